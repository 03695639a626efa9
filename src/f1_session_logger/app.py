from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Optional

from f1_session_logger.analysis.overtake_correlator import OvertakeCorrelator
from f1_session_logger.analysis.results_reporter import ResultsReporter
from f1_session_logger.config import AppConfig
from f1_session_logger.core.errors import NoSessionContextError, ReportJoinError
from f1_session_logger.models.packets import (
    FinalClassification,
    LapProgressUpdate,
    OvertakeSignal,
    Packet,
    RosterUpdate,
    SessionAnnouncement,
    SpeedUpdate,
    StatusUpdate,
)
from f1_session_logger.providers.base import PacketProvider
from f1_session_logger.providers.mock_provider import MockPacketProvider
from f1_session_logger.providers.replay_provider import ReplayPacketProvider
from f1_session_logger.providers.udp_provider import UdpPacketProvider
from f1_session_logger.state.session_state import SessionState
from f1_session_logger.storage.capture_recorder import DatagramRecorder


@dataclass
class SessionLoggerApp:
    config: AppConfig

    def __post_init__(self) -> None:
        self._packet_counter = 0
        self.recorder: Optional[DatagramRecorder] = (
            DatagramRecorder(self.config.capture_dir, chunk_size=self.config.capture_chunk_size)
            if self.config.capture_datagrams and self.config.provider_mode == "udp"
            else None
        )
        self.provider = self._build_provider()
        self.state = SessionState(self.config.output_dir)
        self.correlator = OvertakeCorrelator()
        self.reporter = ResultsReporter(self.config.output_dir)

    def run(self) -> None:
        self.provider.connect()
        try:
            for i, packet in enumerate(self.provider.stream(), start=1):
                self.dispatch(packet)
                if self.config.packet_limit > 0 and i >= self.config.packet_limit:
                    print(f"[RUN] packet_limit reached ({self.config.packet_limit}). Stopping.")
                    break
        finally:
            self.state.close()
            if self.recorder is not None:
                capture_path = self.recorder.flush()
                if capture_path is not None:
                    print(f"[CAPTURE] datagrams saved: {capture_path}")
            self.provider.close()
            print(f"[RUN] {self.summary()}")

    def summary(self) -> str:
        return (
            f"packets={self._packet_counter} overtakes_written={self.correlator.written} "
            f"overtakes_dropped={self.correlator.dropped} decode_errors={self.provider.decode_errors}"
        )

    def dispatch(self, packet: Packet) -> None:
        self._packet_counter += 1
        if isinstance(packet, SessionAnnouncement):
            self.state.lifecycle.observe(packet)
        elif isinstance(packet, RosterUpdate):
            self.state.update_roster(packet)
        elif isinstance(packet, StatusUpdate):
            self.state.update_status(packet)
        elif isinstance(packet, SpeedUpdate):
            self.state.update_speeds(packet)
        elif isinstance(packet, LapProgressUpdate):
            self.state.update_lap_progress(packet)
        elif isinstance(packet, OvertakeSignal):
            self._on_overtake(packet)
        elif isinstance(packet, FinalClassification):
            self._on_final_classification(packet)
        else:
            raise TypeError(f"Unhandled packet type: {type(packet).__name__}")

    def _build_provider(self) -> PacketProvider:
        provider_mode = self.config.provider_mode.strip().lower()
        if provider_mode == "udp":
            return UdpPacketProvider(
                host=self.config.listener_host,
                port=self.config.listener_port,
                recorder=self.recorder,
            )
        if provider_mode == "replay":
            return ReplayPacketProvider(
                capture_file=self.config.replay_file,
                speed=self.config.replay_speed,
            )
        if provider_mode == "mock":
            return MockPacketProvider()
        raise RuntimeError(f"Invalid provider mode: {self.config.provider_mode}")

    def _on_overtake(self, signal: OvertakeSignal) -> None:
        try:
            self.correlator.handle(signal, self.state)
        except OSError as exc:
            sink = self.state.lifecycle.event_sink
            print(f"[EVENTS] failed to write to {sink.path if sink else None}: {exc}", file=sys.stderr)

    def _on_final_classification(self, classification: FinalClassification) -> None:
        try:
            self.reporter.report(classification, self.state)
        except NoSessionContextError as exc:
            print(f"[RESULTS] {exc} (session={classification.session_uid})", file=sys.stderr)
        except ReportJoinError as exc:
            print(
                f"[RESULTS] report aborted for session={classification.session_uid}: {exc}",
                file=sys.stderr,
            )
        except OSError as exc:
            print(f"[RESULTS] failed to write results for session={classification.session_uid}: {exc}", file=sys.stderr)
