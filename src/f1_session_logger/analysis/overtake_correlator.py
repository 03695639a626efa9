from __future__ import annotations

import sys
from typing import Optional

from f1_session_logger.core.errors import CorrelationMissError
from f1_session_logger.models.packets import CarStatusData, LapData, OvertakeSignal, ParticipantData
from f1_session_logger.models.records import MISSING_SPEED, UNKNOWN_TYRE_AGE, OvertakeLogRecord, team_label
from f1_session_logger.state.session_state import SessionState


class OvertakeCorrelator:
    """Joins an overtake signal with the latest roster, status, speed and lap snapshots."""

    def __init__(self) -> None:
        self.written = 0
        self.dropped = 0

    def correlate(self, signal: OvertakeSignal, state: SessionState) -> Optional[OvertakeLogRecord]:
        if not state.lifecycle.logging_enabled or not state.has_roster:
            return None
        try:
            return self._build_record(signal, state)
        except CorrelationMissError as exc:
            self.dropped += 1
            session = state.lifecycle.current_session
            print(
                f"[OVERTAKE] dropped {signal.overtaking_vehicle_idx}->{signal.being_overtaken_vehicle_idx} "
                f"at {signal.session_time_ms}ms session={session.session_uid if session else None}: {exc}",
                file=sys.stderr,
            )
            return None

    def handle(self, signal: OvertakeSignal, state: SessionState) -> Optional[OvertakeLogRecord]:
        record = self.correlate(signal, state)
        sink = state.lifecycle.event_sink
        if record is None or sink is None:
            return None
        sink.write_row(record.to_row())
        self.written += 1
        return record

    def _build_record(self, signal: OvertakeSignal, state: SessionState) -> OvertakeLogRecord:
        overtaker_idx = signal.overtaking_vehicle_idx
        overtakee_idx = signal.being_overtaken_vehicle_idx

        overtaker = _participant(state, overtaker_idx)
        overtaker_status = _status(state, overtaker_idx)
        overtakee = _participant(state, overtakee_idx)
        overtakee_status = _status(state, overtakee_idx)
        # The overtaken car's lap data describes the position being fought for.
        lap = _lap(state, overtakee_idx)

        return OvertakeLogRecord(
            overtaker_name=overtaker.name,
            overtaker_team=team_label(overtaker),
            overtaker_speed=_speed(state, overtaker_idx),
            overtaker_tyre_compound=overtaker_status.visual_tyre_compound.label,
            overtaker_tyre_age=_tyre_age(overtaker_status),
            overtakee_name=overtakee.name,
            overtakee_team=team_label(overtakee),
            overtakee_speed=_speed(state, overtakee_idx),
            overtakee_tyre_compound=overtakee_status.visual_tyre_compound.label,
            overtakee_tyre_age=_tyre_age(overtakee_status),
            for_position=lap.car_position,
            lap=lap.current_lap_num,
            # Negative before the car first crosses the line.
            track_position=max(0, int(lap.lap_distance)),
            session_time_ms=signal.session_time_ms,
        )


def _participant(state: SessionState, vehicle_idx: int) -> ParticipantData:
    participant = state.participant(vehicle_idx)
    if participant is None:
        raise CorrelationMissError(vehicle_idx, "participant")
    return participant


def _status(state: SessionState, vehicle_idx: int) -> CarStatusData:
    status = state.status(vehicle_idx)
    if status is None:
        raise CorrelationMissError(vehicle_idx, "car status")
    return status


def _lap(state: SessionState, vehicle_idx: int) -> LapData:
    lap = state.lap(vehicle_idx)
    if lap is None:
        raise CorrelationMissError(vehicle_idx, "lap data")
    return lap


def _speed(state: SessionState, vehicle_idx: int) -> int:
    speed = state.speed(vehicle_idx)
    return MISSING_SPEED if speed is None else speed


def _tyre_age(status: CarStatusData) -> int:
    return UNKNOWN_TYRE_AGE if status.tyre_age_laps is None else status.tyre_age_laps
