from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from f1_session_logger.core.errors import SinkCreationError
from f1_session_logger.models.packets import SessionAnnouncement
from f1_session_logger.models.records import OVERTAKE_CSV_HEADERS
from f1_session_logger.storage.csv_sink import CsvSink, sink_filename

EVENTS_ARTIFACT = "Events"


class SinkTransition(str, Enum):
    UNCHANGED = "unchanged"
    OPENED = "opened"
    DISABLED = "disabled"  # new session that is not a race
    FAILED = "failed"  # new race session whose Events file could not be created


@dataclass(slots=True)
class SessionLifecycleState:
    session_uid: Optional[int] = None
    current_session: Optional[SessionAnnouncement] = None
    event_sink: Optional[CsvSink] = None


class SessionLifecycleManager:
    """Detects session boundaries and rotates the Events file on each one."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir
        self.state = SessionLifecycleState()

    @property
    def current_session(self) -> Optional[SessionAnnouncement]:
        return self.state.current_session

    @property
    def event_sink(self) -> Optional[CsvSink]:
        return self.state.event_sink

    @property
    def logging_enabled(self) -> bool:
        return self.state.event_sink is not None

    def observe(self, announcement: SessionAnnouncement) -> SinkTransition:
        self.state.current_session = announcement
        if self.state.session_uid == announcement.session_uid:
            return SinkTransition.UNCHANGED

        previous_uid = self.state.session_uid
        self.close()
        self.state.session_uid = announcement.session_uid
        print(
            f"[SESSION] new session uid={announcement.session_uid} previous={previous_uid} "
            f"track={announcement.track.label} type={announcement.session_type.label}"
        )

        if not announcement.is_race:
            print(
                f"[SESSION] uid={announcement.session_uid} is not a race or sprint session - "
                "skipping event logging"
            )
            return SinkTransition.DISABLED

        try:
            self.state.event_sink = self._open_event_sink(announcement)
        except SinkCreationError as exc:
            print(f"[EVENTS] {exc}: {exc.__cause__}", file=sys.stderr)
            return SinkTransition.FAILED
        print(f"[EVENTS] writing events to {self.state.event_sink.path}")
        return SinkTransition.OPENED

    def close(self) -> None:
        sink = self.state.event_sink
        if sink is None:
            return
        self.state.event_sink = None
        try:
            sink.close()
        except OSError as exc:
            print(f"[EVENTS] failed to close {sink.path}: {exc}", file=sys.stderr)
            return
        print(f"[EVENTS] closed {sink.path} rows={sink.rows_written}")

    def _open_event_sink(self, announcement: SessionAnnouncement) -> CsvSink:
        path = self.output_dir / sink_filename(announcement, EVENTS_ARTIFACT, announcement.session_uid)
        try:
            return CsvSink.create(path, OVERTAKE_CSV_HEADERS)
        except OSError as exc:
            raise SinkCreationError(announcement.session_uid, path) from exc
