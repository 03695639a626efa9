from __future__ import annotations

from pathlib import Path


class SessionLoggerError(RuntimeError):
    """Base class for conditions the packet loop reports and survives."""


class PacketDecodeError(SessionLoggerError):
    pass


class CorrelationMissError(SessionLoggerError):
    def __init__(self, vehicle_idx: int, cache: str) -> None:
        super().__init__(f"no {cache} for vehicle {vehicle_idx}")
        self.vehicle_idx = vehicle_idx
        self.cache = cache


class SinkCreationError(SessionLoggerError):
    def __init__(self, session_uid: int, path: Path) -> None:
        super().__init__(f"could not create sink {path} for session {session_uid}")
        self.session_uid = session_uid
        self.path = path


class ReportJoinError(SessionLoggerError):
    def __init__(self, vehicle_idx: int) -> None:
        super().__init__(f"no participant for classified vehicle {vehicle_idx}")
        self.vehicle_idx = vehicle_idx


class NoSessionContextError(SessionLoggerError):
    def __init__(self) -> None:
        super().__init__("final classification received before any session packet")
