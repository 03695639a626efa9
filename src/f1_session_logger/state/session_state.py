from __future__ import annotations

from pathlib import Path
from typing import List, Optional, TypeVar

from f1_session_logger.models.packets import (
    CarStatusData,
    LapData,
    LapProgressUpdate,
    ParticipantData,
    RosterUpdate,
    SpeedUpdate,
    StatusUpdate,
)
from f1_session_logger.tracking.session_lifecycle import SessionLifecycleManager

T = TypeVar("T")


def _lookup(items: List[T], vehicle_idx: int) -> Optional[T]:
    if 0 <= vehicle_idx < len(items):
        return items[vehicle_idx]
    return None


class SessionState:
    """Latest per-vehicle snapshots plus the session lifecycle.

    Every update replaces its cache with the packet's contents, so a cache is
    exactly as fresh as the most recent packet of its kind. A packet listing
    fewer cars than the previous one drops the trailing vehicles.
    """

    def __init__(self, output_dir: Path) -> None:
        self.lifecycle = SessionLifecycleManager(output_dir)
        self.participants: List[ParticipantData] = []
        self.car_status: List[CarStatusData] = []
        self.car_speeds: List[int] = []
        self.lap_data: List[LapData] = []

    @property
    def has_roster(self) -> bool:
        return bool(self.participants)

    def update_roster(self, update: RosterUpdate) -> None:
        self.participants = list(update.participants)

    def update_status(self, update: StatusUpdate) -> None:
        self.car_status = list(update.car_status)

    def update_speeds(self, update: SpeedUpdate) -> None:
        self.car_speeds.clear()
        self.car_speeds.extend(update.speeds)

    def update_lap_progress(self, update: LapProgressUpdate) -> None:
        self.lap_data = list(update.lap_data)

    def participant(self, vehicle_idx: int) -> Optional[ParticipantData]:
        return _lookup(self.participants, vehicle_idx)

    def status(self, vehicle_idx: int) -> Optional[CarStatusData]:
        return _lookup(self.car_status, vehicle_idx)

    def speed(self, vehicle_idx: int) -> Optional[int]:
        return _lookup(self.car_speeds, vehicle_idx)

    def lap(self, vehicle_idx: int) -> Optional[LapData]:
        return _lookup(self.lap_data, vehicle_idx)

    def close(self) -> None:
        self.lifecycle.close()
