from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from f1_session_logger.models.lookups import (
    ResultStatus,
    RuleSet,
    SessionType,
    Team,
    Track,
    VisualTyreCompound,
)


@dataclass(slots=True)
class SessionAnnouncement:
    """Session packet reduced to what names and gates the output files."""

    session_uid: int
    session_type: SessionType
    track: Track
    rule_set: Optional[RuleSet] = None

    @property
    def is_race(self) -> bool:
        if self.rule_set is not None and self.rule_set is not RuleSet.UNKNOWN:
            return self.rule_set is RuleSet.RACE
        return self.session_type.is_race


@dataclass(slots=True)
class ParticipantData:
    name: str
    team: Team
    race_number: int


@dataclass(slots=True)
class RosterUpdate:
    participants: List[ParticipantData] = field(default_factory=list)


@dataclass(slots=True)
class CarStatusData:
    visual_tyre_compound: VisualTyreCompound
    tyre_age_laps: Optional[int] = None  # None = unknown, distinct from a fresh tyre


@dataclass(slots=True)
class StatusUpdate:
    car_status: List[CarStatusData] = field(default_factory=list)


@dataclass(slots=True)
class SpeedUpdate:
    speeds: List[int] = field(default_factory=list)  # km/h


@dataclass(slots=True)
class LapData:
    current_lap_num: int
    car_position: int
    lap_distance: float  # metres into the current lap


@dataclass(slots=True)
class LapProgressUpdate:
    lap_data: List[LapData] = field(default_factory=list)


@dataclass(slots=True)
class OvertakeSignal:
    overtaking_vehicle_idx: int
    being_overtaken_vehicle_idx: int
    session_time_ms: int


@dataclass(slots=True)
class FinalClassificationData:
    position: int
    grid_position: int
    best_lap_time_ms: int
    total_race_time_s: float
    num_laps: int
    num_pit_stops: int
    num_penalties: int
    penalties_time_s: int
    result_status: ResultStatus


@dataclass(slots=True)
class FinalClassification:
    session_uid: int
    num_cars: int
    classifications: List[FinalClassificationData] = field(default_factory=list)


Packet = Union[
    SessionAnnouncement,
    RosterUpdate,
    StatusUpdate,
    SpeedUpdate,
    LapProgressUpdate,
    OvertakeSignal,
    FinalClassification,
]
