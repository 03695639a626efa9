from __future__ import annotations

from dataclasses import dataclass
from typing import List

from f1_session_logger.models.packets import ParticipantData

# Written for a tyre whose age the game did not report.
UNKNOWN_TYRE_AGE = 255
# Written for a vehicle with no car telemetry received yet.
MISSING_SPEED = 0

OVERTAKE_CSV_HEADERS = [
    "Overtaker",
    "Overtaker Team",
    "Overtaker Speed",
    "Overtaker Tyre Compound",
    "Overtaker Tyre Age",
    "Overtakee",
    "Overtakee Team",
    "Overtakee Speed",
    "Overtakee Tyre Compound",
    "Overtakee Tyre Age",
    "For Position",
    "Lap",
    "Track Position",
    "Sessiontime [ms]",
]

CLASSIFICATION_CSV_HEADERS = [
    "Position",
    "Driver",
    "Team",
    "Grid Position",
    "Fastest Lap Time [ms]",
    "Finish Time [ms]",
    "Laps",
    "Pitstops",
    "Penalties",
    "Penalty Time [s]",
    "Status",
]


def team_label(participant: ParticipantData) -> str:
    return f"{participant.team.label} ({participant.race_number})"


@dataclass(frozen=True, slots=True)
class OvertakeLogRecord:
    """One overtake with both cars' context, as written to the Events file."""

    overtaker_name: str
    overtaker_team: str
    overtaker_speed: int
    overtaker_tyre_compound: str
    overtaker_tyre_age: int
    overtakee_name: str
    overtakee_team: str
    overtakee_speed: int
    overtakee_tyre_compound: str
    overtakee_tyre_age: int
    for_position: int
    lap: int
    track_position: int
    session_time_ms: int

    def to_row(self) -> List[str]:
        return [
            self.overtaker_name,
            self.overtaker_team,
            str(self.overtaker_speed),
            self.overtaker_tyre_compound,
            str(self.overtaker_tyre_age),
            self.overtakee_name,
            self.overtakee_team,
            str(self.overtakee_speed),
            self.overtakee_tyre_compound,
            str(self.overtakee_tyre_age),
            str(self.for_position),
            str(self.lap),
            str(self.track_position),
            str(self.session_time_ms),
        ]


@dataclass(frozen=True, slots=True)
class ResultsRow:
    position: int
    driver: str
    team: str
    grid_position: int
    fastest_lap_time_ms: int
    finish_time_ms: int
    laps: int
    pit_stops: int
    penalties: int
    penalty_time_s: int
    status: str

    def to_row(self) -> List[str]:
        return [
            str(self.position),
            self.driver,
            self.team,
            str(self.grid_position),
            str(self.fastest_lap_time_ms),
            str(self.finish_time_ms),
            str(self.laps),
            str(self.pit_stops),
            str(self.penalties),
            str(self.penalty_time_s),
            self.status,
        ]
