from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from f1_session_logger.models.lookups import RuleSet, SessionType, Team, Track, VisualTyreCompound
from f1_session_logger.models.packets import (
    CarStatusData,
    LapData,
    LapProgressUpdate,
    ParticipantData,
    RosterUpdate,
    SessionAnnouncement,
    SpeedUpdate,
    StatusUpdate,
)
from f1_session_logger.state.session_state import SessionState


@pytest.fixture()
def make_session() -> Callable[..., SessionAnnouncement]:
    def _make(uid: int, race: bool = True, track: Track = Track.MONZA) -> SessionAnnouncement:
        return SessionAnnouncement(
            session_uid=uid,
            session_type=SessionType.RACE if race else SessionType.QUALIFYING_1,
            track=track,
            rule_set=RuleSet.RACE if race else RuleSet.PRACTICE_AND_QUALIFYING,
        )

    return _make


@pytest.fixture()
def two_car_state(tmp_path: Path, make_session) -> SessionState:
    """Race session with two cars and every cache populated."""
    state = SessionState(tmp_path)
    state.lifecycle.observe(make_session(42))
    state.update_roster(
        RosterUpdate(
            participants=[
                ParticipantData(name="A", team=Team.FERRARI, race_number=1),
                ParticipantData(name="B", team=Team.WILLIAMS, race_number=2),
            ]
        )
    )
    state.update_status(
        StatusUpdate(
            car_status=[
                CarStatusData(visual_tyre_compound=VisualTyreCompound.SOFT, tyre_age_laps=3),
                CarStatusData(visual_tyre_compound=VisualTyreCompound.MEDIUM, tyre_age_laps=5),
            ]
        )
    )
    state.update_speeds(SpeedUpdate(speeds=[210, 205]))
    state.update_lap_progress(
        LapProgressUpdate(
            lap_data=[
                LapData(current_lap_num=10, car_position=1, lap_distance=120.0),
                LapData(current_lap_num=10, car_position=2, lap_distance=100.0),
            ]
        )
    )
    yield state
    state.close()
