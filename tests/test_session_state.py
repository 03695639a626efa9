from __future__ import annotations

from f1_session_logger.models.lookups import Team, VisualTyreCompound
from f1_session_logger.models.packets import (
    CarStatusData,
    LapData,
    LapProgressUpdate,
    ParticipantData,
    RosterUpdate,
    SpeedUpdate,
    StatusUpdate,
)
from f1_session_logger.state.session_state import SessionState


def _roster(*names: str) -> RosterUpdate:
    return RosterUpdate(
        participants=[ParticipantData(name=name, team=Team.HAAS, race_number=n) for n, name in enumerate(names)]
    )


def test_roster_update_replaces_instead_of_merging(tmp_path) -> None:
    state = SessionState(tmp_path)
    state.update_roster(_roster("A", "B", "C"))
    state.update_roster(_roster("X"))

    assert state.participant(0).name == "X"
    assert state.participant(1) is None
    assert state.participant(2) is None


def test_roster_cache_does_not_alias_packet(tmp_path) -> None:
    state = SessionState(tmp_path)
    update = _roster("A")
    state.update_roster(update)
    update.participants.append(ParticipantData(name="late", team=Team.HAAS, race_number=9))

    assert state.participant(1) is None


def test_speed_update_rebuilds_by_position(tmp_path) -> None:
    state = SessionState(tmp_path)
    state.update_speeds(SpeedUpdate(speeds=[300, 290, 280]))
    state.update_speeds(SpeedUpdate(speeds=[100]))

    assert state.speed(0) == 100
    assert state.speed(1) is None


def test_status_and_lap_updates_replace(tmp_path) -> None:
    state = SessionState(tmp_path)
    state.update_status(StatusUpdate(car_status=[CarStatusData(VisualTyreCompound.HARD, 1)] * 2))
    state.update_lap_progress(LapProgressUpdate(lap_data=[LapData(1, 1, 0.0)] * 2))
    state.update_status(StatusUpdate(car_status=[CarStatusData(VisualTyreCompound.WET, None)]))
    state.update_lap_progress(LapProgressUpdate(lap_data=[]))

    assert state.status(0).visual_tyre_compound is VisualTyreCompound.WET
    assert state.status(1) is None
    assert state.lap(0) is None


def test_lookups_miss_on_out_of_range_indices(tmp_path) -> None:
    state = SessionState(tmp_path)
    state.update_roster(_roster("A"))

    assert state.has_roster
    assert state.participant(-1) is None
    assert state.participant(255) is None
    assert state.speed(0) is None
