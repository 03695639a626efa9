from __future__ import annotations

import csv
from pathlib import Path

import pytest

from f1_session_logger.analysis.results_reporter import ResultsReporter
from f1_session_logger.core.errors import NoSessionContextError, ReportJoinError
from f1_session_logger.models.lookups import ResultStatus
from f1_session_logger.models.packets import FinalClassification, FinalClassificationData, RosterUpdate
from f1_session_logger.models.records import CLASSIFICATION_CSV_HEADERS
from f1_session_logger.state.session_state import SessionState


def _result(position: int, grid: int, status: ResultStatus = ResultStatus.FINISHED) -> FinalClassificationData:
    return FinalClassificationData(
        position=position,
        grid_position=grid,
        best_lap_time_ms=81234,
        total_race_time_s=4800.2504,
        num_laps=53,
        num_pit_stops=1,
        num_penalties=1,
        penalties_time_s=5,
        result_status=status,
    )


def _classification(num_cars: int = 2) -> FinalClassification:
    return FinalClassification(
        session_uid=42,
        num_cars=num_cars,
        classifications=[_result(2, 1), _result(1, 2, ResultStatus.DID_NOT_FINISH), _result(0, 0)],
    )


def test_report_writes_header_and_rows(tmp_path: Path, two_car_state: SessionState) -> None:
    path = ResultsReporter(tmp_path).report(_classification(), two_car_state)

    assert path == tmp_path / "Monza Race Results_42.csv"
    with path.open(newline="", encoding="utf-8") as fp:
        rows = list(csv.reader(fp))
    assert rows[0] == CLASSIFICATION_CSV_HEADERS
    assert rows[1] == ["2", "A", "Ferrari (1)", "1", "81234", "4800250", "53", "1", "1", "5", "Finished"]
    assert rows[2][1] == "B"
    assert rows[2][-1] == "Did Not Finish"
    assert len(rows) == 3
    assert all(len(row) == 11 for row in rows)


def test_report_join_failure_leaves_no_file(tmp_path: Path, two_car_state: SessionState) -> None:
    out_dir = tmp_path / "results"
    two_car_state.update_roster(RosterUpdate(participants=two_car_state.participants[:1]))

    with pytest.raises(ReportJoinError) as excinfo:
        ResultsReporter(out_dir).report(_classification(), two_car_state)

    assert excinfo.value.vehicle_idx == 1
    assert not out_dir.exists() or list(out_dir.iterdir()) == []


def test_report_requires_session(tmp_path: Path) -> None:
    with pytest.raises(NoSessionContextError):
        ResultsReporter(tmp_path).report(_classification(), SessionState(tmp_path))
    assert list(tmp_path.iterdir()) == []


def test_declared_count_limits_rows(tmp_path: Path, two_car_state: SessionState) -> None:
    path = ResultsReporter(tmp_path / "one").report(_classification(num_cars=1), two_car_state)

    assert len(path.read_text(encoding="utf-8").splitlines()) == 2


def test_repeated_reports_get_separate_files(tmp_path: Path, two_car_state: SessionState) -> None:
    reporter = ResultsReporter(tmp_path / "repeat")

    first = reporter.report(_classification(), two_car_state)
    second = reporter.report(_classification(), two_car_state)

    assert first.name == "Monza Race Results_42.csv"
    assert second.name == "Monza Race Results_42-2.csv"
    assert first.read_text(encoding="utf-8") == second.read_text(encoding="utf-8")
