from __future__ import annotations

from pathlib import Path
from typing import Dict, List

from f1_session_logger.core.errors import NoSessionContextError, ReportJoinError
from f1_session_logger.models.packets import FinalClassification, SessionAnnouncement
from f1_session_logger.models.records import CLASSIFICATION_CSV_HEADERS, ResultsRow, team_label
from f1_session_logger.state.session_state import SessionState
from f1_session_logger.storage.csv_sink import sink_filename, write_table_atomically

RESULTS_ARTIFACT = "Results"


class ResultsReporter:
    """Writes one Results file per final classification packet."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir
        self._reports: Dict[int, int] = {}

    def build_rows(self, classification: FinalClassification, state: SessionState) -> List[ResultsRow]:
        rows: List[ResultsRow] = []
        for vehicle_idx, result in enumerate(classification.classifications[: classification.num_cars]):
            participant = state.participant(vehicle_idx)
            if participant is None:
                raise ReportJoinError(vehicle_idx)
            rows.append(
                ResultsRow(
                    position=result.position,
                    driver=participant.name,
                    team=team_label(participant),
                    grid_position=result.grid_position,
                    fastest_lap_time_ms=result.best_lap_time_ms,
                    finish_time_ms=round(result.total_race_time_s * 1000),
                    laps=result.num_laps,
                    pit_stops=result.num_pit_stops,
                    penalties=result.num_penalties,
                    penalty_time_s=result.penalties_time_s,
                    status=result.result_status.label,
                )
            )
        return rows

    def report(self, classification: FinalClassification, state: SessionState) -> Path:
        session = state.lifecycle.current_session
        if session is None:
            raise NoSessionContextError()

        rows = self.build_rows(classification, state)
        path = self._next_path(session, classification.session_uid)
        print(f"[RESULTS] writing final classification to {path}")
        write_table_atomically(path, CLASSIFICATION_CSV_HEADERS, [row.to_row() for row in rows])
        self._reports[classification.session_uid] = self._reports.get(classification.session_uid, 0) + 1
        print(f"[RESULTS] saved {len(rows)} rows session={classification.session_uid}")
        return path

    def _next_path(self, session: SessionAnnouncement, session_uid: int) -> Path:
        # Repeated classifications for one session never overwrite the first file.
        path = self.output_dir / sink_filename(session, RESULTS_ARTIFACT, session_uid)
        previous = self._reports.get(session_uid, 0)
        if previous:
            path = path.with_name(f"{path.stem}-{previous + 1}{path.suffix}")
        return path
