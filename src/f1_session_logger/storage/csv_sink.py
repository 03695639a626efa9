from __future__ import annotations

import csv
import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, TextIO

from f1_session_logger.models.packets import SessionAnnouncement


def sink_filename(session: SessionAnnouncement, artifact_kind: str, session_uid: int) -> str:
    return f"{session.track.label} {session.session_type.label} {artifact_kind}_{session_uid}.csv"


class CsvSink:
    """Append-only CSV file bound to one session and one artifact kind."""

    def __init__(self, path: Path, handle: TextIO) -> None:
        self.path = path
        self._handle: Optional[TextIO] = handle
        self._writer = csv.writer(handle)
        self.rows_written = 0

    @classmethod
    def create(cls, path: Path, headers: Sequence[str]) -> "CsvSink":
        path.parent.mkdir(parents=True, exist_ok=True)
        handle = path.open("w", newline="", encoding="utf-8")
        sink = cls(path, handle)
        try:
            sink._writer.writerow(headers)
            handle.flush()
        except OSError:
            handle.close()
            raise
        return sink

    @property
    def closed(self) -> bool:
        return self._handle is None

    def write_row(self, row: Sequence[str]) -> None:
        if self._handle is None:
            raise ValueError(f"Sink already closed: {self.path}")
        self._writer.writerow(row)
        self._handle.flush()
        self.rows_written += 1

    def close(self) -> None:
        if self._handle is None:
            return
        try:
            self._handle.flush()
        finally:
            self._handle.close()
            self._handle = None


def write_table_atomically(path: Path, headers: Sequence[str], rows: Iterable[Sequence[str]]) -> Path:
    """Writes the whole table next to `path` and renames it into place."""
    path.parent.mkdir(parents=True, exist_ok=True)
    materialized: List[Sequence[str]] = list(rows)
    tmp_path = path.with_name(path.name + ".part")
    try:
        with tmp_path.open("w", newline="", encoding="utf-8") as fp:
            writer = csv.writer(fp)
            writer.writerow(headers)
            writer.writerows(materialized)
            fp.flush()
            os.fsync(fp.fileno())
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    return path
