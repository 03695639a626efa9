from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import List, Optional, Tuple

import pyarrow as pa
import pyarrow.parquet as pq

CAPTURE_SCHEMA = pa.schema(
    [
        ("offset_s", pa.float64()),
        ("payload", pa.binary()),
    ]
)

DEFAULT_CHUNK_SIZE = 3000


class DatagramRecorder:
    """Stores raw UDP datagrams with their arrival offset for later replay.

    Datagrams are written in chunks of ``chunk_size`` as numbered parquet
    parts inside one capture directory, so a capture survives a killed
    process up to the last full chunk.
    """

    def __init__(
        self,
        output_dir: Path,
        capture_name: Optional[str] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.output_dir = output_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)
        if capture_name is None:
            capture_name = f"capture_{dt.datetime.now().strftime('%Y%m%d_%H%M%S')}"
        self.capture_dir = self.output_dir / capture_name
        self.chunk_size = max(1, chunk_size)
        self.parts_written = 0
        self.datagrams_written = 0
        self._datagrams: List[Tuple[float, bytes]] = []

    def __len__(self) -> int:
        return len(self._datagrams)

    def record(self, offset_s: float, payload: bytes) -> None:
        self._datagrams.append((offset_s, bytes(payload)))
        if len(self._datagrams) >= self.chunk_size:
            self._write_part()

    def flush(self) -> Optional[Path]:
        """Writes any buffered datagrams; returns the capture directory if anything was saved."""
        if self._datagrams:
            self._write_part()
        if self.parts_written == 0:
            return None
        return self.capture_dir

    def _write_part(self) -> Path:
        self.capture_dir.mkdir(parents=True, exist_ok=True)
        part_path = self.capture_dir / f"part_{self.parts_written + 1:05d}.parquet"
        table = pa.Table.from_pydict(
            {
                "offset_s": [offset for offset, _ in self._datagrams],
                "payload": [payload for _, payload in self._datagrams],
            },
            schema=CAPTURE_SCHEMA,
        )
        pq.write_table(table, part_path)
        self.parts_written += 1
        self.datagrams_written += len(self._datagrams)
        self._datagrams = []
        return part_path
