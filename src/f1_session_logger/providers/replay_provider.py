from __future__ import annotations

import csv
import time
from pathlib import Path
from typing import Iterator, List, Tuple

import pyarrow.parquet as pq

from f1_session_logger.models.packets import Packet
from f1_session_logger.providers.base import PacketProvider


def load_capture(file_path: Path) -> List[Tuple[float, bytes]]:
    if file_path.is_dir():
        return _load_capture_dir(file_path)
    ext = file_path.suffix.lower()
    if ext == ".csv":
        return _load_csv(file_path)
    if ext in {".parquet", ".pq"}:
        return _load_parquet(file_path)
    raise RuntimeError("Invalid capture file. Use a capture directory, .csv or .parquet.")


def _load_capture_dir(capture_dir: Path) -> List[Tuple[float, bytes]]:
    # Part names are zero-padded, so name order is recording order.
    datagrams: List[Tuple[float, bytes]] = []
    for part_path in sorted(capture_dir.glob("part_*.parquet")):
        datagrams.extend(_load_parquet(part_path))
    return datagrams


def _load_csv(file_path: Path) -> List[Tuple[float, bytes]]:
    datagrams: List[Tuple[float, bytes]] = []
    with file_path.open("r", newline="", encoding="utf-8") as fp:
        reader = csv.DictReader(fp)
        for row in reader:
            datagrams.append((float(row["offset_s"]), bytes.fromhex(row["payload"])))
    return datagrams


def _load_parquet(file_path: Path) -> List[Tuple[float, bytes]]:
    rows = pq.read_table(file_path, columns=["offset_s", "payload"]).to_pylist()
    return [(float(row["offset_s"]), bytes(row["payload"])) for row in rows]


class ReplayPacketProvider(PacketProvider):
    """Plays back a raw datagram capture through the packet decoder."""

    def __init__(self, capture_file: str, speed: float = 1.0) -> None:
        self.capture_file = capture_file
        self.speed = max(0.0, speed)
        self._connected = False
        self._datagrams: List[Tuple[float, bytes]] = []

    def connect(self) -> None:
        file_path = Path(self.capture_file)
        if not self.capture_file:
            raise RuntimeError("F1SL_REPLAY_FILE not set.")
        if not file_path.exists():
            raise RuntimeError(f"Capture file not found: {file_path}")

        self._datagrams = load_capture(file_path)
        if not self._datagrams:
            raise RuntimeError("Capture file is empty.")
        self._connected = True
        print(f"[REPLAY] loaded {len(self._datagrams)} datagrams from {file_path}")

    def stream(self) -> Iterator[Packet]:
        if not self._connected:
            raise RuntimeError("Provider not connected.")

        previous_offset = self._datagrams[0][0]
        for offset_s, payload in self._datagrams:
            if self.speed > 0.0:
                sleep_s = max(0.0, offset_s - previous_offset) / self.speed
                if sleep_s > 0.0:
                    time.sleep(sleep_s)
            previous_offset = offset_s
            packet = self._decode(payload, "REPLAY")
            if packet is not None:
                yield packet

    def close(self) -> None:
        self._connected = False
        self._datagrams = []
