from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True)
class AppConfig:
    provider_mode: str = "udp"  # udp | replay | mock
    listener_host: str = "127.0.0.1"
    listener_port: int = 20777
    output_dir: Path = Path(".")
    replay_file: str = ""
    replay_speed: float = 1.0
    packet_limit: int = 0
    capture_datagrams: bool = False
    capture_dir: Path = Path("data") / "captures"
    capture_chunk_size: int = 3000
