from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Iterator, Optional

from f1_session_logger.core.errors import PacketDecodeError
from f1_session_logger.decoding.f1_23 import decode_packet
from f1_session_logger.models.packets import Packet


class PacketProvider(ABC):
    """Telemetry source abstraction (UDP listener, capture replay, mock)."""

    decode_errors = 0

    @abstractmethod
    def connect(self) -> None:
        pass

    @abstractmethod
    def stream(self) -> Iterator[Packet]:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    def _decode(self, datagram: bytes, tag: str) -> Optional[Packet]:
        # A bad datagram is reported and skipped; the stream keeps going.
        try:
            return decode_packet(datagram)
        except PacketDecodeError as exc:
            self.decode_errors += 1
            print(f"[{tag}] packet error ({len(datagram)} bytes): {exc}", file=sys.stderr)
            return None
