from __future__ import annotations

import socket
import time
from typing import Iterator, Optional

from f1_session_logger.models.packets import Packet
from f1_session_logger.providers.base import PacketProvider
from f1_session_logger.storage.capture_recorder import DatagramRecorder

# Largest F1 23 packet is well under this.
_MAX_DATAGRAM_SIZE = 2048


class UdpPacketProvider(PacketProvider):
    """Receives and decodes F1 telemetry datagrams from a UDP socket."""

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 20777,
        recorder: Optional[DatagramRecorder] = None,
        poll_timeout_s: float = 0.5,
    ) -> None:
        self.host = host
        self.port = port
        self.recorder = recorder
        self.poll_timeout_s = poll_timeout_s
        self._socket: Optional[socket.socket] = None
        self._started_at = 0.0

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def connect(self) -> None:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((self.host, self.port))
        except OSError as exc:
            sock.close()
            raise RuntimeError(f"Could not bind UDP listener on {self.address}: {exc}") from exc
        sock.settimeout(self.poll_timeout_s)
        self._socket = sock
        self._started_at = time.perf_counter()
        print(f"[UDP] collecting telemetry from {self.address}")

    def stream(self) -> Iterator[Packet]:
        if self._socket is None:
            raise RuntimeError("Provider not connected.")

        while True:
            try:
                datagram, _addr = self._socket.recvfrom(_MAX_DATAGRAM_SIZE)
            except socket.timeout:
                continue
            if self.recorder is not None:
                self.recorder.record(time.perf_counter() - self._started_at, datagram)
            packet = self._decode(datagram, "UDP")
            if packet is not None:
                yield packet

    def close(self) -> None:
        if self._socket is not None:
            self._socket.close()
            self._socket = None
