"""Telemetry packet providers."""

from f1_session_logger.providers.mock_provider import MockPacketProvider
from f1_session_logger.providers.replay_provider import ReplayPacketProvider
from f1_session_logger.providers.udp_provider import UdpPacketProvider

__all__ = [
    "MockPacketProvider",
    "ReplayPacketProvider",
    "UdpPacketProvider",
]
