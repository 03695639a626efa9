"""Output sinks and raw datagram capture."""

from f1_session_logger.storage.capture_recorder import DatagramRecorder
from f1_session_logger.storage.csv_sink import CsvSink

__all__ = ["CsvSink", "DatagramRecorder"]
