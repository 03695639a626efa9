from __future__ import annotations

import datetime as dt
import sys
from pathlib import Path
from typing import Optional, TextIO


class _StreamTee:
    """Mirrors a console stream into the runtime log file."""

    def __init__(self, original: TextIO, file_handle: TextIO) -> None:
        self.original = original
        self._file = file_handle

    def write(self, data: str) -> int:
        try:
            self.original.write(data)
        except OSError:
            # Console pipe closed; the log file still gets every line.
            pass
        try:
            self._file.write(data)
        except ValueError:
            # The log file can already be closed during interpreter shutdown.
            pass
        return len(data)

    def flush(self) -> None:
        try:
            self.original.flush()
        except (OSError, ValueError):
            pass
        try:
            self._file.flush()
        except ValueError:
            pass

    def isatty(self) -> bool:
        return bool(getattr(self.original, "isatty", lambda: False)())

    @property
    def encoding(self) -> str | None:
        return getattr(self.original, "encoding", None)


_log_handle: Optional[TextIO] = None


def configure_runtime_log(log_file: Path) -> Path:
    global _log_handle

    log_path = log_file.expanduser().resolve()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handle = log_path.open("a", encoding="utf-8", buffering=1)
    handle.write(
        f"\n========== F1SL listener started {dt.datetime.now().isoformat(timespec='seconds')} ==========\n"
    )

    release_runtime_log()
    sys.stdout = _StreamTee(sys.stdout, handle)  # type: ignore[assignment]
    sys.stderr = _StreamTee(sys.stderr, handle)  # type: ignore[assignment]
    _log_handle = handle
    return log_path


def release_runtime_log(summary: Optional[str] = None) -> None:
    """Puts the console streams back and closes the log file, ending it with `summary`."""
    global _log_handle

    if isinstance(sys.stdout, _StreamTee):
        sys.stdout = sys.stdout.original
    if isinstance(sys.stderr, _StreamTee):
        sys.stderr = sys.stderr.original
    if _log_handle is None:
        return
    handle, _log_handle = _log_handle, None
    if summary:
        handle.write(f"========== F1SL listener stopped: {summary} ==========\n")
    handle.close()
