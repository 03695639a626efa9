from __future__ import annotations

import os
from pathlib import Path

from f1_session_logger.app import SessionLoggerApp
from f1_session_logger.config import AppConfig
from f1_session_logger.runtime_logging import configure_runtime_log, release_runtime_log


def main() -> None:
    log_file = Path(os.getenv("F1SL_LOG_FILE", "logs/f1sl.log").strip() or "logs/f1sl.log")
    log_path = configure_runtime_log(log_file)
    provider_mode = os.getenv("F1SL_PROVIDER", "udp").strip().lower()
    listener_host = os.getenv("F1SL_LISTENER_HOST", "127.0.0.1").strip()
    listener_port = int(os.getenv("F1SL_LISTENER_PORT", "20777"))
    output_dir = os.getenv("F1SL_OUTPUT_DIR", ".").strip() or "."
    replay_file = os.getenv("F1SL_REPLAY_FILE", "").strip()
    replay_speed = float(os.getenv("F1SL_REPLAY_SPEED", "1.0"))
    packet_limit = int(os.getenv("F1SL_PACKET_LIMIT", "0"))
    capture_datagrams = os.getenv("F1SL_CAPTURE", "0") != "0"
    capture_dir = os.getenv("F1SL_CAPTURE_DIR", "data/captures").strip()
    capture_chunk_size = int(os.getenv("F1SL_CAPTURE_CHUNK", "3000"))

    print(
        f"[BOOT] provider={provider_mode} "
        f"listener={listener_host}:{listener_port} "
        f"output_dir={output_dir} packet_limit={packet_limit} "
        f"capture={capture_datagrams} "
        f"log_file={log_path}"
    )
    app = SessionLoggerApp(
        AppConfig(
            provider_mode=provider_mode,
            listener_host=listener_host,
            listener_port=listener_port,
            output_dir=Path(output_dir),
            replay_file=replay_file,
            replay_speed=replay_speed,
            packet_limit=packet_limit,
            capture_datagrams=capture_datagrams,
            capture_dir=Path(capture_dir),
            capture_chunk_size=capture_chunk_size,
        )
    )
    try:
        app.run()
    except KeyboardInterrupt:
        print("[RUN] interrupted.")
    finally:
        release_runtime_log(app.summary())


if __name__ == "__main__":
    main()
