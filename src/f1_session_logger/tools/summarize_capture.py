from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path
from typing import Dict, List, Set

from f1_session_logger.core.errors import PacketDecodeError
from f1_session_logger.decoding.f1_23 import decode_packet
from f1_session_logger.models.packets import FinalClassification, SessionAnnouncement
from f1_session_logger.providers.replay_provider import load_capture


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Summarize a raw F1 telemetry datagram capture."
    )
    parser.add_argument("capture", help="Capture directory, .parquet or .csv file.")
    return parser.parse_args()


def summarize(capture_path: Path) -> Dict[str, object]:
    counts: Counter = Counter()
    session_uids: Set[int] = set()
    errors: List[str] = []
    datagrams = load_capture(capture_path)
    for _offset, payload in datagrams:
        try:
            packet = decode_packet(payload)
        except PacketDecodeError as exc:
            errors.append(str(exc))
            continue
        if packet is None:
            counts["ignored"] += 1
            continue
        counts[type(packet).__name__] += 1
        if isinstance(packet, (SessionAnnouncement, FinalClassification)):
            session_uids.add(packet.session_uid)
    return {
        "datagrams": len(datagrams),
        "counts": dict(counts),
        "decode_errors": len(errors),
        "session_uids": sorted(session_uids),
    }


def main() -> None:
    args = parse_args()
    summary = summarize(Path(args.capture))
    print(f"[CAPTURE] datagrams={summary['datagrams']} decode_errors={summary['decode_errors']}")
    for kind, count in sorted(summary["counts"].items()):
        print(f"[CAPTURE] {kind}={count}")
    print(f"[CAPTURE] sessions={summary['session_uids']}")


if __name__ == "__main__":
    main()
