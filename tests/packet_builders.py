"""Builds F1 23 UDP datagrams for decoder and end-to-end tests."""
from __future__ import annotations

import struct
from typing import Optional, Sequence, Tuple

MAX_CARS = 22
_HEADER = struct.Struct("<HBBBBBQfIIBB")


def header(packet_id: int, session_uid: int, session_time_s: float = 0.0, packet_format: int = 2023) -> bytes:
    return _HEADER.pack(packet_format, 23, 1, 0, 1, packet_id, session_uid, session_time_s, 1, 1, 0, 255)


def session_packet(session_uid: int, session_type: int = 10, track_id: int = 11, rule_set: int = 1) -> bytes:
    body = bytearray(644 - _HEADER.size)
    body[6] = session_type
    struct.pack_into("<b", body, 7, track_id)
    body[602] = rule_set
    return header(1, session_uid) + bytes(body)


def participants_packet(session_uid: int, drivers: Sequence[Tuple[str, int, int]]) -> bytes:
    """drivers: (name, team id, race number) per vehicle index."""
    body = bytearray(1 + MAX_CARS * 58)
    body[0] = len(drivers)
    for idx, (name, team_id, race_number) in enumerate(drivers):
        base = 1 + idx * 58
        body[base + 3] = team_id
        body[base + 5] = race_number
        encoded = name.encode("utf-8")[:47]
        body[base + 7 : base + 7 + len(encoded)] = encoded
    return header(4, session_uid) + bytes(body)


def car_status_packet(session_uid: int, tyres: Sequence[Tuple[int, Optional[int]]]) -> bytes:
    """tyres: (visual compound id, tyre age or None) per vehicle index."""
    body = bytearray(MAX_CARS * 55)
    for idx, (compound, age) in enumerate(tyres):
        base = idx * 55
        body[base + 26] = compound
        body[base + 27] = 255 if age is None else age
    return header(7, session_uid) + bytes(body)


def car_telemetry_packet(session_uid: int, speeds: Sequence[int]) -> bytes:
    body = bytearray(MAX_CARS * 60 + 3)
    for idx, speed in enumerate(speeds):
        struct.pack_into("<H", body, idx * 60, speed)
    return header(6, session_uid) + bytes(body)


def lap_data_packet(session_uid: int, laps: Sequence[Tuple[int, int, float]]) -> bytes:
    """laps: (position, lap number, lap distance) per vehicle index."""
    body = bytearray(MAX_CARS * 50 + 2)
    for idx, (position, lap_num, distance) in enumerate(laps):
        base = idx * 50
        struct.pack_into("<f", body, base + 18, distance)
        struct.pack_into("<BB", body, base + 30, position, lap_num)
    return header(2, session_uid) + bytes(body)


def overtake_packet(session_uid: int, overtaking: int, overtaken: int, session_time_s: float) -> bytes:
    body = b"OVTK" + bytes([overtaking, overtaken]) + bytes(10)
    return header(3, session_uid, session_time_s) + body


def event_packet(session_uid: int, code: bytes) -> bytes:
    return header(3, session_uid) + code + bytes(12)


def final_classification_packet(
    session_uid: int,
    results: Sequence[Tuple[int, int, int, int, float, int, int, int]],
    num_cars: Optional[int] = None,
) -> bytes:
    """results: (position, laps, grid, pit stops, race time s, best lap ms, penalties time, status)."""
    body = bytearray(1 + MAX_CARS * 45)
    body[0] = len(results) if num_cars is None else num_cars
    for idx, (position, laps, grid, pit_stops, race_time, best_lap_ms, penalty_time, status) in enumerate(results):
        struct.pack_into(
            "<BBBBBBIdBB",
            body,
            1 + idx * 45,
            position,
            laps,
            grid,
            0,
            pit_stops,
            status,
            best_lap_ms,
            race_time,
            penalty_time,
            1 if penalty_time else 0,
        )
    return header(8, session_uid) + bytes(body)
