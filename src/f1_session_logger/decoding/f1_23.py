"""Decoder for the F1 23 UDP telemetry format (packetFormat 2023).

Only the packet kinds the session logger consumes are decoded; everything
else decodes to ``None`` so the caller can skip it.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from f1_session_logger.core.errors import PacketDecodeError
from f1_session_logger.models.lookups import (
    ResultStatus,
    RuleSet,
    SessionType,
    Team,
    Track,
    VisualTyreCompound,
)
from f1_session_logger.models.packets import (
    CarStatusData,
    FinalClassification,
    FinalClassificationData,
    LapData,
    LapProgressUpdate,
    OvertakeSignal,
    Packet,
    ParticipantData,
    RosterUpdate,
    SessionAnnouncement,
    SpeedUpdate,
    StatusUpdate,
)

PACKET_FORMAT = 2023
MAX_CARS = 22

# packetFormat, gameYear, major, minor, packetVersion, packetId, sessionUID,
# sessionTime, frameIdentifier, overallFrameIdentifier, playerCarIndex, secondaryPlayerCarIndex
_HEADER_STRUCT = struct.Struct("<HBBBBBQfIIBB")
HEADER_SIZE = _HEADER_STRUCT.size

PACKET_ID_SESSION = 1
PACKET_ID_LAP_DATA = 2
PACKET_ID_EVENT = 3
PACKET_ID_PARTICIPANTS = 4
PACKET_ID_CAR_TELEMETRY = 6
PACKET_ID_CAR_STATUS = 7
PACKET_ID_FINAL_CLASSIFICATION = 8

# Session body offsets (relative to the end of the header).
_SESSION_TYPE_OFFSET = 6
_SESSION_TRACK_OFFSET = 7
_SESSION_RULE_SET_OFFSET = 602

_LAP_DATA_SIZE = 50
# lapDistance lives at +18, carPosition and currentLapNum at +30.
_LAP_DISTANCE_STRUCT = struct.Struct("<f")
_LAP_POSITION_STRUCT = struct.Struct("<BB")

_PARTICIPANT_SIZE = 58
_PARTICIPANT_NAME_SIZE = 48

_CAR_TELEMETRY_SIZE = 60
_SPEED_STRUCT = struct.Struct("<H")

_CAR_STATUS_SIZE = 55
_VISUAL_COMPOUND_OFFSET = 26
_TYRE_AGE_OFFSET = 27
_TYRE_AGE_UNKNOWN = 255

_FINAL_CLASSIFICATION_SIZE = 45
# position, numLaps, gridPosition, points, numPitStops, resultStatus,
# bestLapTimeInMS, totalRaceTime, penaltiesTime, numPenalties
_FINAL_CLASSIFICATION_STRUCT = struct.Struct("<BBBBBBIdBB")

_OVERTAKE_CODE = b"OVTK"


@dataclass(slots=True)
class PacketHeader:
    packet_format: int
    packet_id: int
    session_uid: int
    session_time_s: float


def decode_header(data: bytes) -> PacketHeader:
    if len(data) < HEADER_SIZE:
        raise PacketDecodeError(f"datagram too short for header: {len(data)} bytes")
    (
        packet_format,
        _game_year,
        _major,
        _minor,
        _packet_version,
        packet_id,
        session_uid,
        session_time_s,
        _frame_identifier,
        _overall_frame,
        _player_car_index,
        _secondary_player,
    ) = _HEADER_STRUCT.unpack_from(data, 0)
    if packet_format != PACKET_FORMAT:
        raise PacketDecodeError(f"unsupported packet format {packet_format}")
    return PacketHeader(
        packet_format=packet_format,
        packet_id=packet_id,
        session_uid=session_uid,
        session_time_s=session_time_s,
    )


def _require(data: bytes, size: int, what: str) -> None:
    if len(data) < size:
        raise PacketDecodeError(f"{what} packet truncated: {len(data)} < {size} bytes")


def _read_name(raw: bytes) -> str:
    return raw.split(b"\x00", 1)[0].decode("utf-8", errors="replace").strip()


def _decode_session(header: PacketHeader, data: bytes) -> SessionAnnouncement:
    _require(data, HEADER_SIZE + _SESSION_RULE_SET_OFFSET + 1, "session")
    body = HEADER_SIZE
    session_type = data[body + _SESSION_TYPE_OFFSET]
    track_id = struct.unpack_from("<b", data, body + _SESSION_TRACK_OFFSET)[0]
    rule_set = data[body + _SESSION_RULE_SET_OFFSET]
    return SessionAnnouncement(
        session_uid=header.session_uid,
        session_type=SessionType.from_raw(session_type),
        track=Track.from_raw(track_id),
        rule_set=RuleSet.from_raw(rule_set),
    )


def _decode_lap_data(header: PacketHeader, data: bytes) -> LapProgressUpdate:
    _require(data, HEADER_SIZE + MAX_CARS * _LAP_DATA_SIZE, "lap data")
    laps: List[LapData] = []
    for idx in range(MAX_CARS):
        base = HEADER_SIZE + idx * _LAP_DATA_SIZE
        (lap_distance,) = _LAP_DISTANCE_STRUCT.unpack_from(data, base + 18)
        car_position, current_lap_num = _LAP_POSITION_STRUCT.unpack_from(data, base + 30)
        laps.append(
            LapData(
                current_lap_num=current_lap_num,
                car_position=car_position,
                lap_distance=lap_distance,
            )
        )
    return LapProgressUpdate(lap_data=laps)


def _decode_event(header: PacketHeader, data: bytes) -> Optional[OvertakeSignal]:
    _require(data, HEADER_SIZE + 4, "event")
    code = bytes(data[HEADER_SIZE : HEADER_SIZE + 4])
    if code != _OVERTAKE_CODE:
        return None
    _require(data, HEADER_SIZE + 6, "overtake event")
    overtaking, overtaken = data[HEADER_SIZE + 4], data[HEADER_SIZE + 5]
    return OvertakeSignal(
        overtaking_vehicle_idx=overtaking,
        being_overtaken_vehicle_idx=overtaken,
        session_time_ms=int(round(header.session_time_s * 1000)),
    )


def _decode_participants(header: PacketHeader, data: bytes) -> RosterUpdate:
    _require(data, HEADER_SIZE + 1 + MAX_CARS * _PARTICIPANT_SIZE, "participants")
    num_active_cars = min(MAX_CARS, data[HEADER_SIZE])
    participants: List[ParticipantData] = []
    for idx in range(num_active_cars):
        base = HEADER_SIZE + 1 + idx * _PARTICIPANT_SIZE
        participants.append(
            ParticipantData(
                name=_read_name(data[base + 7 : base + 7 + _PARTICIPANT_NAME_SIZE]),
                team=Team.from_raw(data[base + 3]),
                race_number=data[base + 5],
            )
        )
    return RosterUpdate(participants=participants)


def _decode_car_telemetry(header: PacketHeader, data: bytes) -> SpeedUpdate:
    _require(data, HEADER_SIZE + MAX_CARS * _CAR_TELEMETRY_SIZE, "car telemetry")
    speeds = [
        _SPEED_STRUCT.unpack_from(data, HEADER_SIZE + idx * _CAR_TELEMETRY_SIZE)[0] for idx in range(MAX_CARS)
    ]
    return SpeedUpdate(speeds=speeds)


def _decode_car_status(header: PacketHeader, data: bytes) -> StatusUpdate:
    _require(data, HEADER_SIZE + MAX_CARS * _CAR_STATUS_SIZE, "car status")
    statuses: List[CarStatusData] = []
    for idx in range(MAX_CARS):
        base = HEADER_SIZE + idx * _CAR_STATUS_SIZE
        tyre_age = data[base + _TYRE_AGE_OFFSET]
        statuses.append(
            CarStatusData(
                visual_tyre_compound=VisualTyreCompound.from_raw(data[base + _VISUAL_COMPOUND_OFFSET]),
                tyre_age_laps=None if tyre_age == _TYRE_AGE_UNKNOWN else tyre_age,
            )
        )
    return StatusUpdate(car_status=statuses)


def _decode_final_classification(header: PacketHeader, data: bytes) -> FinalClassification:
    _require(data, HEADER_SIZE + 1 + MAX_CARS * _FINAL_CLASSIFICATION_SIZE, "final classification")
    num_cars = min(MAX_CARS, data[HEADER_SIZE])
    results: List[FinalClassificationData] = []
    for idx in range(MAX_CARS):
        base = HEADER_SIZE + 1 + idx * _FINAL_CLASSIFICATION_SIZE
        (
            position,
            num_laps,
            grid_position,
            _points,
            num_pit_stops,
            result_status,
            best_lap_time_ms,
            total_race_time_s,
            penalties_time_s,
            num_penalties,
        ) = _FINAL_CLASSIFICATION_STRUCT.unpack_from(data, base)
        results.append(
            FinalClassificationData(
                position=position,
                grid_position=grid_position,
                best_lap_time_ms=best_lap_time_ms,
                total_race_time_s=total_race_time_s,
                num_laps=num_laps,
                num_pit_stops=num_pit_stops,
                num_penalties=num_penalties,
                penalties_time_s=penalties_time_s,
                result_status=ResultStatus.from_raw(result_status),
            )
        )
    return FinalClassification(session_uid=header.session_uid, num_cars=num_cars, classifications=results)


_DECODERS: Dict[int, Callable[[PacketHeader, bytes], Optional[Packet]]] = {
    PACKET_ID_SESSION: _decode_session,
    PACKET_ID_LAP_DATA: _decode_lap_data,
    PACKET_ID_EVENT: _decode_event,
    PACKET_ID_PARTICIPANTS: _decode_participants,
    PACKET_ID_CAR_TELEMETRY: _decode_car_telemetry,
    PACKET_ID_CAR_STATUS: _decode_car_status,
    PACKET_ID_FINAL_CLASSIFICATION: _decode_final_classification,
}


def decode_packet(data: bytes) -> Optional[Packet]:
    header = decode_header(data)
    decoder = _DECODERS.get(header.packet_id)
    if decoder is None:
        return None
    try:
        return decoder(header, data)
    except struct.error as exc:
        raise PacketDecodeError(f"packet id {header.packet_id}: {exc}") from exc
