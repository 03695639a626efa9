from __future__ import annotations

import math
from typing import Iterator, List, Sequence, Tuple

from f1_session_logger.models.lookups import ResultStatus, RuleSet, SessionType, Team, Track, VisualTyreCompound
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
from f1_session_logger.providers.base import PacketProvider

_DEFAULT_GRID: Tuple[Tuple[str, Team, int], ...] = (
    ("HAMILTON", Team.MERCEDES, 44),
    ("LECLERC", Team.FERRARI, 16),
    ("VERSTAPPEN", Team.RED_BULL_RACING, 1),
    ("NORRIS", Team.MCLAREN, 4),
)


class MockPacketProvider(PacketProvider):
    """Deterministic synthetic race to exercise the full pipeline."""

    def __init__(
        self,
        tick_rate_hz: int = 10,
        total_laps: int = 3,
        track_length_m: float = 5793.0,
        session_uid: int = 0x5EED,
        grid: Sequence[Tuple[str, Team, int]] = _DEFAULT_GRID,
    ) -> None:
        self.tick_rate_hz = tick_rate_hz
        self.total_laps = total_laps
        self.track_length_m = track_length_m
        self.session_uid = session_uid
        self.grid = list(grid)
        self._connected = False

    def connect(self) -> None:
        self._connected = True

    def stream(self) -> Iterator[Packet]:
        if not self._connected:
            raise RuntimeError("Provider not connected.")

        dt = 1.0 / float(self.tick_rate_hz)
        car_count = len(self.grid)
        base_speed_ms = [65.0 - 0.2 * idx for idx in range(car_count)]
        swing_m = 60.0
        omega = 2.0 * math.pi / 40.0
        race_distance = self.total_laps * self.track_length_m
        session = SessionAnnouncement(
            session_uid=self.session_uid,
            session_type=SessionType.RACE,
            track=Track.MONZA,
            rule_set=RuleSet.RACE,
        )
        roster = RosterUpdate(
            participants=[ParticipantData(name=name, team=team, race_number=number) for name, team, number in self.grid]
        )

        def distance(idx: int, t: float) -> float:
            # Grid slots are 8 m apart; the sine swing makes cars trade places.
            return base_speed_ms[idx] * t + swing_m * math.sin(omega * t + idx * math.pi / 2.0) - idx * 8.0

        def speed_kmh(idx: int, t: float) -> int:
            return int(round((base_speed_ms[idx] + swing_m * omega * math.cos(omega * t + idx * math.pi / 2.0)) * 3.6))

        finish_time_s: List[float] = [0.0] * car_count
        previous_order: List[int] = list(range(car_count))
        tick = 0
        while True:
            t = tick * dt
            if tick % 20 == 0:
                yield session
            if tick % 50 == 0:
                yield roster

            distances = [distance(idx, t) for idx in range(car_count)]
            for idx, travelled in enumerate(distances):
                if travelled >= race_distance and finish_time_s[idx] == 0.0:
                    finish_time_s[idx] = t
            order = sorted(range(car_count), key=lambda idx: -distances[idx])
            laps = [max(1, int(max(0.0, travelled) // self.track_length_m) + 1) for travelled in distances]

            yield StatusUpdate(
                car_status=[
                    CarStatusData(
                        visual_tyre_compound=VisualTyreCompound.SOFT if idx % 2 == 0 else VisualTyreCompound.MEDIUM,
                        tyre_age_laps=laps[idx] - 1,
                    )
                    for idx in range(car_count)
                ]
            )
            yield SpeedUpdate(speeds=[speed_kmh(idx, t) for idx in range(car_count)])
            yield LapProgressUpdate(
                lap_data=[
                    LapData(
                        current_lap_num=min(laps[idx], self.total_laps),
                        car_position=order.index(idx) + 1,
                        lap_distance=max(0.0, distances[idx]) % self.track_length_m,
                    )
                    for idx in range(car_count)
                ]
            )
            for overtaker, overtakee in _overtakes(previous_order, order):
                yield OvertakeSignal(
                    overtaking_vehicle_idx=overtaker,
                    being_overtaken_vehicle_idx=overtakee,
                    session_time_ms=int(round(t * 1000)),
                )
            previous_order = order

            if all(finish_time_s):
                yield self._classification(order, finish_time_s, base_speed_ms)
                return
            tick += 1

    def close(self) -> None:
        self._connected = False

    def _classification(
        self, order: List[int], finish_time_s: List[float], base_speed_ms: List[float]
    ) -> FinalClassification:
        finishing = sorted(range(len(order)), key=lambda idx: finish_time_s[idx])
        results = [
            FinalClassificationData(
                position=finishing.index(idx) + 1,
                grid_position=idx + 1,
                best_lap_time_ms=int(round(self.track_length_m / base_speed_ms[idx] * 1000)),
                total_race_time_s=finish_time_s[idx],
                num_laps=self.total_laps,
                num_pit_stops=0,
                num_penalties=0,
                penalties_time_s=0,
                result_status=ResultStatus.FINISHED,
            )
            for idx in range(len(order))
        ]
        return FinalClassification(session_uid=self.session_uid, num_cars=len(results), classifications=results)


def _overtakes(previous_order: List[int], order: List[int]) -> List[Tuple[int, int]]:
    previous_rank = {idx: rank for rank, idx in enumerate(previous_order)}
    rank = {idx: rank for rank, idx in enumerate(order)}
    passes: List[Tuple[int, int]] = []
    for overtaker in order:
        for overtakee in order:
            if previous_rank[overtaker] > previous_rank[overtakee] and rank[overtaker] < rank[overtakee]:
                passes.append((overtaker, overtakee))
    return passes
