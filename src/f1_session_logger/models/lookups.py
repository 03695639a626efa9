from __future__ import annotations

from enum import IntEnum
from typing import Dict


class _ProtocolEnum(IntEnum):
    """Raw protocol byte with a display label for file names and CSV cells."""

    @classmethod
    def from_raw(cls, raw: int) -> "_ProtocolEnum":
        try:
            return cls(raw)
        except ValueError:
            return cls["UNKNOWN"]

    @property
    def label(self) -> str:
        override = _LABEL_OVERRIDES.get(type(self), {}).get(self.name)
        if override is not None:
            return override
        return self.name.replace("_", " ").title()


class SessionType(_ProtocolEnum):
    UNKNOWN = 0
    PRACTICE_1 = 1
    PRACTICE_2 = 2
    PRACTICE_3 = 3
    SHORT_PRACTICE = 4
    QUALIFYING_1 = 5
    QUALIFYING_2 = 6
    QUALIFYING_3 = 7
    SHORT_QUALIFYING = 8
    ONE_SHOT_QUALIFYING = 9
    RACE = 10
    RACE_2 = 11
    RACE_3 = 12
    TIME_TRIAL = 13

    @property
    def is_race(self) -> bool:
        return self in (SessionType.RACE, SessionType.RACE_2, SessionType.RACE_3)


class RuleSet(_ProtocolEnum):
    PRACTICE_AND_QUALIFYING = 0
    RACE = 1
    TIME_TRIAL = 2
    TIME_ATTACK = 4
    CHECKPOINT_CHALLENGE = 6
    AUTOCROSS = 8
    DRIFT = 9
    AVERAGE_SPEED_ZONE = 10
    RIVAL_DUEL = 11
    UNKNOWN = 255


class Track(_ProtocolEnum):
    MELBOURNE = 0
    PAUL_RICARD = 1
    SHANGHAI = 2
    SAKHIR = 3
    CATALUNYA = 4
    MONACO = 5
    MONTREAL = 6
    SILVERSTONE = 7
    HOCKENHEIM = 8
    HUNGARORING = 9
    SPA = 10
    MONZA = 11
    SINGAPORE = 12
    SUZUKA = 13
    ABU_DHABI = 14
    TEXAS = 15
    BRAZIL = 16
    AUSTRIA = 17
    SOCHI = 18
    MEXICO = 19
    BAKU = 20
    SAKHIR_SHORT = 21
    SILVERSTONE_SHORT = 22
    TEXAS_SHORT = 23
    SUZUKA_SHORT = 24
    HANOI = 25
    ZANDVOORT = 26
    IMOLA = 27
    PORTIMAO = 28
    JEDDAH = 29
    MIAMI = 30
    LAS_VEGAS = 31
    LOSAIL = 32
    UNKNOWN = 255


class Team(_ProtocolEnum):
    MERCEDES = 0
    FERRARI = 1
    RED_BULL_RACING = 2
    WILLIAMS = 3
    ASTON_MARTIN = 4
    ALPINE = 5
    ALPHA_TAURI = 6
    HAAS = 7
    MCLAREN = 8
    ALFA_ROMEO = 9
    F1_CUSTOM_TEAM = 104
    MERCEDES_2022 = 118
    FERRARI_2022 = 119
    RED_BULL_RACING_2022 = 120
    WILLIAMS_2022 = 121
    ASTON_MARTIN_2022 = 122
    ALPINE_2022 = 123
    ALPHA_TAURI_2022 = 124
    HAAS_2022 = 125
    MCLAREN_2022 = 126
    ALFA_ROMEO_2022 = 127
    UNKNOWN = 255


class VisualTyreCompound(_ProtocolEnum):
    INTER = 7
    WET = 8
    F2_WET = 15
    SOFT = 16
    MEDIUM = 17
    HARD = 18
    F2_SUPER_SOFT = 19
    F2_SOFT = 20
    F2_MEDIUM = 21
    F2_HARD = 22
    UNKNOWN = 255


class ResultStatus(_ProtocolEnum):
    INVALID = 0
    INACTIVE = 1
    ACTIVE = 2
    FINISHED = 3
    DID_NOT_FINISH = 4
    DISQUALIFIED = 5
    NOT_CLASSIFIED = 6
    RETIRED = 7
    UNKNOWN = 255


_LABEL_OVERRIDES: Dict[type, Dict[str, str]] = {
    SessionType: {"ONE_SHOT_QUALIFYING": "One-Shot Qualifying"},
    RuleSet: {"PRACTICE_AND_QUALIFYING": "Practice & Qualifying"},
    Team: {
        "MCLAREN": "McLaren",
        "MCLAREN_2022": "McLaren 2022",
        "F1_CUSTOM_TEAM": "F1 Custom Team",
    },
    VisualTyreCompound: {
        "F2_WET": "F2 Wet",
        "F2_SUPER_SOFT": "F2 Super Soft",
        "F2_SOFT": "F2 Soft",
        "F2_MEDIUM": "F2 Medium",
        "F2_HARD": "F2 Hard",
    },
}
