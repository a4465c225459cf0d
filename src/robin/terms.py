"""Game vocabularies shared by plays, drives and the decomposer."""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Mapping


class Quarter(str, Enum):
    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"
    OT = "OT"


class PlayCategory(str, Enum):
    OFFENSIVE = "offensive"
    DEFENSIVE = "defensive"
    SPECIAL = "special"


class PlayType(str, Enum):
    RUN = "run"
    PASS = "pass"
    INTERCEPTION_RETURN = "interception-return"
    FUMBLE_RETURN = "fumble-return"
    FUMBLE_RECOVERY = "fumble-recovery"
    PAT_RETURN = "pat-return"
    KICK = "kick"
    PUNT = "punt"
    KICKOFF_RETURN = "kickoff-return"
    KICK_RETURN = "kick-return"
    PUNT_RETURN = "punt-return"
    PUNT_RECOVERY = "punt-recovery"
    OTHER = "other"


class ScoringMethod(str, Enum):
    TD = "TD"
    FG = "FG"
    SF = "SF"
    XP = "XP"
    X2P = "X2P"
    D2P = "D2P"


class PlayEnding(str, Enum):
    TACKLE = "tackle"
    SACK = "sack"
    FUMBLE = "fumble"
    LATERAL = "lateral"
    INTERCEPTION = "interception"
    PASS_DEFLECTION = "pass-deflection"
    PUNT_BLOCK = "punt-block"
    OTHER = "other"


class DriveEnding(str, Enum):
    TOUCHDOWN = "touchdown"
    FIELD_GOAL = "field-goal"
    SAFETY = "safety"
    TURNOVER = "turnover"
    PUNT = "punt"
    DOWNS = "downs"
    END_OF_HALF = "end-of-half"
    END_OF_GAME = "end-of-game"


OFFENSIVE_PLAY_TYPES: FrozenSet[PlayType] = frozenset({PlayType.RUN, PlayType.PASS})

DEFENSIVE_PLAY_TYPES: FrozenSet[PlayType] = frozenset(
    {
        PlayType.INTERCEPTION_RETURN,
        PlayType.FUMBLE_RETURN,
        PlayType.FUMBLE_RECOVERY,
        PlayType.PAT_RETURN,
    }
)

SPECIAL_PLAY_TYPES: FrozenSet[PlayType] = frozenset(
    {
        PlayType.KICK,
        PlayType.PUNT,
        PlayType.KICKOFF_RETURN,
        PlayType.KICK_RETURN,
        PlayType.PUNT_RETURN,
        PlayType.PUNT_RECOVERY,
        PlayType.OTHER,
    }
)


def _build_category_lookup() -> Dict[PlayType, PlayCategory]:
    lookup: Dict[PlayType, PlayCategory] = {}
    for category, members in (
        (PlayCategory.OFFENSIVE, OFFENSIVE_PLAY_TYPES),
        (PlayCategory.DEFENSIVE, DEFENSIVE_PLAY_TYPES),
        (PlayCategory.SPECIAL, SPECIAL_PLAY_TYPES),
    ):
        for play_type in members:
            if play_type in lookup:
                raise RuntimeError(f"Play type {play_type.value!r} belongs to two categories")
            lookup[play_type] = category
    missing = set(PlayType) - set(lookup)
    if missing:
        raise RuntimeError(f"Play types without a category: {sorted(t.value for t in missing)}")
    return lookup


PLAY_CATEGORIES: Mapping[PlayType, PlayCategory] = _build_category_lookup()


def category_for(play_type: PlayType | str) -> PlayCategory:
    """Return the category a play type belongs to, raising ValueError if unknown."""

    return PLAY_CATEGORIES[PlayType(play_type)]


# Scoring methods that convert a touchdown rather than score on their own.
CONVERSION_METHODS: FrozenSet[ScoringMethod] = frozenset({ScoringMethod.XP, ScoringMethod.X2P})

DRIVE_ENDING_BY_METHOD: Mapping[ScoringMethod, DriveEnding] = {
    ScoringMethod.TD: DriveEnding.TOUCHDOWN,
    ScoringMethod.FG: DriveEnding.FIELD_GOAL,
    ScoringMethod.SF: DriveEnding.SAFETY,
}
