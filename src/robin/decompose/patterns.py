"""Building blocks for turning scoring descriptions into plays."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from robin.errors import ConfigurationError
from robin.models.play import Play, make_player_id
from robin.terms import PlayType, ScoringMethod


# A player name is two word-like groups; the extended form allows suffixes
# such as "III" or a third name. Letters may be non-ASCII and apostrophes
# may be typographic.
NAME_CHAR = r"(?:[^\W\d_]|[\-.'’])"
NAME_2W = rf"{NAME_CHAR}+\s{NAME_CHAR}+"
NAME_EXT = NAME_2W + rf"(?:{NAME_CHAR}|\s)*"
YARDAGE = r"\d{1,3}\sya?r?ds?"

_WHITESPACE_RE = re.compile(r"\s+")
_BRACKETS_RE = re.compile(r"[()]")


def normalize_text(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


@dataclass(frozen=True)
class TeamContext:
    """Team pair every classifier call is bound to."""

    possessing_team_id: str
    defending_team_id: str

    def __post_init__(self) -> None:
        for field_name in ("possessing_team_id", "defending_team_id"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                label = field_name.replace("_id", "").replace("_", " ")
                raise ConfigurationError(f"{label.capitalize()} cannot be empty")
            object.__setattr__(self, field_name, value.strip())

    def player(self, raw_name: str) -> str:
        return make_player_id(self.possessing_team_id, raw_name)

    def play(self, play_type: PlayType, **fields) -> Play:
        return Play(
            play_type=play_type,
            possessing_team_id=self.possessing_team_id,
            defending_team_id=self.defending_team_id,
            **fields,
        )


@dataclass(frozen=True)
class PlayRule:
    """Pattern plus the shape of the play it produces when it matches."""

    name: str
    pattern: re.Pattern
    play_type: PlayType
    scoring_method: ScoringMethod
    author_group: Optional[int] = 1
    passer_group: Optional[int] = None
    result_is_good: bool = True

    def apply(self, text: str, context: TeamContext) -> Optional[Play]:
        match = self.pattern.search(text)
        if match is None:
            return None
        fields = {
            "scoring_method": self.scoring_method,
            "result_is_good": self.result_is_good,
            "origin": match.group(0),
        }
        if self.author_group is not None:
            fields["author"] = context.player(match.group(self.author_group))
        if self.passer_group is not None:
            fields["passer"] = context.player(match.group(self.passer_group))
        return context.play(self.play_type, **fields)


def rule(
    name: str,
    regex: str,
    play_type: PlayType,
    scoring_method: ScoringMethod,
    **options,
) -> PlayRule:
    return PlayRule(
        name=name,
        pattern=re.compile(regex, re.IGNORECASE),
        play_type=play_type,
        scoring_method=scoring_method,
        **options,
    )


def strip_conversion(description: str, origin: str) -> str:
    """Remove a matched conversion phrase and any brackets from a description."""

    remainder = normalize_text(description)
    if origin:
        remainder = remainder.replace(origin, " ", 1)
    return normalize_text(_BRACKETS_RE.sub(" ", remainder))
