"""Canonical play model produced by the scoring decomposer."""

from __future__ import annotations

from typing import Any, Iterable, Optional, Tuple

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator
from pydantic.config import ConfigDict

from robin.terms import PlayCategory, PlayEnding, PlayType, Quarter, ScoringMethod, category_for


PLAYER_ID_SEPARATOR = "/"


def make_player_id(team_id: str, name: str) -> str:
    """Compose the opaque ``<team_id>/<raw_name>`` identifier for a player."""

    return f"{team_id.strip()}{PLAYER_ID_SEPARATOR}{' '.join(name.split())}"


def split_player_id(player_id: str) -> Tuple[str, str]:
    """Split an identifier into ``(team_id, raw_name)``."""

    team_id, sep, name = player_id.rpartition(PLAYER_ID_SEPARATOR)
    if not sep:
        return "", player_id
    return team_id, name


class Play(BaseModel):
    """One discrete on-field action; category is always derived from the type."""

    play_type: PlayType
    possessing_team_id: str = Field(..., min_length=1)
    defending_team_id: str = Field(..., min_length=1)
    scoring_method: Optional[ScoringMethod] = None
    is_scoring_play: bool = False
    result_is_good: bool = True
    is_turnover: bool = False
    author: Optional[str] = None
    passer: Optional[str] = None
    defenders: Tuple[str, ...] = ()
    ending: Optional[PlayEnding] = None
    gain: Optional[int] = None
    start: Optional[int] = Field(default=None, ge=0, le=100)
    finish: Optional[int] = Field(default=None, ge=0, le=100)
    quarter: Optional[Quarter] = None
    origin: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _derive_flags(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        category = data.pop("category", None)
        if category is not None and "play_type" in data:
            expected = category_for(data["play_type"])
            if PlayCategory(category) is not expected:
                raise ValueError(
                    f"category {category!r} does not match play type {data['play_type']!r}"
                )
        if data.get("scoring_method") is not None:
            data["is_scoring_play"] = True
        return data

    @field_validator("possessing_team_id", "defending_team_id", mode="before")
    @classmethod
    def _strip_team(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("author", "passer", mode="before")
    @classmethod
    def _check_player(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("player identifier cannot be empty")
        return value

    @field_validator("defenders", mode="before")
    @classmethod
    def _dedupe_defenders(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        unique: list[str] = []
        for defender in value:
            if not isinstance(defender, str):
                raise ValueError("defenders must be player identifiers")
            defender = defender.strip()
            if defender and defender not in unique:
                unique.append(defender)
        return tuple(unique)

    @model_validator(mode="after")
    def _check_passer(self) -> "Play":
        if self.passer is not None and self.play_type is not PlayType.PASS:
            raise ValueError("passer can only be set on pass plays")
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def category(self) -> PlayCategory:
        return category_for(self.play_type)

    @property
    def author_name(self) -> Optional[str]:
        return split_player_id(self.author)[1] if self.author else None

    @property
    def passer_name(self) -> Optional[str]:
        return split_player_id(self.passer)[1] if self.passer else None

    def with_quarter(self, quarter: Quarter | str) -> "Play":
        return self.model_copy(update={"quarter": Quarter(quarter)})

    def intercepted(self, defender: Optional[str] = None) -> "Play":
        """Return a copy of this play ended by an interception."""

        defenders: Iterable[str] = (defender.strip(),) if defender and defender.strip() else ()
        return self.model_copy(
            update={
                "is_turnover": True,
                "defenders": tuple(defenders),
                "ending": PlayEnding.INTERCEPTION,
            }
        )
