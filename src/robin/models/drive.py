"""Drive aggregate: one possession summarised by its scoring plays."""

from __future__ import annotations

from typing import Any, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.config import ConfigDict

from robin.models.play import Play
from robin.terms import CONVERSION_METHODS, DriveEnding, Quarter


class Drive(BaseModel):
    possessing_team_id: str = Field(..., min_length=1)
    defending_team_id: str = Field(..., min_length=1)
    quarter: Quarter
    home_score: int = Field(..., ge=0)
    away_score: int = Field(..., ge=0)
    is_scoring_drive: bool = False
    ending: Optional[DriveEnding] = None
    plays: Tuple[Play, ...] = ()

    model_config = ConfigDict(frozen=True)

    @field_validator("possessing_team_id", "defending_team_id", mode="before")
    @classmethod
    def _strip_team(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _check_teams(self) -> "Drive":
        if self.possessing_team_id == self.defending_team_id:
            raise ValueError("possessing and defending team must differ")
        return self

    def get_play(self, number: Optional[int] = None) -> Optional[Play]:
        """Return the play at 1-based ``number``, or the last play when omitted."""

        if number is None:
            number = len(self.plays)
        if isinstance(number, bool) or not isinstance(number, int) or number < 1:
            return None
        if number > len(self.plays):
            return None
        return self.plays[number - 1]

    @property
    def scoring_play(self) -> Optional[Play]:
        for play in self.plays:
            if play.scoring_method is not None:
                return play
        return None

    @property
    def has_conversion(self) -> bool:
        return any(play.scoring_method in CONVERSION_METHODS for play in self.plays)

    def with_play(
        self,
        play: Play,
        *,
        home_score: Optional[int] = None,
        away_score: Optional[int] = None,
    ) -> "Drive":
        """Return a new drive with ``play`` appended and optionally a new score."""

        payload = self.model_dump()
        payload["plays"] = (*self.plays, play)
        if home_score is not None:
            payload["home_score"] = home_score
        if away_score is not None:
            payload["away_score"] = away_score
        return Drive.model_validate(payload)
