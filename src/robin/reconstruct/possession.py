"""Infer which team scored from consecutive cumulative scores."""

from __future__ import annotations

from typing import Any, NamedTuple

from robin.errors import ConfigurationError, MalformedInputError


class Possession(NamedTuple):
    possessing_team_id: str
    defending_team_id: str
    points: int


def _check_score(label: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedInputError(f"{label} must be an integer, got {value!r}")
    if value < 0:
        raise MalformedInputError(f"{label} cannot be negative, got {value}")
    return value


def _check_team(label: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{label} cannot be empty")
    return value.strip()


def infer_possession(
    prev_home: int,
    prev_away: int,
    cur_home: int,
    cur_away: int,
    home_team: str,
    away_team: str,
) -> Possession:
    """Return the scoring team, its opponent and the points just scored.

    The away team possesses only when its delta is strictly larger; equal
    deltas (including two unchanged scores) default to the home team.
    """

    home_team = _check_team("Home team", home_team)
    away_team = _check_team("Away team", away_team)
    if home_team == away_team:
        raise ConfigurationError(f"Home and away team must differ, both are {home_team!r}")

    home_delta = _check_score("current home score", cur_home) - _check_score(
        "previous home score", prev_home
    )
    away_delta = _check_score("current away score", cur_away) - _check_score(
        "previous away score", prev_away
    )
    if home_delta < 0 or away_delta < 0:
        raise MalformedInputError(
            f"score went backwards: {prev_home}-{prev_away} -> {cur_home}-{cur_away}"
        )

    if away_delta > home_delta:
        return Possession(away_team, home_team, away_delta)
    return Possession(home_team, away_team, home_delta)
