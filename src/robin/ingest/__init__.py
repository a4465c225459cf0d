"""Input adapters that validate scraped scoring summaries."""

from .rows import (
    GameInput,
    HeaderRow,
    ScoreRow,
    load_game_json,
    load_rows_csv,
    parse_game,
    parse_row,
    parse_rows,
)

__all__ = [
    "GameInput",
    "HeaderRow",
    "ScoreRow",
    "load_game_json",
    "load_rows_csv",
    "parse_game",
    "parse_row",
    "parse_rows",
]
