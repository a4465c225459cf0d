"""Row models and loaders for scraped scoring summaries."""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Annotated, Any, Iterable, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from robin.errors import ConfigurationError, MalformedInputError


logger = logging.getLogger(__name__)


class HeaderRow(BaseModel):
    """Quarter header row, e.g. "Second Quarter" or "Overtime"."""

    kind: Literal["header"] = "header"
    text: str = ""


class ScoreRow(BaseModel):
    """Scoring row with cumulative scores after the event."""

    kind: Literal["score"] = "score"
    home_score: Optional[int] = Field(default=None, ge=0)
    away_score: Optional[int] = Field(default=None, ge=0)
    description: str = ""
    score_type_tag: Optional[str] = None

    @field_validator("home_score", "away_score", mode="before")
    @classmethod
    def _blank_is_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("score_type_tag", mode="before")
    @classmethod
    def _normalize_tag(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().upper()
            return value or None
        return value


ScoringRow = Annotated[Union[HeaderRow, ScoreRow], Field(discriminator="kind")]

_ROW_ADAPTER: TypeAdapter = TypeAdapter(ScoringRow)


class GameInput(BaseModel):
    home_team_id: str
    away_team_id: str
    rows: List[ScoringRow] = Field(default_factory=list)


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


def parse_row(raw: Any, *, row_number: Optional[int] = None) -> Union[HeaderRow, ScoreRow]:
    """Validate one raw row, raising MalformedInputError with its ordinal."""

    if isinstance(raw, (HeaderRow, ScoreRow)):
        return raw
    try:
        return _ROW_ADAPTER.validate_python(raw)
    except ValidationError as exc:
        raise MalformedInputError(f"invalid row: {_describe(exc)}", row_number=row_number) from exc


def parse_rows(raw_rows: Iterable[Any]) -> List[Union[HeaderRow, ScoreRow]]:
    return [parse_row(raw, row_number=number) for number, raw in enumerate(raw_rows, start=1)]


def _team_id(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{key} is required")
    return value.strip()


def parse_game(payload: Mapping[str, Any]) -> GameInput:
    """Validate a scraped game payload with team ids and ordered rows."""

    if not isinstance(payload, Mapping):
        raise MalformedInputError(f"game payload must be an object, got {type(payload).__name__}")
    raw_rows = payload.get("rows") or []
    if not isinstance(raw_rows, list):
        raise MalformedInputError("rows must be a list")
    return GameInput(
        home_team_id=_team_id(payload, "home_team_id"),
        away_team_id=_team_id(payload, "away_team_id"),
        rows=parse_rows(raw_rows),
    )


def load_game_json(path: Path) -> GameInput:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise MalformedInputError(f"{path} is not valid JSON: {exc}") from exc
    return parse_game(payload)


DEFAULT_ROW_MAPPING = {
    "kind": "kind",
    "text": "text",
    "home_score": "home_score",
    "away_score": "away_score",
    "description": "description",
    "score_type_tag": "score_type_tag",
}


def _csv_row_payload(row: Mapping[str, Optional[str]], mapping: Mapping[str, str]) -> dict[str, Any]:
    def extract(key: str) -> str:
        column = mapping.get(key, key)
        value = row.get(column)
        return value.strip() if value is not None else ""

    kind = extract("kind").lower()
    home_score = extract("home_score")
    away_score = extract("away_score")
    text = extract("text")
    if not kind:
        # Older exports have no kind column; headers carry text and no scores.
        kind = "header" if text and not home_score and not away_score else "score"

    if kind == "header":
        return {"kind": "header", "text": text}
    return {
        "kind": kind,
        "home_score": home_score or None,
        "away_score": away_score or None,
        "description": extract("description") or text,
        "score_type_tag": extract("score_type_tag") or None,
    }


def load_rows_csv(
    path: Path, *, mapping: Mapping[str, str] | None = None
) -> List[Union[HeaderRow, ScoreRow]]:
    """Read scoring rows from a CSV export, one row per header or score."""

    mapping = {**DEFAULT_ROW_MAPPING, **(mapping or {})}
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        payloads = [_csv_row_payload(row, mapping) for row in reader]
    logger.debug("Loaded %d rows from %s", len(payloads), path)
    return parse_rows(payloads)
