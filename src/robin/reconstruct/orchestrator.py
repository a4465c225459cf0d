"""Turn an ordered scoring summary into scoring drives."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Sequence, Union

from robin.config import ScoringRules, get_rules
from robin.decompose import TeamContext, get_classifier, strip_conversion
from robin.errors import ConfigurationError, MalformedInputError, ReconstructionError
from robin.ingest import HeaderRow, ScoreRow, parse_row
from robin.models import Drive, Play
from robin.terms import DRIVE_ENDING_BY_METHOD, DriveEnding, Quarter, ScoringMethod

from .possession import Possession, infer_possession
from .quarter import resolve_quarter


logger = logging.getLogger(__name__)

RowInput = Union[HeaderRow, ScoreRow, Any]


def _require_team(label: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{label} cannot be empty")
    return value.strip()


class DriveReconstructor:
    """Single-pass reconstruction of drives for one game.

    Running quarter and score live on the instance and are reset on every
    ``reconstruct`` call; use one instance per game being processed.
    """

    def __init__(
        self,
        home_team_id: str,
        away_team_id: str,
        *,
        rules: ScoringRules | None = None,
    ):
        self.home_team_id = _require_team("Home team", home_team_id)
        self.away_team_id = _require_team("Away team", away_team_id)
        if self.home_team_id == self.away_team_id:
            raise ConfigurationError(f"Home and away team must differ, both are {self.home_team_id!r}")
        self.rules = rules or get_rules()
        self._reset()

    def _reset(self) -> None:
        self.current_quarter = Quarter.Q1
        self.current_home_score = 0
        self.current_away_score = 0
        self._drives: List[Drive] = []

    def reconstruct(self, rows: Iterable[RowInput]) -> List[Drive]:
        self._reset()
        skipped = 0
        for row_number, raw in enumerate(rows, start=1):
            try:
                row = parse_row(raw, row_number=row_number)
                if isinstance(row, HeaderRow):
                    self.current_quarter = resolve_quarter(row.text, rules=self.rules)
                    logger.debug("Row %d: quarter is now %s", row_number, self.current_quarter.value)
                    continue
                if not self._process_score(row, row_number):
                    skipped += 1
            except ReconstructionError as exc:
                if exc.row_number is None:
                    exc.row_number = row_number
                raise
        logger.info(
            "Reconstructed %d drives (%d rows skipped), final score %d-%d",
            len(self._drives),
            skipped,
            self.current_home_score,
            self.current_away_score,
        )
        return list(self._drives)

    def _read_scores(self, row: ScoreRow, row_number: int) -> tuple[int, int]:
        if row.home_score is None and row.away_score is None:
            raise MalformedInputError("score row has neither home nor away score")
        if row.home_score is None or row.away_score is None:
            logger.warning("Row %d: missing score cell treated as 0", row_number)
        return row.home_score or 0, row.away_score or 0

    def _process_score(self, row: ScoreRow, row_number: int) -> bool:
        """Handle one score row; return False when the row produced nothing."""

        new_home, new_away = self._read_scores(row, row_number)
        possession = infer_possession(
            self.current_home_score,
            self.current_away_score,
            new_home,
            new_away,
            self.home_team_id,
            self.away_team_id,
        )
        produced = self._dispatch(row, row_number, possession, new_home, new_away)
        self.current_home_score = new_home
        self.current_away_score = new_away
        return produced

    def _dispatch(
        self,
        row: ScoreRow,
        row_number: int,
        possession: Possession,
        new_home: int,
        new_away: int,
    ) -> bool:
        context = TeamContext(possession.possessing_team_id, possession.defending_team_id)
        points = possession.points

        if points in self.rules.touchdown_points:
            plays = self._touchdown_plays(row.description, context)
            self._emit(possession, new_home, new_away, plays, DriveEnding.TOUCHDOWN)
            return True

        if points == self.rules.field_goal_points:
            play = get_classifier(ScoringMethod.FG)(row.description, context)
            if play is None:
                logger.warning("Row %d: no field goal found in %r", row_number, row.description)
            self._emit(possession, new_home, new_away, [play] if play else [], DriveEnding.FIELD_GOAL)
            return True

        method = self.rules.classifier_for_tag(row.score_type_tag)
        if method is None:
            logger.warning(
                "Row %d: %d points with tag %r cannot be classified; skipping",
                row_number,
                points,
                row.score_type_tag,
            )
            return False

        if method is ScoringMethod.XP and self._fold_conversion(row, possession, new_home, new_away):
            return True

        play = get_classifier(method)(row.description, context)
        if play is None:
            logger.warning("Row %d: no %s play found in %r", row_number, method.value, row.description)
            return False
        self._emit(possession, new_home, new_away, [play], DRIVE_ENDING_BY_METHOD.get(method))
        return True

    def _touchdown_plays(self, description: str, context: TeamContext) -> List[Play]:
        conversion = get_classifier(ScoringMethod.XP)(description, context)
        if conversion is None:
            return [get_classifier(ScoringMethod.TD)(description, context)]
        remainder = strip_conversion(description, conversion.origin or "")
        touchdown = get_classifier(ScoringMethod.TD)(remainder, context)
        return [touchdown, conversion]

    def _fold_conversion(
        self,
        row: ScoreRow,
        possession: Possession,
        new_home: int,
        new_away: int,
    ) -> bool:
        """Attach a standalone conversion row to the touchdown drive it belongs to."""

        previous = self._drives[-1] if self._drives else None
        if previous is None or previous.ending is not DriveEnding.TOUCHDOWN or previous.has_conversion:
            return False
        if possession.points and possession.possessing_team_id != previous.possessing_team_id:
            return False

        context = TeamContext(previous.possessing_team_id, previous.defending_team_id)
        play = get_classifier(ScoringMethod.XP)(row.description, context)
        if play is None:
            return False
        self._drives[-1] = previous.with_play(
            play.with_quarter(previous.quarter),
            home_score=new_home,
            away_score=new_away,
        )
        logger.debug(
            "Folded %s into touchdown drive of %s", play.origin, previous.possessing_team_id
        )
        return True

    def _emit(
        self,
        possession: Possession,
        home_score: int,
        away_score: int,
        plays: Sequence[Optional[Play]],
        ending: Optional[DriveEnding],
    ) -> None:
        drive = Drive(
            possessing_team_id=possession.possessing_team_id,
            defending_team_id=possession.defending_team_id,
            quarter=self.current_quarter,
            home_score=home_score,
            away_score=away_score,
            is_scoring_drive=True,
            ending=ending,
            plays=tuple(play.with_quarter(self.current_quarter) for play in plays if play is not None),
        )
        self._drives.append(drive)


def reconstruct_drives(
    home_team_id: str,
    away_team_id: str,
    rows: Iterable[RowInput],
    *,
    rules: ScoringRules | None = None,
) -> List[Drive]:
    """Reconstruct drives for one game with a fresh reconstructor."""

    return DriveReconstructor(home_team_id, away_team_id, rules=rules).reconstruct(rows)
