"""Scoring conventions for supported scoreboard sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Mapping, Optional

from robin.terms import Quarter, ScoringMethod


@dataclass(frozen=True)
class ScoringRules:
    source: str
    touchdown_points: FrozenSet[int]
    field_goal_points: int
    quarter_keyword: str
    quarter_ordinals: Mapping[str, Quarter]
    score_type_tags: Mapping[str, ScoringMethod]

    def classifier_for_tag(self, tag: Optional[str]) -> Optional[ScoringMethod]:
        """Map a scraped score-type tag to the classifier that handles it."""

        if tag is None:
            return None
        return self.score_type_tags.get(tag.strip().upper())


_SCORING_RULES: Dict[str, ScoringRules] = {
    "ESPN": ScoringRules(
        source="ESPN",
        touchdown_points=frozenset({6, 7, 8}),
        field_goal_points=3,
        quarter_keyword="quarter",
        quarter_ordinals={
            "first": Quarter.Q1,
            "second": Quarter.Q2,
            "third": Quarter.Q3,
            "fourth": Quarter.Q4,
        },
        # Two-point tries are decomposed by the extra-point classifier.
        score_type_tags={
            "SF": ScoringMethod.SF,
            "D2P": ScoringMethod.D2P,
            "XP": ScoringMethod.XP,
            "X2P": ScoringMethod.XP,
            "2PTC": ScoringMethod.XP,
        },
    ),
}

DEFAULT_SOURCE = "ESPN"


def iter_rules() -> Iterable[ScoringRules]:
    """Return an iterator of all configured rule sets."""

    return _SCORING_RULES.values()


def get_rules(source: str = DEFAULT_SOURCE) -> ScoringRules:
    """Fetch rules for a scoreboard source, raising KeyError if missing."""

    key = source.strip().upper()
    if key not in _SCORING_RULES:
        raise KeyError(f"No scoring rules configured for source={source!r}")
    return _SCORING_RULES[key]
