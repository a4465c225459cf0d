"""Configuration helpers for scoreboard sources."""

from .scoring import DEFAULT_SOURCE, ScoringRules, get_rules, iter_rules

__all__ = [
    "DEFAULT_SOURCE",
    "ScoringRules",
    "get_rules",
    "iter_rules",
]
