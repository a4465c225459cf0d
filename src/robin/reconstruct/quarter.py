"""Resolve scraped quarter headers to canonical quarters."""

from __future__ import annotations

from typing import Optional

from robin.config import ScoringRules, get_rules
from robin.terms import Quarter


def resolve_quarter(header_text: Optional[str], *, rules: ScoringRules | None = None) -> Quarter:
    """Map a header such as "Second Quarter" to a quarter.

    Pages omit the header before the first score, so blank text means the
    first quarter. Anything not shaped like "<ordinal> quarter" is overtime.
    """

    rules = rules or get_rules()
    tokens = (header_text or "").split()
    if not tokens:
        return Quarter.Q1
    if len(tokens) == 2 and tokens[1].lower() == rules.quarter_keyword:
        return rules.quarter_ordinals.get(tokens[0].lower(), Quarter.OT)
    return Quarter.OT
