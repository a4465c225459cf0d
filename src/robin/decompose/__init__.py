"""Pattern-based decomposition of scoring descriptions into plays."""

from .classifiers import (
    CLASSIFIERS,
    Classifier,
    decompose_d2p,
    decompose_fg,
    decompose_sf,
    decompose_td,
    decompose_xp,
    get_classifier,
)
from .patterns import PlayRule, TeamContext, normalize_text, strip_conversion

__all__ = [
    "CLASSIFIERS",
    "Classifier",
    "PlayRule",
    "TeamContext",
    "decompose_d2p",
    "decompose_fg",
    "decompose_sf",
    "decompose_td",
    "decompose_xp",
    "get_classifier",
    "normalize_text",
    "strip_conversion",
]
