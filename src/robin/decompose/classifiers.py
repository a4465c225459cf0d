"""Ordered rule tables that decompose scoring descriptions into plays.

Each classifier walks its rules in order and returns the play built by the
first rule whose pattern matches. Touchdown and safety classifiers fall back
to an ``other`` play; the rest return ``None`` when nothing matches.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional, Tuple, cast

from robin.errors import ConfigurationError
from robin.models.play import Play
from robin.terms import PlayType, ScoringMethod

from .patterns import NAME_2W, NAME_EXT, YARDAGE, PlayRule, TeamContext, normalize_text, rule


logger = logging.getLogger(__name__)

Fallback = Callable[[str, TeamContext], Play]


@dataclass(frozen=True)
class Classifier:
    name: str
    rules: Tuple[PlayRule, ...]
    fallback: Optional[Fallback] = None

    def __call__(self, description: str, context: TeamContext) -> Optional[Play]:
        if not isinstance(context, TeamContext):
            raise ConfigurationError(f"{self.name} classifier needs a TeamContext, got {context!r}")
        text = normalize_text(description or "")
        for play_rule in self.rules:
            play = play_rule.apply(text, context)
            if play is not None:
                logger.debug("%s rule %r matched %r", self.name, play_rule.name, play.origin)
                return play
        if self.fallback is not None:
            logger.debug("%s fallback used for %r", self.name, text)
            return self.fallback(text, context)
        return None


def _unmatched(method: ScoringMethod) -> Fallback:
    def build(text: str, context: TeamContext) -> Play:
        return context.play(PlayType.OTHER, scoring_method=method, origin=text)

    return build


_TD_RULES: Tuple[PlayRule, ...] = (
    rule("run", rf"({NAME_EXT})\s{YARDAGE}\srun\b", PlayType.RUN, ScoringMethod.TD),
    rule(
        "pass",
        rf"({NAME_EXT})\s{YARDAGE}\spass\sfrom\s({NAME_EXT})",
        PlayType.PASS,
        ScoringMethod.TD,
        passer_group=2,
    ),
    rule(
        "interception-return",
        rf"({NAME_EXT})\s{YARDAGE}\sinterception\sreturn\b",
        PlayType.INTERCEPTION_RETURN,
        ScoringMethod.TD,
    ),
    rule(
        "fumble-return",
        rf"({NAME_EXT})\s{YARDAGE}\sfumble\sreturn\b",
        PlayType.FUMBLE_RETURN,
        ScoringMethod.TD,
    ),
    rule(
        "fumble-recovery",
        rf"({NAME_EXT})\s{YARDAGE}\sfumble\srecovery\b",
        PlayType.FUMBLE_RECOVERY,
        ScoringMethod.TD,
    ),
    rule(
        "punt-return",
        rf"({NAME_EXT})\s{YARDAGE}\spunt\sreturn\b",
        PlayType.PUNT_RETURN,
        ScoringMethod.TD,
    ),
    rule(
        "kickoff-return",
        rf"({NAME_EXT})\s{YARDAGE}\skickoff\sreturn\b",
        PlayType.KICKOFF_RETURN,
        ScoringMethod.TD,
    ),
)

# Bracketed forms come first and accept extended names; some pages drop the
# brackets, and the unbracketed forms only accept a two-word name.
_XP_RULES: Tuple[PlayRule, ...] = (
    rule(
        "kick-good-bracketed",
        rf"\(({NAME_EXT})\skick\b(?:\sis\sgood)?\)",
        PlayType.KICK,
        ScoringMethod.XP,
    ),
    rule(
        "pat-failed-bracketed",
        rf"\(({NAME_EXT})\sPAT\sfailed\)",
        PlayType.KICK,
        ScoringMethod.XP,
        result_is_good=False,
    ),
    rule("kick-good", rf"\(?({NAME_2W})\skick\b(?:\sis\sgood)?\)?", PlayType.KICK, ScoringMethod.XP),
    rule(
        "pat-failed",
        rf"\(?({NAME_2W})\sPAT\sfailed\)?",
        PlayType.KICK,
        ScoringMethod.XP,
        result_is_good=False,
    ),
    rule(
        "two-point-failed-bracketed",
        rf"\(((?:{NAME_EXT}\s(?:pass|run)\sfor\s)?two-point\s(?:pass|run)?\s?conversion\sfailed)\)",
        PlayType.OTHER,
        ScoringMethod.X2P,
        author_group=None,
        result_is_good=False,
    ),
    rule(
        "two-point-failed",
        rf"((?:{NAME_2W}\s(?:pass|run)\sfor\s)?two-point\s(?:pass|run)?\s?conversion\sfailed)",
        PlayType.OTHER,
        ScoringMethod.X2P,
        author_group=None,
        result_is_good=False,
    ),
    rule(
        "two-point-pass-bracketed",
        rf"\(({NAME_EXT})\spass\sto\s({NAME_EXT})\sfor\stwo-point\sconversion\)",
        PlayType.PASS,
        ScoringMethod.X2P,
        author_group=2,
        passer_group=1,
    ),
    rule(
        "two-point-run-bracketed",
        rf"\(({NAME_EXT})\srun\sfor\stwo-point\sconversion\)",
        PlayType.RUN,
        ScoringMethod.X2P,
    ),
    rule(
        "two-point-pass",
        rf"({NAME_2W})\spass\sto\s({NAME_EXT})\sfor\stwo-point\sconversion",
        PlayType.PASS,
        ScoringMethod.X2P,
        author_group=2,
        passer_group=1,
    ),
    rule(
        "two-point-run",
        rf"({NAME_2W})\srun\sfor\stwo-point\sconversion",
        PlayType.RUN,
        ScoringMethod.X2P,
    ),
)

_FG_RULES: Tuple[PlayRule, ...] = (
    rule("field-goal", rf"({NAME_EXT})\s{YARDAGE}\sfield\sgoal\b", PlayType.KICK, ScoringMethod.FG),
)

_D2P_RULES: Tuple[PlayRule, ...] = (
    rule(
        "defensive-pat",
        rf"({NAME_EXT})\sdefensive\spat\sconversion\b",
        PlayType.PAT_RETURN,
        ScoringMethod.D2P,
    ),
)


TD = Classifier("TD", _TD_RULES, fallback=_unmatched(ScoringMethod.TD))
XP = Classifier("XP", _XP_RULES)
FG = Classifier("FG", _FG_RULES)
SF = Classifier("SF", (), fallback=_unmatched(ScoringMethod.SF))
D2P = Classifier("D2P", _D2P_RULES)

_CLASSIFIERS: Dict[ScoringMethod, Classifier] = {
    ScoringMethod.TD: TD,
    ScoringMethod.XP: XP,
    ScoringMethod.X2P: XP,
    ScoringMethod.FG: FG,
    ScoringMethod.SF: SF,
    ScoringMethod.D2P: D2P,
}

CLASSIFIERS: Mapping[ScoringMethod, Classifier] = _CLASSIFIERS


def get_classifier(method: ScoringMethod | str) -> Classifier:
    """Fetch the classifier for a scoring method, raising KeyError if missing."""

    try:
        key = ScoringMethod(method.upper() if isinstance(method, str) else method)
    except ValueError:
        raise KeyError(f"No classifier registered for {method!r}") from None
    return _CLASSIFIERS[key]


def decompose_td(description: str, context: TeamContext) -> Play:
    return cast(Play, TD(description, context))


def decompose_xp(description: str, context: TeamContext) -> Optional[Play]:
    return XP(description, context)


def decompose_fg(description: str, context: TeamContext) -> Optional[Play]:
    return FG(description, context)


def decompose_sf(description: str, context: TeamContext) -> Play:
    return cast(Play, SF(description, context))


def decompose_d2p(description: str, context: TeamContext) -> Optional[Play]:
    return D2P(description, context)
