"""
Band Resolver
survey_scoring/scoring/bands.py

Two band taxonomies, kept apart:

1. Survey-authored ``ScoreRange``s (respondent-facing). Each survey may define
   its own labels/colors, optionally per category, with global fallbacks.
   Resolved by ``resolve_score_range``.

2. Canonical Index Bands (analytics-facing). A fixed 5-tier table shared by
   every survey, so distributions, trends and rollups stay comparable across
   surveys and across time. Resolved by ``resolve_index_band``.

``IndexBand`` and ``ScoreRange`` are unrelated types; nothing here converts
one into the other.

    critical            0 - 20   #ef4444
    needs-improvement  21 - 40   #f97316
    developing         41 - 60   #f59e0b
    effective          61 - 80   #84cc16
    highly-effective   81 - 100  #22c55e
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from survey_scoring.models.enumerations import TrendDirection
from survey_scoring.models.survey import ScoreRange
from survey_scoring.scoring.utils import Number, clamp

# Change (in index points) beyond which a movement counts as up/down
TREND_THRESHOLD = 1

DEFAULT_MAX_CONFIGURED_SCORE = 100


@dataclass(frozen=True)
class IndexBand:
    """One tier of the canonical Index Band table."""
    band_id: str
    label: str
    min: int
    max: int
    color: str
    severity: str


INDEX_BAND_DEFINITIONS: tuple = (
    IndexBand("critical",          "Critical",          0,  20,  "#ef4444", "critical"),
    IndexBand("needs-improvement", "Needs Improvement", 21, 40,  "#f97316", "warning"),
    IndexBand("developing",        "Developing",        41, 60,  "#f59e0b", "neutral"),
    IndexBand("effective",         "Effective",         61, 80,  "#84cc16", "good"),
    IndexBand("highly-effective",  "Highly Effective",  81, 100, "#22c55e", "excellent"),
)

# Null scores resolve to the middle tier
_NULL_SCORE_BAND = INDEX_BAND_DEFINITIONS[2]


def resolve_band_index(score: Optional[Number]) -> int:
    """
    Position of the canonical band for ``score`` in INDEX_BAND_DEFINITIONS.

    The score is clamped to [0, 100] first. Fractional scores that fall
    between two tiers (e.g. 20.5) resolve to the lower tier.
    """
    if score is None:
        return INDEX_BAND_DEFINITIONS.index(_NULL_SCORE_BAND)
    clamped = clamp(score, 0, 100)
    for i, next_band in enumerate(INDEX_BAND_DEFINITIONS[1:]):
        if clamped < next_band.min:
            return i
    return len(INDEX_BAND_DEFINITIONS) - 1


def resolve_index_band(score: Optional[Number]) -> IndexBand:
    """Canonical Index Band for a normalized 0-100 score."""
    return INDEX_BAND_DEFINITIONS[resolve_band_index(score)]


def resolve_trend_direction(change: Optional[Number]) -> TrendDirection:
    if change is None:
        return TrendDirection.NEUTRAL
    if change > TREND_THRESHOLD:
        return TrendDirection.UP
    if change < -TREND_THRESHOLD:
        return TrendDirection.DOWN
    return TrendDirection.NEUTRAL


# ---------------------------------------------------------------------------
# Survey-authored score ranges
# ---------------------------------------------------------------------------

def effective_ranges(
    score_ranges: Sequence[ScoreRange],
    category_id: Optional[str],
) -> List[ScoreRange]:
    """
    Ranges that govern ``category_id``: its category-specific ranges if any
    exist, otherwise the global (category-less) ranges.
    """
    if category_id is not None:
        specific = [r for r in score_ranges if r.category == category_id]
        if specific:
            return specific
    return [r for r in score_ranges if not r.category]


def max_configured_score(
    score_ranges: Sequence[ScoreRange],
    category_id: Optional[str],
) -> float:
    """Upper end of the scale a category's normalized score is expressed on."""
    return max(
        [DEFAULT_MAX_CONFIGURED_SCORE] + [r.max for r in effective_ranges(score_ranges, category_id)]
    )


def _first_containing(ranges: Iterable[ScoreRange], score: Number) -> Optional[ScoreRange]:
    for r in ranges:
        if r.min <= score <= r.max:
            return r
    return None


def resolve_score_range(
    score: Optional[Number],
    score_ranges: Sequence[ScoreRange],
    category_id: Optional[str] = None,
) -> Optional[ScoreRange]:
    """
    Survey-authored range containing ``score``.

    With a category: that category's ranges are searched first, then the
    global ones. Without a category (the overall score): global ranges
    first, then any range at all, in configured order. Returns None when
    nothing contains the score.
    """
    if score is None:
        return None

    if category_id is not None:
        specific = [r for r in score_ranges if r.category == category_id]
        match = _first_containing(specific, score)
        if match is not None:
            return match
        return _first_containing((r for r in score_ranges if not r.category), score)

    match = _first_containing((r for r in score_ranges if not r.category), score)
    if match is not None:
        return match
    return _first_containing(score_ranges, score)
