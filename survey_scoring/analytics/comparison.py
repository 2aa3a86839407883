"""
Before/After Comparison
survey_scoring/analytics/comparison.py

Compares the five insight dimensions between two ScoreConfigVersions.

    change        = round1(after - before)
    changePercent = round1((after - before) / before × 100)   (null when before == 0)
    trend         = up if change > 1, down if change < -1, else neutral

Overall label: positive when improved outnumbers both declined and stable,
negative likewise for declined, mixed when both improved and declined are
non-zero, otherwise stable. A dimension missing a score on either side
counts as stable.
"""

from typing import Optional, Sequence, Tuple

import structlog

from survey_scoring.analytics.scored import ScoredResponse, overall_scores
from survey_scoring.models.analytics import (
    BeforeAfterComparison,
    ComparisonSummary,
    DimensionComparison,
    VersionRef,
)
from survey_scoring.models.enumerations import OverallTrend, TrendDirection
from survey_scoring.models.response import ScoreConfigVersion
from survey_scoring.scoring.bands import resolve_trend_direction
from survey_scoring.scoring.utils import mean, round1, to_decimal

logger = structlog.get_logger(__name__)

INSIGHT_DIMENSIONS: Tuple[Tuple[str, str], ...] = (
    ("leadership_effectiveness", "Leadership Effectiveness"),
    ("team_wellbeing", "Team Wellbeing"),
    ("burnout_risk", "Burnout Risk"),
    ("psychological_safety", "Psychological Safety"),
    ("engagement_energy", "Engagement"),
)


def _version_ref(
    version_id: str,
    version: Optional[ScoreConfigVersion],
    fallback_label: str,
    response_count: int,
) -> VersionRef:
    return VersionRef(
        id=version_id,
        label=version.label if version else fallback_label,
        version_number=version.version_number if version else 0,
        date=version.created_at if version else None,
        response_count=response_count,
    )


def _average(scored: Sequence[ScoredResponse]) -> Optional[float]:
    avg = mean(overall_scores(scored))
    return round1(avg) if avg is not None else None


def compare_dimension(
    dimension_id: str,
    label: str,
    before: Optional[float],
    after: Optional[float],
) -> DimensionComparison:
    if before is None or after is None:
        return DimensionComparison(
            dimension_id=dimension_id,
            dimension_label=label,
            score_before=before,
            score_after=after,
        )

    delta = to_decimal(after) - to_decimal(before)
    change = round1(delta)
    change_percent = round1(delta / to_decimal(before) * 100) if before != 0 else None
    return DimensionComparison(
        dimension_id=dimension_id,
        dimension_label=label,
        score_before=before,
        score_after=after,
        change=change,
        change_percent=change_percent,
        trend=resolve_trend_direction(change),
    )


def summarize_trends(comparison: Sequence[DimensionComparison]) -> ComparisonSummary:
    improved = sum(1 for c in comparison if c.trend == TrendDirection.UP)
    declined = sum(1 for c in comparison if c.trend == TrendDirection.DOWN)
    stable = len(comparison) - improved - declined

    if improved > declined and improved > stable:
        overall = OverallTrend.POSITIVE
    elif declined > improved and declined > stable:
        overall = OverallTrend.NEGATIVE
    elif improved > 0 and declined > 0:
        overall = OverallTrend.MIXED
    else:
        overall = OverallTrend.STABLE

    return ComparisonSummary(
        total_dimensions_improved=improved,
        total_dimensions_declined=declined,
        total_dimensions_stable=stable,
        overall_trend=overall,
    )


class BeforeAfterComparator:
    """Compare two versions' scored responses dimension by dimension."""

    def compare(
        self,
        scored: Sequence[ScoredResponse],
        versions: Sequence[ScoreConfigVersion],
        version_before_id: str,
        version_after_id: str,
        scoring_enabled: bool,
    ) -> BeforeAfterComparison:
        """
        Args:
            scored: Every response of the survey (not version-filtered).
            versions: The survey's version records; ids not found there get
                the "Version Before"/"Version After" labels.
            version_before_id / version_after_id: The two versions to compare.
            scoring_enabled: False yields five stable, score-less dimensions.
        """
        by_id = {v.id: v for v in versions}
        before = [s for s in scored if s.response.score_config_version_id == version_before_id]
        after = [s for s in scored if s.response.score_config_version_id == version_after_id]

        if not scoring_enabled:
            before, after = [], []

        before_avg = _average(before)
        after_avg = _average(after)
        comparison = [
            compare_dimension(dimension_id, label, before_avg, after_avg)
            for dimension_id, label in INSIGHT_DIMENSIONS
        ]
        summary = summarize_trends(comparison)

        logger.info(
            "versions_compared",
            version_before=version_before_id,
            version_after=version_after_id,
            overall_trend=summary.overall_trend.value,
        )
        return BeforeAfterComparison(
            version_before=_version_ref(
                version_before_id, by_id.get(version_before_id), "Version Before", len(before)
            ),
            version_after=_version_ref(
                version_after_id, by_id.get(version_after_id), "Version After", len(after)
            ),
            comparison=comparison,
            summary=summary,
        )
