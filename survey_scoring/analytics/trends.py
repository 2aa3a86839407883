"""
Index Trend (calendar time) and Index Trends Summary (by scoring version)
survey_scoring/analytics/trends.py

Calendar trend buckets responses by the UTC date of completedAt (falling
back to startedAt): daily, weekly (Monday-start) or monthly. The version
summary emits one point per ScoreConfigVersion instead, so score movement
can be read against changes in the scoring configuration itself.

Every insight index currently carries the bucket's average overall score.
"""

from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence

from survey_scoring.analytics.scored import ScoredResponse, overall_scores
from survey_scoring.models.analytics import (
    IndexTrend,
    IndexTrendsSummary,
    TrendPoint,
    VersionScores,
    VersionTrendPoint,
)
from survey_scoring.models.enumerations import TrendGranularity
from survey_scoring.models.response import ScoreConfigVersion
from survey_scoring.scoring.utils import mean, round1

ALL_RESPONSES_ID = "all"
ALL_RESPONSES_LABEL = "All Responses"


def bucket_start(moment: datetime, granularity: TrendGranularity) -> date:
    day = moment.date()
    if granularity == TrendGranularity.WEEKLY:
        return day - timedelta(days=day.weekday())
    if granularity == TrendGranularity.MONTHLY:
        return day.replace(day=1)
    return day


def _average(scored: Sequence[ScoredResponse]) -> Optional[float]:
    avg = mean(overall_scores(scored))
    return round1(avg) if avg is not None else None


def index_trend(
    scored: Sequence[ScoredResponse],
    scoring_enabled: bool,
    granularity: TrendGranularity = TrendGranularity.WEEKLY,
) -> IndexTrend:
    if not scoring_enabled:
        return IndexTrend()

    buckets: Dict[date, List[ScoredResponse]] = {}
    for item in scored:
        moment = item.response.completed_at or item.response.started_at
        if moment is None:
            continue
        buckets.setdefault(bucket_start(moment, granularity), []).append(item)

    series = []
    for start in sorted(buckets):
        members = buckets[start]
        # None when no response in the bucket produced an overall score
        value = _average(members)
        series.append(
            TrendPoint(
                date=start.isoformat(),
                engagement_index=value,
                leadership_index=value,
                wellbeing_index=value,
                burnout_risk_index=value,
                psychological_safety_index=value,
                response_count=len(members),
            )
        )
    return IndexTrend(series=series)


def _version_point(
    version_id: str,
    label: str,
    number: int,
    version_date: Optional[datetime],
    members: Sequence[ScoredResponse],
) -> VersionTrendPoint:
    avg = _average(members)
    return VersionTrendPoint(
        version_id=version_id,
        version_label=label,
        version_number=number,
        version_date=version_date,
        scores=VersionScores(
            leadership_effectiveness=avg,
            team_wellbeing=avg,
            burnout_risk=avg,
            psychological_safety=avg,
            engagement=avg,
        ),
        response_count=len(members),
    )


def index_trends_summary(
    scored: Sequence[ScoredResponse],
    versions: Sequence[ScoreConfigVersion],
    scoring_enabled: bool,
) -> IndexTrendsSummary:
    """
    Args:
        scored: Every response of the survey (not version-filtered).
        versions: The survey's ScoreConfigVersion records, in any order.
        scoring_enabled: False yields the empty summary.
    """
    if not scoring_enabled:
        return IndexTrendsSummary()

    if not versions:
        if not scored:
            return IndexTrendsSummary()
        point = _version_point(ALL_RESPONSES_ID, ALL_RESPONSES_LABEL, 1, None, scored)
        return IndexTrendsSummary(trends=[point], total_versions=1, has_multiple_versions=False)

    trends = []
    for version in sorted(versions, key=lambda v: v.version_number):
        members = [s for s in scored if s.response.score_config_version_id == version.id]
        if not members:
            continue
        trends.append(
            _version_point(version.id, version.label, version.version_number, version.created_at, members)
        )

    return IndexTrendsSummary(
        trends=trends,
        total_versions=len(trends),
        has_multiple_versions=len(trends) > 1,
    )
