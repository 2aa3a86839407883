"""
Index Distribution and Index Band Distribution
survey_scoring/analytics/distribution.py

Both views bucket each response's overall score. Responses without a score
(scoring disabled, no categories, nothing answered) are excluded from the
buckets, the statistics and the percentage base.
"""

from typing import List, Sequence

from survey_scoring.analytics.scored import ScoredResponse, overall_scores
from survey_scoring.models.analytics import (
    BandCount,
    DistributionBucket,
    DistributionStatistics,
    IndexBandDistribution,
    IndexDistribution,
    IndexDistributionOverall,
    ManagerBandCount,
)
from survey_scoring.scoring.bands import INDEX_BAND_DEFINITIONS, resolve_band_index
from survey_scoring.scoring.utils import Number, mean, median, percentage, round1, std_dev

# Numeric buckets; boundaries line up with the canonical Index Bands
SCORE_BUCKETS = ((0, 20), (21, 40), (41, 60), (61, 80), (81, 100))


def _bucket_index(score: Number) -> int:
    # A score between two buckets (20.5) stays in the lower one
    for i, (lower, _) in enumerate(SCORE_BUCKETS[1:]):
        if score < lower:
            return i
    return len(SCORE_BUCKETS) - 1


def score_statistics(scores: Sequence[Number]) -> DistributionStatistics:
    if not scores:
        return DistributionStatistics()
    return DistributionStatistics(
        min=min(scores),
        max=max(scores),
        mean=round1(mean(scores)),
        median=round1(median(scores)),
        std_dev=round1(std_dev(scores)),
    )


def index_distribution(scored: Sequence[ScoredResponse]) -> IndexDistribution:
    scores = overall_scores(scored)
    counts = [0] * len(SCORE_BUCKETS)
    for score in scores:
        counts[_bucket_index(score)] += 1

    buckets = [
        DistributionBucket(
            range=f"{lower}-{upper}",
            min=lower,
            max=upper,
            count=count,
            percentage=percentage(count, len(scores)),
        )
        for (lower, upper), count in zip(SCORE_BUCKETS, counts)
    ]
    return IndexDistribution(
        overall=IndexDistributionOverall(buckets=buckets, statistics=score_statistics(scores))
    )


def band_counts(scores: Sequence[Number]) -> List[int]:
    counts = [0] * len(INDEX_BAND_DEFINITIONS)
    for score in scores:
        counts[resolve_band_index(score)] += 1
    return counts


def index_band_distribution(scored: Sequence[ScoredResponse]) -> IndexBandDistribution:
    """
    Canonical band counts. ``totalResponses`` is every filtered response;
    percentages are over the scored ones only.
    """
    scores = overall_scores(scored)
    counts = band_counts(scores)
    bands = [
        BandCount(
            band_id=band.band_id,
            band_label=band.label,
            color=band.color,
            count=count,
            percentage=percentage(count, len(scores)),
            min_score=band.min,
            max_score=band.max,
        )
        for band, count in zip(INDEX_BAND_DEFINITIONS, counts)
    ]
    return IndexBandDistribution(bands=bands, total_responses=len(scored))


def manager_band_distribution(scores: Sequence[Number]) -> List[ManagerBandCount]:
    counts = band_counts(scores)
    return [
        ManagerBandCount(
            band_id=band.band_id,
            band_label=band.label,
            count=count,
            percentage=percentage(count, len(scores)),
            color=band.color,
        )
        for band, count in zip(INDEX_BAND_DEFINITIONS, counts)
    ]
