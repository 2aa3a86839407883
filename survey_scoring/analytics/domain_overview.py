"""
Domain Overview
survey_scoring/analytics/domain_overview.py

Per category: average/min/max normalized score across responses, and its
weighted share of the total:

    contributionToTotal = (avg × weight) / Σ(avg × weight) × 100

Unlike the overall index (an unweighted mean of categories), this view is
category-weight sensitive. A response's category score is counted only when
that response answered at least one question in the category.
"""

from decimal import Decimal
from typing import Dict, List, Sequence

from survey_scoring.analytics.scored import ScoredResponse
from survey_scoring.models.analytics import DomainCategory, DomainOverview
from survey_scoring.models.survey import ScoreConfig
from survey_scoring.scoring.utils import mean, round1, to_decimal


def domain_overview(
    scored: Sequence[ScoredResponse],
    score_config: ScoreConfig,
) -> DomainOverview:
    if score_config is None or not score_config.enabled or not score_config.categories:
        return DomainOverview()

    per_category: Dict[str, List[int]] = {c.id: [] for c in score_config.categories}
    for item in scored:
        for category in item.score.categories:
            if category.answered_count > 0 and category.category_id in per_category:
                per_category[category.category_id].append(category.normalized_score)

    averages: Dict[str, Decimal] = {}
    for category_id, values in per_category.items():
        avg = mean(values)
        averages[category_id] = avg if avg is not None else Decimal("0")

    weighted_total = sum(
        (averages[c.id] * to_decimal(c.weight) for c in score_config.categories),
        Decimal("0"),
    )

    entries = []
    for category in score_config.categories:
        values = per_category[category.id]
        avg = averages[category.id]
        share = Decimal("0")
        if weighted_total > 0:
            share = avg * to_decimal(category.weight) / weighted_total * 100
        entries.append(
            DomainCategory(
                category_id=category.id,
                category_name=category.name,
                average_score=round1(avg),
                min_score=min(values) if values else 0,
                max_score=max(values) if values else 0,
                response_count=len(values),
                weight=category.weight,
                contribution_to_total=round1(share),
            )
        )

    entries.sort(key=lambda e: (-e.weight, -e.average_score))
    return DomainOverview(categories=entries)
