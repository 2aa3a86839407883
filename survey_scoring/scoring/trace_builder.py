"""
Scoring Trace Builder
survey_scoring/scoring/trace_builder.py

Full diagnostic decomposition of one response's score. ``compute()`` is the
single scoring path of the engine: the trace, the respondent-facing result
and every analytics view call it, so there is no separate debug algorithm.

Formulas:
    categoryNormalized = round(rawTotal / maxTotal × maxConfiguredScore)   (0 if maxTotal == 0)
    maxConfiguredScore = max(100, max of effective score range maxima)
    overall            = round(mean of categoryNormalized over categories
                         with >= 1 answered question), clamped to [0, 100]

The overall mean is unweighted; category weights only feed the domain
overview contribution percentages.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

import structlog

from survey_scoring.models.response import AnswerValue
from survey_scoring.models.survey import Survey
from survey_scoring.models.trace import (
    CategoryBreakdown,
    MatchedRule,
    OverallScore,
    QuestionContribution,
    ScoringTrace,
    TraceCategoryRef,
    TraceConfig,
    TraceMeta,
    TraceScoreRangeRef,
)
from survey_scoring.scoring.bands import (
    max_configured_score,
    resolve_index_band,
    resolve_score_range,
)
from survey_scoring.scoring.category_aggregator import AggregationResult, CategoryAggregator
from survey_scoring.scoring.utils import clamp, mean, round_half_up, to_decimal

logger = structlog.get_logger(__name__)

SCORING_DISABLED_ERROR = "Scoring is not enabled for this survey"
NO_CATEGORIES_ERROR = "No scoring categories defined"
NO_RANGES_ERROR = "No score ranges (bands) defined"


@dataclass
class CategoryScore:
    category_id: str
    name: str
    weight: float
    raw_total: float
    max_total: float
    normalized_score: int
    answered_count: int


@dataclass
class ResponseScore:
    """Output of ScoringTraceBuilder.compute()."""
    categories: List[CategoryScore] = field(default_factory=list)
    overall: Optional[int] = None
    aggregation: Optional[AggregationResult] = None
    errors: List[str] = field(default_factory=list)

    def category_score(self, category_id: str) -> Optional[CategoryScore]:
        for c in self.categories:
            if c.category_id == category_id:
                return c
        return None


def normalize_category_score(raw_total: float, max_total: float, max_configured: float) -> int:
    if max_total <= 0:
        return 0
    return round_half_up(to_decimal(raw_total) / to_decimal(max_total) * to_decimal(max_configured))


def overall_score(categories: List[CategoryScore]) -> Optional[int]:
    """Unweighted mean over answered categories; None when none were answered."""
    answered = [c.normalized_score for c in categories if c.answered_count > 0]
    avg = mean(answered)
    if avg is None:
        return None
    return clamp(round_half_up(avg), 0, 100)


class ScoringTraceBuilder:
    """Build scores and traces for one survey + one answer set. Read-only."""

    def __init__(self, aggregator: Optional[CategoryAggregator] = None):
        self.aggregator = aggregator or CategoryAggregator()

    def compute(self, survey: Survey, answers: Mapping[str, Optional[AnswerValue]]) -> ResponseScore:
        config = survey.score_config
        if config is None or not config.enabled:
            return ResponseScore(errors=[SCORING_DISABLED_ERROR])

        errors: List[str] = []
        if not config.categories:
            errors.append(NO_CATEGORIES_ERROR)
        if not config.score_ranges:
            errors.append(NO_RANGES_ERROR)

        aggregation = self.aggregator.aggregate(survey.questions, config.categories, answers)
        errors.extend(aggregation.errors)

        categories = []
        for totals in aggregation.categories.values():
            ceiling = max_configured_score(config.score_ranges, totals.category_id)
            categories.append(
                CategoryScore(
                    category_id=totals.category_id,
                    name=totals.name,
                    weight=totals.weight,
                    raw_total=totals.raw_total,
                    max_total=totals.max_total,
                    normalized_score=normalize_category_score(
                        totals.raw_total, totals.max_total, ceiling
                    ),
                    answered_count=totals.answered_count,
                )
            )

        return ResponseScore(
            categories=categories,
            overall=overall_score(categories),
            aggregation=aggregation,
            errors=errors,
        )

    def build(
        self,
        survey: Survey,
        answers: Mapping[str, Optional[AnswerValue]],
        response_id: Optional[str] = None,
    ) -> ScoringTrace:
        """
        Args:
            survey: Resolved survey with its questions and ScoreConfig.
            answers: Question id -> answer (a stored response's, or ad-hoc).
            response_id: Stored response id, or None for ad-hoc answers.

        Returns:
            ScoringTrace. Never raises for configuration or data problems;
            they are listed in ``errors``.
        """
        config = survey.score_config
        scoring_enabled = config is not None and config.enabled
        computed = self.compute(survey, answers)

        trace = ScoringTrace(
            meta=TraceMeta(
                survey_id=survey.id,
                survey_title=survey.title or "Untitled Survey",
                response_id=response_id,
                scoring_enabled=scoring_enabled,
            ),
            errors=list(computed.errors),
        )
        if not scoring_enabled:
            logger.info("trace_built", survey_id=survey.id, response_id=response_id, scoring_enabled=False)
            return trace

        trace.config = TraceConfig(
            enabled=True,
            categories=[TraceCategoryRef(id=c.id, name=c.name) for c in config.categories],
            score_ranges=[
                TraceScoreRangeRef(id=r.id, min=r.min, max=r.max, label=r.label)
                for r in config.score_ranges
            ],
        )

        names: Dict[str, str] = {c.category_id: c.name for c in computed.categories}
        for sq in computed.aggregation.scored_questions:
            max_points = sq.result.max_possible_score
            trace.questions.append(
                QuestionContribution(
                    question_id=sq.question.id,
                    question_text=sq.question.text or "Untitled Question",
                    question_type=sq.question.type,
                    category=sq.question.scoring_category,
                    category_name=names[sq.question.scoring_category],
                    raw_answer=sq.answer,
                    option_score_used=sq.result.option_score_used,
                    max_points=max_points,
                    weight=sq.weight,
                    contribution_to_category=sq.contribution,
                    normalized_contribution=(
                        round_half_up(to_decimal(sq.result.score) / to_decimal(max_points) * 100)
                        if max_points > 0 else 0
                    ),
                )
            )

        for category in computed.categories:
            band = resolve_index_band(category.normalized_score)
            trace.categories.append(
                CategoryBreakdown(
                    category_id=category.category_id,
                    category_name=category.name,
                    raw_score=category.raw_total,
                    max_possible_score=category.max_total,
                    normalized_score=category.normalized_score,
                    band_id=band.band_id,
                    band_label=band.label,
                    band_color=band.color,
                    question_count=category.answered_count,
                )
            )

        if computed.overall is not None:
            band = resolve_index_band(computed.overall)
            rule = resolve_score_range(computed.overall, config.score_ranges)
            trace.overall = OverallScore(
                score=computed.overall,
                band_id=band.band_id,
                band_label=band.label,
                band_color=band.color,
                matched_rule=(
                    MatchedRule(id=rule.id, min=rule.min, max=rule.max, label=rule.label)
                    if rule is not None else None
                ),
            )

        logger.info(
            "trace_built",
            survey_id=survey.id,
            response_id=response_id,
            overall=computed.overall,
            errors=len(trace.errors),
        )
        return trace
