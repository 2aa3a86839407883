"""
Category Aggregator
survey_scoring/scoring/category_aggregator.py

Sums weighted question contributions into per-category raw/max totals.

    contribution    = score × score_weight
    maxContribution = maxPossibleScore × score_weight

A question is aggregated only when it is ``scorable`` AND has a
``scoring_category`` that exists in the ScoreConfig. Half-configured
questions and unknown categories are recorded as errors and dropped.
Unanswered questions are skipped entirely (they do not count as zero).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

import structlog

from survey_scoring.models.response import AnswerValue
from survey_scoring.models.survey import Category, QuestionBase
from survey_scoring.scoring.question_scorer import QuestionScore, QuestionScorer, is_answered

logger = structlog.get_logger(__name__)


@dataclass
class CategoryTotals:
    """Running totals for one configured category."""
    category_id: str
    name: str
    weight: float = 1.0
    raw_total: float = 0.0
    max_total: float = 0.0
    answered_count: int = 0


@dataclass
class ScoredQuestion:
    """One aggregated question: its scorer output and weighted contribution."""
    question: QuestionBase
    answer: AnswerValue
    result: QuestionScore
    weight: float
    contribution: float
    max_contribution: float


@dataclass
class AggregationResult:
    """Output of CategoryAggregator.aggregate()."""
    categories: Dict[str, CategoryTotals]   # configured order preserved
    scored_questions: List[ScoredQuestion] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def validate_scoring_flags(question: QuestionBase) -> Optional[str]:
    """Error text for a question with exactly one of scorable/scoring_category set."""
    if question.scoring_category and not question.scorable:
        return f"Question {question.id} has scoringCategory but scorable=false. Skipping."
    if question.scorable and not question.scoring_category:
        return f"Question {question.id} is scorable but missing scoringCategory. Skipping."
    return None


class CategoryAggregator:
    """Aggregate one response's answers into category totals."""

    def __init__(self, scorer: Optional[QuestionScorer] = None):
        self.scorer = scorer or QuestionScorer()

    def aggregate(
        self,
        questions: Sequence[QuestionBase],
        categories: Sequence[Category],
        answers: Mapping[str, Optional[AnswerValue]],
    ) -> AggregationResult:
        """
        Args:
            questions: Survey questions in display order.
            categories: Configured ScoreConfig categories.
            answers: Question id -> answer for one response.

        Returns:
            AggregationResult with a CategoryTotals entry for every configured
            category (answered or not), the per-question contributions in
            question order, and the collected data-quality errors.
        """
        totals: Dict[str, CategoryTotals] = {
            c.id: CategoryTotals(category_id=c.id, name=c.name, weight=c.weight)
            for c in categories
        }
        result = AggregationResult(categories=totals)

        for question in questions:
            flag_error = validate_scoring_flags(question)
            if flag_error:
                result.errors.append(flag_error)
            if not question.scorable or not question.scoring_category:
                continue

            category = totals.get(question.scoring_category)
            if category is None:
                result.errors.append(
                    f"Question {question.id} has unknown category: {question.scoring_category}"
                )
                continue

            answer = answers.get(question.id)
            if not is_answered(answer):
                continue

            scored = self.scorer.score(question, answer)
            weight = question.score_weight
            contribution = scored.score * weight
            max_contribution = scored.max_possible_score * weight

            category.raw_total += contribution
            category.max_total += max_contribution
            category.answered_count += 1

            result.scored_questions.append(
                ScoredQuestion(
                    question=question,
                    answer=answer,
                    result=scored,
                    weight=weight,
                    contribution=contribution,
                    max_contribution=max_contribution,
                )
            )

        if result.errors:
            logger.debug("aggregation_errors", count=len(result.errors))
        return result
