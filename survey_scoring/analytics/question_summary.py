"""
Question Summary
survey_scoring/analytics/question_summary.py

Per question: completion rate, numeric stats for numeric-bearing kinds and
an option distribution for choice/scale kinds. Structural kinds are skipped
and do not consume a question number.
"""

import math
import re
from typing import Dict, List, Optional, Sequence, Tuple

from survey_scoring.models.analytics import OptionCount, QuestionSummary, QuestionSummaryItem
from survey_scoring.models.response import AnswerValue, SurveyResponse
from survey_scoring.models.survey import (
    LikertQuestion,
    OpinionScaleQuestion,
    QuestionBase,
    RatingQuestion,
    YesNoQuestion,
)
from survey_scoring.scoring.question_scorer import is_answered
from survey_scoring.scoring.utils import mean, percentage, round1

SKIPPED_TYPES = frozenset({"section", "statement", "legal", "hidden"})

NUMERIC_TYPES = frozenset({
    "rating", "nps", "likert", "opinion_scale", "slider", "number", "emoji_rating",
})

DISTRIBUTION_TYPES = frozenset({
    "multiple_choice", "checkbox", "dropdown", "image_choice", "yes_no",
    "rating", "nps", "likert", "opinion_scale", "emoji_rating",
})

# Kinds whose non-numeric answers may still map through option_scores
_OPTION_SCORE_FALLBACK_TYPES = frozenset({"likert", "opinion_scale"})

LIKERT_5_LABELS = ["Strongly Disagree", "Disagree", "Neutral", "Agree", "Strongly Agree"]
LIKERT_7_LABELS = [
    "Strongly Disagree", "Disagree", "Somewhat Disagree", "Neutral",
    "Somewhat Agree", "Agree", "Strongly Agree",
]

_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_leading_float(text: str) -> Optional[float]:
    """Leading decimal number of an answer; None when absent or out of float range."""
    match = _LEADING_FLOAT.match(text)
    if not match:
        return None
    value = float(match.group(1))
    return value if math.isfinite(value) else None


def default_likert_labels(points: int) -> List[str]:
    if points == 5:
        return list(LIKERT_5_LABELS)
    if points == 7:
        return list(LIKERT_7_LABELS)
    return [str(i + 1) for i in range(points)]


def _integer_range(lower: int, upper: int) -> List[Tuple[str, str]]:
    return [(str(i), str(i)) for i in range(lower, upper + 1)]


def question_options(question: QuestionBase) -> List[Tuple[str, str]]:
    """Canonical (value, label) pairs a question's answers are counted against."""
    if question.options:
        return [(opt, opt) for opt in question.options]
    if isinstance(question, RatingQuestion):
        return _integer_range(1, question.rating_scale or 5)
    if question.type == "nps":
        return _integer_range(0, 10)
    if isinstance(question, YesNoQuestion):
        yes = question.yes_label or "Yes"
        no = question.no_label or "No"
        return [(yes, yes), (no, no)]
    if isinstance(question, LikertQuestion):
        labels = question.custom_labels or default_likert_labels(question.likert_points or 5)
        return [(str(i + 1), label) for i, label in enumerate(labels)]
    if isinstance(question, OpinionScaleQuestion):
        lower = int(question.min) if question.min is not None else 1
        upper = int(question.max) if question.max is not None else 10
        return _integer_range(lower, upper)
    if question.type == "emoji_rating":
        return _integer_range(1, 5)
    return []


def _numeric_value(question: QuestionBase, answer: AnswerValue) -> Optional[float]:
    if isinstance(answer, list):
        return None
    value = parse_leading_float(answer)
    if value is None and question.type in _OPTION_SCORE_FALLBACK_TYPES and question.option_scores:
        value = question.option_scores.get(answer)
    return value


def _distribution(
    question: QuestionBase,
    answers: Sequence[AnswerValue],
) -> List[OptionCount]:
    counts: Dict[str, int] = {}
    for answer in answers:
        items = answer if isinstance(answer, list) else [answer]
        for item in items:
            counts[item] = counts.get(item, 0) + 1

    total = len(answers)
    return [
        OptionCount(
            value=value,
            label=label,
            count=counts.get(value, 0),
            percentage=percentage(counts.get(value, 0), total),
        )
        for value, label in question_options(question)
    ]


def summarize_question(
    question: QuestionBase,
    question_number: int,
    responses: Sequence[SurveyResponse],
) -> QuestionSummaryItem:
    answers = [
        r.answers.get(question.id) for r in responses
        if is_answered(r.answers.get(question.id))
    ]

    item = QuestionSummaryItem(
        question_id=question.id,
        question_number=question_number,
        question_text=question.text or f"Question {question_number}",
        question_type=question.type,
        completion_rate=percentage(len(answers), len(responses)),
        total_answers=len(answers),
    )

    if question.type in NUMERIC_TYPES:
        values = [v for v in (_numeric_value(question, a) for a in answers) if v is not None]
        if values:
            item.avg_value = round1(mean(values))
            item.min_value = min(values)
            item.max_value = max(values)

    if question.type in DISTRIBUTION_TYPES:
        item.distribution = _distribution(question, answers)

    return item


def question_summary(
    questions: Sequence[QuestionBase],
    responses: Sequence[SurveyResponse],
) -> QuestionSummary:
    items = []
    number = 0
    for question in questions:
        if question.type in SKIPPED_TYPES:
            continue
        number += 1
        items.append(summarize_question(question, number, responses))
    return QuestionSummary(questions=items, total_responses=len(responses))
