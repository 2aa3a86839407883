"""
Question Scorer
survey_scoring/scoring/question_scorer.py

Scores one answer against one question definition.

Max points by type:
    rating          rating_scale (default 5)
    nps             10
    likert          likert_points (default 5)
    opinion_scale   max - min when max is set, else rating_scale (default 5)
    slider          max - min when max is set, else 10
    multiple_choice / dropdown / ranking   option count (default 5)
    checkbox        max_selections (default 5)
    image_choice    image option count, else option count (default 5)
    yes_no          1
    matrix          rows × columns (default 1 × 5)
    constant_sum    total_points (default 100)
    number          10
    anything else   0

Score resolution, first hit wins:
    (a) option_scores[answer]           (reported as option_score_used)
    (b) leading integer of the answer   ("4", " +3 pts" -> 3; beyond 2**53 - 1 is skipped)
    (c) 1-based option position         (multiple_choice / dropdown only)
    (d) 0

List answers (checkbox, ranking, ...) are looked up by their FIRST element
only. Sums across selections are not attempted.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from survey_scoring.models.response import AnswerValue
from survey_scoring.models.survey import (
    CheckboxQuestion,
    ConstantSumQuestion,
    DropdownQuestion,
    ImageChoiceQuestion,
    LikertQuestion,
    MatrixQuestion,
    MultipleChoiceQuestion,
    NpsQuestion,
    NumberQuestion,
    OpinionScaleQuestion,
    QuestionBase,
    RankingQuestion,
    RatingQuestion,
    SliderQuestion,
    YesNoQuestion,
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

DEFAULT_SCALE = 5
NPS_MAX = 10
NUMBER_MAX = 10
SLIDER_DEFAULT_MAX = 10
CONSTANT_SUM_DEFAULT_TOTAL = 100
MAX_SAFE_INTEGER = 2 ** 53 - 1


@dataclass
class QuestionScore:
    """Output of QuestionScorer.score()."""
    score: float
    max_possible_score: float
    option_score_used: Optional[float] = None


def answer_text(answer: AnswerValue) -> Optional[str]:
    """Text used for score lookup: the answer itself, or a list's first element."""
    if isinstance(answer, list):
        return answer[0] if answer else None
    return answer


def is_answered(answer: Optional[AnswerValue]) -> bool:
    """None, blank text and empty lists all count as unanswered."""
    if answer is None:
        return False
    if isinstance(answer, list):
        return len(answer) > 0
    return answer.strip() != ""


def parse_leading_int(text: Optional[str]) -> Optional[int]:
    """
    Leading integer of an answer, or None.

    Integers beyond MAX_SAFE_INTEGER cannot be held exactly and are treated
    as unparseable.
    """
    if text is None:
        return None
    match = _LEADING_INT.match(text)
    if not match:
        return None
    # float() first: int() refuses very long digit strings
    if abs(float(match.group(1))) > MAX_SAFE_INTEGER:
        return None
    return int(match.group(1))


def _count_or(items: Optional[List], default: float) -> float:
    return len(items) if items else default


def max_possible_score(question: QuestionBase) -> float:
    """Maximum raw points a question can yield before weighting."""
    if isinstance(question, RatingQuestion):
        return question.rating_scale or DEFAULT_SCALE
    if isinstance(question, NpsQuestion):
        return NPS_MAX
    if isinstance(question, LikertQuestion):
        return question.likert_points or DEFAULT_SCALE
    if isinstance(question, OpinionScaleQuestion):
        if question.max is not None:
            return question.max - (question.min or 0)
        return question.rating_scale or DEFAULT_SCALE
    if isinstance(question, SliderQuestion):
        if question.max is not None:
            return question.max - (question.min or 0)
        return SLIDER_DEFAULT_MAX
    if isinstance(question, (MultipleChoiceQuestion, DropdownQuestion, RankingQuestion)):
        return _count_or(question.options, DEFAULT_SCALE)
    if isinstance(question, CheckboxQuestion):
        return question.max_selections or DEFAULT_SCALE
    if isinstance(question, ImageChoiceQuestion):
        if question.image_options:
            return len(question.image_options)
        return _count_or(question.options, DEFAULT_SCALE)
    if isinstance(question, YesNoQuestion):
        return 1
    if isinstance(question, MatrixQuestion):
        return _count_or(question.row_labels, 1) * _count_or(question.col_labels, DEFAULT_SCALE)
    if isinstance(question, ConstantSumQuestion):
        return question.total_points or CONSTANT_SUM_DEFAULT_TOTAL
    if isinstance(question, NumberQuestion):
        return NUMBER_MAX
    return 0


class QuestionScorer:
    """Score a single answer. Stateless; safe to share."""

    def score(self, question: QuestionBase, answer: AnswerValue) -> QuestionScore:
        """
        Args:
            question: Any question model from the Question union.
            answer: Answer text, or list of texts for multi-select kinds.

        Returns:
            QuestionScore with score, max_possible_score and option_score_used
            (None unless the score came from option_scores).
        """
        max_points = max_possible_score(question)
        text = answer_text(answer)

        if question.option_scores and text is not None:
            option_score = question.option_scores.get(text)
            if option_score is not None:
                return QuestionScore(option_score, max_points, option_score_used=option_score)

        parsed = parse_leading_int(text)
        if parsed is not None:
            return QuestionScore(parsed, max_points)

        if isinstance(question, (MultipleChoiceQuestion, DropdownQuestion)) and question.options:
            if text in question.options:
                return QuestionScore(question.options.index(text) + 1, max_points)

        return QuestionScore(0, max_points)
