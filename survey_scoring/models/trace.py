"""
Scoring trace models - Survey Scoring Engine
survey_scoring/models/trace.py

Diagnostic decomposition of one response's score. Built fresh per call and
never persisted.
"""

from typing import List, Optional

from pydantic import Field

from survey_scoring.models.common import CamelModel
from survey_scoring.models.response import AnswerValue


class TraceMeta(CamelModel):
    survey_id: str
    survey_title: str
    response_id: Optional[str] = None
    scoring_enabled: bool


class TraceCategoryRef(CamelModel):
    id: str
    name: str


class TraceScoreRangeRef(CamelModel):
    id: Optional[str] = None
    min: float
    max: float
    label: str


class TraceConfig(CamelModel):
    enabled: bool
    categories: List[TraceCategoryRef] = Field(default_factory=list)
    score_ranges: List[TraceScoreRangeRef] = Field(default_factory=list)


class QuestionContribution(CamelModel):
    """One answered, scorable question and what it added to its category."""

    question_id: str
    question_text: str
    question_type: str
    category: str
    category_name: str
    raw_answer: AnswerValue
    option_score_used: Optional[float] = None
    max_points: float
    weight: float
    contribution_to_category: float
    normalized_contribution: int = Field(..., description="score / maxPoints as a 0-100 integer")


class CategoryBreakdown(CamelModel):
    category_id: str
    category_name: str
    raw_score: float
    max_possible_score: float
    normalized_score: int
    band_id: str
    band_label: str
    band_color: str
    question_count: int


class MatchedRule(CamelModel):
    id: Optional[str] = None
    min: float
    max: float
    label: str


class OverallScore(CamelModel):
    score: int
    band_id: str
    band_label: str
    band_color: str
    matched_rule: Optional[MatchedRule] = None


class ScoringTrace(CamelModel):
    meta: TraceMeta
    config: Optional[TraceConfig] = None
    questions: List[QuestionContribution] = Field(default_factory=list)
    categories: List[CategoryBreakdown] = Field(default_factory=list)
    overall: Optional[OverallScore] = None
    errors: List[str] = Field(default_factory=list)
