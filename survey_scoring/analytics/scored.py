"""
Scored response set
survey_scoring/analytics/scored.py

Analytics never re-implement scoring: each response is scored once through
ScoringTraceBuilder.compute() and the views read from the result.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from survey_scoring.models.response import SurveyResponse
from survey_scoring.models.survey import Survey
from survey_scoring.scoring.trace_builder import ResponseScore, ScoringTraceBuilder


@dataclass
class ScoredResponse:
    response: SurveyResponse
    score: ResponseScore

    @property
    def overall(self) -> Optional[int]:
        return self.score.overall


def score_responses(
    survey: Survey,
    responses: Sequence[SurveyResponse],
    builder: Optional[ScoringTraceBuilder] = None,
) -> List[ScoredResponse]:
    builder = builder or ScoringTraceBuilder()
    return [ScoredResponse(r, builder.compute(survey, r.answers)) for r in responses]


def overall_scores(scored: Sequence[ScoredResponse]) -> List[int]:
    """Overall scores of the responses that produced one."""
    return [s.overall for s in scored if s.overall is not None]
