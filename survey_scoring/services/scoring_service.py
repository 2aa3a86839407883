"""
Scoring Service - Survey Scoring Engine
survey_scoring/services/scoring_service.py

Resolves surveys/responses from the store and runs the trace builder:

  1. Trace for a stored response (GET /scoring/{survey_id}/trace)
  2. Trace for ad-hoc answers, e.g. an editor preview (POST /scoring/{survey_id}/trace)
"""

import logging
from typing import Mapping, Optional

from survey_scoring.core.exceptions import EntityNotFoundException
from survey_scoring.models.response import AnswerValue
from survey_scoring.models.trace import ScoringTrace
from survey_scoring.repositories.response_repository import ResponseRepository
from survey_scoring.repositories.survey_repository import SurveyRepository
from survey_scoring.scoring.trace_builder import ScoringTraceBuilder

logger = logging.getLogger(__name__)


class ScoringService:
    """Trace queries over stored surveys and responses."""

    def __init__(
        self,
        surveys: SurveyRepository,
        responses: ResponseRepository,
        builder: Optional[ScoringTraceBuilder] = None,
    ):
        self.surveys = surveys
        self.responses = responses
        self.builder = builder or ScoringTraceBuilder()

    def trace_response(self, survey_id: str, response_id: str) -> ScoringTrace:
        """
        Raises:
            EntityNotFoundException: Unknown survey, unknown response, or a
                response that belongs to another survey.
        """
        survey = self.surveys.get_by_id(survey_id)
        response = self.responses.get_by_id(response_id)
        if response.survey_id != survey_id:
            raise EntityNotFoundException("Response", response_id)

        trace = self.builder.build(survey, response.answers, response_id=response.id)
        logger.info(
            "Trace for survey %s response %s: overall=%s, %d error(s)",
            survey_id, response_id,
            trace.overall.score if trace.overall else None,
            len(trace.errors),
        )
        return trace

    def trace_answers(
        self,
        survey_id: str,
        answers: Mapping[str, Optional[AnswerValue]],
    ) -> ScoringTrace:
        """Trace for answers that were never stored."""
        survey = self.surveys.get_by_id(survey_id)
        return self.builder.build(survey, answers, response_id=None)
