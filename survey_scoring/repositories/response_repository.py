"""
Response Repository - Survey Scoring Engine
survey_scoring/repositories/response_repository.py

Responses are immutable once stored; deletion is the only write the engine
performs.
"""

import logging
from typing import List, Optional

from survey_scoring.models.response import SurveyResponse
from survey_scoring.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ResponseRepository(BaseRepository[SurveyResponse]):
    """Repository for survey responses."""

    MODEL = SurveyResponse
    ENTITY_NAME = "Response"
    SEED_FILE = "responses.json"

    def list_by_survey(
        self,
        survey_id: str,
        version_id: Optional[str] = None,
    ) -> List[SurveyResponse]:
        """
        Responses for a survey, optionally only those tagged with one
        ScoreConfigVersion.
        """
        return [
            r for r in self._items.values()
            if r.survey_id == survey_id
            and (version_id is None or r.score_config_version_id == version_id)
        ]

    def count_by_survey(self, survey_id: str) -> int:
        return sum(1 for r in self._items.values() if r.survey_id == survey_id)

    def delete(self, entity_id: str) -> None:
        super().delete(entity_id)
        logger.info("Deleted response %s", entity_id)
