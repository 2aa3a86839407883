"""
Respondent Repository - Survey Scoring Engine
survey_scoring/repositories/respondent_repository.py

Invited respondents. Only the per-survey count is used (response rate).
"""

from typing import Optional

from survey_scoring.models.response import Respondent
from survey_scoring.repositories.base import BaseRepository


class RespondentRepository(BaseRepository[Respondent]):
    """Repository for invited respondents."""

    MODEL = Respondent
    ENTITY_NAME = "Respondent"
    SEED_FILE = "respondents.json"

    def count_by_survey(self, survey_id: str) -> Optional[int]:
        """Invite count, or None when no invitations are on record."""
        count = sum(1 for r in self._items.values() if r.survey_id == survey_id)
        return count or None
