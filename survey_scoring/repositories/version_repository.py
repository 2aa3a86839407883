"""
Score Config Version Repository - Survey Scoring Engine
survey_scoring/repositories/version_repository.py

Version records are optional: a survey without any is treated as a single
implicit version.
"""

from typing import List, Optional

from survey_scoring.models.response import ScoreConfigVersion
from survey_scoring.repositories.base import BaseRepository


class VersionRepository(BaseRepository[ScoreConfigVersion]):
    """Repository for ScoreConfigVersion records."""

    MODEL = ScoreConfigVersion
    ENTITY_NAME = "ScoreConfigVersion"
    SEED_FILE = "versions.json"

    def list_by_survey(self, survey_id: str) -> List[ScoreConfigVersion]:
        """Versions of a survey ordered by version number (oldest first)."""
        versions = [v for v in self._items.values() if v.survey_id == survey_id]
        return sorted(versions, key=lambda v: v.version_number)

    def get_latest(self, survey_id: str) -> Optional[ScoreConfigVersion]:
        versions = self.list_by_survey(survey_id)
        return versions[-1] if versions else None
