"""
Survey Repository - Survey Scoring Engine
survey_scoring/repositories/survey_repository.py

Read access to survey definitions (questions + ScoreConfig).
"""

from survey_scoring.models.survey import Survey
from survey_scoring.repositories.base import BaseRepository


class SurveyRepository(BaseRepository[Survey]):
    """Repository for survey definitions."""

    MODEL = Survey
    ENTITY_NAME = "Survey"
    SEED_FILE = "surveys.json"
