"""
Repositories Package - Survey Scoring Engine
survey_scoring/repositories/__init__.py

Read contract of the survey/response store, with an in-memory implementation.
"""

from survey_scoring.repositories.base import BaseRepository
from survey_scoring.repositories.respondent_repository import RespondentRepository
from survey_scoring.repositories.response_repository import ResponseRepository
from survey_scoring.repositories.survey_repository import SurveyRepository
from survey_scoring.repositories.version_repository import VersionRepository

__all__ = [
    "BaseRepository",
    "RespondentRepository",
    "ResponseRepository",
    "SurveyRepository",
    "VersionRepository",
]
