"""
Dependencies - Survey Scoring Engine
survey_scoring/core/dependencies.py

FastAPI dependency injection for repositories and services.
"""

from functools import lru_cache

from survey_scoring.config import get_settings
from survey_scoring.models.enumerations import TrendGranularity
from survey_scoring.repositories.respondent_repository import RespondentRepository
from survey_scoring.repositories.response_repository import ResponseRepository
from survey_scoring.repositories.survey_repository import SurveyRepository
from survey_scoring.repositories.version_repository import VersionRepository
from survey_scoring.services.analytics_service import AnalyticsService
from survey_scoring.services.scoring_service import ScoringService


@lru_cache()
def get_survey_repository() -> SurveyRepository:
    """Get cached SurveyRepository instance."""
    return SurveyRepository(get_settings().DATA_DIR)


@lru_cache()
def get_response_repository() -> ResponseRepository:
    """Get cached ResponseRepository instance."""
    return ResponseRepository(get_settings().DATA_DIR)


@lru_cache()
def get_version_repository() -> VersionRepository:
    """Get cached VersionRepository instance."""
    return VersionRepository(get_settings().DATA_DIR)


@lru_cache()
def get_respondent_repository() -> RespondentRepository:
    """Get cached RespondentRepository instance."""
    return RespondentRepository(get_settings().DATA_DIR)


@lru_cache()
def get_scoring_service() -> ScoringService:
    """Get cached ScoringService instance."""
    return ScoringService(get_survey_repository(), get_response_repository())


@lru_cache()
def get_analytics_service() -> AnalyticsService:
    """Get cached AnalyticsService instance."""
    settings = get_settings()
    return AnalyticsService(
        surveys=get_survey_repository(),
        responses=get_response_repository(),
        versions=get_version_repository(),
        respondents=get_respondent_repository(),
        completion_threshold=settings.COMPLETION_THRESHOLD,
        min_responses_meaningful=settings.MIN_RESPONSES_MEANINGFUL,
        default_granularity=TrendGranularity(settings.DEFAULT_TREND_GRANULARITY),
    )
