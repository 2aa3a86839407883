"""
Services module for the Survey Scoring Engine.
"""

from survey_scoring.services.analytics_service import AnalyticsService
from survey_scoring.services.scoring_service import ScoringService

__all__ = ["AnalyticsService", "ScoringService"]
