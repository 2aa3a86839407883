"""
Analytics Service - Survey Scoring Engine
survey_scoring/services/analytics_service.py

Resolves a metric id to its view, fetches the survey and the (version
filtered) responses, scores every response once and wraps the view in the
analytics envelope {meta, data}.

Version filter: when a query omits the version, the survey's latest
ScoreConfigVersion (highest version number) is used; with no version
records every response is included. The trends summary and the before/after
comparison look across versions and are never filtered.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, NamedTuple, Optional

from pydantic import BaseModel

from survey_scoring.analytics.comparison import BeforeAfterComparator
from survey_scoring.analytics.confidence import analyze_confidence
from survey_scoring.analytics.distribution import index_band_distribution, index_distribution
from survey_scoring.analytics.domain_overview import domain_overview
from survey_scoring.analytics.manager_rollup import manager_index_summary
from survey_scoring.analytics.participation import ParticipationCalculator
from survey_scoring.analytics.question_summary import question_summary
from survey_scoring.analytics.scored import ScoredResponse, score_responses
from survey_scoring.analytics.trends import index_trend, index_trends_summary
from survey_scoring.core.exceptions import AnalyticsQueryException
from survey_scoring.models.analytics import (
    AnalyticsConfidence,
    AnalyticsEnvelope,
    AnalyticsMeta,
    VersionInfo,
    VersionsListing,
)
from survey_scoring.models.enumerations import IndexType, MetricId, TrendGranularity
from survey_scoring.models.response import SurveyResponse
from survey_scoring.models.survey import Survey
from survey_scoring.repositories.respondent_repository import RespondentRepository
from survey_scoring.repositories.response_repository import ResponseRepository
from survey_scoring.repositories.survey_repository import SurveyRepository
from survey_scoring.repositories.version_repository import VersionRepository
from survey_scoring.scoring.trace_builder import ScoringTraceBuilder

logger = logging.getLogger(__name__)


class MetricQuery(NamedTuple):
    """Everything a view may need; built once per request."""
    survey: Survey
    responses: List[SurveyResponse]
    scored: List[ScoredResponse]
    version: Optional[str]
    granularity: TrendGranularity
    version_before: Optional[str]
    version_after: Optional[str]


# metric id -> (view kind, index type reported in meta)
_METRICS: Dict[MetricId, tuple] = {
    MetricId.PARTICIPATION_METRICS: ("participation", None),
    MetricId.QUESTION_SUMMARY: ("question_summary", None),

    MetricId.LEADERSHIP_INDEX_DISTRIBUTION: ("index_distribution", IndexType.LEADERSHIP_EFFECTIVENESS),
    MetricId.WELLBEING_INDEX_DISTRIBUTION: ("index_distribution", IndexType.TEAM_WELLBEING),
    MetricId.BURNOUT_RISK_DISTRIBUTION: ("index_distribution", IndexType.BURNOUT_RISK),
    MetricId.PSYCHOLOGICAL_SAFETY_DISTRIBUTION: ("index_distribution", IndexType.PSYCHOLOGICAL_SAFETY),
    MetricId.ENGAGEMENT_INDEX_DISTRIBUTION: ("index_distribution", IndexType.ENGAGEMENT),

    MetricId.LEADERSHIP_INDEX_BAND_DISTRIBUTION: ("band_distribution", IndexType.LEADERSHIP_EFFECTIVENESS),
    MetricId.WELLBEING_INDEX_BAND_DISTRIBUTION: ("band_distribution", IndexType.TEAM_WELLBEING),
    MetricId.BURNOUT_RISK_BAND_DISTRIBUTION: ("band_distribution", IndexType.BURNOUT_RISK),
    MetricId.PSYCHOLOGICAL_SAFETY_BAND_DISTRIBUTION: ("band_distribution", IndexType.PSYCHOLOGICAL_SAFETY),
    MetricId.ENGAGEMENT_INDEX_BAND_DISTRIBUTION: ("band_distribution", IndexType.ENGAGEMENT),

    MetricId.LEADERSHIP_DOMAIN_OVERVIEW: ("domain_overview", IndexType.LEADERSHIP_EFFECTIVENESS),
    MetricId.WELLBEING_DOMAIN_OVERVIEW: ("domain_overview", IndexType.TEAM_WELLBEING),
    MetricId.ENGAGEMENT_DOMAIN_OVERVIEW: ("domain_overview", IndexType.ENGAGEMENT),

    MetricId.LEADERSHIP_INDEX_TREND: ("index_trend", IndexType.LEADERSHIP_EFFECTIVENESS),
    MetricId.WELLBEING_INDEX_TREND: ("index_trend", IndexType.TEAM_WELLBEING),
    MetricId.BURNOUT_RISK_TREND: ("index_trend", IndexType.BURNOUT_RISK),

    MetricId.MANAGER_INDEX_SUMMARY: ("manager_summary", None),
    MetricId.INDEX_TRENDS_SUMMARY: ("trends_summary", None),
    MetricId.BEFORE_AFTER_INDEX_COMPARISON: ("before_after", None),
}

# Views that compare across versions and therefore ignore the version filter
_CROSS_VERSION_VIEWS = frozenset({"trends_summary", "before_after"})


def valid_metric_ids() -> List[str]:
    return [m.value for m in MetricId]


class AnalyticsService:
    """Analytics queries over stored surveys and responses."""

    def __init__(
        self,
        surveys: SurveyRepository,
        responses: ResponseRepository,
        versions: VersionRepository,
        respondents: RespondentRepository,
        builder: Optional[ScoringTraceBuilder] = None,
        completion_threshold: float = 80.0,
        min_responses_meaningful: int = 5,
        default_granularity: TrendGranularity = TrendGranularity.WEEKLY,
    ):
        self.surveys = surveys
        self.responses = responses
        self.versions = versions
        self.respondents = respondents
        self.builder = builder or ScoringTraceBuilder()
        self.completion_threshold = completion_threshold
        self.min_responses_meaningful = min_responses_meaningful
        self.default_granularity = default_granularity

        self._views: Dict[str, Callable[[MetricQuery], BaseModel]] = {
            "participation": self._participation,
            "question_summary": self._question_summary,
            "index_distribution": lambda q: index_distribution(q.scored),
            "band_distribution": lambda q: index_band_distribution(q.scored),
            "domain_overview": lambda q: domain_overview(q.scored, q.survey.score_config),
            "index_trend": lambda q: index_trend(q.scored, q.survey.scoring_enabled, q.granularity),
            "manager_summary": self._manager_summary,
            "trends_summary": self._trends_summary,
            "before_after": self._before_after,
        }

    # ------------------------------------------------------------------
    # Public queries
    # ------------------------------------------------------------------

    def get_metric(
        self,
        survey_id: str,
        metric_id: str,
        version: Optional[str] = None,
        granularity: Optional[TrendGranularity] = None,
        version_before: Optional[str] = None,
        version_after: Optional[str] = None,
    ) -> AnalyticsEnvelope:
        """
        Compute one metric and wrap it in the analytics envelope.

        Raises:
            AnalyticsQueryException: Unknown metric id, or before/after
                comparison without both version ids.
            EntityNotFoundException: Unknown survey.
        """
        try:
            metric = MetricId(metric_id)
        except ValueError:
            raise AnalyticsQueryException(
                f"Unknown metric: {metric_id}",
                {"validMetrics": valid_metric_ids()},
            )

        view, index_type = _METRICS[metric]
        if view == "before_after" and not (version_before and version_after):
            raise AnalyticsQueryException(
                "versionBefore and versionAfter are required for before_after_index_comparison",
                {"versionBefore": version_before, "versionAfter": version_after},
            )

        survey = self.surveys.get_by_id(survey_id)
        if view in _CROSS_VERSION_VIEWS:
            resolved_version = None
        else:
            resolved_version = self.resolve_version(survey_id, version)

        responses = self.responses.list_by_survey(survey_id, resolved_version)
        query = MetricQuery(
            survey=survey,
            responses=responses,
            scored=score_responses(survey, responses, self.builder),
            version=resolved_version,
            granularity=granularity or self.default_granularity,
            version_before=version_before,
            version_after=version_after,
        )
        data = self._views[view](query)

        logger.info(
            "Computed %s for survey %s (version=%s, responses=%d)",
            metric.value, survey_id, resolved_version, len(responses),
        )
        return AnalyticsEnvelope(
            meta=AnalyticsMeta(
                survey_id=survey_id,
                version=resolved_version,
                index_type=index_type.value if index_type else None,
                version_before=version_before,
                version_after=version_after,
                generated_at=datetime.now(timezone.utc),
            ),
            data=data.model_dump(mode="json", by_alias=True),
        )

    def resolve_version(self, survey_id: str, version: Optional[str]) -> Optional[str]:
        """Explicit version, else the latest version id, else None (all responses)."""
        if version:
            return version
        latest = self.versions.get_latest(survey_id)
        return latest.id if latest else None

    def list_versions(self, survey_id: str) -> VersionsListing:
        self.surveys.get_by_id(survey_id)
        versions = self.versions.list_by_survey(survey_id)
        latest_id = versions[-1].id if versions else None
        return VersionsListing(
            versions=[
                VersionInfo(
                    id=v.id,
                    version_number=v.version_number,
                    label=v.label,
                    created_at=v.created_at,
                    is_latest=v.id == latest_id,
                )
                for v in reversed(versions)
            ],
            latest_version_id=latest_id,
        )

    def get_confidence(self, survey_id: str) -> AnalyticsConfidence:
        survey = self.surveys.get_by_id(survey_id)
        responses = self.responses.list_by_survey(survey_id)
        return analyze_confidence(
            survey.score_config,
            response_count=len(responses),
            version_count=len(self.versions.list_by_survey(survey_id)),
            has_manager_data=any(r.manager_id() for r in responses),
            min_responses=self.min_responses_meaningful,
        )

    # ------------------------------------------------------------------
    # Views needing collaborators beyond the scored responses
    # ------------------------------------------------------------------

    def _participation(self, query: MetricQuery):
        calculator = ParticipationCalculator(self.completion_threshold)
        return calculator.calculate(
            query.responses,
            invited_count=self.respondents.count_by_survey(query.survey.id),
        )

    def _question_summary(self, query: MetricQuery):
        return question_summary(query.survey.questions, query.responses)

    def _manager_summary(self, query: MetricQuery):
        return manager_index_summary(
            query.scored, query.survey.scoring_enabled, self.completion_threshold
        )

    def _trends_summary(self, query: MetricQuery):
        return index_trends_summary(
            query.scored,
            self.versions.list_by_survey(query.survey.id),
            query.survey.scoring_enabled,
        )

    def _before_after(self, query: MetricQuery):
        return BeforeAfterComparator().compare(
            query.scored,
            self.versions.list_by_survey(query.survey.id),
            query.version_before,
            query.version_after,
            query.survey.scoring_enabled,
        )
