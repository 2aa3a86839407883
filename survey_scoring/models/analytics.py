"""
Analytics result models - Survey Scoring Engine
survey_scoring/models/analytics.py

One model per derived view. Every view has a well-defined empty form, so
callers never need to special-case missing data.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from survey_scoring.models.common import CamelModel
from survey_scoring.models.enumerations import (
    AnalyticsMode,
    OverallTrend,
    TrendDirection,
)


# ---------------------------------------------------------------------------
# Participation
# ---------------------------------------------------------------------------

class ParticipationMetrics(CamelModel):
    total_responses: int = 0
    response_rate: Optional[float] = Field(default=None, description="Null when the invite count is unknown")
    completion_rate: float = 0.0
    avg_completion_time: Optional[int] = Field(default=None, description="Seconds")


# ---------------------------------------------------------------------------
# Distributions
# ---------------------------------------------------------------------------

class DistributionBucket(CamelModel):
    range: str
    min: int
    max: int
    count: int = 0
    percentage: float = 0.0


class DistributionStatistics(CamelModel):
    min: float = 0
    max: float = 0
    mean: float = 0.0
    median: float = 0.0
    std_dev: float = 0.0


class IndexDistributionOverall(CamelModel):
    buckets: List[DistributionBucket] = Field(default_factory=list)
    statistics: DistributionStatistics = Field(default_factory=DistributionStatistics)


class IndexDistribution(CamelModel):
    overall: IndexDistributionOverall = Field(default_factory=IndexDistributionOverall)


class BandCount(CamelModel):
    band_id: str
    band_label: str
    color: str
    count: int = 0
    percentage: float = 0.0
    min_score: int
    max_score: int


class IndexBandDistribution(CamelModel):
    bands: List[BandCount] = Field(default_factory=list)
    total_responses: int = 0


# ---------------------------------------------------------------------------
# Question summary
# ---------------------------------------------------------------------------

class OptionCount(CamelModel):
    value: str
    label: str
    count: int = 0
    percentage: float = 0.0


class QuestionSummaryItem(CamelModel):
    question_id: str
    question_number: int
    question_text: str
    question_type: str
    completion_rate: float = 0.0
    total_answers: int = 0
    avg_value: Optional[float] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    distribution: Optional[List[OptionCount]] = None


class QuestionSummary(CamelModel):
    questions: List[QuestionSummaryItem] = Field(default_factory=list)
    total_responses: int = 0


# ---------------------------------------------------------------------------
# Manager rollup
# ---------------------------------------------------------------------------

class ManagerBandCount(CamelModel):
    band_id: str
    band_label: str
    count: int = 0
    percentage: float = 0.0
    color: str


class ManagerSummary(CamelModel):
    manager_id: str
    manager_name: Optional[str] = None
    respondent_count: int
    completion_rate: float
    avg_index_score: float
    band_distribution: List[ManagerBandCount] = Field(default_factory=list)


class ManagerIndexSummary(CamelModel):
    managers: List[ManagerSummary] = Field(default_factory=list)
    total_managers: int = 0
    total_responses: int = 0


# ---------------------------------------------------------------------------
# Trends
# ---------------------------------------------------------------------------

class TrendPoint(CamelModel):
    date: str = Field(..., description="Bucket start as an ISO date")
    engagement_index: Optional[float] = None
    leadership_index: Optional[float] = None
    wellbeing_index: Optional[float] = None
    burnout_risk_index: Optional[float] = None
    psychological_safety_index: Optional[float] = None
    response_count: int


class IndexTrend(CamelModel):
    series: List[TrendPoint] = Field(default_factory=list)


class VersionScores(CamelModel):
    leadership_effectiveness: Optional[float] = None
    team_wellbeing: Optional[float] = None
    burnout_risk: Optional[float] = None
    psychological_safety: Optional[float] = None
    engagement: Optional[float] = None


class VersionTrendPoint(CamelModel):
    version_id: str
    version_label: str
    version_number: int
    version_date: Optional[datetime] = None
    scores: VersionScores
    response_count: int


class IndexTrendsSummary(CamelModel):
    trends: List[VersionTrendPoint] = Field(default_factory=list)
    total_versions: int = 0
    has_multiple_versions: bool = False


# ---------------------------------------------------------------------------
# Before / after
# ---------------------------------------------------------------------------

class VersionRef(CamelModel):
    id: str
    label: str
    version_number: int = 0
    date: Optional[datetime] = None
    response_count: int = 0


class DimensionComparison(CamelModel):
    dimension_id: str
    dimension_label: str
    score_before: Optional[float] = None
    score_after: Optional[float] = None
    change: Optional[float] = None
    change_percent: Optional[float] = None
    trend: TrendDirection = TrendDirection.NEUTRAL


class ComparisonSummary(CamelModel):
    total_dimensions_improved: int = 0
    total_dimensions_declined: int = 0
    total_dimensions_stable: int = 0
    overall_trend: OverallTrend = OverallTrend.STABLE


class BeforeAfterComparison(CamelModel):
    version_before: VersionRef
    version_after: VersionRef
    comparison: List[DimensionComparison] = Field(default_factory=list)
    summary: ComparisonSummary = Field(default_factory=ComparisonSummary)


# ---------------------------------------------------------------------------
# Domain overview
# ---------------------------------------------------------------------------

class DomainCategory(CamelModel):
    category_id: str
    category_name: str
    average_score: float = 0.0
    min_score: float = 0
    max_score: float = 0
    response_count: int = 0
    weight: float = 1.0
    contribution_to_total: float = 0.0


class DomainOverview(CamelModel):
    categories: List[DomainCategory] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Versions, confidence, envelope
# ---------------------------------------------------------------------------

class VersionInfo(CamelModel):
    id: str
    version_number: int
    label: str
    created_at: Optional[datetime] = None
    is_latest: bool = False


class VersionsListing(CamelModel):
    versions: List[VersionInfo] = Field(default_factory=list)
    latest_version_id: Optional[str] = None


class AnalyticsWarning(CamelModel):
    type: str
    severity: str
    title: str
    message: str


class AnalyticsConfidence(CamelModel):
    mode: AnalyticsMode
    show_participation: bool = True
    show_question_summary: bool = False
    show_index_distribution: bool = False
    show_band_distribution: bool = False
    show_dimension_leaderboard: bool = False
    show_manager_comparison: bool = False
    show_trends: bool = False
    show_before_after: bool = False
    warnings: List[AnalyticsWarning] = Field(default_factory=list)
    response_count: int = 0
    version_count: int = 0
    category_count: int = 0
    has_scoring_enabled: bool = False
    has_valid_categories: bool = False


class AnalyticsMeta(CamelModel):
    survey_id: str
    version: Optional[str] = None
    index_type: Optional[str] = None
    version_before: Optional[str] = None
    version_after: Optional[str] = None
    generated_at: datetime


class AnalyticsEnvelope(CamelModel):
    meta: AnalyticsMeta
    data: Dict[str, Any]
