"""
Analytics confidence and display rules
survey_scoring/analytics/confidence.py

Decides which analytics a survey can meaningfully show and why not, so
broken configuration surfaces as a warning instead of charts full of zeros.
"""

from typing import List, Optional

from survey_scoring.models.analytics import AnalyticsConfidence, AnalyticsWarning
from survey_scoring.models.enumerations import AnalyticsMode
from survey_scoring.models.survey import ScoreConfig

MIN_RESPONSES_MEANINGFUL = 5

CANONICAL_DIMENSION_IDS = (
    "engagement",
    "leadership-effectiveness",
    "psychological-safety",
    "team-wellbeing",
    "burnout-risk",
)
MIN_CANONICAL_DIMENSIONS = 3


def determine_mode(score_config: Optional[ScoreConfig]) -> AnalyticsMode:
    if score_config is None or not score_config.enabled:
        return AnalyticsMode.BASIC
    if not score_config.categories:
        return AnalyticsMode.MISCONFIGURED

    category_ids = {c.id for c in score_config.categories}
    matching = [d for d in CANONICAL_DIMENSION_IDS if d in category_ids]
    if len(matching) >= MIN_CANONICAL_DIMENSIONS:
        return AnalyticsMode.INSIGHT_DIMENSIONS
    return AnalyticsMode.GENERIC_SCORING


def analyze_confidence(
    score_config: Optional[ScoreConfig],
    response_count: int,
    version_count: int,
    has_manager_data: bool,
    min_responses: int = MIN_RESPONSES_MEANINGFUL,
) -> AnalyticsConfidence:
    mode = determine_mode(score_config)
    scoring_enabled = score_config is not None and score_config.enabled
    category_count = len(score_config.categories) if score_config is not None else 0
    warnings: List[AnalyticsWarning] = []

    if response_count == 0:
        warnings.append(AnalyticsWarning(
            type="no-responses",
            severity="info",
            title="No Responses Yet",
            message="This survey has not received any responses. "
                    "Analytics will appear once responses are submitted.",
        ))
    elif response_count < min_responses:
        plural = "" if response_count == 1 else "s"
        warnings.append(AnalyticsWarning(
            type="low-responses",
            severity="warning",
            title="Limited Data",
            message=f"Only {response_count} response{plural}. Results may not be representative. "
                    f"We recommend at least {min_responses} responses for meaningful analysis.",
        ))

    if version_count <= 1 and scoring_enabled:
        warnings.append(AnalyticsWarning(
            type="single-version",
            severity="info",
            title="Single Snapshot Mode",
            message="Only one scoring version available. "
                    "Trend analysis requires multiple versions over time.",
        ))

    if mode == AnalyticsMode.MISCONFIGURED:
        warnings.append(AnalyticsWarning(
            type="misconfigured",
            severity="error",
            title="Scoring Misconfigured",
            message="Scoring is enabled but no categories are defined. "
                    "Please configure scoring categories in the Survey Builder.",
        ))

    if not has_manager_data and mode in (AnalyticsMode.INSIGHT_DIMENSIONS, AnalyticsMode.GENERIC_SCORING):
        warnings.append(AnalyticsWarning(
            type="no-managers",
            severity="info",
            title="No Manager Data",
            message="Manager comparison requires responses to include manager metadata.",
        ))

    has_responses = response_count > 0
    can_show_scoring = scoring_enabled and category_count > 0 and has_responses
    can_show_trends = can_show_scoring and version_count > 1

    return AnalyticsConfidence(
        mode=mode,
        show_participation=True,
        show_question_summary=has_responses,
        show_index_distribution=can_show_scoring,
        show_band_distribution=can_show_scoring,
        show_dimension_leaderboard=can_show_scoring and mode == AnalyticsMode.INSIGHT_DIMENSIONS,
        show_manager_comparison=can_show_scoring and has_manager_data,
        show_trends=can_show_trends,
        show_before_after=can_show_trends,
        warnings=warnings,
        response_count=response_count,
        version_count=version_count,
        category_count=category_count,
        has_scoring_enabled=scoring_enabled,
        has_valid_categories=category_count > 0,
    )
