"""
Participation Metrics
survey_scoring/analytics/participation.py

    responseRate       = total / invited × 100        (null if invites unknown or 0)
    completionRate     = responses with completionPercentage >= threshold / total × 100
    avgCompletionTime  = mean duration in seconds     (null if no response has one)

Duration prefers the stored ``total_duration_ms`` and falls back to
completedAt - startedAt. Responses with neither are left out of the average,
not counted as zero.
"""

from typing import List, Optional, Sequence

import structlog

from survey_scoring.models.analytics import ParticipationMetrics
from survey_scoring.models.response import SurveyResponse
from survey_scoring.scoring.utils import mean, percentage, round1, round_half_up

logger = structlog.get_logger(__name__)

COMPLETION_THRESHOLD = 80.0


def is_completed(response: SurveyResponse, threshold: float = COMPLETION_THRESHOLD) -> bool:
    return (response.completion_percentage or 0) >= threshold


def response_duration_ms(response: SurveyResponse) -> Optional[float]:
    if response.total_duration_ms is not None:
        return response.total_duration_ms
    if response.started_at is not None and response.completed_at is not None:
        elapsed = (response.completed_at - response.started_at).total_seconds() * 1000
        # Clock skew between client and server can invert the pair
        return elapsed if elapsed >= 0 else None
    return None


class ParticipationCalculator:
    """Compute participation metrics over a filtered response set."""

    def __init__(self, completion_threshold: float = COMPLETION_THRESHOLD):
        self.completion_threshold = completion_threshold

    def calculate(
        self,
        responses: Sequence[SurveyResponse],
        invited_count: Optional[int] = None,
    ) -> ParticipationMetrics:
        total = len(responses)

        response_rate = None
        if invited_count:
            response_rate = round1(total / invited_count * 100)

        completed = sum(1 for r in responses if is_completed(r, self.completion_threshold))

        durations: List[float] = [
            d for d in (response_duration_ms(r) for r in responses) if d is not None
        ]
        avg_ms = mean(durations)
        avg_seconds = round_half_up(avg_ms / 1000) if avg_ms is not None else None

        logger.debug(
            "participation_calculated",
            total=total,
            completed=completed,
            timed=len(durations),
        )
        return ParticipationMetrics(
            total_responses=total,
            response_rate=response_rate,
            completion_rate=percentage(completed, total),
            avg_completion_time=avg_seconds,
        )
