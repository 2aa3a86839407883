"""
Manager Rollup
survey_scoring/analytics/manager_rollup.py

Groups responses by the manager id carried in response metadata
(``managerId`` or ``manager_id``). Responses without one are left out of the
groups but still counted in ``totalResponses``.
"""

from typing import Dict, List, Sequence

from survey_scoring.analytics.distribution import manager_band_distribution
from survey_scoring.analytics.participation import COMPLETION_THRESHOLD, is_completed
from survey_scoring.analytics.scored import ScoredResponse, overall_scores
from survey_scoring.models.analytics import ManagerIndexSummary, ManagerSummary
from survey_scoring.scoring.utils import mean, percentage, round1


def manager_index_summary(
    scored: Sequence[ScoredResponse],
    scoring_enabled: bool,
    completion_threshold: float = COMPLETION_THRESHOLD,
) -> ManagerIndexSummary:
    if not scoring_enabled or not scored:
        return ManagerIndexSummary()

    groups: Dict[str, List[ScoredResponse]] = {}
    for item in scored:
        manager_id = item.response.manager_id()
        if manager_id is None:
            continue
        groups.setdefault(manager_id, []).append(item)

    managers = []
    for manager_id, members in groups.items():
        scores = overall_scores(members)
        completed = sum(1 for m in members if is_completed(m.response, completion_threshold))
        avg = mean(scores)
        first_metadata = members[0].response.metadata or {}
        name = first_metadata.get("managerName")

        managers.append(
            ManagerSummary(
                manager_id=manager_id,
                manager_name=str(name) if name else None,
                respondent_count=len(members),
                completion_rate=percentage(completed, len(members)),
                avg_index_score=round1(avg) if avg is not None else 0.0,
                band_distribution=manager_band_distribution(scores),
            )
        )

    managers.sort(key=lambda m: (-m.respondent_count, m.manager_id))
    return ManagerIndexSummary(
        managers=managers,
        total_managers=len(managers),
        total_responses=len(scored),
    )
