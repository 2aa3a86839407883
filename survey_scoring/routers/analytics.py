"""
Analytics API Router
survey_scoring/routers/analytics.py

Endpoints:
  GET /api/v1/analytics/{survey_id}/versions     - ScoreConfigVersions, newest first
  GET /api/v1/analytics/{survey_id}/confidence   - Analytics mode, warnings, show flags
  GET /api/v1/analytics/{survey_id}/{metric_id}  - One metric in the {meta, data} envelope

Metric query params: version, granularity, versionBefore, versionAfter.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from survey_scoring.core.dependencies import get_analytics_service
from survey_scoring.core.exceptions import AnalyticsQueryException, EntityNotFoundException
from survey_scoring.models.enumerations import TrendGranularity
from survey_scoring.routers.errors import raise_bad_request, raise_not_found
from survey_scoring.services.analytics_service import AnalyticsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Analytics"])


@router.get("/analytics/{survey_id}/versions", summary="List score config versions")
async def list_versions(
    survey_id: str,
    service: AnalyticsService = Depends(get_analytics_service),
) -> Dict[str, Any]:
    try:
        listing = service.list_versions(survey_id)
    except EntityNotFoundException as e:
        raise_not_found(e)
    return listing.model_dump(mode="json", by_alias=True)


@router.get("/analytics/{survey_id}/confidence", summary="Analytics confidence and display rules")
async def get_confidence(
    survey_id: str,
    service: AnalyticsService = Depends(get_analytics_service),
) -> Dict[str, Any]:
    try:
        confidence = service.get_confidence(survey_id)
    except EntityNotFoundException as e:
        raise_not_found(e)
    return confidence.model_dump(mode="json", by_alias=True)


@router.get("/analytics/{survey_id}/{metric_id}", summary="Compute one analytics metric")
async def get_metric(
    survey_id: str,
    metric_id: str,
    version: Optional[str] = Query(None, description="ScoreConfigVersion id; defaults to the latest"),
    granularity: Optional[TrendGranularity] = Query(None, description="Trend bucket size"),
    version_before: Optional[str] = Query(None, alias="versionBefore"),
    version_after: Optional[str] = Query(None, alias="versionAfter"),
    service: AnalyticsService = Depends(get_analytics_service),
) -> Dict[str, Any]:
    try:
        envelope = service.get_metric(
            survey_id,
            metric_id,
            version=version,
            granularity=granularity,
            version_before=version_before,
            version_after=version_after,
        )
    except AnalyticsQueryException as e:
        logger.warning("Rejected analytics query %s for survey %s: %s", metric_id, survey_id, e.message)
        raise_bad_request("INVALID_METRIC_QUERY", e.message, e.details)
    except EntityNotFoundException as e:
        raise_not_found(e)
    return envelope.model_dump(mode="json", by_alias=True)
