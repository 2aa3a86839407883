"""
Health Check Router - Survey Scoring Engine
survey_scoring/routers/health.py

The engine has no external dependencies of its own; health reports the
in-memory store sizes so a mis-seeded DATA_DIR is visible at a glance.
"""

from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from survey_scoring.config import Settings, get_settings
from survey_scoring.core.dependencies import (
    get_respondent_repository,
    get_response_repository,
    get_survey_repository,
    get_version_repository,
)

router = APIRouter(tags=["Health"])


#  Schemas


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    environment: str
    store: Dict[str, int]


#  Main Health Check Route


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Service status, version and in-memory store sizes.",
)
async def health_check(settings: Settings = Depends(get_settings)):
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
        store={
            "surveys": len(get_survey_repository().get_all()),
            "responses": len(get_response_repository().get_all()),
            "versions": len(get_version_repository().get_all()),
            "respondents": len(get_respondent_repository().get_all()),
        },
    )
