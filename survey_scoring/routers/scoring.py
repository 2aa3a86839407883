"""
Scoring Trace API Router
survey_scoring/routers/scoring.py

Endpoints:
  GET    /api/v1/scoring/{survey_id}/trace?response_id=   - Trace a stored response
  POST   /api/v1/scoring/{survey_id}/trace                - Trace ad-hoc answers (editor preview)
  DELETE /api/v1/scoring/{survey_id}/responses/{response_id} - Delete a stored response
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field, field_validator

from survey_scoring.core.dependencies import get_response_repository, get_scoring_service
from survey_scoring.core.exceptions import EntityNotFoundException
from survey_scoring.models.response import AnswerValue, coerce_answer
from survey_scoring.repositories.response_repository import ResponseRepository
from survey_scoring.services.scoring_service import ScoringService
from survey_scoring.routers.errors import raise_not_found

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Scoring"])


# =====================================================================
# Request / Response Models
# =====================================================================

class AdHocTraceRequest(BaseModel):
    """Answers to trace without storing them."""
    answers: Dict[str, Optional[AnswerValue]] = Field(
        ..., description="Question id -> answer text or list of texts"
    )

    @field_validator("answers", mode="before")
    @classmethod
    def coerce_answers(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {k: coerce_answer(val) for k, val in v.items()}
        return v


class TraceResponse(BaseModel):
    """Trace plus generation time; the trace itself is timestamp-free."""
    generated_at: datetime
    duration_ms: float
    trace: Dict[str, Any]


# =====================================================================
# Endpoints
# =====================================================================

def _wrap(trace, started: float) -> TraceResponse:
    return TraceResponse(
        generated_at=datetime.now(timezone.utc),
        duration_ms=round((time.perf_counter() - started) * 1000, 3),
        trace=trace.model_dump(mode="json", by_alias=True),
    )


@router.get(
    "/scoring/{survey_id}/trace",
    response_model=TraceResponse,
    summary="Scoring trace for a stored response",
)
async def get_trace(
    survey_id: str,
    response_id: str = Query(..., min_length=1),
    service: ScoringService = Depends(get_scoring_service),
):
    started = time.perf_counter()
    try:
        trace = service.trace_response(survey_id, response_id)
    except EntityNotFoundException as e:
        raise_not_found(e)
    return _wrap(trace, started)


@router.post(
    "/scoring/{survey_id}/trace",
    response_model=TraceResponse,
    summary="Scoring trace for ad-hoc answers",
)
async def post_trace(
    survey_id: str,
    body: AdHocTraceRequest,
    service: ScoringService = Depends(get_scoring_service),
):
    started = time.perf_counter()
    try:
        trace = service.trace_answers(survey_id, body.answers)
    except EntityNotFoundException as e:
        raise_not_found(e)
    return _wrap(trace, started)


@router.delete(
    "/scoring/{survey_id}/responses/{response_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a stored response",
)
async def delete_response(
    survey_id: str,
    response_id: str,
    responses: ResponseRepository = Depends(get_response_repository),
):
    try:
        response = responses.get_by_id(response_id)
        if response.survey_id != survey_id:
            raise EntityNotFoundException("Response", response_id)
        responses.delete(response_id)
    except EntityNotFoundException as e:
        raise_not_found(e)
    logger.info("Response %s of survey %s deleted", response_id, survey_id)
