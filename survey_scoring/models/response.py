"""
Response-side models - Survey Scoring Engine
survey_scoring/models/response.py

Responses, score config versions and invited respondents as handed to the
engine by the survey/response store. All read-only except for deletion.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, field_validator

from survey_scoring.models.common import CamelModel

AnswerValue = Union[str, List[str]]


def coerce_answer(value: Any) -> Any:
    # Editors and imports send bare numbers/booleans; scoring works on text.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list):
        return [coerce_answer(v) for v in value]
    return value


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive timestamps are taken to be UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SurveyResponse(CamelModel):
    """
    One respondent's submission.
    """

    id: str = Field(..., min_length=1)
    survey_id: str = Field(..., min_length=1)
    answers: Dict[str, Optional[AnswerValue]] = Field(
        default_factory=dict,
        description="Question id -> answer text (or list of texts for multi-select)",
    )
    metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Opaque key/value data; may carry managerId / managerName",
    )
    completion_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    total_duration_ms: Optional[float] = Field(default=None, ge=0)
    score_config_version_id: Optional[str] = None

    @field_validator("answers", mode="before")
    @classmethod
    def coerce_answers(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {k: coerce_answer(val) for k, val in v.items()}
        return v

    @field_validator("started_at", "completed_at")
    @classmethod
    def normalize_timestamps(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v)

    def manager_id(self) -> Optional[str]:
        if not self.metadata:
            return None
        value = self.metadata.get("managerId") or self.metadata.get("manager_id")
        return str(value) if value else None


class ScoreConfigVersion(CamelModel):
    """Immutable snapshot reference; responses are tagged with the active one."""

    id: str = Field(..., min_length=1)
    survey_id: str = Field(..., min_length=1)
    version_number: int = Field(..., ge=0)
    created_at: Optional[datetime] = None

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v)

    @property
    def label(self) -> str:
        return f"v{self.version_number}"


class Respondent(CamelModel):
    """An invited respondent; only the count matters to the engine."""

    id: str = Field(..., min_length=1)
    survey_id: str = Field(..., min_length=1)
    email: Optional[str] = None
    name: Optional[str] = None
    invited_at: Optional[datetime] = None
