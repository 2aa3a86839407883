"""
Error responses - Survey Scoring Engine
survey_scoring/routers/errors.py

Uniform error body {error_code, message, details, timestamp} for HTTP errors
raised by routers and for request validation failures.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from survey_scoring.core.exceptions import EntityNotFoundException


#  Validation Error Messages


FIELD_MESSAGES = {
    "answers": {
        "missing": "Answers are required",
        "dict_type": "Answers must be an object keyed by question id",
    },
    "granularity": {
        "enum": "Granularity must be one of: daily, weekly, monthly",
    },
    "response_id": {
        "missing": "response_id query parameter is required",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "string_too_short": "Field '{field}' is too short",
    "string_type": "Field '{field}' must be a string",
    "list_type": "Field '{field}' must be a list",
    "dict_type": "Field '{field}' must be an object",
    "enum": "Field '{field}' has an unsupported value",
    "json_invalid": "Malformed JSON request body",
    "extra_forbidden": "Unknown field '{field}' is not allowed",
}


def get_validation_message(field: str, error_type: str) -> str:
    # Last path segment decides field-specific wording (query.granularity -> granularity)
    key = field.split(".")[-1] if field else field
    if key in FIELD_MESSAGES:
        for fragment, message in FIELD_MESSAGES[key].items():
            if fragment in error_type:
                return message
    for fragment, template in DEFAULT_MESSAGES.items():
        if fragment in error_type:
            return template.format(field=field)
    return f"Invalid value for field '{field}'"


def error_body(error_code: str, message: str, details: Optional[dict] = None) -> dict:
    return {
        "error_code": error_code,
        "message": message,
        "details": details,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=error_body("VALIDATION_ERROR", "Request validation failed"),
        )

    first = errors[0]
    error_type = first.get("type", "")
    if "json_invalid" in error_type:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("INVALID_REQUEST", "Malformed JSON request body"),
        )

    def location(e) -> str:
        return ".".join(str(part) for part in e.get("loc", []) if part != "body")

    field = location(first)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_body(
            "VALIDATION_ERROR",
            get_validation_message(field, error_type),
            {
                "field": field,
                "type": error_type,
                "errors": [{"field": location(e), "message": e.get("msg")} for e in errors],
            },
        ),
    )


#  Schemas


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: Optional[dict] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


#  Exception Helpers


def raise_error(status_code: int, error_code: str, message: str, details: Optional[dict] = None):
    raise HTTPException(
        status_code=status_code,
        detail=ErrorResponse(error_code=error_code, message=message, details=details).model_dump(mode="json"),
    )


def raise_not_found(exc: EntityNotFoundException):
    raise_error(
        status.HTTP_404_NOT_FOUND,
        f"{exc.entity_type.upper()}_NOT_FOUND",
        str(exc),
        {"entity_type": exc.entity_type, "entity_id": exc.entity_id},
    )


def raise_bad_request(error_code: str, message: str, details: Optional[dict] = None):
    raise_error(status.HTTP_400_BAD_REQUEST, error_code, message, details)
