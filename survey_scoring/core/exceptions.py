"""
Custom Exceptions - Survey Scoring Engine
survey_scoring/core/exceptions.py

Exception classes raised by the survey/response store collaborators.
The scoring engine itself never raises for data-quality problems; those are
collected into the ``errors`` list of each result.
"""

from typing import Optional


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class EntityNotFoundException(RepositoryException):
    """Entity not found in the store."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class SeedDataException(RepositoryException):
    """Seed file could not be read or failed validation."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load seed data from {path}: {reason}")


class AnalyticsQueryException(Exception):
    """Analytics query cannot be answered as asked (unknown metric, missing versions)."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)
