"""
Core Package - Survey Scoring Engine
survey_scoring/core/__init__.py

Core infrastructure: exceptions, logging setup. Dependency factories live in
``survey_scoring.core.dependencies`` (imported directly to avoid a cycle with
the services package).
"""

from survey_scoring.core.exceptions import (
    AnalyticsQueryException,
    EntityNotFoundException,
    RepositoryException,
    SeedDataException,
)
from survey_scoring.core.logging import setup_logging

__all__ = [
    # Exceptions
    "AnalyticsQueryException",
    "EntityNotFoundException",
    "RepositoryException",
    "SeedDataException",
    # Logging
    "setup_logging",
]
