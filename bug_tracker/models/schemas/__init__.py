"""Pydantic schema definitions."""

from bug_tracker.models.schemas.base import CamelCaseModel
from bug_tracker.models.schemas.bug import (
    BugDeleteResponse,
    BugListResponse,
    BugRead,
    BugWriteRequest,
)
from bug_tracker.models.schemas.health import DatabaseHealth, HealthResponse

__all__ = [
    "BugDeleteResponse",
    "BugListResponse",
    "BugRead",
    "BugWriteRequest",
    "CamelCaseModel",
    "DatabaseHealth",
    "HealthResponse",
]
