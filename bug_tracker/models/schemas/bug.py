from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import ConfigDict, field_validator

from bug_tracker.models.entities import BugPriority, BugSeverity, BugStatus
from bug_tracker.models.schemas.base import CamelCaseModel


class BugWriteRequest(CamelCaseModel):
    """Body of POST and PUT. Optional fields left out fall back to defaults on
    create and to the stored values on update. An explicit null is rejected,
    as is any key the record does not have."""

    model_config = ConfigDict(extra="forbid")

    title: str
    description: str
    severity: BugSeverity | None = None
    status: BugStatus | None = None
    priority: BugPriority | None = None
    assigned_to: str | None = None
    reported_by: str
    tags: list[str] | None = None

    @field_validator("severity", "status", "priority", "assigned_to", "tags", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        # Only runs for keys present in the body; omitted keys keep the default.
        if value is None:
            raise ValueError("must not be null")
        return value


class BugRead(CamelCaseModel):
    id: UUID
    title: str
    description: str
    severity: BugSeverity
    status: BugStatus
    priority: BugPriority
    assigned_to: str
    reported_by: str
    tags: list[str]
    created_at: datetime
    updated_at: datetime


class BugListResponse(CamelCaseModel):
    bugs: list[BugRead]
    total_pages: int
    current_page: int
    total: int


class BugDeleteResponse(CamelCaseModel):
    message: str
