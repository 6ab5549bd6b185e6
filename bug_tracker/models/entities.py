from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, get_args
from uuid import UUID

BugSeverity = Literal["Low", "Medium", "High", "Critical"]
BugStatus = Literal["Open", "In Progress", "Resolved", "Closed"]
BugPriority = Literal["Low", "Medium", "High", "Urgent"]

BUG_SEVERITIES: tuple[str, ...] = get_args(BugSeverity)
BUG_STATUSES: tuple[str, ...] = get_args(BugStatus)
BUG_PRIORITIES: tuple[str, ...] = get_args(BugPriority)

DEFAULT_SEVERITY: BugSeverity = "Medium"
DEFAULT_STATUS: BugStatus = "Open"
DEFAULT_PRIORITY: BugPriority = "Medium"
DEFAULT_ASSIGNEE = "Unassigned"


@dataclass(slots=True)
class BugEntity:
    id: UUID
    title: str
    description: str
    severity: BugSeverity
    status: BugStatus
    priority: BugPriority
    assigned_to: str
    reported_by: str
    created_at: datetime
    updated_at: datetime
    tags: list[str] = field(default_factory=list)
