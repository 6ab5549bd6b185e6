"""Domain models and API schemas."""

from bug_tracker.models.entities import BugEntity, BugPriority, BugSeverity, BugStatus

__all__ = ["BugEntity", "BugPriority", "BugSeverity", "BugStatus"]
