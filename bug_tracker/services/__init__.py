"""Business services."""

from bug_tracker.services.bug_service import BugService
from bug_tracker.services.health_service import HealthService

__all__ = ["BugService", "HealthService"]
