"""Database repositories."""

from bug_tracker.repositories.bug_repository import BugRepository
from bug_tracker.repositories.health_repository import HealthRepository

__all__ = ["BugRepository", "HealthRepository"]
