import time
from collections.abc import Callable

from bug_tracker.core.config import Settings
from bug_tracker.models.schemas.health import HealthResponse
from bug_tracker.repositories.health_repository import HealthRepository

STARTED_AT = time.monotonic()


class HealthService:
    def __init__(
        self,
        repository: HealthRepository,
        settings: Settings,
        *,
        started_at: float = STARTED_AT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.repository = repository
        self.settings = settings
        self.started_at = started_at
        self.clock = clock

    def get_health(self) -> HealthResponse:
        database = self.repository.check_connection(self.settings.database_url)
        return HealthResponse(
            status="ok" if database.connected else "degraded",
            environment=self.settings.app_env,
            uptime=self.uptime_seconds(),
            database=database,
        )

    def uptime_seconds(self) -> float:
        """Seconds since the process imported this module, to the millisecond."""
        return round(max(self.clock() - self.started_at, 0.0), 3)
