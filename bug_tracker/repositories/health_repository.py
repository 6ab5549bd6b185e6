import logging

from psycopg import OperationalError

from bug_tracker.core.database import get_connection
from bug_tracker.models.schemas.health import DatabaseHealth

logger = logging.getLogger(__name__)

UNREACHABLE_MESSAGE = "Database is unreachable."


class HealthRepository:
    def __init__(self, timeout_seconds: int = 3) -> None:
        self.timeout_seconds = timeout_seconds

    def check_connection(self, database_url: str) -> DatabaseHealth:
        try:
            with get_connection(database_url, connect_timeout=self.timeout_seconds) as connection:
                row = connection.execute("SELECT 1 AS alive").fetchone()
        except OperationalError as exc:
            # Connection errors can echo the DSN, so only the log sees them.
            logger.warning("Database ping failed: %s", exc)
            return DatabaseHealth(connected=False, message=UNREACHABLE_MESSAGE)

        if not row or row["alive"] != 1:
            return DatabaseHealth(
                connected=False,
                message="Database ping returned an unexpected result.",
            )
        return DatabaseHealth(connected=True)
