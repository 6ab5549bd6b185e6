from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from uuid import UUID

from psycopg import Connection

from bug_tracker.core.database import get_connection
from bug_tracker.models.entities import (
    DEFAULT_ASSIGNEE,
    DEFAULT_PRIORITY,
    DEFAULT_SEVERITY,
    DEFAULT_STATUS,
    BugEntity,
    BugPriority,
    BugSeverity,
    BugStatus,
)

BUG_COLUMNS = """
    id, title, description, severity, status, priority,
    assigned_to, reported_by, tags, created_at, updated_at
"""

# Query filter name -> column. Values are matched by equality only.
FILTER_COLUMNS = {
    "status": "status",
    "severity": "severity",
    "priority": "priority",
    "assigned_to": "assigned_to",
}


def _to_bug_entity(row: dict[str, Any]) -> BugEntity:
    return BugEntity(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        severity=row["severity"],
        status=row["status"],
        priority=row["priority"],
        assigned_to=row["assigned_to"],
        reported_by=row["reported_by"],
        tags=list(row["tags"] or []),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class BugRepository:
    def __init__(self, database_url: str | None = None) -> None:
        self.database_url = database_url

    @contextmanager
    def _use_connection(self, connection: Connection | None) -> Iterator[Connection]:
        if connection is not None:
            yield connection
            return
        with get_connection(self.database_url) as managed:
            yield managed

    def create(
        self,
        *,
        title: str,
        description: str,
        reported_by: str,
        severity: BugSeverity = DEFAULT_SEVERITY,
        status: BugStatus = DEFAULT_STATUS,
        priority: BugPriority = DEFAULT_PRIORITY,
        assigned_to: str = DEFAULT_ASSIGNEE,
        tags: list[str] | None = None,
        connection: Connection | None = None,
    ) -> BugEntity:
        query = f"""
            INSERT INTO bugs (
                title, description, severity, status, priority,
                assigned_to, reported_by, tags
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING {BUG_COLUMNS}
        """
        params = (
            title,
            description,
            severity,
            status,
            priority,
            assigned_to,
            reported_by,
            list(tags or []),
        )
        with self._use_connection(connection) as active_connection:
            with active_connection.cursor() as cursor:
                cursor.execute(query, params)
                created = cursor.fetchone()
        if created is None:
            raise RuntimeError("Failed to create bug.")
        return _to_bug_entity(created)

    def get_by_id(self, bug_id: UUID, connection: Connection | None = None) -> BugEntity | None:
        query = f"""
            SELECT {BUG_COLUMNS}
            FROM bugs
            WHERE id = %s
        """
        with self._use_connection(connection) as active_connection:
            with active_connection.cursor() as cursor:
                cursor.execute(query, (bug_id,))
                row = cursor.fetchone()
        if row is None:
            return None
        return _to_bug_entity(row)

    def update(
        self,
        *,
        bug_id: UUID,
        title: str,
        description: str,
        severity: BugSeverity,
        status: BugStatus,
        priority: BugPriority,
        assigned_to: str,
        reported_by: str,
        tags: list[str],
        connection: Connection | None = None,
    ) -> BugEntity | None:
        query = f"""
            UPDATE bugs
            SET title = %s,
                description = %s,
                severity = %s,
                status = %s,
                priority = %s,
                assigned_to = %s,
                reported_by = %s,
                tags = %s,
                updated_at = NOW()
            WHERE id = %s
            RETURNING {BUG_COLUMNS}
        """
        params = (
            title,
            description,
            severity,
            status,
            priority,
            assigned_to,
            reported_by,
            list(tags),
            bug_id,
        )
        with self._use_connection(connection) as active_connection:
            with active_connection.cursor() as cursor:
                cursor.execute(query, params)
                row = cursor.fetchone()
        if row is None:
            return None
        return _to_bug_entity(row)

    def delete(self, bug_id: UUID, connection: Connection | None = None) -> BugEntity | None:
        query = f"DELETE FROM bugs WHERE id = %s RETURNING {BUG_COLUMNS}"
        with self._use_connection(connection) as active_connection:
            with active_connection.cursor() as cursor:
                cursor.execute(query, (bug_id,))
                row = cursor.fetchone()
        if row is None:
            return None
        return _to_bug_entity(row)

    def list_filtered(
        self,
        *,
        filters: dict[str, str],
        limit: int,
        offset: int,
        connection: Connection | None = None,
    ) -> tuple[list[BugEntity], int]:
        where_clauses: list[str] = []
        params: list[Any] = []

        for name, value in filters.items():
            column = FILTER_COLUMNS.get(name)
            if column is None:
                raise ValueError(f"Unsupported bug filter: {name}")
            where_clauses.append(f"{column} = %s")
            params.append(value)

        where_sql = ""
        if where_clauses:
            where_sql = "WHERE " + " AND ".join(where_clauses)

        list_query = f"""
            SELECT {BUG_COLUMNS}
            FROM bugs
            {where_sql}
            ORDER BY created_at DESC, id DESC
            LIMIT %s OFFSET %s
        """
        count_query = f"""
            SELECT COUNT(1) AS total
            FROM bugs
            {where_sql}
        """
        list_params = [*params, limit, offset]

        with self._use_connection(connection) as active_connection:
            with active_connection.cursor() as cursor:
                cursor.execute(count_query, params)
                count_row = cursor.fetchone()
                total = int(count_row["total"]) if count_row is not None else 0

                cursor.execute(list_query, list_params)
                rows = cursor.fetchall()

        return ([_to_bug_entity(row) for row in rows], total)
