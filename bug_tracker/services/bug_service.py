import logging
import math
from uuid import UUID

from fastapi import status

from bug_tracker.core.database import get_connection
from bug_tracker.core.errors import AppError
from bug_tracker.models.entities import (
    DEFAULT_ASSIGNEE,
    DEFAULT_PRIORITY,
    DEFAULT_SEVERITY,
    DEFAULT_STATUS,
    BugEntity,
)
from bug_tracker.models.schemas.base import to_camel
from bug_tracker.models.schemas.bug import (
    BugDeleteResponse,
    BugListResponse,
    BugRead,
    BugWriteRequest,
)
from bug_tracker.repositories.bug_repository import BugRepository

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000
# OFFSET is a bigint in PostgreSQL.
MAX_OFFSET = 2**63 - 1


class BugService:
    def __init__(
        self,
        bug_repository: BugRepository,
        database_url: str | None = None,
    ) -> None:
        self.bug_repository = bug_repository
        self.database_url = database_url

    def list_bugs(
        self,
        *,
        status: str | None = None,
        severity: str | None = None,
        priority: str | None = None,
        assigned_to: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> BugListResponse:
        candidates = {
            "status": status,
            "severity": severity,
            "priority": priority,
            "assigned_to": assigned_to,
        }
        filters = {name: value for name, value in candidates.items() if value}
        for name, value in filters.items():
            if "\x00" in value:
                field = to_camel(name)
                self._raise_validation_failed(field, f"{field} cannot contain NUL characters")

        offset = (page - 1) * limit
        if offset > MAX_OFFSET:
            self._raise_validation_failed("page", "page is out of range")

        bugs, total = self.bug_repository.list_filtered(
            filters=filters,
            limit=limit,
            offset=offset,
        )
        logger.info("Found %d bugs (%d total) with filters %s", len(bugs), total, filters)
        return BugListResponse(
            bugs=[self._to_bug_read(bug) for bug in bugs],
            total_pages=math.ceil(total / limit),
            current_page=page,
            total=total,
        )

    def get_bug(self, bug_id: str) -> BugRead:
        parsed_id = self._parse_bug_id(bug_id)
        bug = self.bug_repository.get_by_id(parsed_id)
        if bug is None:
            self._raise_bug_not_found(bug_id)
        return self._to_bug_read(bug)

    def create_bug(self, payload: BugWriteRequest) -> BugRead:
        title = self._validate_text("title", payload.title, max_length=TITLE_MAX_LENGTH)
        description = self._validate_text(
            "description",
            payload.description,
            max_length=DESCRIPTION_MAX_LENGTH,
        )
        reported_by = self._validate_text("reportedBy", payload.reported_by)
        assigned_to = DEFAULT_ASSIGNEE
        if payload.assigned_to is not None:
            assigned_to = self._validate_text("assignedTo", payload.assigned_to)
        tags = self._validate_tags(payload.tags or [])

        created = self.bug_repository.create(
            title=title,
            description=description,
            reported_by=reported_by,
            severity=payload.severity or DEFAULT_SEVERITY,
            status=payload.status or DEFAULT_STATUS,
            priority=payload.priority or DEFAULT_PRIORITY,
            assigned_to=assigned_to,
            tags=tags,
        )
        logger.info("Created bug %s: %s", created.id, created.title)
        return self._to_bug_read(created)

    def update_bug(self, bug_id: str, payload: BugWriteRequest) -> BugRead:
        parsed_id = self._parse_bug_id(bug_id)
        title = self._validate_text("title", payload.title, max_length=TITLE_MAX_LENGTH)
        description = self._validate_text(
            "description",
            payload.description,
            max_length=DESCRIPTION_MAX_LENGTH,
        )
        reported_by = self._validate_text("reportedBy", payload.reported_by)
        assigned_to = None
        if payload.assigned_to is not None:
            assigned_to = self._validate_text("assignedTo", payload.assigned_to)
        tags = self._validate_tags(payload.tags) if payload.tags is not None else None

        with get_connection(self.database_url) as connection:
            current = self.bug_repository.get_by_id(parsed_id, connection=connection)
            if current is None:
                self._raise_bug_not_found(bug_id)

            updated = self.bug_repository.update(
                bug_id=parsed_id,
                title=title,
                description=description,
                severity=payload.severity or current.severity,
                status=payload.status or current.status,
                priority=payload.priority or current.priority,
                assigned_to=assigned_to or current.assigned_to,
                reported_by=reported_by,
                tags=tags if tags is not None else current.tags,
                connection=connection,
            )
            if updated is None:
                self._raise_bug_not_found(bug_id)

        logger.info("Updated bug %s: %s", updated.id, updated.title)
        return self._to_bug_read(updated)

    def delete_bug(self, bug_id: str) -> BugDeleteResponse:
        parsed_id = self._parse_bug_id(bug_id)
        deleted = self.bug_repository.delete(parsed_id)
        if deleted is None:
            self._raise_bug_not_found(bug_id)
        logger.info("Deleted bug %s: %s", deleted.id, deleted.title)
        return BugDeleteResponse(message="Bug deleted successfully")

    def _to_bug_read(self, bug: BugEntity) -> BugRead:
        return BugRead(
            id=bug.id,
            title=bug.title,
            description=bug.description,
            severity=bug.severity,
            status=bug.status,
            priority=bug.priority,
            assigned_to=bug.assigned_to,
            reported_by=bug.reported_by,
            tags=list(bug.tags),
            created_at=bug.created_at,
            updated_at=bug.updated_at,
        )

    def _parse_bug_id(self, bug_id: str) -> UUID:
        try:
            return UUID(bug_id)
        except (TypeError, ValueError) as exc:
            raise AppError(
                status_code=status.HTTP_400_BAD_REQUEST,
                code="INVALID_BUG_ID",
                message="Invalid bug ID",
                details={"bug_id": bug_id},
            ) from exc

    def _validate_text(self, field: str, value: str, *, max_length: int | None = None) -> str:
        normalized = value.strip()
        if not normalized:
            self._raise_validation_failed(field, f"{field} is required")
        if "\x00" in normalized:
            self._raise_validation_failed(field, f"{field} cannot contain NUL characters")
        if max_length is not None and len(normalized) > max_length:
            self._raise_validation_failed(
                field,
                f"{field} cannot exceed {max_length} characters",
            )
        return normalized

    def _validate_tags(self, tags: list[str]) -> list[str]:
        normalized = [tag.strip() for tag in tags]
        if any(not tag for tag in normalized):
            self._raise_validation_failed("tags", "tags cannot contain empty values")
        if any("\x00" in tag for tag in normalized):
            self._raise_validation_failed("tags", "tags cannot contain NUL characters")
        return normalized

    def _raise_validation_failed(self, field: str, message: str) -> None:
        raise AppError(
            status_code=status.HTTP_400_BAD_REQUEST,
            code="VALIDATION_FAILED",
            message=message,
            details={"field": field},
        )

    def _raise_bug_not_found(self, bug_id: str) -> None:
        logger.warning("Bug not found: %s", bug_id)
        raise AppError(
            status_code=status.HTTP_404_NOT_FOUND,
            code="BUG_NOT_FOUND",
            message="Bug not found",
            details={"bug_id": bug_id},
        )
