from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from bug_tracker.models.schemas.bug import (
    BugDeleteResponse,
    BugListResponse,
    BugRead,
    BugWriteRequest,
)
from bug_tracker.repositories.bug_repository import BugRepository
from bug_tracker.services.bug_service import BugService

router = APIRouter(prefix="/bugs")


def get_bug_service() -> BugService:
    return BugService(bug_repository=BugRepository())


@router.get("", response_model=BugListResponse)
def list_bugs(
    bug_service: Annotated[BugService, Depends(get_bug_service)],
    bug_status: Annotated[str | None, Query(alias="status")] = None,
    severity: Annotated[str | None, Query()] = None,
    priority: Annotated[str | None, Query()] = None,
    assigned_to: Annotated[str | None, Query(alias="assignedTo")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> BugListResponse:
    return bug_service.list_bugs(
        status=bug_status,
        severity=severity,
        priority=priority,
        assigned_to=assigned_to,
        page=page,
        limit=limit,
    )


@router.post("", response_model=BugRead, status_code=status.HTTP_201_CREATED)
def create_bug(
    payload: BugWriteRequest,
    bug_service: Annotated[BugService, Depends(get_bug_service)],
) -> BugRead:
    return bug_service.create_bug(payload)


@router.get("/{bug_id}", response_model=BugRead)
def get_bug(
    bug_id: str,
    bug_service: Annotated[BugService, Depends(get_bug_service)],
) -> BugRead:
    return bug_service.get_bug(bug_id)


@router.put("/{bug_id}", response_model=BugRead)
def update_bug(
    bug_id: str,
    payload: BugWriteRequest,
    bug_service: Annotated[BugService, Depends(get_bug_service)],
) -> BugRead:
    return bug_service.update_bug(bug_id, payload)


@router.delete("/{bug_id}", response_model=BugDeleteResponse)
def delete_bug(
    bug_id: str,
    bug_service: Annotated[BugService, Depends(get_bug_service)],
) -> BugDeleteResponse:
    return bug_service.delete_bug(bug_id)
