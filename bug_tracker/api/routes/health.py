from typing import Annotated

from fastapi import APIRouter, Depends

from bug_tracker.core.config import Settings, get_settings
from bug_tracker.models.schemas.health import HealthResponse
from bug_tracker.repositories.health_repository import HealthRepository
from bug_tracker.services.health_service import HealthService

router = APIRouter()


def get_health_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthService:
    repository = HealthRepository(timeout_seconds=settings.database_ping_timeout)
    return HealthService(repository=repository, settings=settings)


@router.get("/health", response_model=HealthResponse)
def read_health(
    health_service: Annotated[HealthService, Depends(get_health_service)],
) -> HealthResponse:
    """Always answers 200; a failed database ping only downgrades ``status``."""
    return health_service.get_health()
