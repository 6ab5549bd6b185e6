from fastapi import APIRouter

from bug_tracker.api.routes.bugs import router as bug_router
from bug_tracker.api.routes.health import router as health_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["health"])
api_router.include_router(bug_router, tags=["bugs"])
