from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bug_tracker.api.router import api_router
from bug_tracker.core.config import get_settings
from bug_tracker.core.errors import register_exception_handlers
from bug_tracker.core.logging import configure_logging, log_requests

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.app_debug,
)

app.middleware("http")(log_requests)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/")
def root() -> dict[str, str]:
    return {
        "message": "Bug Tracker API",
        "version": settings.app_version,
        "docs": f"{settings.api_prefix}/health",
    }
