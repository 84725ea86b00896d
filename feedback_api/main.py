"""
Feedback Bridge API

Thin FastAPI backend that turns mobile app feedback into GitHub issues.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from feedback_api.config import get_settings
from feedback_api.middleware import (
    CORSHeadersMiddleware,
    RequestIDLogFilter,
    RequestIDMiddleware,
)
from feedback_api.routers import feedback

logger = logging.getLogger(__name__)

settings = get_settings()

VERSION = "0.1.0"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s"


def configure_logging(level: str) -> None:
    """Configure root logging with the request ID on every record."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, RequestIDLogFilter) for f in handler.filters):
            handler.addFilter(RequestIDLogFilter())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown."""
    configure_logging(settings.log_level)
    if not settings.github_token:
        logger.warning("GITHUB_TOKEN is not set; submissions will fail with 500")
    yield


app = FastAPI(
    title="Feedback Bridge API",
    description="Forwards mobile app feedback to GitHub issues",
    version=VERSION,
    lifespan=lifespan,
)

# CORS
app.add_middleware(CORSHeadersMiddleware)
# Request ID (runs first — outermost middleware)
app.add_middleware(RequestIDMiddleware)

# Routers
app.include_router(feedback.router, prefix="/api")


def _check_config() -> str:
    """Verify required configuration is loaded. Returns 'ok' or 'fail'."""
    if get_settings().github_token:
        return "ok"
    return "fail"


@app.get("/api/health")
async def health_check() -> JSONResponse:
    """Health check verifying service configuration."""
    checks = {"config": _check_config()}
    failed = [k for k, v in checks.items() if v != "ok"]

    if failed:
        overall = "degraded"
        logger.warning("Health check degraded — failed: %s", ", ".join(failed))
    else:
        overall = "ok"

    result: dict[str, Any] = {
        "status": overall,
        "service": "feedback-bridge-api",
        "version": VERSION,
        "checks": checks,
    }
    return JSONResponse(content=result, status_code=200)
