from __future__ import annotations

"""Application factory for the FastAPI app.

Centralizes app construction (state, lifespan, middleware, handlers, routers)
so tests can build isolated instances with their own counter and database.
"""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from user_admin.adapters.rate_limit.base import AbstractRequestCounter
from user_admin.adapters.rate_limit.in_memory import InMemoryRequestCounter
from user_admin.api.routes import health_router, pages_router, request_count_router, users_router
from user_admin.core.config import settings
from user_admin.core.exception_handlers import setup_exception_handlers
from user_admin.core.logging import configure_logging
from user_admin.core.middleware import request_id_middleware
from user_admin.core.openapi import apply_openapi_customizations
from user_admin.core.rate_limit import run_periodic_reset
from user_admin.db.session import close_database, init_database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables, start the daily counter reset, dispose the pool on exit."""
    init_database()
    reset_task = asyncio.create_task(run_periodic_reset(app.state.request_counter))
    logger.info(
        "app.started",
        extra={
            "app_env": settings.app_env,
            "daily_request_limit": settings.app.daily_request_limit,
        },
    )
    try:
        yield
    finally:
        reset_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await reset_task
        close_database()


def create_app(request_counter: AbstractRequestCounter | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        request_counter: Counter shared by every request of this app. A fresh
            in-memory counter with the configured window is built when omitted.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="User Admin",
        description=(
            "Minimal user management: list, create, replace and delete users "
            "stored in a relational database, with a process-wide daily "
            "request limit."
        ),
        version="0.1.0",
        debug=settings.app.debug,
        lifespan=lifespan,
    )

    app.state.request_counter = request_counter or InMemoryRequestCounter(
        reset_interval_seconds=settings.app.request_count_reset_seconds,
    )

    # Middleware
    app.middleware("http")(request_id_middleware)

    # Exception handlers
    setup_exception_handlers(app)

    # Routers
    app.include_router(pages_router)
    app.include_router(users_router)
    app.include_router(request_count_router)
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app
