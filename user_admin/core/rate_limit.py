"""Daily request limit wiring for FastAPI routes.

The counter itself lives on ``app.state`` (built once by the app factory);
this module exposes it as a dependency and implements the caller side of the
limit: a request is admitted and counted in one atomic step before any work.

Rate limiting strategy:
- One global budget per process (not per client), ``APP_DAILY_REQUEST_LIMIT``.
- The window starts over every ``APP_REQUEST_COUNT_RESET_SECONDS``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated, Awaitable, Callable

from fastapi import Depends, Request

from user_admin.adapters.rate_limit.base import AbstractRequestCounter
from user_admin.core.config import settings
from user_admin.core.errors import RateLimitAppError

logger = logging.getLogger(__name__)


def get_request_counter(request: Request) -> AbstractRequestCounter:
    """Return the process-wide counter attached to the running app."""

    return request.app.state.request_counter


RequestCounterDep = Annotated[AbstractRequestCounter, Depends(get_request_counter)]


def get_daily_limit() -> int:
    return settings.app.daily_request_limit


async def enforce_daily_limit(
    counter: RequestCounterDep,
    limit: Annotated[int, Depends(get_daily_limit)],
) -> None:
    """FastAPI dependency admitting a request against the daily budget.

    Runs before body validation and before any store access. An admitted
    request is counted here, atomically with the check; a rejected one is
    not counted and never touches the database.

    Raises:
        RateLimitAppError: 429 when ``count >= limit``.
    """

    if counter.try_acquire(limit):
        return

    count = counter.get_count()
    retry_after = int(counter.seconds_until_reset()) + 1
    logger.warning(
        "rate_limit.exceeded",
        extra={"count": count, "limit": limit, "retry_after_s": retry_after},
    )
    raise RateLimitAppError(
        code="rate_limit_exceeded",
        message="Daily request limit reached. Try again tomorrow.",
        details={
            "limit": limit,
            "count": count,
            "retry_after": retry_after,
            "reset_at": counter.reset_at(),
        },
    )


async def run_periodic_reset(
    counter: AbstractRequestCounter,
    *,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """Reset the counter at every window boundary for the life of the process.

    Meant to run as a background task started by the app lifespan; it only
    stops when cancelled at shutdown.
    """

    while True:
        await sleep(counter.seconds_until_reset())
        counter.rollover()
