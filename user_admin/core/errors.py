"""Application-level exception types.

Domain errors raised by services and dependencies. The global exception
handlers turn each subclass into its HTTP status code and a consistent JSON
error body.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    field: str
    fields: list[str]
    user_id: int
    limit: int
    count: int
    retry_after: int
    reset_at: int
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    status_code = 400

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when client-supplied data is missing or malformed."""


class NotFoundAppError(AppError):
    """Raised when an update or delete targets a user id that does not exist."""

    status_code = 404


class RateLimitAppError(AppError):
    """Raised when the daily request budget is exhausted."""

    status_code = 429


class StoreAppError(AppError):
    """Raised when the relational store fails (connection, constraint, ...)."""

    status_code = 500
