"""User persistence service.

Each public method performs one independent store operation inside its own
session transaction. There is no locking or version check: the last writer
wins. Store failures are logged with full detail and re-raised as
``StoreAppError`` so the API answers with a generic 500.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from user_admin.core import user_rules
from user_admin.core.errors import NotFoundAppError, StoreAppError, ValidationAppError
from user_admin.db.models import User

logger = logging.getLogger(__name__)

USER_FIELDS = ("name", "email", "age")


def validate_user_fields(values: dict, required: tuple[str, ...] = USER_FIELDS) -> None:
    """Apply presence checks, then the shared field rules.

    Args:
        values: Submitted values keyed by field name.
        required: Fields that must be present and truthy.

    Raises:
        ValidationAppError: If a field is missing or breaks a rule.
    """
    missing = user_rules.missing_fields(values, required)
    if missing:
        raise ValidationAppError(
            code="missing_fields",
            message=user_rules.ALL_FIELDS_REQUIRED,
            details={"fields": missing},
        )

    errors = user_rules.field_errors(values["name"], values["email"], values["age"])
    if errors:
        field, message = next(iter(errors.items()))
        raise ValidationAppError(
            code="invalid_field",
            message=message,
            details={"field": field, "fields": sorted(errors)},
        )


class UserService:
    """CRUD operations over the ``users`` table.

    Attributes:
        session: SQLAlchemy session scoped to the current request.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def _store_call(self, operation: str, **context) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception(
                "users.store_error",
                extra={"operation": operation, "error_type": type(exc).__name__, **context},
            )
            raise StoreAppError(
                code="store_error",
                message="Internal Server Error",
            ) from exc

    def _get_or_404(self, user_id: int) -> User:
        user = self.session.get(User, user_id)
        if user is None:
            raise NotFoundAppError(
                code="user_not_found",
                message=f"User {user_id} not found",
                details={"user_id": user_id},
            )
        return user

    def list_users(self) -> list[User]:
        """Return every user in store order."""
        with self._store_call("list"):
            users = list(self.session.scalars(select(User)))
        logger.info("users.listed", extra={"user_count": len(users)})
        return users

    def create_user(self, name: str | None, email: str | None, age: int | None) -> User:
        """Insert a new user and return it with its store-assigned id.

        Name and email are stored without surrounding whitespace.

        Raises:
            ValidationAppError: If a field is missing or invalid.
            StoreAppError: If the insert fails.
        """
        name, email = user_rules.clean_text(name), user_rules.clean_text(email)
        validate_user_fields({"name": name, "email": email, "age": age})

        user = User(name=name, email=email, age=age)
        with self._store_call("create"):
            self.session.add(user)
            self.session.commit()
        logger.info("users.created", extra={"user_id": user.id})
        return user

    def update_user(
        self,
        user_id: int | None,
        name: str | None,
        email: str | None,
        age: int | None,
    ) -> User:
        """Replace name, email and age of an existing user.

        Raises:
            ValidationAppError: If a field (including the id) is missing or invalid.
            NotFoundAppError: If no user has ``user_id``.
            StoreAppError: If the update fails.
        """
        name, email = user_rules.clean_text(name), user_rules.clean_text(email)
        validate_user_fields(
            {"id": user_id, "name": name, "email": email, "age": age},
            required=("id", *USER_FIELDS),
        )

        with self._store_call("update", user_id=user_id):
            user = self._get_or_404(user_id)
            user.name = name
            user.email = email
            user.age = age
            self.session.commit()
        logger.info("users.updated", extra={"user_id": user_id})
        return user

    def delete_user(self, user_id: int | None) -> None:
        """Delete one user.

        Deleting an id that does not exist (including a second delete of the
        same id) raises ``NotFoundAppError``.
        """
        if user_id is None:
            raise ValidationAppError(code="missing_id", message="ID required")

        with self._store_call("delete", user_id=user_id):
            user = self._get_or_404(user_id)
            self.session.delete(user)
            self.session.commit()
        logger.info("users.deleted", extra={"user_id": user_id})
