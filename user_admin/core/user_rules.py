"""Field rules for users, shared by the API and the rendered page.

The server enforces these on create and update; the page template receives
the same constants so its inline validation never disagrees with the API.
"""

from __future__ import annotations

import re
from typing import Any

MIN_NAME_LENGTH = 3
MIN_AGE = 18
MAX_AGE = 150
# Same expression the page uses (JavaScript RegExp syntax is compatible)
EMAIL_PATTERN = r"^\S+@\S+\.\S+$"

_EMAIL_RE = re.compile(EMAIL_PATTERN)

ALL_FIELDS_REQUIRED = "All fields are required!"


def missing_fields(values: dict[str, Any], required: tuple[str, ...]) -> list[str]:
    """Return the names of required fields that are absent or falsy.

    Falsy covers ``None``, empty strings and an age of ``0``.
    """

    return [name for name in required if not values.get(name)]


def clean_text(value: Any) -> Any:
    """Strip surrounding whitespace from strings; other values pass through."""

    return value.strip() if isinstance(value, str) else value


def name_error(value: Any) -> str | None:
    name = str(value or "").strip()
    if not name:
        return "Name is required."
    if len(name) < MIN_NAME_LENGTH:
        return f"Name must be at least {MIN_NAME_LENGTH} characters."
    return None


def email_error(value: Any) -> str | None:
    email = str(value or "").strip()
    if not email:
        return "Email is required."
    if not _EMAIL_RE.match(email):
        return "Invalid email format."
    return None


def age_error(value: Any) -> str | None:
    if value is None or value == "":
        return "Age is required."
    if isinstance(value, bool) or not isinstance(value, int):
        return "Age must be a whole number."
    if value < MIN_AGE:
        return f"Age must be at least {MIN_AGE}."
    if value > MAX_AGE:
        return f"Age must be at most {MAX_AGE}."
    return None


def field_errors(name: Any, email: Any, age: Any) -> dict[str, str]:
    """Validate the three user fields; an empty dict means valid."""

    errors = {
        "name": name_error(name),
        "email": email_error(email),
        "age": age_error(age),
    }
    return {field: message for field, message in errors.items() if message}


def page_rules() -> dict[str, Any]:
    """Rule constants in the shape the page template expects."""

    return {
        "min_name_length": MIN_NAME_LENGTH,
        "min_age": MIN_AGE,
        "max_age": MAX_AGE,
        "email_pattern": EMAIL_PATTERN,
    }
