"""Tests for the shared user field rules."""

import re

import pytest

from user_admin.core import user_rules


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Ann", None),
        ("  Ann  ", None),
        ("", "Name is required."),
        ("   ", "Name is required."),
        ("Al", "Name must be at least 3 characters."),
        (None, "Name is required."),
    ],
)
def test_name_error(value, expected) -> None:
    assert user_rules.name_error(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("ann@x.com", None),
        ("a.b+c@mail.example.org", None),
        ("", "Email is required."),
        ("ann", "Invalid email format."),
        ("ann@x", "Invalid email format."),
        ("ann @x.com", "Invalid email format."),
    ],
)
def test_email_error(value, expected) -> None:
    assert user_rules.email_error(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (18, None),
        (99, None),
        (150, None),
        (17, "Age must be at least 18."),
        (151, "Age must be at most 150."),
        (10**30, "Age must be at most 150."),
        (None, "Age is required."),
        ("30", "Age must be a whole number."),
        (True, "Age must be a whole number."),
        (30.5, "Age must be a whole number."),
    ],
)
def test_age_error(value, expected) -> None:
    assert user_rules.age_error(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [("  Ann  ", "Ann"), (" ann@x.com\n", "ann@x.com"), ("   ", ""), (30, 30), (None, None)],
)
def test_clean_text(value, expected) -> None:
    assert user_rules.clean_text(value) == expected


def test_missing_fields_treats_falsy_as_missing() -> None:
    values = {"name": "Ann", "email": "", "age": 0}

    assert user_rules.missing_fields(values, ("id", "name", "email", "age")) == [
        "id",
        "email",
        "age",
    ]


def test_field_errors_empty_when_valid() -> None:
    assert user_rules.field_errors("Ann", "ann@x.com", 30) == {}


def test_page_rules_match_server_rules() -> None:
    rules = user_rules.page_rules()

    assert rules["min_name_length"] == 3
    assert rules["min_age"] == 18
    assert rules["max_age"] == 150
    assert rules["email_pattern"] == r"^\S+@\S+\.\S+$"
    assert re.match(rules["email_pattern"], "ann@x.com")
