"""OpenAPI customization.

Adds tag descriptions and documents the shared error body and the 429
response on every users operation, keeping documentation concerns out of the
app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

TAGS_METADATA = [
    {
        "name": "Users",
        "description": "Create, list, replace and delete users. Counted against the daily request limit.",
    },
    {
        "name": "Requests",
        "description": "Daily request budget usage.",
    },
    {
        "name": "Health",
        "description": "Liveness and readiness checks.",
    },
]

ERROR_SCHEMA = {
    "type": "object",
    "properties": {
        "error": {
            "type": "object",
            "properties": {
                "code": {"type": "string"},
                "message": {"type": "string"},
                "request_id": {"type": "string", "nullable": True},
                "details": {"type": "object"},
            },
            "required": ["code", "message"],
        }
    },
}

_ERROR_RESPONSES = {
    "400": "Missing or invalid field",
    "429": "Daily request limit reached",
    "500": "Store failure",
}


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation with tags and error responses."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema
        schema = original_openapi()

        components = schema.setdefault("components", {})
        components.setdefault("schemas", {})["ErrorResponse"] = ERROR_SCHEMA

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        tags.extend(t for t in TAGS_METADATA if t["name"] not in existing_tag_names)

        error_ref = {
            "content": {
                "application/json": {"schema": {"$ref": "#/components/schemas/ErrorResponse"}}
            }
        }
        for path, methods in schema.get("paths", {}).items():
            if not path.startswith("/api/users"):
                continue
            for method_obj in methods.values():
                if not isinstance(method_obj, dict):
                    continue
                responses = method_obj.setdefault("responses", {})
                # FastAPI's default 422 never happens: input errors map to 400
                responses.pop("422", None)
                for status_code, description in _ERROR_RESPONSES.items():
                    responses.setdefault(status_code, {"description": description, **error_ref})
                if method_obj.get("operationId", "").startswith(("update_user", "delete_user")):
                    responses.setdefault("404", {"description": "User not found", **error_ref})

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
