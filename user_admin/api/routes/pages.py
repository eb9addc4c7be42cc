from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from user_admin.core import user_rules
from user_admin.core.config import settings

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"

router = APIRouter(tags=["Pages"], include_in_schema=False)
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@router.get("/", response_class=HTMLResponse)
def users_page(request: Request) -> HTMLResponse:
    """Render the user management page.

    The page receives the same field rules the API enforces, plus the daily
    request limit for the usage toast.
    """

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "rules": user_rules.page_rules(),
            "daily_limit": settings.app.daily_request_limit,
        },
    )
