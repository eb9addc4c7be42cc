from __future__ import annotations

from user_admin.api.routes.health import router as health_router
from user_admin.api.routes.pages import router as pages_router
from user_admin.api.routes.request_count import router as request_count_router
from user_admin.api.routes.users import router as users_router

__all__ = ["health_router", "pages_router", "request_count_router", "users_router"]
