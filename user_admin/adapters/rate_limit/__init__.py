"""Request counter adapters.

The API depends on ``AbstractRequestCounter`` only, so the in-process counter
can later be swapped for a shared store without touching the routes.
"""

from user_admin.adapters.rate_limit.base import AbstractRequestCounter
from user_admin.adapters.rate_limit.in_memory import InMemoryRequestCounter

__all__ = ["AbstractRequestCounter", "InMemoryRequestCounter"]
