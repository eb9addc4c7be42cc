from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from user_admin.core.rate_limit import RequestCounterDep, get_daily_limit
from user_admin.schemas.user import RequestCountResponse

router = APIRouter(prefix="/api", tags=["Requests"])


@router.get("/request-count", response_model=RequestCountResponse)
def read_request_count(
    counter: RequestCounterDep,
    limit: Annotated[int, Depends(get_daily_limit)],
) -> RequestCountResponse:
    """Report how much of the daily request budget has been used.

    Reading the count is free: it is neither limited nor counted.
    """

    return RequestCountResponse(count=counter.get_count(), limit=limit)
