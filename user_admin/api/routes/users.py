from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from user_admin.core.rate_limit import enforce_daily_limit
from user_admin.db.session import get_session
from user_admin.schemas.user import (
    MessageResponse,
    UserCreatedResponse,
    UserListResponse,
    UserPayload,
    UserRead,
    UserUpdatePayload,
    UserUpdatedResponse,
)
from user_admin.services.user_service import UserService

router = APIRouter(
    prefix="/api/users",
    tags=["Users"],
    dependencies=[Depends(enforce_daily_limit)],
)


def get_user_service(session: Annotated[Session, Depends(get_session)]) -> UserService:
    return UserService(session)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]


@router.get("", response_model=UserListResponse)
def list_users(service: UserServiceDep) -> UserListResponse:
    """List every user in store order."""
    users = service.list_users()
    return UserListResponse(
        message="Users loaded successfully",
        users=[UserRead.model_validate(user) for user in users],
    )


@router.post(
    "",
    response_model=UserCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_user(
    payload: UserPayload,
    service: UserServiceDep,
) -> UserCreatedResponse:
    """Create a user from name, email and age.

    Raises:
        ValidationAppError: 400 when a field is missing or invalid.
        StoreAppError: 500 when the insert fails.
    """
    user = service.create_user(payload.name, payload.email, payload.age)
    return UserCreatedResponse(
        message="User added successfully!",
        user=UserRead.model_validate(user),
    )


@router.put("", response_model=UserUpdatedResponse)
def update_user(
    payload: UserUpdatePayload,
    service: UserServiceDep,
) -> UserUpdatedResponse:
    """Replace all fields of the user identified by ``id`` in the body.

    Raises:
        ValidationAppError: 400 when a field is missing or invalid.
        NotFoundAppError: 404 when no user has that id.
        StoreAppError: 500 when the update fails.
    """
    user = service.update_user(payload.id, payload.name, payload.email, payload.age)
    return UserUpdatedResponse(
        message="User updated successfully!",
        updated_user=UserRead.model_validate(user),
    )


@router.delete("", response_model=MessageResponse)
def delete_user(
    service: UserServiceDep,
    user_id: Annotated[int | None, Query(alias="id")] = None,
) -> MessageResponse:
    """Delete the user given by the ``id`` query parameter.

    Raises:
        ValidationAppError: 400 when ``id`` is missing.
        NotFoundAppError: 404 when no user has that id.
        StoreAppError: 500 when the delete fails.
    """
    service.delete_user(user_id)
    return MessageResponse(message="User deleted")
