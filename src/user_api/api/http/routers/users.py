"""User API router with CRUD operations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from starlette.responses import JSONResponse

from src.user_api.api.http.deps import get_user_service
from src.user_api.api.http.schemas import ApiResponse, envelope
from src.user_api.core.errors import UserErrorKind, UserServiceError
from src.user_api.core.services import UserService
from src.user_api.entities.user import UserDetails

router = APIRouter(prefix="/api/users", tags=["users"])

# Ids are stored as signed 64-bit integers
UserId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]

# Every domain failure is a client error
ERROR_STATUS: dict[UserErrorKind, int] = {
    UserErrorKind.DUPLICATE_USERNAME: status.HTTP_400_BAD_REQUEST,
    UserErrorKind.DUPLICATE_EMAIL: status.HTTP_400_BAD_REQUEST,
    UserErrorKind.NOT_FOUND: status.HTTP_400_BAD_REQUEST,
}


def _failure(error: UserServiceError) -> JSONResponse:
    return envelope(ERROR_STATUS[error.kind], success=False, message=error.message)


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    details: UserDetails,
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    """Create a new user."""
    try:
        created = service.create_user(details)
    except UserServiceError as e:
        return _failure(e)
    return envelope(
        status.HTTP_201_CREATED,
        success=True,
        message="user created successfully",
        data=created,
    )


@router.get("/username/{username}", response_model=ApiResponse)
def get_user_by_username(
    username: str,
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    """Get a user by username."""
    user = service.get_user_by_username(username)
    if user is None:
        return envelope(
            status.HTTP_404_NOT_FOUND,
            success=False,
            message=f"user not found, username: {username}",
        )
    return envelope(status.HTTP_200_OK, success=True, data=user)


@router.get("/{user_id}", response_model=ApiResponse)
def get_user(
    user_id: UserId,
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    """Get a user by ID."""
    user = service.get_user_by_id(user_id)
    if user is None:
        return envelope(
            status.HTTP_404_NOT_FOUND,
            success=False,
            message=f"user not found, id: {user_id}",
        )
    return envelope(status.HTTP_200_OK, success=True, data=user)


@router.get("", response_model=ApiResponse)
def list_users(
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    """List all users."""
    users = service.list_users()
    return envelope(status.HTTP_200_OK, success=True, data=users, count=len(users))


@router.put("/{user_id}", response_model=ApiResponse)
def update_user(
    user_id: UserId,
    details: UserDetails,
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    """Update a user."""
    try:
        updated = service.update_user(user_id, details)
    except UserServiceError as e:
        return _failure(e)
    return envelope(
        status.HTTP_200_OK,
        success=True,
        message="user updated successfully",
        data=updated,
    )


@router.delete("/{user_id}", response_model=ApiResponse)
def delete_user(
    user_id: UserId,
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    """Delete a user."""
    try:
        service.delete_user(user_id)
    except UserServiceError as e:
        return _failure(e)
    return envelope(status.HTTP_200_OK, success=True, message="user deleted successfully")
