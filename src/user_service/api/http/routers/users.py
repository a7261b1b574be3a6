"""User API router."""

from fastapi import APIRouter, Depends, File, UploadFile, status
from pydantic import EmailStr
from starlette.responses import Response

from src.user_service.api.http.deps import get_user_service
from src.user_service.core.services import UserService
from src.user_service.entities.core.user import (
    UserCreate,
    UserResponse,
    UserStatusUpdate,
    UserUpdate,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Create a new user."""
    return service.create(payload)


@router.get("", response_model=list[UserResponse])
def list_users(service: UserService = Depends(get_user_service)) -> list[UserResponse]:
    """List all users, newest first."""
    return service.find_all()


@router.get("/email/{email}", response_model=UserResponse)
def get_user_by_email(
    email: EmailStr,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Look up a user by email, normalized the same way as on create."""
    return service.find_by_email(email)


@router.get("/login/{login}", response_model=UserResponse)
def get_user_by_login(
    login: str,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return service.find_by_login(login)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return service.find_by_id(user_id)


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    payload: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Update any subset of a user's fields."""
    return service.update(user_id, payload)


@router.patch("/{user_id}/status", response_model=UserResponse)
def update_user_status(
    user_id: str,
    payload: UserStatusUpdate,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return service.update_status(user_id, payload.status)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> Response:
    service.delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{user_id}/avatar", response_model=UserResponse)
def upload_avatar(
    user_id: str,
    avatar: UploadFile | None = File(default=None),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Accept an avatar upload.

    Avatar storage is not implemented; the file is ignored and the user is
    returned unchanged.
    """
    return service.find_by_id(user_id)
