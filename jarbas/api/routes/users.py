"""User Routes — account CRUD, profile upsert/delete and credential check.

Invariants:
    - Responses are built from UserResponse (password_hash never serialized)
    - Email lookups go through the same normalization as registration
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from jarbas.api.dependencies import get_identity_manager
from jarbas.schemas.user import (
    CredentialsCheck, MessageResponse, ProfileUpdate, UserCreate,
    UserResponse, UserUpdate,
)
from jarbas.services.identity_manager import IdentityManager

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post(
    "", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate,
    manager: IdentityManager = Depends(get_identity_manager),
):
    """Register a new user."""
    user = await manager.create_user(body.name, body.email, body.password)
    return UserResponse.model_validate(user)


@router.post("/verify", response_model=UserResponse)
async def verify_credentials(
    body: CredentialsCheck,
    manager: IdentityManager = Depends(get_identity_manager),
):
    """Check an email/password pair against the stored hash."""
    user = await manager.verify_credentials(body.email, body.password)
    return UserResponse.model_validate(user)


@router.get("/email/{email}", response_model=UserResponse)
async def get_user_by_email(
    email: str,
    manager: IdentityManager = Depends(get_identity_manager),
):
    user = await manager.get_user_by_email(email)
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID,
    manager: IdentityManager = Depends(get_identity_manager),
):
    user = await manager.get_user(user_id)
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    body: UserUpdate,
    manager: IdentityManager = Depends(get_identity_manager),
):
    """Edit name, and optionally email and/or password."""
    user = await manager.update_user(
        user_id, body.name, body.email, body.password,
    )
    return UserResponse.model_validate(user)


@router.put("/{user_id}/profile", response_model=UserResponse)
async def upsert_profile(
    user_id: UUID,
    body: ProfileUpdate,
    manager: IdentityManager = Depends(get_identity_manager),
):
    """Create or edit the user's profile in place."""
    user = await manager.upsert_profile(user_id, body.model_dump())
    return UserResponse.model_validate(user)


@router.delete("/{user_id}/profile", response_model=UserResponse)
async def delete_profile(
    user_id: UUID,
    manager: IdentityManager = Depends(get_identity_manager),
):
    user = await manager.delete_profile(user_id)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: UUID,
    manager: IdentityManager = Depends(get_identity_manager),
):
    """Delete the user and, first, their profile."""
    await manager.delete_user(user_id)
    return MessageResponse(message="User deleted")
