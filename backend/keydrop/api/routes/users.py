"""User Routes - registration and public key lookup.

Invariants:
    - POST /user/register returns 201 with the stored entity (id, createdAt assigned)
    - Duplicate username → 409 (ConflictError from the repository)
    - GET /user/{username}/public-key → 404 when no such user
"""

import logging

from fastapi import APIRouter, Depends, status

from keydrop.core.domain_types import Username
from keydrop.core.errors import ErrorContext, ResourceNotFoundError
from keydrop.infrastructure.store_manager import get_user_repository
from keydrop.repositories.user_repository import UserRepository
from keydrop.schemas.user import UserRegister

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/user", tags=["user"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_user(
    body: UserRegister,
    users: UserRepository = Depends(get_user_repository),
):
    """Register a new user with their public key."""
    user = await users.create(body.to_domain())
    return {"message": "User created successfully", "user": user.to_document()}


@router.get("/{username}/public-key")
async def get_public_key(
    username: str,
    users: UserRepository = Depends(get_user_repository),
):
    """Get a user's public key by username."""
    user = await users.read_by_username(Username(username))
    if user is None:
        raise ResourceNotFoundError(
            f"User with username {username} not found",
            ErrorContext(collection="users"),
        )
    return {"publicKey": user.public_key}
