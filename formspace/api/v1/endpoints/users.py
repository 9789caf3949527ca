"""User API endpoints.

Profile and theme of the signed-in user.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from formspace.api.v1.endpoints.auth import get_current_user
from formspace.db.database import get_db
from formspace.models.auth_schemas import UpdateProfileRequest, UpdateThemeRequest, UserResponse
from formspace.services import user_service
from formspace.utils import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_user_details(
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserResponse:
    """Get the current user's profile, bypassing the cache."""
    return user_service.get_user_details(db, current_user.id)


@router.patch("/me", response_model=UserResponse)
async def update_profile(
    body: UpdateProfileRequest,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserResponse:
    """Update the current user's username and/or email."""
    logger.info(f"PATCH /users/me: user_id={current_user.id}")
    return user_service.update_profile(db, current_user.id, username=body.username, email=body.email)


@router.put("/me/theme", response_model=UserResponse)
async def update_theme(
    body: UpdateThemeRequest,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserResponse:
    """Set the current user's display theme."""
    return user_service.update_theme(db, current_user.id, body.theme)
