"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from formspace.db.database import get_db
from formspace.models.auth_schemas import LoginRequest, SignupRequest, Token, UserResponse
from formspace.services import auth_service
from formspace.utils import get_logger

logger = get_logger(__name__)

router = APIRouter()
security = HTTPBearer()


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Session = Depends(get_db),
) -> UserResponse:
    """Get current authenticated user from JWT token."""
    token = credentials.credentials

    user_id = auth_service.verify_token(token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = auth_service.get_user_from_cache(db, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(body: SignupRequest, db: Session = Depends(get_db)):
    """Register a new user and their workspace."""
    logger.info(f"POST /auth/signup: email={body.email}, username={body.username}")
    return auth_service.register_user(db, body.username, body.email, body.password)


@router.post("/login", response_model=Token)
async def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Login user and return JWT token."""
    logger.info(f"POST /auth/login: email={body.email}")
    access_token, profile = auth_service.login(db, body.email, body.password)
    return Token(access_token=access_token, token_type="bearer", user=profile)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: UserResponse = Depends(get_current_user)):
    """Get current user information."""
    logger.info(f"GET /auth/me: user_id={current_user.id}")
    return current_user
