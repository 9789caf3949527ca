from .auth_schemas import (
    LoginRequest,
    SignupRequest,
    Token,
    UpdateProfileRequest,
    UpdateThemeRequest,
    UserResponse,
)

__all__ = [
    "SignupRequest",
    "LoginRequest",
    "Token",
    "UserResponse",
    "UpdateProfileRequest",
    "UpdateThemeRequest",
]
