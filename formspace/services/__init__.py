from .auth_service import (
    create_access_token,
    get_password_hash,
    get_user_from_cache,
    login,
    register_user,
    verify_password,
    verify_token,
)
from .user_service import get_user_details, update_profile, update_theme

__all__ = [
    "create_access_token",
    "get_password_hash",
    "get_user_from_cache",
    "login",
    "register_user",
    "verify_password",
    "verify_token",
    "get_user_details",
    "update_profile",
    "update_theme",
]
