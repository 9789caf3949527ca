"""Database module for the Formspace backend.

Components:
- SQL (SQLite or MySQL via SQLAlchemy): users, workspaces, folders, forms,
  elements, respondent sessions and entries
- Redis: shared cache for user profiles
"""

from formspace.db.database import (
    SessionLocal,
    check_connection,
    close_db,
    engine,
    get_db,
    init_db,
    unit_of_work,
)
from formspace.db.models import (
    Base,
    Element,
    Folder,
    Form,
    FormEntry,
    FormResponse,
    FormSession,
    SharedWorkspaceGrant,
    User,
    Workspace,
)
from formspace.db.redis_cache import RedisCache, RedisKeyPrefix, get_redis_cache

__all__ = [
    # Redis
    "RedisCache",
    "RedisKeyPrefix",
    "get_redis_cache",
    # SQL - Connection
    "engine",
    "SessionLocal",
    "get_db",
    "unit_of_work",
    "init_db",
    "close_db",
    "check_connection",
    # SQL - Models
    "Base",
    "User",
    "Workspace",
    "SharedWorkspaceGrant",
    "Folder",
    "Form",
    "Element",
    "FormSession",
    "FormEntry",
    "FormResponse",
]
