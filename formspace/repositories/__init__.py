"""Repository layer for database access.

Repositories wrap queries and row construction for each entity. They flush
but never commit; services own transactions.

Usage:
    from formspace.repositories import form_repository

    form = form_repository.get_by_id(db, form_id)
"""

from formspace.repositories.element import ElementRepository, element_repository
from formspace.repositories.folder import FolderRepository, folder_repository
from formspace.repositories.form import FormRepository, form_repository
from formspace.repositories.form_entry import (
    FormEntryRepository,
    FormSessionRepository,
    form_entry_repository,
    form_session_repository,
)
from formspace.repositories.grant import GrantRepository, grant_repository
from formspace.repositories.user import UserRepository, user_repository
from formspace.repositories.workspace import WorkspaceRepository, workspace_repository

__all__ = [
    "UserRepository",
    "user_repository",
    "WorkspaceRepository",
    "workspace_repository",
    "GrantRepository",
    "grant_repository",
    "FolderRepository",
    "folder_repository",
    "FormRepository",
    "form_repository",
    "ElementRepository",
    "element_repository",
    "FormSessionRepository",
    "form_session_repository",
    "FormEntryRepository",
    "form_entry_repository",
]
