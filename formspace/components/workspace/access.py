"""Workspace authorization.

Workspace-scoped operations call one of the ``require_*`` guards, which load
the workspace (locked for writes) and classify the caller with ``access_for``.
``resolve_access`` answers the same question from a bare workspace id
without raising.

Failure policy:
- the workspace does not exist: NotFoundError
- read by a caller with no relationship to the workspace: NotFoundError,
  so that existence is not revealed
- write by a caller without edit access: UnauthorizedError
- grant management by anyone but the owner: UnauthorizedError
"""

from sqlalchemy.orm import Session

from formspace.components.workspace.models import AccessLevel, WorkspaceAccess, WorkspaceRole
from formspace.db.models import Form as FormModel
from formspace.db.models import Workspace as WorkspaceModel
from formspace.errors import NotFoundError, UnauthorizedError
from formspace.repositories import form_repository, grant_repository, workspace_repository
from formspace.utils import get_logger

logger = get_logger(__name__)


def access_for(db: Session, user_id: str, workspace: WorkspaceModel) -> WorkspaceAccess:
    """Classify ``user_id`` against an already loaded workspace."""
    if workspace.created_by == user_id:
        return WorkspaceAccess(workspaceId=workspace.id, role=WorkspaceRole.owner, accessLevel=AccessLevel.edit)

    grant = grant_repository.get_for(db, user_id, workspace.id)
    if grant is not None:
        return WorkspaceAccess(
            workspaceId=workspace.id,
            role=WorkspaceRole.collaborator,
            accessLevel=AccessLevel(grant.access_level),
        )

    return WorkspaceAccess(workspaceId=workspace.id, role=WorkspaceRole.none, accessLevel=AccessLevel.none)


def resolve_access(db: Session, user_id: str, workspace_id: str) -> WorkspaceAccess:
    """Resolve whether ``user_id`` owns, collaborates on, or has no access to a workspace.

    A missing workspace resolves to role ``none``.
    """
    workspace = workspace_repository.get_by_id(db, workspace_id)
    if workspace is None:
        return WorkspaceAccess(workspaceId=workspace_id, role=WorkspaceRole.none, accessLevel=AccessLevel.none)
    return access_for(db, user_id, workspace)


def _load_workspace(db: Session, workspace_id: str, for_update: bool) -> WorkspaceModel:
    if for_update:
        workspace = workspace_repository.get_for_update(db, workspace_id)
    else:
        workspace = workspace_repository.get_by_id(db, workspace_id)
    if workspace is None:
        raise NotFoundError("Workspace not found")
    return workspace


def require_view(db: Session, user_id: str, workspace_id: str) -> tuple[WorkspaceModel, WorkspaceAccess]:
    """Load a workspace the caller may read.

    Raises:
        NotFoundError: Workspace missing, or caller has no access to it
    """
    workspace = _load_workspace(db, workspace_id, for_update=False)
    access = access_for(db, user_id, workspace)
    if not access.can_view:
        logger.warning(f"Read denied: user={user_id} workspace={workspace_id}")
        raise NotFoundError("Workspace not found or not shared with user")
    return workspace, access


def require_edit(db: Session, user_id: str, workspace_id: str) -> tuple[WorkspaceModel, WorkspaceAccess]:
    """Load and lock a workspace the caller may modify.

    Raises:
        NotFoundError: Workspace missing
        UnauthorizedError: Caller lacks edit access
    """
    workspace = _load_workspace(db, workspace_id, for_update=True)
    access = access_for(db, user_id, workspace)
    if not access.can_edit:
        logger.warning(f"Write denied: user={user_id} workspace={workspace_id} level={access.accessLevel.value}")
        raise UnauthorizedError("You don't have permission to modify this workspace")
    return workspace, access


def require_form_access(
    db: Session,
    user_id: str,
    form_id: str,
    edit: bool = False,
) -> tuple[FormModel, WorkspaceAccess]:
    """Load a form and check the caller's access to the workspace holding it.

    Raises:
        NotFoundError: Form missing, or (for reads) caller has no access
        UnauthorizedError: ``edit`` requested without edit access
    """
    form = form_repository.get_by_id(db, form_id)
    if form is None:
        raise NotFoundError("Form not found")
    guard = require_edit if edit else require_view
    _, access = guard(db, user_id, form.workspace_id)
    return form, access


def require_owner(db: Session, user_id: str, workspace_id: str) -> WorkspaceModel:
    """Load a workspace only its owner may manage.

    Raises:
        NotFoundError: Workspace missing
        UnauthorizedError: Caller is not the owner
    """
    workspace = _load_workspace(db, workspace_id, for_update=False)
    if workspace.created_by != user_id:
        logger.warning(f"Owner-only operation denied: user={user_id} workspace={workspace_id}")
        raise UnauthorizedError("Only the workspace owner can manage sharing")
    return workspace
