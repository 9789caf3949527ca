"""Workspace sharing.

Grants are created two ways:
- the owner shares their own workspace with another user by email
- a user follows a share link and grants themself the level it encodes

A (user, workspace) pair holds at most one grant. Re-sharing is reported
as a conflict, never applied as a silent level change.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from formspace.components.workspace.access import require_owner
from formspace.components.workspace.models import Collaborator
from formspace.db.database import unit_of_work
from formspace.db.models import User as UserModel
from formspace.errors import ConflictError, InvalidInputError, NotFoundError
from formspace.repositories import grant_repository, user_repository, workspace_repository
from formspace.utils import get_logger

logger = get_logger(__name__)

GRANT_LEVELS = ("view", "edit")


def _check_level(access_level: str) -> None:
    if access_level not in GRANT_LEVELS:
        raise InvalidInputError(f"Invalid access level: {access_level}")


def _grant(db: Session, user_id: str, workspace_id: str, access_level: str) -> None:
    """Insert a grant in its own transaction. Duplicates become ConflictError."""
    if grant_repository.get_for(db, user_id, workspace_id) is not None:
        raise ConflictError("Workspace is already shared with this user")
    try:
        with unit_of_work(db):
            grant_repository.create_grant(db, user_id, workspace_id, access_level)
    except IntegrityError as e:
        # Lost a race with a concurrent share of the same pair
        raise ConflictError("Workspace is already shared with this user") from e


def share_workspace(db: Session, owner_user_id: str, invitee_email: str, access_level: str) -> Collaborator:
    """Share the acting user's own workspace with the user registered under ``invitee_email``.

    Raises:
        InvalidInputError: Unknown access level
        NotFoundError: Acting user, their workspace, or the invitee missing
        ConflictError: Self-share, or the invitee already holds a grant
    """
    _check_level(access_level)

    owner = db.get(UserModel, owner_user_id)
    if owner is None or not owner.workspace_id:
        raise NotFoundError("Workspace not found")
    workspace = workspace_repository.get_by_id(db, owner.workspace_id)
    if workspace is None:
        raise NotFoundError("Workspace not found")

    invitee = user_repository.get_by_email(db, invitee_email)
    if invitee is None:
        raise NotFoundError("User not found")
    if invitee.id == owner.id:
        logger.warning(f"Self-share rejected: user={owner.id}")
        raise ConflictError("You cannot share a workspace with yourself")

    _grant(db, invitee.id, workspace.id, access_level)
    grant = grant_repository.get_for(db, invitee.id, workspace.id)
    logger.info(f"Workspace {workspace.id} shared with {invitee.id} ({access_level})")
    return Collaborator(
        userId=invitee.id,
        username=invitee.username,
        email=invitee.email,
        accessLevel=grant.access_level,
        grantedAt=grant.created_at,
    )


def share_workspace_via_link(db: Session, user_id: str, workspace_id: str, access_level: str) -> str:
    """Grant the acting user access to a workspace at the level a share link encodes.

    Returns:
        The workspace id now shared with the user

    Raises:
        InvalidInputError: Unknown access level
        NotFoundError: Workspace missing
        ConflictError: The user owns the workspace or already holds a grant
    """
    _check_level(access_level)

    workspace = workspace_repository.get_by_id(db, workspace_id)
    if workspace is None:
        raise NotFoundError("Workspace not found")
    if workspace.created_by == user_id:
        raise ConflictError("You already own this workspace")

    _grant(db, user_id, workspace.id, access_level)
    logger.info(f"Workspace {workspace.id} joined via link by {user_id} ({access_level})")
    return workspace.id


def revoke_grant(db: Session, owner_user_id: str, workspace_id: str, invitee_email: str) -> None:
    """Remove a collaborator's grant. Owner only.

    Raises:
        NotFoundError: Workspace, user or grant missing
        UnauthorizedError: Caller is not the owner
    """
    with unit_of_work(db):
        workspace = require_owner(db, owner_user_id, workspace_id)
        invitee = user_repository.get_by_email(db, invitee_email)
        grant = grant_repository.get_for(db, invitee.id, workspace.id) if invitee is not None else None
        if grant is None:
            raise NotFoundError("No grant for this user on the workspace")
        grant_repository.delete(db, grant.id)

    logger.info(f"Revoked grant of {invitee.id} on workspace {workspace_id}")


def list_collaborators(db: Session, owner_user_id: str, workspace_id: str) -> list[Collaborator]:
    """Users holding a grant on the workspace, oldest grant first. Owner only."""
    workspace = require_owner(db, owner_user_id, workspace_id)
    collaborators = []
    for grant in grant_repository.get_by_workspace(db, workspace.id):
        user = grant.user
        collaborators.append(
            Collaborator(
                userId=user.id,
                username=user.username,
                email=user.email,
                accessLevel=grant.access_level,
                grantedAt=grant.created_at,
            )
        )
    return collaborators
