"""Workspace API endpoints.

Workspace reads, sharing and collaborator management.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from formspace.api.v1.endpoints.auth import get_current_user
from formspace.components.workspace import (
    Collaborator,
    ShareViaLinkRequest,
    ShareWorkspaceRequest,
    WorkspaceDetail,
    WorkspaceSummary,
    get_workspace,
    list_collaborators,
    list_workspaces,
    revoke_grant,
    share_workspace,
    share_workspace_via_link,
)
from formspace.db.database import get_db
from formspace.models.auth_schemas import UserResponse
from formspace.utils import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=list[WorkspaceSummary])
async def list_user_workspaces(
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[WorkspaceSummary]:
    """List the caller's own workspace and every workspace shared with them."""
    return list_workspaces(db, current_user.id)


@router.post("/share", response_model=Collaborator, status_code=status.HTTP_201_CREATED)
async def share(
    body: ShareWorkspaceRequest,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Collaborator:
    """Share the caller's workspace with another user by email."""
    logger.info(f"POST /workspaces/share: user_id={current_user.id} invitee={body.email} level={body.accessLevel}")
    return share_workspace(db, current_user.id, body.email, body.accessLevel)


@router.post("/share/link", status_code=status.HTTP_201_CREATED)
async def share_via_link(
    body: ShareViaLinkRequest,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    """Join a workspace through a share link."""
    logger.info(f"POST /workspaces/share/link: user_id={current_user.id} workspace={body.workspaceId}")
    workspace_id = share_workspace_via_link(db, current_user.id, body.workspaceId, body.accessLevel)
    return {"message": "Workspace shared successfully", "workspaceId": workspace_id, "accessLevel": body.accessLevel}


@router.get("/{workspace_id}", response_model=WorkspaceDetail)
async def get_user_workspace(
    workspace_id: str,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> WorkspaceDetail:
    """Get a workspace with its folders and top-level forms."""
    return get_workspace(db, current_user.id, workspace_id)


@router.get("/{workspace_id}/collaborators", response_model=list[Collaborator])
async def get_collaborators(
    workspace_id: str,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[Collaborator]:
    """List the users a workspace is shared with. Owner only."""
    return list_collaborators(db, current_user.id, workspace_id)


@router.delete("/{workspace_id}/collaborators/{email}")
async def remove_collaborator(
    workspace_id: str,
    email: str,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    """Revoke a collaborator's access. Owner only."""
    logger.info(f"DELETE /workspaces/{workspace_id}/collaborators/{email}: user_id={current_user.id}")
    revoke_grant(db, current_user.id, workspace_id, email)
    return {"message": "Access revoked", "email": email}
