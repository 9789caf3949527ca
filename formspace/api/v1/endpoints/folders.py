"""Folder API endpoints.

Folders group forms inside a workspace. Mounted under
``/workspaces/{workspace_id}/folders``.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from formspace.api.v1.endpoints.auth import get_current_user
from formspace.components.workspace import (
    CreateFolderRequest,
    Folder,
    FolderDetail,
    FolderListing,
    create_folder,
    delete_folder,
    get_folder,
    list_folders,
)
from formspace.db.database import get_db
from formspace.models.auth_schemas import UserResponse
from formspace.utils import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post("", response_model=Folder, status_code=status.HTTP_201_CREATED)
async def create_workspace_folder(
    workspace_id: str,
    request: CreateFolderRequest,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Folder:
    """Create a new folder.

    Args:
        workspace_id: The workspace ID
        request: Folder creation request

    Returns:
        The created folder
    """
    logger.info(f"POST /workspaces/{workspace_id}/folders: user_id={current_user.id} name={request.name}")
    return create_folder(db, current_user.id, workspace_id, request.name)


@router.get("", response_model=FolderListing)
async def list_workspace_folders(
    workspace_id: str,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> FolderListing:
    """List the folders of a workspace with the caller's access level."""
    return list_folders(db, current_user.id, workspace_id)


@router.get("/{folder_id}", response_model=FolderDetail)
async def get_workspace_folder(
    workspace_id: str,
    folder_id: str,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> FolderDetail:
    """Get a specific folder with its forms."""
    return get_folder(db, current_user.id, workspace_id, folder_id)


@router.delete("/{folder_id}")
async def delete_workspace_folder(
    workspace_id: str,
    folder_id: str,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    """Delete a folder. Its forms move to the top level of the workspace.

    Returns:
        Success message with the moved form ids
    """
    logger.info(f"DELETE /workspaces/{workspace_id}/folders/{folder_id}: user_id={current_user.id}")
    moved = delete_folder(db, current_user.id, workspace_id, folder_id)
    return {"message": "Folder deleted", "id": folder_id, "movedFormIds": moved}
