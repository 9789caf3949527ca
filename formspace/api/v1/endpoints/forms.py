"""Form API endpoints scoped to a workspace.

Mounted under ``/workspaces/{workspace_id}/forms``. ``folderId`` selects a
folder; without it the workspace's top-level forms are addressed.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from formspace.api.v1.endpoints.auth import get_current_user
from formspace.components.workspace import (
    CreateFormRequest,
    Form,
    FormListing,
    create_form,
    delete_form,
    list_forms,
)
from formspace.db.database import get_db
from formspace.models.auth_schemas import UserResponse
from formspace.utils import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post("", response_model=Form, status_code=status.HTTP_201_CREATED)
async def create_workspace_form(
    workspace_id: str,
    request: CreateFormRequest,
    folder_id: str | None = Query(default=None, alias="folderId"),
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Form:
    """Create a form at the top level or inside a folder (body or query ``folderId``)."""
    target_folder = request.folderId or folder_id
    logger.info(f"POST /workspaces/{workspace_id}/forms: user_id={current_user.id} folder={target_folder}")
    return create_form(db, current_user.id, workspace_id, request.name, folder_id=target_folder)


@router.get("", response_model=FormListing)
async def list_workspace_forms(
    workspace_id: str,
    folder_id: str | None = Query(default=None, alias="folderId"),
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> FormListing:
    """List the forms of one container with their elements."""
    return list_forms(db, current_user.id, workspace_id, folder_id=folder_id)


@router.delete("/{form_id}")
async def delete_workspace_form(
    workspace_id: str,
    form_id: str,
    folder_id: str | None = Query(default=None, alias="folderId"),
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    """Delete a form from its container."""
    logger.info(f"DELETE /workspaces/{workspace_id}/forms/{form_id}: user_id={current_user.id} folder={folder_id}")
    delete_form(db, current_user.id, workspace_id, form_id, folder_id=folder_id)
    return {"message": "Form deleted", "id": form_id}
