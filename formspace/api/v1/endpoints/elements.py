"""Form element API endpoints.

Saving requires edit access to the form's workspace; reading is public so
respondents can render the form.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from formspace.api.v1.endpoints.auth import get_current_user
from formspace.components.workspace import (
    FormWithElements,
    SaveElementsRequest,
    get_form_elements,
    save_form_elements,
)
from formspace.db.database import get_db
from formspace.models.auth_schemas import UserResponse
from formspace.utils import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.put("/{form_id}/elements", response_model=FormWithElements)
async def save_elements(
    form_id: str,
    request: SaveElementsRequest,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> FormWithElements:
    """Replace the form's ordered element list."""
    logger.info(f"PUT /forms/{form_id}/elements: user_id={current_user.id} count={len(request.elements)}")
    return save_form_elements(db, form_id, request.elements, user_id=current_user.id)


@router.get("/{form_id}/elements", response_model=FormWithElements)
async def get_elements(form_id: str, db: Session = Depends(get_db)) -> FormWithElements:
    """Get a form and its elements for rendering."""
    return get_form_elements(db, form_id)
