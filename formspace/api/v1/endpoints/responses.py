"""Respondent and analytics API endpoints.

Session, answer and submit endpoints are public: the session id issued by
``POST /forms/{form_id}/sessions`` is the respondent's credential. The
aggregate is for users with view access to the form's workspace.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from formspace.api.v1.endpoints.auth import get_current_user
from formspace.components.responses import (
    FormResponsesAggregate,
    RecordedResponse,
    RecordResponseRequest,
    SessionIssued,
    SubmitResult,
    aggregate_responses,
    issue_session,
    record_response,
    submit_form,
)
from formspace.db.database import get_db
from formspace.models.auth_schemas import UserResponse
from formspace.utils import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post("/{form_id}/sessions", response_model=SessionIssued, status_code=status.HTTP_201_CREATED)
async def start_session(form_id: str, db: Session = Depends(get_db)) -> SessionIssued:
    """Issue a respondent session and count a form view."""
    return issue_session(db, form_id)


@router.post("/{form_id}/sessions/{session_id}/responses", response_model=RecordedResponse)
async def add_response(
    form_id: str,
    session_id: str,
    request: RecordResponseRequest,
    db: Session = Depends(get_db),
) -> RecordedResponse:
    """Record or overwrite the session's answer to one element."""
    return record_response(db, session_id, form_id, request.elementId, request.value)


@router.post("/{form_id}/sessions/{session_id}/submit", response_model=SubmitResult)
async def submit(form_id: str, session_id: str, db: Session = Depends(get_db)) -> SubmitResult:
    """Submit the session's answers."""
    logger.info(f"POST /forms/{form_id}/sessions/{session_id}/submit")
    return submit_form(db, session_id, form_id)


@router.get("/{form_id}/responses", response_model=FormResponsesAggregate)
async def get_responses(
    form_id: str,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> FormResponsesAggregate:
    """Every entry of the form with its answers and counters."""
    return aggregate_responses(db, form_id, user_id=current_user.id)
