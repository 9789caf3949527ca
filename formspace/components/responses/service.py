"""Response collection business logic.

A respondent session moves through three states per form:

    NoEntry --first answer--> Started --submit--> Completed

- issue_session: hands out a session id and counts a view (NoEntry)
- record_response: creates the entry on the first answer and counts a start,
  then keeps one live answer per element
- submit_form: checks required inputs and completes the entry exactly once
- aggregate_responses: read-only analytics over every entry of a form

The session id is the respondent's only credential. It must have been
issued for the form it is used with.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from formspace.components.responses.models import (
    ElementColumn,
    EntrySummary,
    FormResponsesAggregate,
    RecordedResponse,
    ResponseItem,
    SessionIssued,
    SubmitResult,
)
from formspace.components.workspace.access import require_form_access
from formspace.components.workspace.models import collects_input
from formspace.db.database import unit_of_work
from formspace.db.models import Form as FormModel
from formspace.db.models import FormEntry as FormEntryModel
from formspace.errors import (
    ConflictError,
    IncompleteSubmissionError,
    InternalError,
    InvalidInputError,
    NotFoundError,
)
from formspace.repositories import (
    element_repository,
    form_entry_repository,
    form_repository,
    form_session_repository,
)
from formspace.settings import settings
from formspace.utils import generate_session_id, get_logger

logger = get_logger(__name__)


def _get_form(db: Session, form_id: str) -> FormModel:
    form = form_repository.get_by_id(db, form_id)
    if form is None:
        raise NotFoundError("Form not found")
    return form


def _require_session(db: Session, session_id: str, form_id: str) -> None:
    """Reject session ids that were never issued for ``form_id``."""
    issued = form_session_repository.get_by_id(db, session_id)
    if issued is None or issued.form_id != form_id:
        logger.warning(f"Unknown session {session_id} for form {form_id}")
        raise NotFoundError("Session not found for this form")


def _is_answered(value: str | None) -> bool:
    return value is not None and value.strip() != ""


def issue_session(db: Session, form_id: str) -> SessionIssued:
    """Issue a new respondent session for a form and count one view.

    The id is inserted under its primary-key constraint; a collision rolls
    back and regenerates, up to ``settings.session_id_max_attempts`` times.

    Raises:
        NotFoundError: Form missing
        InternalError: No unique id after the allowed attempts
    """
    _get_form(db, form_id)

    for attempt in range(1, settings.session_id_max_attempts + 1):
        session_id = generate_session_id()
        if form_session_repository.exists(db, session_id):
            logger.warning(f"Session id collision on attempt {attempt} for form {form_id}")
            continue
        try:
            with unit_of_work(db):
                issued = form_session_repository.create_session(db, session_id, form_id)
                form_repository.increment_counter(db, form_id, "view_count")
        except IntegrityError:
            logger.warning(f"Session id collision on attempt {attempt} for form {form_id}")
            continue

        logger.info(f"Issued session {session_id} for form {form_id}")
        return SessionIssued(sessionId=issued.session_id, formId=form_id, issuedAt=issued.issued_at)

    logger.error(f"Could not allocate a session id for form {form_id}")
    raise InternalError("Could not allocate a session id")


def _get_or_start_entry(db: Session, form_id: str, session_id: str) -> tuple[FormEntryModel, bool]:
    """Get the session's entry, creating it and counting a start if needed.

    Returns:
        (entry, started) where ``started`` is True if this call created it
    """
    entry = form_entry_repository.get_by_session(db, form_id, session_id)
    if entry is not None:
        return entry, False

    try:
        with unit_of_work(db):
            entry = form_entry_repository.create_entry(db, form_id, session_id)
            form_repository.increment_counter(db, form_id, "start_count")
    except IntegrityError:
        # A concurrent first answer created the entry and counted the start
        entry = form_entry_repository.get_by_session(db, form_id, session_id)
        if entry is None:
            raise
        return entry, False

    logger.info(f"Started entry {entry.id} for session {session_id} on form {form_id}")
    return entry, True


def record_response(
    db: Session,
    session_id: str,
    form_id: str,
    element_id: str,
    value: str | None,
) -> RecordedResponse:
    """Record a respondent's answer to one element.

    Raises:
        NotFoundError: Form or session missing, or the element is not listed on the form
        InvalidInputError: The element does not collect input
        ConflictError: The entry was already submitted
    """
    form = _get_form(db, form_id)
    _require_session(db, session_id, form_id)

    if element_id not in (form.element_ids or []):
        raise NotFoundError("Element not found on this form")
    element = element_repository.get_by_id(db, element_id)
    if element is None:
        raise NotFoundError("Element not found on this form")
    if not collects_input(element.type):
        raise InvalidInputError(f"{element.type} elements do not take responses")

    entry, started = _get_or_start_entry(db, form_id, session_id)

    with unit_of_work(db):
        db.refresh(entry, with_for_update=True)
        if entry.is_completed:
            logger.warning(f"Response to completed entry rejected: session={session_id} form={form_id}")
            raise ConflictError("This form has already been submitted")
        response = form_entry_repository.upsert_response(db, entry, element.id, value)
        result = RecordedResponse(
            entryId=entry.id,
            sessionId=session_id,
            elementId=response.element_id,
            value=response.value,
            started=started,
        )

    return result


def submit_form(db: Session, session_id: str, form_id: str) -> SubmitResult:
    """Complete a session's entry.

    Every required input element listed on the form needs a non-blank answer.

    Raises:
        NotFoundError: Form missing, or the session has no entry
        ConflictError: Already submitted, including a concurrent submit winning
        IncompleteSubmissionError: Required inputs unanswered
    """
    form = _get_form(db, form_id)

    with unit_of_work(db):
        entry = form_entry_repository.get_by_session(db, form_id, session_id)
        if entry is None:
            raise NotFoundError("No responses recorded for this session")
        if entry.is_completed:
            raise ConflictError("This form has already been submitted")

        answered = {response.element_id for response in entry.responses if _is_answered(response.value)}
        missing = [
            element.id
            for element in element_repository.get_many(db, list(form.element_ids or []))
            if element.required and collects_input(element.type) and element.id not in answered
        ]
        if missing:
            logger.warning(f"Incomplete submission: session={session_id} form={form_id} missing={missing}")
            raise IncompleteSubmissionError(missing)

        if not form_entry_repository.mark_completed(db, entry.id):
            raise ConflictError("This form has already been submitted")
        form_repository.increment_counter(db, form_id, "completed_count")
        result = SubmitResult(
            entryId=entry.id,
            sessionId=session_id,
            formId=form_id,
            completedAt=entry.completed_at,
        )

    logger.info(f"Form {form_id} submitted by session {session_id}")
    return result


def aggregate_responses(db: Session, form_id: str, user_id: str | None = None) -> FormResponsesAggregate:
    """Join a form's input elements with every entry recorded for it.

    When ``user_id`` is given the caller needs view access to the form's
    workspace.

    Raises:
        NotFoundError: Form missing, or not visible to the caller
    """
    if user_id is not None:
        form, _ = require_form_access(db, user_id, form_id)
    else:
        form = _get_form(db, form_id)

    columns = [
        element
        for element in element_repository.get_many(db, list(form.element_ids or []))
        if collects_input(element.type)
    ]
    column_by_id = {element.id: element for element in columns}

    entries = []
    for entry in form_entry_repository.get_by_form(db, form.id):
        responses = [
            ResponseItem(
                elementId=response.element_id,
                label=column_by_id[response.element_id].label,
                type=column_by_id[response.element_id].type,
                value=response.value,
            )
            for response in entry.responses
            if response.element_id in column_by_id
        ]
        entries.append(
            EntrySummary(
                sessionId=entry.session_id,
                submittedAt=entry.completed_at or entry.updated_at,
                isCompleted=entry.is_completed,
                responses=responses,
            )
        )

    completion_rate = round(form.completed_count / form.start_count * 100, 2) if form.start_count else 0.0
    return FormResponsesAggregate(
        formId=form.id,
        formName=form.name,
        elements=[
            ElementColumn(id=element.id, label=element.label, type=element.type, required=element.required)
            for element in columns
        ],
        entries=entries,
        viewCount=form.view_count,
        startCount=form.start_count,
        completedCount=form.completed_count,
        completionRate=completion_rate,
    )
