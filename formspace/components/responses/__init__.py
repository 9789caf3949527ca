"""Response Collection Module.

Anonymous respondent sessions, per-element answers, submission and
analytics for forms.

Components:
- models.py: Session, response, submission and aggregate models
- service.py: Session issue, record, submit and aggregate operations

Usage:
    from formspace.components.responses import issue_session, record_response, submit_form

    issued = issue_session(db, form_id)
    record_response(db, issued.sessionId, form_id, element_id, "Ada")
    submit_form(db, issued.sessionId, form_id)
"""

from formspace.components.responses.models import (
    ElementColumn,
    EntrySummary,
    FormResponsesAggregate,
    RecordedResponse,
    RecordResponseRequest,
    ResponseItem,
    SessionIssued,
    SubmitResult,
)
from formspace.components.responses.service import (
    aggregate_responses,
    issue_session,
    record_response,
    submit_form,
)

__all__ = [
    # Models
    "SessionIssued",
    "RecordResponseRequest",
    "RecordedResponse",
    "SubmitResult",
    "ElementColumn",
    "ResponseItem",
    "EntrySummary",
    "FormResponsesAggregate",
    # Service functions
    "issue_session",
    "record_response",
    "submit_form",
    "aggregate_responses",
]
