"""Response collection data models.

API-facing entities for anonymous respondents and form analytics:
- SessionIssued / RecordedResponse / SubmitResult: respondent flow results
- FormResponsesAggregate: per-entry answers joined with the form's input elements
"""

from pydantic import BaseModel, Field

from formspace.components.workspace.models import ElementType


class SessionIssued(BaseModel):
    """A freshly issued respondent session."""

    sessionId: str
    formId: str
    issuedAt: int


class RecordResponseRequest(BaseModel):
    """One answer from a respondent.

    ``elementId`` is the element's store id as returned by the public
    element listing.
    """

    elementId: str = Field(..., min_length=1)
    value: str | None = None


class RecordedResponse(BaseModel):
    """The live answer after a record call."""

    entryId: str
    sessionId: str
    elementId: str
    value: str | None = None
    started: bool = Field(default=False, description="True when this call created the entry")


class SubmitResult(BaseModel):
    """Outcome of a successful submission."""

    entryId: str
    sessionId: str
    formId: str
    completedAt: int


class ElementColumn(BaseModel):
    """An input element as an analytics column."""

    id: str
    label: str | None = None
    type: ElementType
    required: bool = False


class ResponseItem(BaseModel):
    """One answer inside an aggregated entry."""

    elementId: str
    label: str | None = None
    type: ElementType
    value: str | None = None


class EntrySummary(BaseModel):
    """One respondent session's answers."""

    sessionId: str
    submittedAt: int
    isCompleted: bool
    responses: list[ResponseItem] = Field(default_factory=list)


class FormResponsesAggregate(BaseModel):
    """Every entry of a form plus its counters."""

    formId: str
    formName: str
    elements: list[ElementColumn] = Field(default_factory=list)
    entries: list[EntrySummary] = Field(default_factory=list)
    viewCount: int = 0
    startCount: int = 0
    completedCount: int = 0
    # Percentage of started sessions that were submitted
    completionRate: float = 0.0
