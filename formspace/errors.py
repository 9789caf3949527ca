"""Typed service errors.

Every failure raised by a service carries a stable ``kind`` and a
human-readable message. The FastAPI application translates them into
responses (see ``formspace.main``).
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Stable error categories exposed to API clients."""

    not_found = "not_found"
    unauthorized = "unauthorized"
    conflict = "conflict"
    invalid_input = "invalid_input"
    internal = "internal"


class FormspaceError(Exception):
    """Base class for all service errors."""

    kind: ErrorKind = ErrorKind.internal
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"detail": self.message, "kind": self.kind.value}


class NotFoundError(FormspaceError):
    kind = ErrorKind.not_found
    status_code = 404


class UnauthorizedError(FormspaceError):
    kind = ErrorKind.unauthorized
    status_code = 403


class ConflictError(FormspaceError):
    kind = ErrorKind.conflict
    status_code = 409


class InvalidInputError(FormspaceError):
    kind = ErrorKind.invalid_input
    status_code = 400


class IncompleteSubmissionError(InvalidInputError):
    """Raised when a form is submitted with required inputs unanswered."""

    def __init__(self, missing_element_ids: list[str]):
        super().__init__("Please fill in all required fields before submitting")
        self.missing_element_ids = missing_element_ids

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["missingElementIds"] = self.missing_element_ids
        return data


class InternalError(FormspaceError):
    kind = ErrorKind.internal
    status_code = 500
