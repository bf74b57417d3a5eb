"""
Decision Compass exception hierarchy.

Every domain error carries an ``error_code`` and ``status_code`` so the HTTP
layer can map it to a response without knowing each class.
"""

from __future__ import annotations


class DecisionCompassError(Exception):
    """Base class for all domain errors raised by the service."""

    error_code = "internal_error"
    status_code = 500

    def __init__(self, message: str, details: str | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class AnswerValidationError(DecisionCompassError):
    """Answer references an unknown question or a value outside its domain."""

    error_code = "validation_error"
    status_code = 422


class SessionFullError(AnswerValidationError):
    """A new question would push the session past its question count."""


class SessionNotFoundError(DecisionCompassError):
    error_code = "session_not_found"
    status_code = 404

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session '{session_id}' not found")


class SessionExpiredError(SessionNotFoundError):
    error_code = "session_expired"

    def __init__(self, session_id: str) -> None:
        super().__init__(session_id)
        self.message = f"Session '{session_id}' has expired"
        self.args = (self.message,)


class SessionCompleteError(DecisionCompassError):
    """Session already holds a full answer set; it no longer accepts changes."""

    error_code = "session_complete"
    status_code = 409


class NoAnswersError(DecisionCompassError):
    error_code = "no_answers"
    status_code = 400


class InternalError(DecisionCompassError):
    """Unexpected failure while orchestrating a request."""
