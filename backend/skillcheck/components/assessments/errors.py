"""Domain errors raised by the assessment lifecycle and scoring engine.

Every error carries a stable ``code`` and an HTTP ``status_code`` so the API
layer can render it without knowing the individual classes.
"""

from typing import Any, Dict, Optional


class AssessmentError(Exception):
    """Base class for all assessment domain errors."""

    status_code = 400
    code = "ASSESSMENT_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotFoundError(AssessmentError):
    """A referenced user, assessment, question, link or candidate assessment does not exist."""

    status_code = 404
    code = "NOT_FOUND"


class RoleMismatchError(AssessmentError):
    """The user exists but is not eligible for the operation."""

    status_code = 422
    code = "ROLE_MISMATCH"


class ConflictError(AssessmentError):
    """The operation is illegal in the entity's current state."""

    status_code = 409
    code = "CONFLICT"


class AlreadyInvitedError(ConflictError):
    code = "ALREADY_INVITED"


class AlreadyCompletedError(ConflictError):
    code = "ALREADY_COMPLETED"


class InvalidTransitionError(ConflictError):
    code = "INVALID_TRANSITION"


class InvitationExpiredError(InvalidTransitionError):
    code = "INVITATION_EXPIRED"


class TimeLimitExceededError(InvalidTransitionError):
    code = "TIME_LIMIT_EXCEEDED"


class DuplicateQuestionError(ConflictError):
    code = "DUPLICATE_QUESTION"
