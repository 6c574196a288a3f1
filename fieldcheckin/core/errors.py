"""
Domain error taxonomy.

Every error carries the HTTP status and machine-readable code it maps to, so
services raise by meaning and the exception handlers in ``main.py`` turn them
into the standard error envelope.
"""

from typing import Any, Optional


class CheckInServiceError(Exception):
    """Base class for errors the API reports to callers"""

    status_code = 500
    error_code = "INTERNAL_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(CheckInServiceError):
    status_code = 400
    error_code = "VALIDATION_ERROR"
    default_message = "Invalid request"


class PreconditionFailed(ValidationError):
    """The referenced resource is not in a state that allows the operation"""

    error_code = "PRECONDITION_FAILED"
    default_message = "Precondition failed"


class NotFound(CheckInServiceError):
    status_code = 404
    error_code = "NOT_FOUND"
    default_message = "Not found"


class Forbidden(CheckInServiceError):
    status_code = 403
    error_code = "FORBIDDEN"
    default_message = "Access denied"


class AlreadyCheckedIn(CheckInServiceError):
    """The participant already holds a check-in for this event on this day"""

    status_code = 400
    error_code = "ALREADY_CHECKED_IN"
    default_message = "Participant already checked in today"


class LookupServiceError(CheckInServiceError):
    """The identity registry could not be reached or answered unexpectedly"""

    status_code = 500
    error_code = "LOOKUP_SERVICE_ERROR"
    default_message = "Error looking up participant information"


class InternalError(CheckInServiceError):
    pass
