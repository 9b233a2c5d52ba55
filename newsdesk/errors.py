"""
Application error types.

Services raise these; the API layer turns them into the standard JSON
envelope using ``status_code`` and ``message``.
"""
from http import HTTPStatus


class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(ApiError):
    """Missing or malformed input."""

    status_code = HTTPStatus.BAD_REQUEST
    message = "Invalid request"


class NotFoundError(ApiError):
    """The requested resource does not exist."""

    status_code = HTTPStatus.NOT_FOUND
    message = "Resource not found"


class ConflictError(ApiError):
    """A uniqueness or dependency rule would be violated."""

    status_code = HTTPStatus.BAD_REQUEST
    message = "Conflict with existing data"


class NotConnected(ApiError):
    """The database was not reachable when the application started."""

    status_code = HTTPStatus.SERVICE_UNAVAILABLE
    message = "Database is not connected"


class InternalError(ApiError):
    """Unexpected failure."""


class SubscriberNotFound(ValidationError):
    message = "Subscriber does not exist"


class NewspaperNotFound(ValidationError):
    message = "Newspaper does not exist"


class DuplicateEmail(ConflictError):
    message = "Email already exists"


class EmailConflict(ConflictError):
    message = "Email is already used by another subscriber"


class DuplicateName(ConflictError):
    message = "Newspaper name already exists"


class NameConflict(ConflictError):
    message = "Newspaper name is already used by another newspaper"


class HasDependentSubscriptions(ConflictError):
    message = "Cannot delete a record that still has subscriptions"


class DuplicateActiveSubscription(ConflictError):
    message = "Subscriber already has an active subscription to this newspaper"
