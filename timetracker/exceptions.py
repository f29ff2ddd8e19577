"""Error taxonomy raised by the services and mapped to HTTP responses."""


class AppError(Exception):
    """Base class for errors that are safe to report to the caller."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    """Entity does not exist, or exists but belongs to another user."""

    status_code = 404
    code = "NOT_FOUND"


class ForbiddenError(AppError):
    """Caller is authenticated but does not own the resource."""

    status_code = 403
    code = "FORBIDDEN"


class ConflictError(AppError):
    """Request conflicts with the current state of a resource."""

    status_code = 409
    code = "CONFLICT"


class TimerAlreadyRunningError(ConflictError):
    """A RUNNING timer already exists for the work log."""

    code = "TIMER_ALREADY_RUNNING"


class DuplicateEmailError(ConflictError):
    """Username is already registered."""

    code = "DUPLICATE_EMAIL"


class InvalidInputError(AppError):
    """Malformed input, e.g. a blank required field."""

    status_code = 400
    code = "VALIDATION_ERROR"


class AuthenticationError(AppError):
    """No identity could be resolved from the request."""

    status_code = 401
    code = "UNAUTHORIZED"
