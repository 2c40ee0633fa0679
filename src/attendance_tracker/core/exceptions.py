from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations.

    ``status_code`` is the HTTP status the API layer answers with; ``message``
    is safe to show to the caller.
    """

    status_code = 400
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DomainError):
    """Raised when input data is missing, malformed or violates domain rules."""

    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(DomainError):
    """Raised when credentials or tokens are invalid."""

    status_code = 401
    default_message = "Authentication required"


class InvalidCredentials(AuthenticationError):
    default_message = "Invalid email or password"


class AccountDisabled(AuthenticationError):
    default_message = "Your account has been disabled"


class InvalidToken(AuthenticationError):
    default_message = "Invalid token"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403
    default_message = "Access denied. Insufficient permissions."


class ConflictError(DomainError):
    status_code = 409
    default_message = "Conflicting request"


class AlreadyCheckedIn(ConflictError):
    default_message = "Already checked in today"


class AlreadyCheckedOut(ConflictError):
    default_message = "Already checked out today"


class EmailTaken(ConflictError):
    default_message = "Email is already registered"


class NotFoundError(DomainError):
    status_code = 404
    default_message = "Not found"


class NoCheckInFound(NotFoundError):
    default_message = "No check-in record found for today"


class InternalError(DomainError):
    status_code = 500
    default_message = "Internal server error"


class DuplicateRecordError(Exception):
    """Raised by repositories when a unique key rejects an insert or update.

    Services translate it into the matching domain conflict.
    """

    def __init__(self, key: str | None = None):
        self.key = key
        super().__init__(f"duplicate value for unique key {key!r}" if key else "duplicate value for unique key")


class ConfigurationError(RuntimeError):
    """Raised at startup when required settings are missing."""
