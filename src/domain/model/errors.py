"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Each error carries the HTTP status it maps to, so the API boundary can
turn any of them into a ``{"message": ...}`` response without knowing
which service raised it.
"""

DEFAULT_ERROR_MESSAGE = "An unknown error occurred!"


class DomainError(Exception):
    """Base class for all domain errors."""

    status_code = 500

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGE, code: int | None = None):
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.status_code


class ValidationError(DomainError):
    """Input violates a business validation rule."""

    status_code = 422


class InvalidFileTypeError(ValidationError):
    """Uploaded file has a MIME type outside the image allow-list."""


class FileTooLargeError(ValidationError):
    """Uploaded file exceeds the configured size ceiling."""

    status_code = 413


class AuthenticationError(DomainError):
    """Caller could not be authenticated."""

    status_code = 403


class InvalidTokenError(AuthenticationError):
    """Token is malformed, has a bad signature, or has expired."""


class InvalidCredentialsError(AuthenticationError):
    """Email/password pair does not match a user (deliberately vague)."""


class TokenIssuanceError(DomainError):
    """Signing a new token failed."""


class PermissionDeniedError(DomainError):
    """Caller does not own the resource it tries to mutate."""

    status_code = 401


class NotFoundError(DomainError):
    """Requested entity does not exist."""

    status_code = 404


class DuplicateError(DomainError):
    """Entity with the same unique key already exists.

    Kept at 500 to match the status clients of this API already handle.
    """


class GeocodeError(DomainError):
    """Address could not be resolved to coordinates."""

    status_code = 422


class PersistenceError(DomainError):
    """A store read or write failed."""
