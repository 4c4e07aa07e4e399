"""Error taxonomy shared by the session services and the HTTP layer.

Every error carries the HTTP status and the message that is safe to show a
client. Authentication failures all share one public message; the concrete
subclass (and its ``reason``) exists for logs and tests only.
"""
from dataclasses import dataclass

AUTH_FAILED_MESSAGE = "Invalid or expired credentials"
INTERNAL_ERROR_MESSAGE = "Internal server error"


@dataclass(frozen=True)
class FieldViolation:
    """A single field-level validation problem."""

    field: str
    message: str


class ServiceError(Exception):
    """Base class for errors surfaced through the response envelope."""

    status_code = 500
    public_message = INTERNAL_ERROR_MESSAGE

    def __init__(self, reason: str | None = None):
        self.reason = reason or self.__class__.__name__
        super().__init__(self.reason)


class ValidationError(ServiceError):
    """Malformed input. Surfaces the first violation message."""

    status_code = 400

    def __init__(self, violations: list[FieldViolation]):
        if not violations:
            violations = [FieldViolation(field="body", message="Invalid request")]
        self.violations = violations
        super().__init__(reason=violations[0].message)

    @property
    def public_message(self) -> str:
        return self.violations[0].message


class ConflictError(ServiceError):
    """Duplicate registration."""

    status_code = 409
    public_message = "Email already registered"


class InternalError(ServiceError):
    """Storage or signing failure."""


class AuthenticationError(ServiceError):
    """Any authentication failure; collapses to one 401 at the boundary."""

    status_code = 401
    public_message = AUTH_FAILED_MESSAGE


class InvalidCredentials(AuthenticationError):
    """Unknown email or wrong password (indistinguishable to the caller)."""


class Unauthorized(AuthenticationError):
    """Missing or invalid access token."""


class InvalidOrExpired(AuthenticationError):
    """Refresh token failed signature or expiry verification."""


class NotRegistered(AuthenticationError):
    """No persisted record for the presented session."""


class Revoked(AuthenticationError):
    """Persisted record has been revoked."""


class HashMismatch(AuthenticationError):
    """Correctly signed token that is not the one on record."""


class Expired(AuthenticationError):
    """Persisted record is past its expiry."""


class StaleVersion(AuthenticationError):
    """Token version snapshot predates a global logout."""


class SessionLookupFailed(AuthenticationError):
    """Storage failed while checking a refresh session."""


class InvalidToken(Exception):
    """Opaque token verification failure raised by the signer."""
