class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced employee or time entry does not exist."""


class AuthorizationError(DomainError):
    """Raised when the admin passkey gate is locked or the passkey is wrong."""
