class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AccessDeniedError(DomainError):
    """Raised when the caller's role does not grant access to a row or view."""


class DuplicateRecordError(DomainError):
    """Raised when a user already has an attendance record for the day."""


class NoActiveCheckInError(DomainError):
    """Raised on check-out when there is no open record for today."""


class InvalidDurationError(DomainError):
    """Raised when check-out would produce a negative number of hours."""
