class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when a sign-in cannot be matched to a profile."""


class AuthorizationError(DomainError):
    """Raised when a profile lacks permission for an action."""
