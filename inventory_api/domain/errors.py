"""Domain error hierarchy for clean exception handling."""
from __future__ import annotations


class DomainError(Exception):
    """Base for all domain errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Invalid input or state."""


class InvalidIdentifierError(ValidationError):
    """Malformed record identifier."""


class ConflictError(DomainError):
    """Resource conflict (e.g., model already purchased)."""


class AuthenticationError(DomainError):
    """Caller identity could not be established."""


class AuthenticationMissingError(AuthenticationError):
    """No bearer token supplied on a route that requires one."""


class AuthenticationInvalidError(AuthenticationError):
    """Bearer token failed verification."""


class AuthorizationError(DomainError):
    """Caller is not allowed to act on the resource."""
