"""Domain-specific exceptions for account access errors.

This module defines the closed set of failures the account service can
report. Every exception carries an ``ErrorKind`` tag so callers branch on
the kind instead of comparing messages.
"""

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Tagged failure kinds surfaced by the account service."""

    VALIDATION = "validation"
    DUPLICATE_IDENTITY = "duplicate_identity"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


class DomainException(Exception):
    """Base exception for all domain-related errors.

    Provides a consistent interface for domain exceptions with error codes
    and optional contextual details.

    Attributes:
        code: Machine-readable error code
        kind: Failure category from the closed ``ErrorKind`` set
        message: Human-readable error message
        details: Optional additional error context (dict or list)
    """

    code: str = "DOMAIN_ERROR"
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, details: dict[str, Any] | list[Any] | None = None) -> None:
        """Initialize domain exception.

        Args:
            message: Human-readable error description
            details: Optional additional context about the error
        """
        self.message = message
        self.details = details
        super().__init__(self.message)


class ValidationError(DomainException):
    """Raised when an account payload fails validation.

    Structural checks normally happen before the service is called; this
    covers whatever still reaches the core malformed.
    """

    code = "VALIDATION_ERROR"
    kind = ErrorKind.VALIDATION


class InvalidIdentifierError(ValidationError):
    """Raised when an account identifier cannot be parsed."""

    code = "INVALID_IDENTIFIER"


class DuplicateIdentityError(DomainException):
    """Raised when a username or email is already held by an active account.

    Comes either from the service pre-check or from the partial unique
    indexes on the accounts table.
    """

    code = "DUPLICATE_IDENTITY"
    kind = ErrorKind.DUPLICATE_IDENTITY


class EntityNotFoundError(DomainException):
    """Raised when no active account matches the requested identifier."""

    code = "ENTITY_NOT_FOUND"
    kind = ErrorKind.NOT_FOUND


class StoreError(DomainException):
    """Raised when the record store fails (connectivity, timeout, bad query)."""

    code = "STORE_FAILURE"
    kind = ErrorKind.INTERNAL
