"""Custom exception hierarchy for brokerage-admin."""

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    QUERY_FAILED = "QUERY_FAILED"
    IDENTITY_DIRECTORY_FAILED = "IDENTITY_DIRECTORY_FAILED"
    UNAUTHORIZED = "UNAUTHORIZED"
    INTERNAL = "INTERNAL"


class BrokerageError(Exception):
    """Base exception for all brokerage-admin errors."""

    kind: ErrorKind = ErrorKind.INTERNAL


class EntityNotFoundError(BrokerageError):
    """Raised when an entity id is absent at get/update/delete."""

    kind = ErrorKind.NOT_FOUND


class AlreadyExistsError(BrokerageError):
    """Raised when a unique key (profile ``user_id``) is already taken."""

    kind = ErrorKind.ALREADY_EXISTS


class ValidationFailedError(BrokerageError):
    """Raised when a required field is missing before a mutating call."""

    kind = ErrorKind.VALIDATION_FAILED


class QueryFailedError(BrokerageError):
    """Raised when the document store is unavailable or rejects a query."""

    kind = ErrorKind.QUERY_FAILED


class IdentityDirectoryError(BrokerageError):
    """Raised when an identity directory operation fails."""

    kind = ErrorKind.IDENTITY_DIRECTORY_FAILED


class AuthorizationError(BrokerageError):
    """Raised when a principal lacks the admin role."""

    kind = ErrorKind.UNAUTHORIZED


class ConfigurationError(BrokerageError):
    """Raised when configuration is invalid or missing."""


class SinkError(BrokerageError):
    """Raised when a change-event sink operation fails."""
