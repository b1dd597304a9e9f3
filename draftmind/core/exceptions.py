"""
Exception hierarchy for the Draftmind retrieval engine.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DraftmindException(Exception):
    """Base exception for all Draftmind application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(DraftmindException):
    """Raised when required configuration (e.g. an API credential) is missing."""

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error message
            setting: Name of the missing or invalid setting
            details: Additional context
        """
        details = details or {}
        if setting:
            details["setting"] = setting
        super().__init__(message, details)


class ValidationError(DraftmindException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ProviderError(DraftmindException):
    """Raised when the embedding provider fails for a chunk or query."""

    def __init__(
        self,
        message: str,
        model_id: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider error.

        Args:
            message: Error message
            model_id: Embedding model the call was made for
            status_code: HTTP status returned by the provider, if any
            details: Additional context
        """
        details = details or {}
        if model_id:
            details["model_id"] = model_id
        if status_code is not None:
            details["status_code"] = status_code
        self.model_id = model_id
        self.status_code = status_code
        super().__init__(message, details)


class NotFoundError(DraftmindException):
    """Raised when a referenced model or document does not exist."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            resource: Kind of resource (model, document)
            identifier: ID of the missing resource
            details: Additional context
        """
        details = details or {}
        details[f"{resource}_id"] = identifier
        super().__init__(f"{resource.capitalize()} not found: {identifier}", details)


class StoreError(DraftmindException):
    """Raised when embedding store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize store error.

        Args:
            message: Error message
            operation: Operation that failed (open, insert, query, delete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class StoreMigrationError(StoreError):
    """Raised when the legacy schema upgrade fails. Fatal at startup."""

    def __init__(
        self,
        message: str,
        table: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if table:
            details["table"] = table
        super().__init__(message, operation="migrate", details=details)
