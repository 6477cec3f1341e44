"""
Exception hierarchy for the ChatPPC backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class ChatPPCException(Exception):
    """Base exception for all ChatPPC application errors."""

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


class ConfigurationError(ChatPPCException):
    """Raised when required configuration is missing or invalid."""

    pass


class ValidationError(ChatPPCException):
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


class NotFoundError(ChatPPCException):
    """Raised when a referenced entity does not exist."""

    pass


class SessionNotFoundError(NotFoundError):
    """Raised when a chat session cannot be found."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            session_id: ID of the missing session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        super().__init__(f"Session not found: {session_id}", details)


class DocumentNotFoundError(NotFoundError):
    """Raised when no chunk matches a document source, title or id."""

    def __init__(self, identifier: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["identifier"] = identifier
        super().__init__(f"Document not found: {identifier}", details)


class AuthenticationError(ChatPPCException):
    """Raised when a bearer token or API key is missing or invalid."""

    pass


class AuthorizationError(ChatPPCException):
    """Raised when an authenticated caller may not act on a resource."""

    pass


class SessionOwnershipError(AuthorizationError):
    """Raised when a session is written or deleted by a non-owner."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["session_id"] = session_id
        super().__init__(
            "You don't have permission to modify this session", details
        )


class DocumentProcessingError(ChatPPCException):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            source: Source identifier of the document that failed
            details: Additional context
        """
        details = details or {}
        if source:
            details["source"] = source
        super().__init__(message, details)


class EmbeddingError(DocumentProcessingError):
    """Raised when embedding generation fails."""

    pass


class VectorStoreError(ChatPPCException):
    """Raised when chunk store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (insert, delete, lookup)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
