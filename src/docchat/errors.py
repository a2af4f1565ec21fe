"""
DocChat Unified Error Classification System.

This module provides a hierarchy of exceptions for the failures that can occur
while ingesting documents and assembling grounded chat context.

Error Categories:
-----------------
1. Retryable Errors: Transient failures of an external service
   - Rate limiting (HTTP 429)
   - Service unavailable (HTTP 5xx)
   - Connection failures and timeouts

2. Permanent Errors: Failures that won't succeed on retry
   - Authentication errors (HTTP 401/403)
   - Invalid parameters (HTTP 400)
   - Not found (HTTP 404)
   - Malformed service responses
   - Configuration errors

3. Domain Errors: Failures of a pipeline stage
   - Unsupported file type, extraction failure, oversized upload
   - Per-item and per-batch embedding failures
   - Vector dimension mismatch
   - Document processing failure (wraps the stage error)

Usage:
------
    from docchat.errors import DocumentProcessingError, UnsupportedFileTypeError

    try:
        processed = await processor.process(data, mime_type)
    except DocumentProcessingError as e:
        logger.error(f"Ingestion failed at {e.stage}: {e}")
        if isinstance(e.original_error, UnsupportedFileTypeError):
            ...
"""

from typing import Any


class DocChatError(Exception):
    """
    Base exception for all DocChat errors.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error (optional)
        original_error: The underlying exception that caused this error (optional)
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error

    def __str__(self) -> str:
        base = self.message
        if self.details:
            base += f" | Details: {self.details}"
        if self.original_error:
            base += f" | Caused by: {type(self.original_error).__name__}: {self.original_error}"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "details": self.details,
            "original_error": str(self.original_error) if self.original_error else None
        }


# =============================================================================
# Retryable Errors - Transient failures that may succeed on retry
# =============================================================================

class RetryableError(DocChatError):
    """
    Base class for errors that may succeed on retry.

    Attributes:
        retry_after: Suggested wait time before retry (seconds), if known
    """

    def __init__(
        self,
        message: str,
        retry_after: float | None = None,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)
        self.retry_after = retry_after


class RateLimitError(RetryableError):
    """Raised when API rate limit is exceeded (HTTP 429)."""

    def __init__(
        self,
        message: str = "API rate limit exceeded",
        retry_after: float | None = None,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, retry_after, details, original_error)


class ServiceUnavailableError(RetryableError):
    """Raised when a service is temporarily unavailable (HTTP 503)."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        retry_after: float | None = None,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, retry_after, details, original_error)


class ServiceConnectionError(RetryableError):
    """
    Raised when connection to a service fails.

    This includes DNS resolution failures, refused connections and
    unreachable networks.
    """

    def __init__(
        self,
        message: str = "Failed to connect to service",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, retry_after=None, details=details, original_error=original_error)


class RequestTimeoutError(RetryableError):
    """Raised when a request to a service exceeds its time limit."""

    def __init__(
        self,
        message: str = "Request timed out",
        timeout: float | None = None,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        details = details or {}
        details["timeout"] = timeout
        super().__init__(message, retry_after=None, details=details, original_error=original_error)
        self.timeout = timeout


class TransientError(RetryableError):
    """Generic retryable error for unclassified transient failures."""
    pass


# =============================================================================
# Permanent Errors - Failures that won't succeed on retry
# =============================================================================

class PermanentError(DocChatError):
    """
    Base class for errors that will not succeed on retry.

    These errors indicate issues that require user intervention such as
    invalid credentials, malformed requests or configuration problems.
    """
    pass


class AuthenticationError(PermanentError):
    """Raised when authentication fails (HTTP 401/403)."""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class InvalidRequestError(PermanentError):
    """Raised when request parameters are invalid (HTTP 400)."""

    def __init__(
        self,
        message: str = "Invalid request parameters",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class NotFoundError(PermanentError):
    """Raised when requested resource is not found (HTTP 404)."""

    def __init__(
        self,
        message: str = "Resource not found",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class ConfigurationError(PermanentError):
    """Raised when there's a configuration problem."""

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class MalformedResponseError(PermanentError):
    """Raised when a service answers with a body that cannot be parsed."""
    pass


class QuotaExceededError(PermanentError):
    """Raised when the account quota of an external service is exhausted."""

    def __init__(
        self,
        message: str = "Account quota exceeded",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


# =============================================================================
# Domain-Specific Errors
# =============================================================================

class UnsupportedFileTypeError(PermanentError):
    """Raised when no extractor handles the uploaded MIME type."""

    def __init__(
        self,
        mime_type: str,
        supported: list[str] | None = None,
        details: dict[str, Any] | None = None
    ):
        details = details or {}
        details["mime_type"] = mime_type
        if supported:
            details["supported"] = supported
        super().__init__(f"Unsupported file type: {mime_type}", details)
        self.mime_type = mime_type


class FileTooLargeError(PermanentError):
    """Raised when an upload exceeds the configured size limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            f"File size {size} bytes exceeds the {limit} byte limit",
            details={"size": size, "limit": limit}
        )
        self.size = size
        self.limit = limit


class ExtractionError(DocChatError):
    """Raised when a corrupt or unparseable file cannot be turned into text."""
    pass


class EmbeddingError(DocChatError):
    """Raised when an embedding operation fails."""
    pass


class EmbeddingItemError(EmbeddingError):
    """Raised when a single text could not be embedded."""

    def __init__(
        self,
        message: str,
        index: int,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        details = details or {}
        details["index"] = index
        super().__init__(message, details, original_error)
        self.index = index


class EmbeddingBatchError(EmbeddingError):
    """Raised when a whole embedding batch fails (e.g. service unreachable)."""
    pass


class DimensionMismatchError(DocChatError, ValueError):
    """Raised when two vectors of different length are compared."""

    def __init__(self, left: int, right: int):
        super().__init__(
            f"Vector dimension mismatch: {left} != {right}",
            details={"left": left, "right": right}
        )


class DocumentProcessingError(DocChatError):
    """
    Raised when ingestion of a document fails fatally.

    Always carries the stage at which processing stopped and the document id
    (when known) so operators can locate the failure.
    """

    def __init__(
        self,
        message: str,
        stage: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        details = details or {}
        details["stage"] = stage
        details["document_id"] = document_id
        super().__init__(message, details, original_error)
        self.stage = stage
        self.document_id = document_id


class DocumentNotFoundError(NotFoundError):
    """Raised when a document does not exist or is not owned by the caller."""

    def __init__(self, document_id: str):
        super().__init__(f"Document not found: {document_id}", details={"document_id": document_id})
        self.document_id = document_id


class StorageError(DocChatError):
    """Raised when the persistence store rejects a write."""
    pass


class GenerationError(DocChatError):
    """Raised when the answer generation service fails."""
    pass


# =============================================================================
# Helper Functions
# =============================================================================

def is_retryable(error: Exception) -> bool:
    """
    Check if an error is retryable.

    Args:
        error: The exception to check

    Returns:
        True if the error is an instance of RetryableError
    """
    return isinstance(error, RetryableError)


def is_input_rejection(error: Exception) -> bool:
    """
    Check whether an error is attributable to a single input text.

    Only a request the service explicitly rejected as invalid (HTTP 400) or a
    response that lacks a vector for the text counts.

    Args:
        error: The exception to check

    Returns:
        True for input-specific failures
    """
    return isinstance(error, (InvalidRequestError, EmbeddingItemError))


def is_service_failure(error: Exception) -> bool:
    """
    Check whether an error means the external service itself is unusable.

    Anything that is not an input rejection counts: transport failures,
    credential problems, unknown models or endpoints (HTTP 404), unclassified
    HTTP errors and unparseable response bodies affect every request equally.

    Args:
        error: The exception to check

    Returns:
        True for service-wide failures, False for input-specific ones
    """
    return not is_input_rejection(error)


def classify_http_error(status_code: int, message: str = "", headers: dict | None = None) -> DocChatError:
    """
    Classify an HTTP error based on status code.

    Args:
        status_code: HTTP status code
        message: Error message from response
        headers: Response headers (used to extract Retry-After)

    Returns:
        Appropriate DocChatError subclass instance

    Example:
        if response.status_code >= 400:
            raise classify_http_error(
                response.status_code,
                response.text,
                dict(response.headers)
            )
    """
    headers = headers or {}
    retry_after = None

    raw_retry_after = headers.get("Retry-After") or headers.get("retry-after")
    if raw_retry_after is not None:
        try:
            retry_after = float(raw_retry_after)
        except (ValueError, TypeError):
            pass

    details = {"status_code": status_code}

    if status_code == 429:
        return RateLimitError(
            message=message or "API rate limit exceeded",
            retry_after=retry_after,
            details=details
        )
    elif status_code == 401:
        return AuthenticationError(
            message=message or "Authentication failed - invalid API key",
            details=details
        )
    elif status_code == 403:
        return AuthenticationError(
            message=message or "Access forbidden - insufficient permissions",
            details=details
        )
    elif status_code == 400:
        return InvalidRequestError(
            message=message or "Invalid request parameters",
            details=details
        )
    elif status_code == 404:
        return NotFoundError(
            message=message or "Resource not found",
            details=details
        )
    elif status_code == 503:
        return ServiceUnavailableError(
            message=message or "Service temporarily unavailable",
            retry_after=retry_after,
            details=details
        )
    elif status_code >= 500:
        return TransientError(
            message=message or f"Server error (HTTP {status_code})",
            details=details
        )
    else:
        return PermanentError(
            message=message or f"HTTP error {status_code}",
            details=details
        )
