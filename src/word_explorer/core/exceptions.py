"""
Unified Exception Hierarchy for Unified Word Explorer.

Exception Hierarchy:
    WordExplorerError (base)
    ├── APIError
    │   ├── RateLimitError
    │   ├── NetworkError
    │   └── ServiceUnavailableError
    ├── ValidationError
    │   ├── InvalidInputError
    │   └── InvalidParameterError
    ├── DataError
    │   ├── NotFoundError
    │   ├── ParseError
    │   └── EmptyResultError
    ├── SynthesisError
    │   └── SynthesisUnavailableError
    └── ConfigurationError

Provider-level errors (NotFoundError on 404, ServiceUnavailableError on 5xx,
NetworkError, ParseError) are raised inside the base client and absorbed
there; they never reach the caller of the aggregation. Only
InvalidInputError escapes ``build_word_bundle``. ConfigurationError is
raised at server start for unusable settings.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    WARNING = auto()      # Recoverable, can continue
    ERROR = auto()        # Failed but can retry
    CRITICAL = auto()     # Cannot continue
    TRANSIENT = auto()    # Temporary, should retry automatically


class ErrorCategory(Enum):
    """Categories for error classification."""
    API = "api"
    VALIDATION = "validation"
    DATA = "data"
    SYNTHESIS = "synthesis"
    CONFIGURATION = "config"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Rich context for error messages."""
    tool_name: str | None = None
    operation: str | None = None
    input_value: Any = None
    suggestion: str | None = None
    example: str | None = None
    retry_after: float | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def merged(self, **overrides: Any) -> ErrorContext:
        """Return a copy with the given fields replaced."""
        values = {
            "tool_name": self.tool_name,
            "operation": self.operation,
            "input_value": self.input_value,
            "suggestion": self.suggestion,
            "example": self.example,
            "retry_after": self.retry_after,
            "metadata": self.metadata,
        }
        values.update(overrides)
        return ErrorContext(**values)


class WordExplorerError(Exception):
    """
    Base exception for all Word Explorer errors.

    Provides:
    - Structured error context
    - Severity classification
    - Retry guidance
    - Agent-friendly formatting
    """

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        category: ErrorCategory = ErrorCategory.API,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.context = context or ErrorContext()
        self.severity = severity
        self.category = category
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "error": str(self),
            "category": self.category.value,
            "severity": self.severity.name.lower(),
            "retryable": self.retryable,
        }
        if self.context.tool_name:
            result["tool"] = self.context.tool_name
        if self.context.suggestion:
            result["suggestion"] = self.context.suggestion
        if self.context.example:
            result["example"] = self.context.example
        if self.context.retry_after:
            result["retry_after_seconds"] = self.context.retry_after
        return result

    def to_agent_message(self) -> str:
        """Format for Agent consumption (Markdown)."""
        parts = [f"❌ **Error**: {self}"]

        if self.context.suggestion:
            parts.append(f"💡 **Suggestion**: {self.context.suggestion}")
        if self.context.example:
            parts.append(f"📝 **Example**: `{self.context.example}`")
        if self.retryable:
            if self.context.retry_after:
                parts.append(f"🔄 Retry after {self.context.retry_after:.1f} seconds")
            else:
                parts.append("🔄 This error is retryable")

        return "\n".join(parts)


# =============================================================================
# API Errors
# =============================================================================

class APIError(WordExplorerError):
    """Base class for provider API errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        retryable: bool = True,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.ERROR,
            category=ErrorCategory.API,
            retryable=retryable,
        )


class RateLimitError(APIError):
    """Raised when a provider rate limit is exceeded or a circuit is open."""

    def __init__(
        self,
        message: str = "API rate limit exceeded",
        *,
        retry_after: float = 1.0,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).merged(retry_after=retry_after)
        if not ctx.suggestion:
            ctx = ctx.merged(suggestion="Wait and retry the request")
        super().__init__(message, context=ctx, retryable=True)
        self.severity = ErrorSeverity.TRANSIENT


class NetworkError(APIError):
    """Raised for network connectivity issues and timeouts."""

    def __init__(
        self,
        message: str = "Network connection failed",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, context=context, retryable=True)


class ServiceUnavailableError(APIError):
    """Raised when a provider is temporarily unavailable."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        *,
        service: str = "provider",
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(f"{service}: {message}", context=context, retryable=True)
        self.severity = ErrorSeverity.TRANSIENT


# =============================================================================
# Validation Errors
# =============================================================================

class ValidationError(WordExplorerError):
    """Base class for validation errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.WARNING,
            category=ErrorCategory.VALIDATION,
            retryable=False,
        )


class InvalidInputError(ValidationError):
    """Raised when the search term is empty or whitespace-only."""

    def __init__(
        self,
        term: str | None,
        reason: str = "Search term cannot be empty.",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).merged(input_value=term)
        ctx = ctx.merged(
            suggestion=ctx.suggestion or "Provide a non-empty word or phrase",
            example=ctx.example or 'explore_word(word="ephemeral")',
        )
        super().__init__(reason, context=ctx)


class InvalidParameterError(ValidationError):
    """Raised when a parameter value is invalid."""

    def __init__(
        self,
        param_name: str,
        value: Any,
        expected: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).merged(
            input_value=value,
            suggestion=f"Expected {expected}",
        )
        super().__init__(
            f"Invalid parameter '{param_name}': {value!r} (expected {expected})",
            context=ctx,
        )


# =============================================================================
# Data Errors
# =============================================================================

class DataError(WordExplorerError):
    """Base class for data-related errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.ERROR,
            category=ErrorCategory.DATA,
            retryable=False,
        )


class NotFoundError(DataError):
    """Raised when a provider has no data for the requested term."""

    def __init__(
        self,
        resource: str,
        identifier: str | None = None,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        msg = f"{resource} not found"
        if identifier:
            msg = f"{resource} not found: {identifier}"
        ctx = (context or ErrorContext()).merged(input_value=identifier)
        super().__init__(msg, context=ctx)


class ParseError(DataError):
    """Raised when a provider payload cannot be parsed."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        full_msg = f"Parse error: {message}"
        if source:
            full_msg = f"Parse error ({source}): {message}"
        super().__init__(full_msg, context=context)


class EmptyResultError(DataError):
    """Raised by the presentation layer when a bundle has nothing to show."""

    def __init__(
        self,
        term: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).merged(input_value=term)
        if not ctx.suggestion:
            ctx = ctx.merged(suggestion="Check the spelling or try a related word")
        super().__init__(
            f'No data found for "{term}". Please check the spelling.',
            context=ctx,
        )
        self.severity = ErrorSeverity.WARNING


# =============================================================================
# Synthesis Errors
# =============================================================================

class SynthesisError(WordExplorerError):
    """Raised when the generative summary call fails."""

    def __init__(
        self,
        message: str = "Failed to generate AI summary. The API call may have failed.",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.ERROR,
            category=ErrorCategory.SYNTHESIS,
            retryable=False,
        )


class SynthesisUnavailableError(SynthesisError):
    """Raised when synthesis is requested but no API key is configured."""

    def __init__(self, *, context: ErrorContext | None = None) -> None:
        ctx = context or ErrorContext(
            suggestion="Set GEMINI_API_KEY (or GOOGLE_API_KEY) to enable AI features",
        )
        super().__init__(
            "AI features are disabled. Please configure your Gemini API key.",
            context=ctx,
        )
        self.category = ErrorCategory.CONFIGURATION


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(WordExplorerError):
    """Raised for configuration-related errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.CONFIGURATION,
            retryable=False,
        )


# =============================================================================
# Retry helpers
# =============================================================================

def is_retryable_error(error: Exception) -> bool:
    """Check if an error should be retried."""
    if isinstance(error, WordExplorerError):
        return error.retryable

    error_str = str(error).lower()
    transient_patterns = [
        "rate limit",
        "too many requests",
        "temporarily unavailable",
        "service unavailable",
        "connection reset",
        "timeout",
    ]
    return any(pattern in error_str for pattern in transient_patterns)


def get_retry_delay(error: Exception, attempt: int, *, cap: float = 30.0) -> float:
    """
    Calculate retry delay with exponential backoff.

    Args:
        error: The exception that occurred
        attempt: Current attempt number (0-based)
        cap: Maximum delay in seconds

    Returns:
        Delay in seconds before next retry
    """
    base_delay = 1.0

    if isinstance(error, WordExplorerError) and error.context.retry_after:
        base_delay = error.context.retry_after

    delay = base_delay * (2 ** attempt)
    jitter = random.uniform(0, 0.1 * delay)

    return min(delay + jitter, cap)
