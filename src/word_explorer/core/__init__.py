"""
Core module for Unified Word Explorer.

Provides:
- Unified exception hierarchy
- Async utilities for concurrent provider calls
"""

from .async_utils import (
    # Fault tolerance
    CircuitBreaker,
    # Rate limiting
    RateLimiter,
    # Parallel execution
    gather_settled,
    # Utilities
    timeout_with_fallback,
)
from .exceptions import (
    # API errors
    APIError,
    # Configuration errors
    ConfigurationError,
    # Data errors
    DataError,
    EmptyResultError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    # Validation errors
    InvalidInputError,
    InvalidParameterError,
    NetworkError,
    NotFoundError,
    ParseError,
    RateLimitError,
    ServiceUnavailableError,
    # Synthesis errors
    SynthesisError,
    SynthesisUnavailableError,
    ValidationError,
    # Base
    WordExplorerError,
    # Utilities
    get_retry_delay,
    is_retryable_error,
)

__all__ = [
    "APIError",
    "CircuitBreaker",
    "ConfigurationError",
    "DataError",
    "EmptyResultError",
    "ErrorCategory",
    "ErrorContext",
    "ErrorSeverity",
    "InvalidInputError",
    "InvalidParameterError",
    "NetworkError",
    "NotFoundError",
    "ParseError",
    "RateLimitError",
    "RateLimiter",
    "ServiceUnavailableError",
    "SynthesisError",
    "SynthesisUnavailableError",
    "ValidationError",
    "WordExplorerError",
    "gather_settled",
    "get_retry_delay",
    "is_retryable_error",
    "timeout_with_fallback",
]
