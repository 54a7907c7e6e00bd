"""
rediskit - Core Error Types

Defines the exception hierarchy for rediskit.
All exceptions raised by this package inherit from RedisKitError.

Errors coming from the redis client itself (ResponseError, DataError,
ConnectionError...) are NOT wrapped by the store facade; they propagate to
the caller unchanged.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes attached to serialized errors."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    STORE_FAILURE = "STORE_FAILURE"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    STORE_NOT_INITIALIZED = "STORE_NOT_INITIALIZED"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class RedisKitError(Exception):
    """Base exception for all rediskit errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary (for logs and API responses)."""
        return {
            "error": self.__class__.__name__,
            "error_code": extract_error_code(self).value,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(RedisKitError):
    """Raised when configuration is invalid or missing."""


class StoreError(RedisKitError):
    """Base exception for store-related errors."""


class StoreConnectionError(StoreError):
    """Raised when the backing store cannot be reached."""

    def __init__(self, backend: str, details: dict[str, Any] | None = None):
        message = f"Failed to connect to store backend: {backend}"
        super().__init__(message, details)
        self.backend = backend


class StoreNotInitializedError(StoreError):
    """Raised when the process-wide store is used before init_store()."""

    def __init__(self) -> None:
        super().__init__("Store has not been initialized, call init_store() first")


class NotFoundError(RedisKitError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        message = f"{resource} not found: {identifier}"
        super().__init__(message, {"resource": resource, "id": identifier})


def extract_error_code(error: Exception) -> ErrorCode:
    """
    Extract the appropriate ErrorCode from an exception.

    Args:
        error: Exception to categorize

    Returns:
        Appropriate ErrorCode for the exception
    """
    if isinstance(error, ConfigurationError):
        return ErrorCode.CONFIGURATION_ERROR

    if isinstance(error, StoreNotInitializedError):
        return ErrorCode.STORE_NOT_INITIALIZED

    if isinstance(error, StoreConnectionError):
        return ErrorCode.STORE_UNAVAILABLE

    if isinstance(error, StoreError):
        return ErrorCode.STORE_FAILURE

    if isinstance(error, NotFoundError):
        return ErrorCode.NOT_FOUND

    return ErrorCode.INTERNAL_ERROR
