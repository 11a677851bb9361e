"""
Error types and error codes for tokenindex.

A missing or expired token is never an error: lookups return ``None`` or
``False``. The exceptions below cover caller mistakes, bad configuration and
unreadable stored records. Failures raised by the Redis client are not
wrapped and reach the caller unchanged.
"""

from enum import Enum
from typing import Dict, Any, Optional


class ErrorCode(str, Enum):
    """Error codes used across tokenindex."""
    INVALID_ARGUMENT = "invalid_argument"
    CONFIGURATION_ERROR = "configuration_error"
    SERIALIZATION_FAILED = "serialization_failed"

    def __str__(self) -> str:
        return self.value


INVALID_ARGUMENT = ErrorCode.INVALID_ARGUMENT
CONFIGURATION_ERROR = ErrorCode.CONFIGURATION_ERROR
SERIALIZATION_FAILED = ErrorCode.SERIALIZATION_FAILED


class TokenIndexError(Exception):
    """Base exception for all tokenindex errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            'error': self.error_code.value,
            'message': self.message,
            'details': self.details
        }

        if self.cause:
            result['cause'] = str(self.cause)

        return result

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"


class InvalidArgumentError(TokenIndexError):
    """Raised when a required identifying argument is missing or malformed."""

    def __init__(
        self,
        message: str,
        argument: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, INVALID_ARGUMENT, details)
        self.argument = argument
        self.value = value

        if argument:
            self.details['argument'] = argument
        if value is not None:
            self.details['value'] = str(value)


class ConfigurationError(TokenIndexError):
    """Raised when there's a configuration error."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, CONFIGURATION_ERROR, details)
        self.config_key = config_key
        self.config_value = config_value

        if config_key:
            self.details['config_key'] = config_key
        if config_value is not None:
            self.details['config_value'] = str(config_value)


class SerializationError(TokenIndexError):
    """Raised when a record cannot be packed or a stored blob cannot be unpacked."""

    def __init__(
        self,
        message: str,
        serializer: Optional[str] = None,
        key: Optional[str] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, SERIALIZATION_FAILED, cause=cause)
        self.serializer = serializer
        self.key = key

        if serializer:
            self.details['serializer'] = serializer
        if key:
            self.details['key'] = key


__all__ = [
    "ErrorCode",
    "INVALID_ARGUMENT",
    "CONFIGURATION_ERROR",
    "SERIALIZATION_FAILED",
    "TokenIndexError",
    "InvalidArgumentError",
    "ConfigurationError",
    "SerializationError",
]
