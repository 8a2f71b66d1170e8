"""Custom exceptions for the simplecontext package.

This module defines the exception hierarchy for context-related errors,
providing structured error handling with machine-readable error codes.
"""

from typing import Any


class ContextError(Exception):
    """Base exception for all context-related errors.

    Attributes:
        code: Machine-readable error code
        message: Human-readable error message
    """

    def __init__(self, message: str, code: str) -> None:
        """Initialize context error.

        Args:
            message: Human-readable error description
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code


class InvalidKeyError(ContextError):
    """Raised when a key is not a non-empty string.

    Every key-accepting operation (get, set, delete, has) raises this error
    before touching any store.
    """

    def __init__(self, key: Any) -> None:
        """Initialize invalid key error.

        Args:
            key: The rejected key
        """
        if isinstance(key, str):
            detail = "got an empty string"
        else:
            detail = f"got {type(key).__name__}"
        super().__init__(
            message=f"Context key must be a non-empty string, {detail}",
            code="invalid_key",
        )
        self.key = key
