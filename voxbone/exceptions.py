"""
Voxbone Python SDK - Exceptions

Only problems detected before a request is sent are raised. Failures
reported by the API, or by the network, come back as values
(see :mod:`voxbone.results`).
"""

from typing import Optional, Dict, Any


class VoxboneError(Exception):
    """
    Base exception for all Voxbone SDK errors.

    Attributes:
        message: Human-readable error message
        code: Error code if available
        details: Additional error details
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', code='{self.code}')"


class ValidationError(VoxboneError):
    """
    Raised when a required parameter is missing or invalid.

    Raised before any request is built, so nothing reaches the network.

    Attributes:
        field_errors: Dictionary mapping field names to error messages
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(message, code="VALIDATION_ERROR", details=field_errors)
        self.field_errors = field_errors or {}

    def __str__(self) -> str:
        base = super().__str__()
        if self.field_errors:
            errors = ", ".join(f"{k}: {v}" for k, v in self.field_errors.items())
            return f"{base} ({errors})"
        return base


class ConfigurationError(VoxboneError):
    """Raised when the client cannot be configured from the given settings."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="CONFIGURATION_ERROR")
