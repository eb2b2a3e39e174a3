"""Custom exception classes for the CEP loader function."""

from typing import Any


class CepLoaderError(Exception):
    """Base exception for the CEP loader."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ConfigurationError(CepLoaderError):
    """Raised when a required setting is missing or unusable."""

    def __init__(
        self,
        message: str = "Invalid configuration",
        setting: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        error_details = details or {}
        if setting:
            error_details["setting"] = setting
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details=error_details,
        )


class LookupFailedError(CepLoaderError):
    """Raised when the postal-code lookup service cannot be queried."""

    def __init__(
        self,
        message: str = "Postal code lookup failed",
        postal_code: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize LookupFailedError.

        Args:
            message: Error message
            postal_code: Postal code that was being looked up
            status_code: Upstream HTTP status, when a response was received
            details: Additional error details
        """
        error_details = details or {}
        if postal_code:
            error_details["postal_code"] = postal_code
        if status_code is not None:
            error_details["status_code"] = status_code
        super().__init__(
            message=message,
            error_code="LOOKUP_FAILED",
            details=error_details,
        )
        self.postal_code = postal_code
        self.status_code = status_code


class DatabaseConnectionError(CepLoaderError):
    """Raised when the database connection cannot be opened."""

    def __init__(
        self,
        message: str = "Could not open database connection",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="DATABASE_UNAVAILABLE",
            details=details,
        )


class PersistFailedError(CepLoaderError):
    """Raised when a rolled-back insert must fail the invocation."""

    def __init__(
        self,
        message: str = "Address was not persisted",
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        error_details = details or {}
        if reason:
            error_details["reason"] = reason
        super().__init__(
            message=message,
            error_code="PERSIST_FAILED",
            details=error_details,
        )
