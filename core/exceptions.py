"""
Custom exceptions for ParcelIQ Relay
Provides structured error handling across all domains
"""
from typing import Any, Dict, Optional


class ParcelIQError(Exception):
    """Base exception for all relay errors"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses"""
        return {
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class ValidationError(ParcelIQError):
    """Raised when input validation fails"""

    def __init__(self, message: str, field: Optional[str] = None, **details):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details={"field": field, **details} if field else details,
            status_code=400,
        )


class PayloadTooLargeError(ParcelIQError):
    """Raised when a request body exceeds the configured cap"""

    def __init__(self, limit_bytes: int):
        super().__init__(
            message=f"Request body exceeds {limit_bytes} bytes",
            error_code="PAYLOAD_TOO_LARGE",
            details={"limit_bytes": limit_bytes},
            status_code=413,
        )


class ConfigurationError(ParcelIQError):
    """Raised when configuration is invalid or missing"""

    def __init__(self, message: str, setting: Optional[str] = None, status_code: int = 500):
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details={"setting": setting} if setting else {},
            status_code=status_code,
        )
