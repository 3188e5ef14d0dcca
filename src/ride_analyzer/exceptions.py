"""
Custom exceptions for the Ride Analyzer.

This module defines a hierarchy of exceptions that provide clear error
handling throughout the application. Each exception includes:
- A descriptive message
- An error code for API responses
- HTTP status code mapping
- Optional details for debugging
"""

import math
from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent API error responses."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Metrics errors
    INVALID_NORMALIZATION_REFERENCE = "INVALID_NORMALIZATION_REFERENCE"
    INSUFFICIENT_TRAINING_DATA = "INSUFFICIENT_TRAINING_DATA"

    # FIT errors
    FIT_DECODING_ERROR = "FIT_DECODING_ERROR"


class RideAnalyzerError(Exception):
    """
    Base exception for all Ride Analyzer errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        status_code: HTTP status code for API responses
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors (400 / 422)
# ============================================================================

class ValidationError(RideAnalyzerError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=error_details,
        )


class InvalidNormalizationReferenceError(ValidationError):
    """Raised when a maximum used for normalization is zero, negative or not finite."""

    def __init__(
        self,
        field: str,
        value: float,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        error_details["value"] = value if math.isfinite(value) else repr(value)
        super().__init__(
            message=f"Normalization reference '{field}' must be a positive number, got {value}",
            field=field,
            details=error_details,
        )
        self.code = ErrorCode.INVALID_NORMALIZATION_REFERENCE
        self.status_code = 422


# ============================================================================
# Data Errors (422)
# ============================================================================

class TrainingDataError(RideAnalyzerError):
    """Raised when the supplied training data cannot produce a result."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.INSUFFICIENT_TRAINING_DATA,
            status_code=422,
            details=details,
        )


# ============================================================================
# FIT Errors
# ============================================================================

class FITError(RideAnalyzerError):
    """Base class for FIT file errors."""
    pass


class FITDecodingError(FITError):
    """Raised when a FIT file cannot be decoded."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.FIT_DECODING_ERROR,
            status_code=400,
            details=details,
        )
