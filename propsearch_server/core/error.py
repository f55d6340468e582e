"""
Error management module.
"""
import logging
import traceback
from enum import Enum
from typing import Any, Dict, Optional


class ErrorType(Enum):
    """Error classification types."""
    CONFIGURATION = "configuration"
    EXTERNAL_SERVICE = "external_service"
    NOT_FOUND = "not_found"
    INVALID_PARAMS = "invalid_params"
    UNKNOWN = "unknown"


class PropsearchError(Exception):
    """Base exception for propsearch errors."""

    error_type = ErrorType.UNKNOWN

    def __init__(
        self,
        message: str,
        error_type: Optional[ErrorType] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        if error_type is not None:
            self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "error_type": self.error_type.value,
            "message": str(self),
            "details": self.details,
        }


class ConfigurationError(PropsearchError):
    """Invalid auth combination, missing URL or missing API key."""
    error_type = ErrorType.CONFIGURATION


class ExternalServiceError(PropsearchError):
    """Elasticsearch or geocoding HTTP failure."""
    error_type = ErrorType.EXTERNAL_SERVICE


class GeocodingError(ExternalServiceError):
    """The geocoding provider answered with a status other than OK."""

    def __init__(self, location: str, status: Optional[str], error_message: Optional[str] = None):
        super().__init__(
            f"Geocoding failed: {status or 'Unknown error'} for location \"{location}\"",
            details={"location": location, "status": status, "error_message": error_message},
        )
        self.location = location
        self.status = status
        self.error_message = error_message


class NotFoundError(PropsearchError):
    """Geocoding produced no usable result after all fallback attempts."""
    error_type = ErrorType.NOT_FOUND


def classify_error(error: Exception) -> ErrorType:
    """
    Classify error type from exception.

    Args:
        error: Exception instance

    Returns:
        ErrorType enum value
    """
    if isinstance(error, PropsearchError):
        return error.error_type

    error_str = str(error).lower()
    error_type = type(error).__name__.lower()

    if any(keyword in error_str for keyword in ["invalid", "validation", "parameter", "format"]):
        return ErrorType.INVALID_PARAMS

    if any(
        keyword in error_str or keyword in error_type
        for keyword in ["network", "connection", "timeout", "http", "request", "transport", "api"]
    ):
        return ErrorType.EXTERNAL_SERVICE

    if "notfound" in error_type or "not found" in error_str:
        return ErrorType.NOT_FOUND

    return ErrorType.UNKNOWN


def log_error(
    error: Exception,
    logger: Optional[logging.Logger] = None,
    context: Optional[Dict[str, Any]] = None,
    level: str = "ERROR",
) -> Dict[str, Any]:
    """
    Log error with context and return error info.

    Args:
        error: Exception instance
        logger: Logger instance (if None, uses default)
        context: Additional context information
        level: Logging level

    Returns:
        Dictionary with error information
    """
    if logger is None:
        logger = logging.getLogger("propsearch")

    error_type = classify_error(error)
    if isinstance(error, PropsearchError):
        error_info = error.to_dict()
    else:
        error_info = {"error_type": error_type.value, "message": str(error)}
    error_info["error_class"] = type(error).__name__
    error_info["context"] = context or {}

    log_method = getattr(logger, level.lower(), logger.error)
    prefix = (context or {}).get("operation")
    log_method(f"{prefix}: {error}" if prefix else f"[{error_type.value}] {type(error).__name__}: {error}")

    # Log traceback in debug mode
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Traceback:\n{traceback.format_exc()}")

    return error_info
