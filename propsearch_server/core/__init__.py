"""Core module: configuration, logging, errors, readiness probe and the MCP server."""
from .config import (
    DEFAULT_INFERENCE_ID,
    DEFAULT_PROPERTIES_SEARCH_TEMPLATE,
    PROPERTIES_INDEX,
    PROPERTIES_SEARCH_TEMPLATE,
    PropsearchConfig,
    get_env_config,
    load_config,
)
from .error import (
    ConfigurationError,
    ErrorType,
    ExternalServiceError,
    GeocodingError,
    NotFoundError,
    PropsearchError,
    classify_error,
    log_error,
)
from .logger import JsonLineFormatter, bind_loggers, setup_logger
from .readiness import check_endpoint, probe_inference_endpoint

__all__ = [
    # Config
    "DEFAULT_INFERENCE_ID",
    "DEFAULT_PROPERTIES_SEARCH_TEMPLATE",
    "PROPERTIES_INDEX",
    "PROPERTIES_SEARCH_TEMPLATE",
    "PropsearchConfig",
    "get_env_config",
    "load_config",
    # Error handling
    "ConfigurationError",
    "ErrorType",
    "ExternalServiceError",
    "GeocodingError",
    "NotFoundError",
    "PropsearchError",
    "classify_error",
    "log_error",
    # Logging
    "JsonLineFormatter",
    "bind_loggers",
    "setup_logger",
    # Readiness
    "check_endpoint",
    "probe_inference_endpoint",
]
