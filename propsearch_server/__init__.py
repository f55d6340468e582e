"""propsearch - real-estate search tools served over MCP stdio."""
from .core.config import (
    PROPERTIES_INDEX,
    PROPERTIES_SEARCH_TEMPLATE,
    SERVER_NAME,
    SERVER_VERSION,
    PropsearchConfig,
    load_config,
)
from .core.server import build_server, main
from .core.tools import PropertySearchTools

__all__ = [
    "PROPERTIES_INDEX",
    "PROPERTIES_SEARCH_TEMPLATE",
    "SERVER_NAME",
    "SERVER_VERSION",
    "PropsearchConfig",
    "PropertySearchTools",
    "build_server",
    "load_config",
    "main",
]
