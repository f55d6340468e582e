"""Models module: data schemas and types."""
from .schema import (
    GeoPoint,
    ParamValue,
    SearchMetadata,
    SearchParams,
    SearchResult,
    TemplateParameters,
    TextFragment,
    ToolResult,
    build_error_result,
    build_tool_result,
    text_fragment,
)

__all__ = [
    "GeoPoint",
    "ParamValue",
    "SearchMetadata",
    "SearchParams",
    "SearchResult",
    "TemplateParameters",
    "TextFragment",
    "ToolResult",
    "build_error_result",
    "build_tool_result",
    "text_fragment",
]
