"""Search module: parameter normalization, template introspection, geocoding and execution."""
from .geocoder import fallback_queries, geocode, to_geo_point
from .normalizer import normalize_distance, normalize_home_price, normalize_params
from .searcher import (
    format_hit,
    format_metadata,
    render_search_result,
    run_search,
    shape_response,
    to_json,
)
from .templates import PARAMETER_DESCRIPTIONS, extract_template_parameters, get_template_parameters

__all__ = [
    "PARAMETER_DESCRIPTIONS",
    "extract_template_parameters",
    "fallback_queries",
    "format_hit",
    "format_metadata",
    "geocode",
    "get_template_parameters",
    "normalize_distance",
    "normalize_home_price",
    "normalize_params",
    "render_search_result",
    "run_search",
    "shape_response",
    "to_geo_point",
    "to_json",
]
