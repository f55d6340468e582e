"""
Tool handlers. Each one wraps its external calls so a failure becomes part
of the normal tool output instead of a transport fault.
"""
import logging
from typing import Any, Dict

from ..models.schema import ToolResult, build_error_result, build_tool_result
from ..retrievers.base import GeocodingProvider, SearchBackend
from ..search.geocoder import geocode
from ..search.searcher import render_search_result, run_search, to_json
from ..search.templates import get_template_parameters
from .config import PropsearchConfig
from .error import ConfigurationError, GeocodingError, NotFoundError, log_error

logger = logging.getLogger("propsearch")


class PropertySearchTools:
    """The three tools, bound to one config and one set of backend clients."""

    def __init__(
        self,
        config: PropsearchConfig,
        backend: SearchBackend,
        geocoder: GeocodingProvider,
    ) -> None:
        self.config = config
        self.backend = backend
        self.geocoder = geocoder

    async def get_properties_template_params(self) -> ToolResult:
        """Get the required parameters for the properties search template."""
        template_id = self.config.properties_search_template
        try:
            template = await get_template_parameters(self.backend, template_id)
        except Exception as e:
            log_error(e, logger, context={"operation": "Failed to get template parameters"})
            return build_error_result(f"Error: {e}")

        parameters = sorted(template["names"])
        return build_tool_result(
            [
                "Required parameters for properties search template:",
                ", ".join(parameters),
                "Parameter descriptions:",
                template["descriptions"],
            ],
            data={"parameters": parameters},
        )

    async def geocode_location(self, location: str) -> ToolResult:
        """Geocode a location string into a geo_point."""
        location = (location or "").strip()
        if not location:
            return build_error_result("Error: Location string is required")

        try:
            geo_point = await geocode(self.geocoder, location)
        except ConfigurationError as e:
            logger.error("No Google Maps API key provided")
            return build_error_result(f"Error: {e}")
        except (GeocodingError, NotFoundError) as e:
            return build_error_result(str(e))
        except Exception as e:
            log_error(e, logger, context={"operation": "Geocoding error"})
            return build_error_result(f"Error: {e}")

        return build_tool_result(
            [f'Geocoded "{location}" to: {to_json(geo_point)}'],
            data=dict(geo_point),
        )

    async def search_template(
        self,
        index: str,
        template_id: str,
        params: Dict[str, Any],
        original_query: str,
    ) -> ToolResult:
        """Execute a pre-defined Elasticsearch search template with provided parameters."""
        try:
            result = await run_search(self.backend, index, template_id, params, original_query)
        except Exception as e:
            log_error(e, logger, context={"operation": "Search template failed"})
            return build_error_result(f"Error: {e}")

        return build_tool_result(render_search_result(result))
