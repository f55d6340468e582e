import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from ..models.schema import ToolResult, build_error_result
from ..retrievers.elastic import ElasticsearchRetriever
from ..retrievers.google_maps import GoogleMapsRetriever
from .config import SERVER_NAME, SERVER_VERSION, PropsearchConfig, load_config
from .logger import bind_loggers, setup_logger
from .readiness import probe_inference_endpoint
from .tools import PropertySearchTools

logger = logging.getLogger("propsearch")

TOOL_DEFINITIONS: List[types.Tool] = [
    types.Tool(
        name="get_properties_template_params",
        description="Get the required parameters for the properties search template",
        inputSchema={"type": "object", "properties": {}},
    ),
    types.Tool(
        name="geocode_location",
        description="Geocode a location string into a geo_point",
        inputSchema={
            "type": "object",
            "properties": {
                "location": {
                    "type": "string",
                    "minLength": 1,
                    "description": "Location as a human-readable string (e.g., 'Surfside Beach, Texas')",
                },
            },
            "required": ["location"],
        },
    ),
    types.Tool(
        name="search_template",
        description="Execute a pre-defined Elasticsearch search template with provided parameters.",
        inputSchema={
            "type": "object",
            "properties": {
                "index": {
                    "type": "string",
                    "minLength": 1,
                    "description": "Name of the Elasticsearch index to search",
                },
                "template_id": {
                    "type": "string",
                    "minLength": 1,
                    "description": "ID of the stored search template to use",
                },
                "params": {
                    "type": "object",
                    "additionalProperties": True,
                    "description": "Parameters to pass to the template",
                },
                "original_query": {
                    "type": "string",
                    "description": "The complete original query from the user",
                },
            },
            "required": ["index", "template_id", "params", "original_query"],
        },
    ),
]

# Keys whose values should be masked when logging the environment
_ENV_MASK_KEYS = frozenset({"ES_API_KEY", "ES_PASSWORD", "GOOGLE_MAPS_API_KEY"})
_ENV_KEYS = [
    "ES_URL", "ES_API_KEY", "ES_USERNAME", "ES_PASSWORD", "ES_CA_CERT",
    "GOOGLE_MAPS_API_KEY", "PROPERTIES_SEARCH_TEMPLATE", "ELSER_INFERENCE_ID",
]


def tool_handlers(tools: PropertySearchTools) -> Dict[str, Callable[..., Awaitable[ToolResult]]]:
    return {
        "get_properties_template_params": lambda args: tools.get_properties_template_params(),
        "geocode_location": lambda args: tools.geocode_location(args.get("location", "")),
        "search_template": lambda args: tools.search_template(
            index=args.get("index", ""),
            template_id=args.get("template_id", ""),
            params=args.get("params") or {},
            original_query=args.get("original_query", ""),
        ),
    }


async def dispatch(
    tools: PropertySearchTools, name: str, arguments: Optional[Dict[str, Any]]
) -> ToolResult:
    handler = tool_handlers(tools).get(name)
    if handler is None:
        logger.error(f"Unknown tool: {name}")
        return build_error_result(f"Error: Unknown tool: {name}")
    return await handler(arguments or {})


def to_mcp_result(result: ToolResult):
    """
    ToolResult -> what the low-level server's call_tool handler returns:
    a content list, or (content, structured) when the tool has data.
    """
    content = [types.TextContent(type="text", text=f["text"]) for f in result.get("content", [])]
    data = result.get("data")
    if data is not None:
        return content, data
    return content


def build_server(tools: PropertySearchTools) -> Server:
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return TOOL_DEFINITIONS

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]):
        return to_mcp_result(await dispatch(tools, name, arguments))

    return server


def log_startup_env() -> None:
    """
    Log the relevant environment variables, masking secrets.
    """
    for k in _ENV_KEYS:
        v = os.getenv(k)
        if v is None or v == "":
            logger.info(f"{k}= (unset)")
        elif k in _ENV_MASK_KEYS:
            logger.info(f"{k}= *** (set)")
        else:
            logger.info(f"{k}= {v}")


async def serve(config: PropsearchConfig) -> None:
    """
    Build the clients and serve the tools over stdio until stdin closes.

    The readiness probe runs beside the server and never delays tool calls.
    """
    backend = ElasticsearchRetriever.from_config(config)
    geocoder = GoogleMapsRetriever(config.google_maps_api_key)
    server = build_server(PropertySearchTools(config, backend, geocoder))

    probe: Optional[asyncio.Task] = None
    try:
        async with stdio_server() as (read_stream, write_stream):
            probe = asyncio.create_task(probe_inference_endpoint(backend, config.inference_id))
            logger.info(f"Starting {SERVER_NAME} {SERVER_VERSION} on stdio...")
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        if probe is not None and not probe.done():
            probe.cancel()
        await backend.close()


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Real-estate search MCP server (stdio)")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional log file; logs always go to stderr as well",
    )
    args, _unknown = parser.parse_known_args(argv)
    return args


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    log = setup_logger(
        name="propsearch",
        level=args.log_level,
        log_file=Path(args.log_file) if args.log_file else None,
    )
    bind_loggers(log)

    try:
        config = load_config()
        log_startup_env()
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        log.info("Interrupted, shutting down")
        sys.exit(0)
    except Exception as e:
        log.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
