import asyncio

import mcp.types as types
import pytest
from conftest import FakeBackend, FakeGeocoder, ok

from propsearch_server.core import server as server_module
from propsearch_server.core.error import ConfigurationError
from propsearch_server.core.server import (
    TOOL_DEFINITIONS,
    build_server,
    dispatch,
    parse_args,
    to_mcp_result,
)
from propsearch_server.core.tools import PropertySearchTools


@pytest.fixture
def tools(config) -> PropertySearchTools:
    backend = FakeBackend(script={"script": {"source": "{{query}}"}})
    return PropertySearchTools(config, backend, FakeGeocoder({"Austin": ok(30.3, -97.7)}))


def test_three_tools_are_declared() -> None:
    names = [tool.name for tool in TOOL_DEFINITIONS]
    assert names == ["get_properties_template_params", "geocode_location", "search_template"]
    search = TOOL_DEFINITIONS[2].inputSchema
    assert search["required"] == ["index", "template_id", "params", "original_query"]
    assert TOOL_DEFINITIONS[1].inputSchema["properties"]["location"]["minLength"] == 1


def test_dispatch_routes_by_name(tools) -> None:
    result = asyncio.run(dispatch(tools, "geocode_location", {"location": "Austin"}))
    assert result["data"] == {"latitude": 30.3, "longitude": -97.7}

    result = asyncio.run(
        dispatch(
            tools,
            "search_template",
            {"index": "x", "template_id": "y", "params": {"distance": 5}, "original_query": "q"},
        )
    )
    assert tools.backend.calls[-1][3]["distance"] == "5miles"


def test_dispatch_unknown_tool_is_an_error_result(tools) -> None:
    result = asyncio.run(dispatch(tools, "drop_index", {}))
    assert result["content"][0]["text"] == "Error: Unknown tool: drop_index"


def test_structured_data_becomes_second_element(tools) -> None:
    content, data = to_mcp_result(asyncio.run(dispatch(tools, "get_properties_template_params", None)))
    assert all(isinstance(c, types.TextContent) for c in content)
    assert data == {"parameters": ["query"]}


def test_text_only_results_stay_a_list() -> None:
    result = to_mcp_result({"content": [{"type": "text", "text": "Error: boom"}]})
    assert isinstance(result, list)
    assert result[0].text == "Error: boom"


def test_build_server_names_itself(tools) -> None:
    server = build_server(tools)
    assert server.name == "propsearch-server"
    assert types.ListToolsRequest in server.request_handlers
    assert types.CallToolRequest in server.request_handlers


def test_parse_args_ignores_unknown_flags() -> None:
    args = parse_args(["--log-level", "DEBUG", "--something-else"])
    assert args.log_level == "DEBUG"
    assert args.log_file is None


def test_main_exits_1_on_startup_failure(monkeypatch) -> None:
    def _fail():
        raise ConfigurationError("Invalid configuration (url): Elasticsearch URL cannot be empty")

    monkeypatch.setattr(server_module, "load_config", _fail)
    with pytest.raises(SystemExit) as excinfo:
        server_module.main([])
    assert excinfo.value.code == 1


def test_main_exits_0_on_interrupt(monkeypatch, config) -> None:
    async def _interrupted(cfg):
        raise KeyboardInterrupt

    monkeypatch.setattr(server_module, "load_config", lambda: config)
    monkeypatch.setattr(server_module, "serve", _interrupted)
    with pytest.raises(SystemExit) as excinfo:
        server_module.main([])
    assert excinfo.value.code == 0
