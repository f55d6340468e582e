"""
Shared fakes for the search backend and geocoding provider.
"""
import logging
from typing import Any, Dict, List, Optional

import pytest

from propsearch_server.core.config import PropsearchConfig


class FakeBackend:
    def __init__(
        self,
        script: Optional[Dict[str, Any]] = None,
        search_response: Optional[Dict[str, Any]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.script = script or {}
        self.search_response = search_response or {"hits": {"total": 0, "hits": []}}
        self.error = error
        self.calls: List[tuple] = []
        self.closed = False

    async def get_script(self, template_id: str) -> Dict[str, Any]:
        self.calls.append(("get_script", template_id))
        if self.error:
            raise self.error
        return self.script

    async def search_template(self, index, template_id, params) -> Dict[str, Any]:
        self.calls.append(("search_template", index, template_id, dict(params)))
        if self.error:
            raise self.error
        return self.search_response

    async def infer(self, inference_id, body, timeout_seconds=None) -> Dict[str, Any]:
        self.calls.append(("infer", inference_id, dict(body), timeout_seconds))
        if self.error:
            raise self.error
        return {"sparse_embedding": []}

    async def close(self) -> None:
        self.closed = True


class FakeGeocoder:
    """Answers lookups from a dict of address -> payload; unknown addresses are empty."""

    def __init__(self, responses: Dict[str, Dict[str, Any]], api_key: Optional[str] = "maps-key") -> None:
        self.responses = responses
        self.api_key = api_key
        self.queries: List[str] = []

    async def lookup(self, address: str) -> Dict[str, Any]:
        self.queries.append(address)
        response = self.responses.get(address, {"status": "ZERO_RESULTS", "results": []})
        if isinstance(response, Exception):
            raise response
        return response


def ok(lat: float, lng: float) -> Dict[str, Any]:
    return {"status": "OK", "results": [{"geometry": {"location": {"lat": lat, "lng": lng}}}]}


EMPTY_OK = {"status": "OK", "results": []}


@pytest.fixture
def config() -> PropsearchConfig:
    return PropsearchConfig(url="http://localhost:9200", google_maps_api_key="maps-key")


@pytest.fixture(autouse=True)
def restore_root_handlers():
    root = logging.getLogger()
    saved = list(root.handlers)
    yield
    root.handlers[:] = saved
