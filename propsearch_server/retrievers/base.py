"""
Capability interfaces for the external services the tools consume.
"""
from typing import Any, Dict, Mapping, Optional, Protocol


class SearchBackend(Protocol):
    """
    Protocol defining the search engine calls the tools need.
    """
    async def get_script(self, template_id: str) -> Dict[str, Any]:
        ...

    async def search_template(
        self, index: str, template_id: str, params: Mapping[str, Any]
    ) -> Dict[str, Any]:
        ...

    async def infer(
        self,
        inference_id: str,
        body: Mapping[str, Any],
        timeout_seconds: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Run an inference call, waiting at most `timeout_seconds` for the endpoint."""
        ...

    async def close(self) -> None:
        ...


class GeocodingProvider(Protocol):
    """
    Protocol for a geocoding service; `lookup` returns the provider payload
    (`{"status": ..., "results": [...]}`).
    """
    api_key: Optional[str]

    async def lookup(self, address: str) -> Dict[str, Any]:
        ...
