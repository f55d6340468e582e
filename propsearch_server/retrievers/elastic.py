import logging
from typing import Any, Dict, Mapping, Optional

from elasticsearch import AsyncElasticsearch

from ..core.config import PropsearchConfig

_JSON_HEADERS = {"accept": "application/json", "content-type": "application/json"}

# Client-side slack on top of the server-side inference timeout.
INFER_REQUEST_MARGIN_SECONDS = 5


def _body(response: Any) -> Dict[str, Any]:
    """ObjectApiResponse -> plain dict."""
    body = getattr(response, "body", response)
    return dict(body) if isinstance(body, Mapping) else {"response": body}


class ElasticsearchRetriever:
    """
    Thin adapter over AsyncElasticsearch used by every tool.

    The client handle is created once at startup and shared read-only.
    """

    def __init__(self, client: AsyncElasticsearch) -> None:
        self.client = client

    @classmethod
    def from_config(cls, config: PropsearchConfig) -> "ElasticsearchRetriever":
        options = config.client_options()
        auth = "api_key" if "api_key" in options else ("basic" if "basic_auth" in options else "none")
        logging.getLogger("propsearch").info(f"Connecting to Elasticsearch at {config.url} (auth: {auth})")
        return cls(AsyncElasticsearch(**options))

    async def get_script(self, template_id: str) -> Dict[str, Any]:
        response = await self.client.get_script(id=template_id)
        return _body(response)

    async def search_template(
        self, index: str, template_id: str, params: Mapping[str, Any]
    ) -> Dict[str, Any]:
        response = await self.client.search_template(index=index, id=template_id, params=dict(params))
        return _body(response)

    async def infer(
        self,
        inference_id: str,
        body: Mapping[str, Any],
        timeout_seconds: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        POST /_inference/{inference_id}.

        With `timeout_seconds`, the cluster is asked to wait that long for the
        endpoint and the client waits a little longer than the cluster does.
        """
        client = self.client
        params = None
        if timeout_seconds is not None:
            params = {"timeout": f"{timeout_seconds}s"}
            client = client.options(request_timeout=timeout_seconds + INFER_REQUEST_MARGIN_SECONDS)
        response = await client.perform_request(
            "POST",
            f"/_inference/{inference_id}",
            params=params,
            headers=_JSON_HEADERS,
            body=dict(body),
        )
        return _body(response)

    async def close(self) -> None:
        await self.client.close()
