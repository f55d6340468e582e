import logging
from typing import Any, Dict, Optional

import requests
from anyio import to_thread

from ..core.config import GEOCODING_HTTP_TIMEOUT, GEOCODING_REGION, GEOCODING_URL


class GoogleMapsRetriever:
    """
    Google Maps Geocoding API client.

    `requests` is blocking, so each lookup runs on a worker thread.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        region: str = GEOCODING_REGION,
        base_url: str = GEOCODING_URL,
        timeout: int = GEOCODING_HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.region = region
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, address: str) -> Dict[str, Any]:
        params = {"address": address, "region": self.region, "key": self.api_key}
        response = self.session.get(self.base_url, params=params, timeout=self.timeout)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            logging.getLogger("propsearch").warning(f"Unexpected geocoding payload type: {type(data).__name__}")
            return {}
        return data

    async def lookup(self, address: str) -> Dict[str, Any]:
        return await to_thread.run_sync(lambda: self.fetch(address))
