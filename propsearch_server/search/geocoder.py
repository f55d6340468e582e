"""
Geocoding with fallback query rewrites for ambiguous or empty answers.
"""
import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from ..core.error import ConfigurationError, GeocodingError, NotFoundError
from ..models.schema import GeoPoint
from ..retrievers.base import GeocodingProvider

logger = logging.getLogger("propsearch")


def _first_result(payload: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    results = (payload or {}).get("results") or []
    return results[0] if results else None


def fallback_queries(location: str) -> List[str]:
    """
    Rewrites tried, in order, when the primary query comes back empty.

    "Surfside Beach, TX" -> ["Surfside Beach, Texas", "Surfside Beach"]
    """
    queries: List[str] = []
    if "TX" in location:
        queries.append(location.replace("TX", "Texas", 1))
    comma = location.rfind(",")
    if comma > 0:
        queries.append(location[:comma].strip())
    return queries


def to_geo_point(result: Optional[Mapping[str, Any]]) -> Optional[GeoPoint]:
    """Provider `{lat, lng}` -> `{latitude, longitude}`."""
    point = ((result or {}).get("geometry") or {}).get("location")
    if not point:
        return None
    return {"latitude": point.get("lat"), "longitude": point.get("lng")}


async def geocode(provider: GeocodingProvider, location: str) -> GeoPoint:
    """
    Resolve a free-text location into a GeoPoint.

    Raises:
        ConfigurationError: no API key configured
        GeocodingError: the primary query came back with a status other than OK
        NotFoundError: nothing usable after the fallback rewrites
    """
    if not provider.api_key:
        raise ConfigurationError("Google Maps API key not configured")

    logger.info(f'Attempting to geocode: "{location}"')
    payload = await provider.lookup(location)
    status = (payload or {}).get("status")
    logger.info(f"Geocoding status: {status}")

    if status != "OK":
        error_message = (payload or {}).get("error_message")
        logger.error(f"Google API error: {status} - {error_message or 'No detailed error message'}")
        raise GeocodingError(location, status, error_message)

    result = _first_result(payload)
    if not result:
        logger.info("No results found, trying variations...")
        for fallback in fallback_queries(location):
            logger.info(f'Trying fallback: "{fallback}"')
            result = _first_result(await provider.lookup(fallback))
            if result:
                break

    geo_point = to_geo_point(result)
    if geo_point is None:
        logger.error("No geocoding results found after all attempts")
        raise NotFoundError(f'Could not geocode location: "{location}"', details={"location": location})

    logger.info(f"Successfully geocoded to: {json.dumps(geo_point)}")
    return geo_point
