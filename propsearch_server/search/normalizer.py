"""
Normalizer module: reshape caller parameters into what the properties
search template expects.
"""
import logging
import math
import re
from typing import Any, Optional, Union

from ..models.schema import ParamValue, SearchParams

logger = logging.getLogger("propsearch")

_DIGITS = re.compile(r"[0-9]+")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _format_number(value: Union[int, float]) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _parse_number(text: str) -> Optional[Union[int, float]]:
    """Numeric string -> int/float, anything else (including inf/nan) -> None."""
    s = text.strip()
    if not s:
        return None
    try:
        number = float(s)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def normalize_distance(distance: ParamValue) -> ParamValue:
    """
    Give a distance an explicit unit, defaulting to miles.

    5 -> "5miles", "5" -> "5miles", "5mi" -> "5miles",
    "5km" and "5miles" are left alone.
    """
    if not distance:
        return distance
    if _is_number(distance):
        return f"{_format_number(distance)}miles"
    if not isinstance(distance, str):
        return distance
    if _DIGITS.fullmatch(distance):
        return f"{distance}miles"
    if distance.endswith("mi") and not distance.endswith("miles"):
        return f"{distance[:-2]}miles"
    if "miles" not in distance and "km" not in distance:
        return f"{distance}miles"
    return distance


def normalize_home_price(home_price: ParamValue) -> ParamValue:
    """
    The template takes a max price, not a range: "0-500000" -> 500000.
    """
    if not home_price or not isinstance(home_price, str) or "-" not in home_price:
        return home_price
    upper = _parse_number(home_price.rsplit("-", 1)[1])
    if upper is None:
        return home_price
    return upper


def normalize_params(params: SearchParams, original_query: str) -> SearchParams:
    """
    Normalize template parameters on a shallow copy; `params` is not modified.

    Steps, in order:
    1. `query` becomes the full original query
    2. `lat`/`lon` are copied to `latitude`/`longitude` (originals kept)
    3. `distance` gets a unit
    4. `home_price` ranges collapse to their upper bound
    """
    normalized: SearchParams = dict(params or {})

    normalized["query"] = original_query

    if "lat" in normalized and "lon" in normalized:
        logger.info("Converting lat/lon to latitude/longitude")
        normalized["latitude"] = normalized["lat"]
        normalized["longitude"] = normalized["lon"]

    if "distance" in normalized:
        distance = normalize_distance(normalized["distance"])
        if distance != normalized["distance"]:
            logger.info(f"Normalized distance: {distance}")
            normalized["distance"] = distance

    if "home_price" in normalized:
        home_price = normalize_home_price(normalized["home_price"])
        if home_price is not normalized["home_price"]:
            logger.info(f"Extracted upper limit from home_price range: {home_price}")
            normalized["home_price"] = home_price

    return normalized
