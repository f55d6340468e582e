"""
Search execution module: run the properties search template and shape hits
into text fragments.
"""
import json
import logging
from typing import Any, Dict, List, Mapping

from ..core.config import PROPERTIES_INDEX, PROPERTIES_SEARCH_TEMPLATE
from ..models.schema import SearchMetadata, SearchParams, SearchResult
from ..retrievers.base import SearchBackend
from .normalizer import normalize_params

logger = logging.getLogger("propsearch")

MAX_SHOWN_RESULTS = 5


def _whole_floats_as_int(value: Any) -> Any:
    # 1e21 and up is exponent notation in JSON.stringify, keep those as floats
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    if isinstance(value, Mapping):
        return {key: _whole_floats_as_int(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_whole_floats_as_int(item) for item in value]
    return value


def to_json(value: Any) -> str:
    """Compact JSON text; whole-number floats are written without a fraction (`1.0` -> `1`)."""
    return json.dumps(_whole_floats_as_int(value), ensure_ascii=False, separators=(",", ":"))


def extract_total(hits: Mapping[str, Any]) -> int:
    """`hits.total` is either a plain number or `{"value": n, "relation": ...}`."""
    total = hits.get("total")
    if isinstance(total, (int, float)) and not isinstance(total, bool):
        return total
    if isinstance(total, Mapping):
        return total.get("value") or 0
    return 0


def format_hit(hit: Mapping[str, Any]) -> str:
    """
    Highlighted fields first, then every source field without a highlight.
    """
    highlighted_fields = hit.get("highlight") or {}
    source_data = hit.get("_source") or {}

    lines: List[str] = []
    for field, highlights in highlighted_fields.items():
        if highlights:
            lines.append(f"{field} (highlighted): {' ... '.join(highlights)}")

    for field, value in source_data.items():
        if field not in highlighted_fields:
            lines.append(f"{field}: {to_json(value)}")

    return "\n".join(lines).strip()


def format_metadata(metadata: SearchMetadata) -> str:
    return (
        f"Total results: {metadata['total']}, showing {metadata['returned']} "
        f"from position {metadata['offset']}. Maximum of {MAX_SHOWN_RESULTS} results are shown "
        "with ALL available property details included. No additional API calls are needed "
        "to get more details about these properties."
    )


def shape_response(response: Mapping[str, Any], offset: Any = 0) -> SearchResult:
    hits = response.get("hits") or {}
    hit_list = hits.get("hits") or []
    metadata: SearchMetadata = {
        "total": extract_total(hits),
        "returned": len(hit_list),
        "offset": offset,
    }
    return {
        "metadata": metadata,
        "fragments": [format_hit(hit) for hit in hit_list],
    }


async def run_search(
    backend: SearchBackend,
    index: str,
    template_id: str,
    params: SearchParams,
    original_query: str,
) -> SearchResult:
    """
    Normalize params and execute the properties search template.

    `index` and `template_id` are accepted for interface compatibility only;
    the search always targets the properties index and template.

    Raises:
        Whatever the backend raises; the tool boundary converts it.
    """
    effective_index = PROPERTIES_INDEX
    effective_template_id = PROPERTIES_SEARCH_TEMPLATE
    if (index, template_id) != (effective_index, effective_template_id):
        logger.info(
            f"Requested template {template_id} on index {index}; "
            f"overriding to {effective_template_id} on {effective_index}"
        )

    normalized = normalize_params(params, original_query)

    logger.info(f"Using template ID: {effective_template_id} for index: {effective_index}")
    logger.info(f"Original user query: {original_query}")
    logger.info(f"Normalized parameters: {to_json(normalized)}")

    response: Dict[str, Any] = await backend.search_template(
        effective_index, effective_template_id, normalized
    )
    return shape_response(response, offset=normalized.get("from") or 0)


def render_search_result(result: SearchResult) -> List[str]:
    """Metadata fragment first, then one fragment per hit."""
    return [format_metadata(result["metadata"])] + result["fragments"]
