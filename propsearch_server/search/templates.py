"""
Template introspection: find the mustache placeholders a stored search
template declares.
"""
import json
import logging
import re
from typing import Any, Mapping, Set

from ..models.schema import TemplateParameters
from ..retrievers.base import SearchBackend

logger = logging.getLogger("propsearch")

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([a-zA-Z0-9_]+)\s*\}\}")
SOURCE_NOT_AVAILABLE = "Template source not available"

PARAMETER_DESCRIPTIONS = """- query: Main search query (mandatory)
- latitude: Geographic latitude coordinate
- longitude: Geographic longitude coordinate
- bathrooms: Number of bathrooms
- tax: Real estate tax amount
- maintenance: Maintenance fee amount
- square_footage: Property square footage
- home_price: Max home price. Not a range, just a number
- features: Home features such as AC, pool, updated kitches, etc. the features should be enclosed in *. For example features such as pool and updated kitchen should be formated as *pool*updated kitchen*"""


def extract_template_parameters(source: str) -> Set[str]:
    """
    "{{query}} and {{  lat  }}" -> {"query", "lat"}
    """
    return set(PLACEHOLDER_PATTERN.findall(source or ""))


def extract_script_source(response: Any) -> str:
    """Pull `script.source` out of a `GET _scripts/<id>` response."""
    if isinstance(response, Mapping) and "script" in response:
        script = response["script"]
        if isinstance(script, Mapping) and "source" in script:
            source = script["source"]
            # mustache templates stored as objects come back as JSON
            return source if isinstance(source, str) else json.dumps(source)
    return SOURCE_NOT_AVAILABLE


async def get_template_parameters(backend: SearchBackend, template_id: str) -> TemplateParameters:
    """
    Fetch a stored template and list its placeholder names.

    A response without a script source is logged and yields no names; backend
    failures propagate to the tool boundary.
    """
    response = await backend.get_script(template_id)
    source = extract_script_source(response)
    if source == SOURCE_NOT_AVAILABLE:
        logger.info(f"Template {template_id} structure: {json.dumps(response, default=str)}")

    names = extract_template_parameters(source)
    logger.info(f"Found parameters for template {template_id}: {', '.join(sorted(names))}")
    return {"names": names, "descriptions": PARAMETER_DESCRIPTIONS}
