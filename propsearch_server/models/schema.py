from typing import Any, Dict, List, Literal, Optional, Set, TypedDict, Union

# JSON scalar kinds a template parameter may carry; nested JSON passes through untouched.
ParamValue = Union[str, int, float, bool, None, List[Any], Dict[str, Any]]
SearchParams = Dict[str, ParamValue]


class GeoPoint(TypedDict):
    latitude: float
    longitude: float


class TextFragment(TypedDict):
    type: Literal["text"]
    text: str


class SearchMetadata(TypedDict):
    total: int
    returned: int
    offset: Any


class SearchResult(TypedDict):
    metadata: SearchMetadata
    fragments: List[str]


class TemplateParameters(TypedDict):
    names: Set[str]
    descriptions: str


class ToolResult(TypedDict, total=False):
    content: List[TextFragment]
    data: Dict[str, Any]


def text_fragment(text: str) -> TextFragment:
    return {"type": "text", "text": text}


def build_tool_result(texts: List[str], data: Optional[Dict[str, Any]] = None) -> ToolResult:
    result: ToolResult = {"content": [text_fragment(t) for t in texts]}
    if data is not None:
        result["data"] = data
    return result


def build_error_result(message: str) -> ToolResult:
    return build_tool_result([message])
