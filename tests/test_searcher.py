import asyncio

from conftest import FakeBackend

from propsearch_server.search.searcher import (
    extract_total,
    format_hit,
    format_metadata,
    render_search_result,
    run_search,
    shape_response,
    to_json,
)

SEARCH_RESPONSE = {
    "hits": {
        "total": {"value": 42, "relation": "eq"},
        "hits": [
            {
                "_source": {"title": "Beach house", "home_price": 450000, "features": ["pool", "AC"]},
                "highlight": {"title": ["<em>Beach</em> house"], "empty": []},
            },
            {"_source": {"title": "Condo", "city": "Surfside Beach"}},
        ],
    }
}


def test_format_hit_prefers_highlights() -> None:
    text = format_hit(
        {
            "_source": {"title": "Beach house", "home_price": 450000},
            "highlight": {"title": ["<em>Beach</em> house", "big <em>beach</em>"]},
        }
    )
    assert text == (
        "title (highlighted): <em>Beach</em> house ... big <em>beach</em>\n"
        "home_price: 450000"
    )


def test_format_hit_skips_empty_highlights_and_serializes_json() -> None:
    text = format_hit(
        {
            "_source": {"title": "Beach house", "features": ["pool", "AC"], "city": "Köln"},
            "highlight": {"title": []},
        }
    )
    # title is in the highlight map, so it is not repeated from _source
    assert text == 'features: ["pool","AC"]\ncity: "Köln"'


def test_whole_number_floats_render_without_fraction() -> None:
    text = format_hit(
        {"_source": {"bedrooms": 3.0, "location": {"lat": 29.0, "lon": -95.5}, "sizes": [1.0, 2.5], "flag": True}}
    )
    assert text == 'bedrooms: 3\nlocation: {"lat":29,"lon":-95.5}\nsizes: [1,2.5]\nflag: true'
    assert to_json(1e21) == "1e+21"


def test_extract_total_supports_plain_and_wrapped_totals() -> None:
    assert extract_total({"total": 7}) == 7
    assert extract_total({"total": {"value": 42}}) == 42
    assert extract_total({}) == 0


def test_metadata_fragment_text() -> None:
    text = format_metadata({"total": 42, "returned": 5, "offset": 10})
    assert text.startswith("Total results: 42, showing 5 from position 10.")
    assert "Maximum of 5 results are shown" in text


def test_shape_response_counts_hits() -> None:
    result = shape_response(SEARCH_RESPONSE, offset=0)
    assert result["metadata"] == {"total": 42, "returned": 2, "offset": 0}
    assert result["fragments"][1] == 'title: "Condo"\ncity: "Surfside Beach"'


def test_run_search_overrides_routing_and_normalizes() -> None:
    backend = FakeBackend(search_response=SEARCH_RESPONSE)
    result = asyncio.run(
        run_search(
            backend,
            index="homes",
            template_id="my-template",
            params={"distance": "5mi", "home_price": "0-500000", "from": 10},
            original_query="beach house under 500k",
        )
    )

    call = backend.calls[0]
    assert call[:3] == ("search_template", "properties", "properties-search-template")
    assert call[3] == {
        "query": "beach house under 500k",
        "distance": "5miles",
        "home_price": 500000,
        "from": 10,
    }
    fragments = render_search_result(result)
    assert fragments[0].startswith("Total results: 42, showing 2 from position 10.")
    assert fragments[1].startswith("title (highlighted): <em>Beach</em> house")
    assert len(fragments) == 3


def test_run_search_defaults_offset_to_zero() -> None:
    backend = FakeBackend(search_response={"hits": {"total": 3, "hits": []}})
    result = asyncio.run(run_search(backend, "properties", "properties-search-template", {}, "q"))
    assert render_search_result(result) == [format_metadata({"total": 3, "returned": 0, "offset": 0})]
