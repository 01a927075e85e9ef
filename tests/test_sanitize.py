import json

from app.schemas import FacetResult, FacetTerm, SearchHit, SearchResult
from app.services.sanitize import strip_index_locations


def _result() -> SearchResult:
    return SearchResult(
        total_hits=2,
        max_score=1.5,
        took_ms=3,
        hits=[
            SearchHit(id="d1", score=1.5, index="data/index", fields={"title": "The harbour cat", "Date": "1921"}),
            SearchHit(id="d2", score=0.7, index="data/index", fields={"title": "Ship arrivals"},
                      fragments={"body": ["one <b>cat</b> arrived"]}),
        ],
        facets={"Date": FacetResult(field="Date", total=1, terms=[FacetTerm(term="1921", count=1)])},
    )


def test_index_location_is_cleared():
    clean = strip_index_locations(_result())
    assert all(hit.index is None for hit in clean.hits)


def test_original_is_untouched():
    result = _result()
    strip_index_locations(result)
    assert result.hits[0].index == "data/index"


def test_idempotent():
    once = strip_index_locations(_result())
    twice = strip_index_locations(once)
    assert once == twice


def test_json_round_trip_drops_only_the_location():
    before = _result().model_dump(mode="json")
    after = json.loads(json.dumps(strip_index_locations(_result()).model_dump(mode="json")))

    for hit_before, hit_after in zip(before["hits"], after["hits"]):
        assert "index" not in hit_after
        hit_before.pop("index")
        assert hit_before == hit_after
    before.pop("hits")
    after.pop("hits")
    assert before == after


def test_facets_absent_when_not_requested():
    payload = SearchResult(total_hits=0).model_dump(mode="json")
    assert "facets" not in payload
