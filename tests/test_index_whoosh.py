import pytest

from app.adapters.index_whoosh import WhooshIndexAdapter
from app.errors import IndexUnavailable, SearchError
from app.params import SearchParams
from app.ports import FacetRequest, QueryStringQuery, SearchRequest
from app.services.query_builders import build_fuzzy, build_prefix, build_standard


def _ids(result):
    return {hit.id for hit in result.hits}


def test_open_missing_directory(tmp_path):
    with pytest.raises(IndexUnavailable):
        WhooshIndexAdapter.open(tmp_path / "nope")


def test_doc_count(index):
    assert index.doc_count() == 5


def test_standard_hits_are_ranked_and_paged(index):
    result = index.search(build_standard(SearchParams(query="cat", size=10, facet_size=8)))
    scores = [hit.score for hit in result.hits]
    assert _ids(result) == {"d1", "d2", "d5"}
    assert scores == sorted(scores, reverse=True)
    assert len(result.hits) <= 10
    assert result.max_score == scores[0]
    assert len(result.facets["Date"].terms) <= 8
    assert result.facets["Date"].terms[0].term == "1921"
    assert result.facets["Date"].terms[0].count == 2


def test_hits_carry_location_and_stored_fields(index):
    result = index.search(build_standard(SearchParams(query="market")))
    hit = result.hits[0]
    assert hit.id == "d4"
    assert hit.index == index.location
    assert hit.fields["title"] == "Market report"
    assert hit.fields["Date"] == "1948"


def test_pagination_offsets_the_ranked_list(index):
    full = index.search(build_standard(SearchParams(query="harbour OR market OR letters OR parrot")))
    page = index.search(build_standard(SearchParams(query="harbour OR market OR letters OR parrot", from_=1, size=2)))
    assert full.total_hits == page.total_hits == 5
    assert [h.id for h in page.hits] == [h.id for h in full.hits[1:3]]


def test_facet_buckets_are_bounded(index):
    result = index.search(build_standard(SearchParams(query="harbour OR market OR letters OR parrot", facet_size=2)))
    facet = result.facets["Date"]
    assert [(t.term, t.count) for t in facet.terms] == [("1921", 2), ("1935", 1)]
    assert facet.total == 4
    assert facet.other == 1
    assert facet.missing == 1


def test_facet_on_unknown_field_counts_everything_missing(index):
    request = SearchRequest(
        query=QueryStringQuery("cat"),
        facets={"Year": FacetRequest(field="published", size=5)},
    )
    facet = index.search(request).facets["Year"]
    assert facet.terms == []
    assert facet.missing == 3


def test_field_syntax_in_query_string(index):
    result = index.search(build_standard(SearchParams(query="title:catalogue")))
    assert _ids(result) == {"d3"}


def test_prefix_is_case_insensitive(index):
    upper = index.search(build_prefix(SearchParams(query="Cat")))
    lower = index.search(build_prefix(SearchParams(query="cat")))
    assert _ids(upper) == _ids(lower) == {"d1", "d2", "d3", "d5"}
    assert all(not hit.fragments for hit in upper.hits)
    assert upper.facets is None


def test_fuzzy_matches_within_two_edits(index):
    result = index.search(build_fuzzy(SearchParams(query="Harbor")))
    assert _ids(result) == {"d1", "d2"}
    assert any(hit.fragments for hit in result.hits)


def test_fuzzy_misses_beyond_two_edits(index):
    result = index.search(build_fuzzy(SearchParams(query="hxxbxur")))
    assert result.total_hits == 0
    assert result.hits == []


@pytest.mark.parametrize("build", [build_standard, build_prefix, build_fuzzy])
def test_blank_query_matches_nothing(index, build):
    result = index.search(build(SearchParams(query="   ")))
    assert result.total_hits == 0
    assert result.hits == []


def test_engine_failures_are_wrapped(index, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("segment file vanished")

    monkeypatch.setattr(index.index, "searcher", explode)
    with pytest.raises(SearchError) as exc_info:
        index.search(build_standard(SearchParams(query="cat")))
    assert "segment file vanished" in exc_info.value.message
