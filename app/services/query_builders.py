"""
Query builders: one per search mode.

Each takes the parsed SearchParams and returns a fresh SearchRequest for the
index port. The route decides which builder runs; nothing in the params
selects the mode. Prefix and fuzzy lower-case the query so matching is
case-insensitive; the query-string mode keeps it as typed and is the only
mode that asks for facets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from app.params import SearchParams
from app.ports import (
    FacetRequest,
    FuzzyQuery,
    PrefixQuery,
    QueryStringQuery,
    SearchRequest,
)


@dataclass(frozen=True)
class QueryOptions:
    fuzziness: int = 2
    facet_name: str = "Date"
    facet_field: str = "Date"


DEFAULT_OPTIONS = QueryOptions()


def build_standard(params: SearchParams, options: QueryOptions = DEFAULT_OPTIONS) -> SearchRequest:
    return SearchRequest(
        query=QueryStringQuery(params.query),
        from_=params.from_,
        size=params.size,
        facets={options.facet_name: FacetRequest(field=options.facet_field, size=params.facet_size)},
    )


def build_prefix(params: SearchParams, options: QueryOptions = DEFAULT_OPTIONS) -> SearchRequest:
    return SearchRequest(
        query=PrefixQuery(params.query.lower()),
        from_=params.from_,
        size=params.size,
        highlight=False,
    )


def build_fuzzy(params: SearchParams, options: QueryOptions = DEFAULT_OPTIONS) -> SearchRequest:
    return SearchRequest(
        query=FuzzyQuery(params.query.lower(), fuzziness=options.fuzziness),
        from_=params.from_,
        size=params.size,
        highlight=True,
    )


Builder = Callable[[SearchParams, QueryOptions], SearchRequest]

BUILDERS: Dict[str, Builder] = {
    "search": build_standard,
    "prefix": build_prefix,
    "fuzzy": build_fuzzy,
}
