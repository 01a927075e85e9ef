"""
Engine-facing request types and the search index port.

Query builders produce a SearchRequest; any index adapter implementing
SearchIndexPort executes it. The index handle is shared by every request
thread, so implementations must be safe for concurrent reads.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Union

from app.schemas import SearchResult


@dataclass(frozen=True)
class QueryStringQuery:
    """Full query-string syntax (field:term, +must, -not, "phrases")."""
    text: str


@dataclass(frozen=True)
class PrefixQuery:
    text: str


@dataclass(frozen=True)
class FuzzyQuery:
    text: str
    fuzziness: int = 2


Query = Union[QueryStringQuery, PrefixQuery, FuzzyQuery]


@dataclass(frozen=True)
class FacetRequest:
    field: str
    size: int


@dataclass(frozen=True)
class SearchRequest:
    query: Query
    from_: int = 0
    size: int = 10
    highlight: bool = False
    facets: Dict[str, FacetRequest] = field(default_factory=dict)


class SearchIndexPort(ABC):
    """Read-only handle over a pre-built index."""

    location: str

    @abstractmethod
    def search(self, request: SearchRequest) -> SearchResult:
        """Run `request`; raise app.errors.SearchError on engine failure."""

    @abstractmethod
    def doc_count(self) -> int:
        ...
