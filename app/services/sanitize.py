"""
Redaction applied to every result before it is serialized.
"""

from __future__ import annotations

from app.schemas import SearchResult


def strip_index_locations(result: SearchResult) -> SearchResult:
    """
    Return a copy of `result` with each hit's index location cleared.

    The location names the index that produced a hit and means nothing to
    clients. Applying this twice gives the same result as applying it once.
    """
    hits = [hit.model_copy(update={"index": None}) for hit in result.hits]
    return result.model_copy(update={"hits": hits})
