"""
app/params.py

Turns raw URL query parameters into a SearchParams.
- q  -> query text, kept verbatim
- f  -> offset of the first hit
- s  -> page size
- fa -> number of facet buckets
Numeric fields never fail a request: anything missing, non-numeric or
negative falls back to that field's default, oversized values are clamped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_FROM = 0
DEFAULT_SIZE = 10
DEFAULT_FACET_SIZE = 8

MAX_FROM = 10_000
MAX_SIZE = 1_000
MAX_FACET_SIZE = 1_000

_COUNT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class SearchParams:
    query: str = ""
    from_: int = DEFAULT_FROM
    size: int = DEFAULT_SIZE
    facet_size: int = DEFAULT_FACET_SIZE


def _parse_count(raw: Optional[str], default: int, upper: int) -> int:
    if raw is None:
        return default
    raw = raw.strip()
    # ASCII digits only; int() would also take "1_0" and non-Latin digits
    if not _COUNT_RE.fullmatch(raw):
        return default
    value = int(raw, 10)
    if value < 0:
        return default
    return min(value, upper)


def parse_params(query_params: Mapping[str, str]) -> SearchParams:
    return SearchParams(
        query=query_params.get("q") or "",
        from_=_parse_count(query_params.get("f"), DEFAULT_FROM, MAX_FROM),
        size=_parse_count(query_params.get("s"), DEFAULT_SIZE, MAX_SIZE),
        facet_size=_parse_count(query_params.get("fa"), DEFAULT_FACET_SIZE, MAX_FACET_SIZE),
    )
