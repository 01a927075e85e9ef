"""
Adapter for a Whoosh index that implements SearchIndexPort.

Translates the three query variants into Whoosh queries over the schema's
TEXT fields, collects facets with FieldFacet counts, and maps Whoosh hits
into the SearchResult contract. One searcher is opened per call, so a single
adapter can be shared by every request thread.
"""

from __future__ import annotations

import logging
from pathlib import Path
from time import perf_counter
from typing import Dict, List, Optional

from whoosh import index as whoosh_index
from whoosh import query as wq
from whoosh import sorting
from whoosh.collectors import TimeLimitCollector
from whoosh.fields import TEXT
from whoosh.qparser import MultifieldParser, OrGroup
from whoosh.searching import TimeLimit

from app.errors import IndexUnavailable, SearchError, SearchTimeout
from app.ports import (
    FacetRequest,
    FuzzyQuery,
    PrefixQuery,
    Query,
    QueryStringQuery,
    SearchIndexPort,
    SearchRequest,
)
from app.schemas import FacetResult, FacetTerm, SearchHit, SearchResult

logger = logging.getLogger(__name__)


class WhooshIndexAdapter(SearchIndexPort):
    def __init__(
        self,
        ix: whoosh_index.Index,
        location: str,
        id_field: str = "id",
        timeout: Optional[float] = None,
    ):
        self.index = ix
        self.location = location
        self.id_field = id_field
        self.timeout = timeout or None
        schema = ix.schema
        self.search_fields: List[str] = [name for name, field in schema.items() if isinstance(field, TEXT)]
        if not self.search_fields:
            raise IndexUnavailable(f"Index at {location} has no TEXT fields to search")

    @classmethod
    def open(
        cls,
        location: str | Path,
        indexname: Optional[str] = None,
        id_field: str = "id",
        timeout: Optional[float] = None,
    ) -> "WhooshIndexAdapter":
        path = Path(location).expanduser()
        if not whoosh_index.exists_in(str(path), indexname=indexname):
            raise IndexUnavailable(f"Index not found: {path}")
        ix = whoosh_index.open_dir(str(path), indexname=indexname)
        name = f"{path}#{indexname}" if indexname else str(path)
        return cls(ix, location=name, id_field=id_field, timeout=timeout)

    def doc_count(self) -> int:
        return self.index.doc_count()

    # ---------------- query translation ----------------
    def _to_whoosh(self, query: Query) -> wq.Query:
        if isinstance(query, QueryStringQuery):
            parser = MultifieldParser(self.search_fields, schema=self.index.schema, group=OrGroup)
            return parser.parse(query.text)
        if isinstance(query, PrefixQuery):
            return wq.Or([wq.Prefix(name, query.text) for name in self.search_fields])
        if isinstance(query, FuzzyQuery):
            return wq.Or([
                wq.FuzzyTerm(name, query.text, maxdist=query.fuzziness, prefixlength=0)
                for name in self.search_fields
            ])
        raise SearchError(f"Unsupported query type: {type(query).__name__}")

    def _empty(self, request: SearchRequest) -> SearchResult:
        facets = None
        if request.facets:
            facets = {name: FacetResult(field=f.field) for name, f in request.facets.items()}
        return SearchResult(facets=facets)

    # ---------------- search ----------------
    def search(self, request: SearchRequest) -> SearchResult:
        if not request.query.text.strip():
            return self._empty(request)

        t0 = perf_counter()
        try:
            with self.index.searcher() as searcher:
                result = self._run(searcher, request)
        except SearchError:
            raise
        except TimeLimit as exc:
            raise SearchTimeout(f"Search exceeded {self.timeout}s") from exc
        except Exception as exc:
            logger.exception("Whoosh search failed for %r", request.query)
            raise SearchError(f"Search failed: {type(exc).__name__}: {exc}") from exc

        result.took_ms = int((perf_counter() - t0) * 1000)
        return result

    def _run(self, searcher, request: SearchRequest) -> SearchResult:
        schema = self.index.schema
        q = self._to_whoosh(request.query)

        groupedby = {
            name: sorting.FieldFacet(facet.field, maptype=sorting.Count)
            for name, facet in request.facets.items()
            if facet.field in schema
        }
        limit = max(request.from_ + request.size, 1)
        collector = searcher.collector(limit=limit, groupedby=groupedby or None)
        if self.timeout:
            collector = TimeLimitCollector(collector, timelimit=self.timeout, use_alarm=False)
        searcher.search_with_collector(q, collector)
        results = collector.results()

        total = len(results)
        hits = [
            self._to_hit(hit, request.highlight)
            for hit in results[request.from_:request.from_ + request.size]
        ]
        max_score = float(results.score(0) or 0.0) if results.scored_length() else 0.0

        facets = None
        if request.facets:
            facets = {}
            for name, facet in request.facets.items():
                counts = results.groups(name) if name in groupedby else {}
                facets[name] = _facet_result(facet, counts, total)

        return SearchResult(total_hits=total, max_score=max_score, hits=hits, facets=facets)

    def _to_hit(self, hit, highlight: bool) -> SearchHit:
        stored = hit.fields()
        doc_id = stored.get(self.id_field)
        fragments: Dict[str, List[str]] = {}
        if highlight:
            for name in self.search_fields:
                if name not in stored:
                    continue
                fragment = hit.highlights(name)
                if fragment:
                    fragments[name] = [fragment]
        return SearchHit(
            id=str(doc_id) if doc_id is not None else str(hit.docnum),
            score=float(hit.score or 0.0),
            index=self.location,
            fields=stored,
            fragments=fragments,
        )


def _facet_result(facet: FacetRequest, counts: Dict, total_hits: int) -> FacetResult:
    valued: Dict[str, int] = {}
    for key, count in counts.items():
        if key is None or key == "" or key == b"":
            continue
        term = key.decode("utf-8") if isinstance(key, bytes) else str(key)
        valued[term] = valued.get(term, 0) + int(count)

    ranked = sorted(valued.items(), key=lambda kv: (-kv[1], kv[0]))
    top = ranked[:facet.size]
    counted = sum(valued.values())
    return FacetResult(
        field=facet.field,
        total=counted,
        missing=max(total_hits - counted, 0),
        other=counted - sum(c for _, c in top),
        terms=[FacetTerm(term=t, count=c) for t, c in top],
    )
