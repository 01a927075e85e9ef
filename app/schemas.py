# app/schemas.py
# Purpose: Pydantic models for search responses to keep the JSON contract stable.

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_serializer


class SearchHit(BaseModel):
    id: str
    score: float
    # Which index produced the hit; cleared before the hit leaves the service.
    index: Optional[str] = None
    fields: Dict[str, Any] = Field(default_factory=dict)
    fragments: Dict[str, List[str]] = Field(default_factory=dict)

    @model_serializer(mode="wrap")
    def _drop_empty(self, handler):
        data = handler(self)
        if not data.get("index"):
            data.pop("index", None)
        if not data.get("fragments"):
            data.pop("fragments", None)
        return data


class FacetTerm(BaseModel):
    term: str
    count: int


class FacetResult(BaseModel):
    field: str
    total: int = 0
    missing: int = 0
    other: int = 0
    terms: List[FacetTerm] = Field(default_factory=list)


class SearchResult(BaseModel):
    total_hits: int = 0
    max_score: float = 0.0
    took_ms: int = 0
    hits: List[SearchHit] = Field(default_factory=list)
    facets: Optional[Dict[str, FacetResult]] = None

    @model_serializer(mode="wrap")
    def _drop_unrequested_facets(self, handler):
        data = handler(self)
        if data.get("facets") is None:
            data.pop("facets", None)
        return data


class ErrorResponse(BaseModel):
    error: str
    message: str
    detail: Optional[Dict[str, Any]] = None
