# app/routers/search.py
# Purpose: Defines the read-only search endpoints.
# - /search: query-string syntax with a Date facet (q, f, s, fa).
# - /prefix: case-insensitive prefix match (q, f, s).
# - /fuzzy:  case-insensitive fuzzy match within a fixed edit distance (q, f, s).
# - Every response is JSON with an allow-all CORS header; failures become error bodies via app.errors.

from typing import Dict

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic_core import PydanticSerializationError

from app.errors import CORS_HEADERS, IndexUnavailable, SerializationError
from app.ports import SearchIndexPort
from app.schemas import SearchResult
from app.services.search_service import search_service

router = APIRouter(tags=["search"])


def _index(request: Request) -> SearchIndexPort:
    index = getattr(request.app.state, "index", None)
    if index is None:
        raise IndexUnavailable("Search index is not loaded")
    return index


def _json(result: SearchResult) -> JSONResponse:
    try:
        return JSONResponse(content=result.model_dump(mode="json"), headers=CORS_HEADERS)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise SerializationError(f"Failed to serialize results: {e}") from e


def _first_values(request: Request) -> Dict[str, str]:
    # A repeated key keeps its first value
    params = request.query_params
    return {key: params.getlist(key)[0] for key in params.keys()}


def _handle(mode: str, request: Request) -> JSONResponse:
    settings = request.app.state.settings
    result = search_service(
        mode,
        _first_values(request),
        _index(request),
        options=settings.query_options(),
        max_query_length=settings.max_query_length,
    )
    return _json(result)


@router.get("/search", response_model=SearchResult)
def search(request: Request):
    return _handle("search", request)


@router.get("/prefix", response_model=SearchResult)
def prefix(request: Request):
    return _handle("prefix", request)


@router.get("/fuzzy", response_model=SearchResult)
def fuzzy(request: Request):
    return _handle("fuzzy", request)
