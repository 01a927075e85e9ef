# app/services/search_service.py
from __future__ import annotations

import logging
from typing import Mapping

from app.errors import QueryTooLong
from app.params import parse_params
from app.ports import SearchIndexPort
from app.schemas import SearchResult
from app.services.query_builders import BUILDERS, DEFAULT_OPTIONS, QueryOptions
from app.services.sanitize import strip_index_locations

logger = logging.getLogger(__name__)


def search_service(
    mode: str,
    query_params: Mapping[str, str],
    index: SearchIndexPort,
    options: QueryOptions = DEFAULT_OPTIONS,
    max_query_length: int = 256,
) -> SearchResult:
    """
    Run one request through the pipeline: parse -> build (by mode) -> search -> redact.

    Engine failures propagate as app.errors.SearchError for the HTTP layer to render.
    """
    build = BUILDERS[mode]
    params = parse_params(query_params)
    if len(params.query) > max_query_length:
        raise QueryTooLong(
            f"Query exceeds {max_query_length} characters",
            detail={"length": len(params.query), "max": max_query_length},
        )

    request = build(params, options)
    result = index.search(request)
    logger.info(
        "%s q=%r from=%d size=%d -> %d/%d hits in %dms",
        mode, params.query, params.from_, params.size, len(result.hits), result.total_hits, result.took_ms,
    )
    return strip_index_locations(result)
