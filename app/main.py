"""
app/main.py

FastAPI application entrypoint.
- Builds the app via create_app(); `app` is the instance uvicorn serves.
- Opens the Whoosh index once at startup and shares the read-only handle across requests.
- Registers routers (health, search) and the JSON error handlers.
- Adds allow-all CORS and mounts static archive files when a directory is configured.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.adapters.index_whoosh import WhooshIndexAdapter
from app.errors import ApiError, register_error_handlers
from app.ports import SearchIndexPort
from app.routers import health, search
from app.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _open_index(settings: Settings) -> Optional[SearchIndexPort]:
    try:
        index = WhooshIndexAdapter.open(
            settings.index_dir,
            indexname=settings.index_name,
            id_field=settings.id_field,
            timeout=settings.search_timeout,
        )
    except ApiError as e:
        logger.error("Starting without an index: %s", e.message)
        return None
    logger.info("Opened index %s (%d documents)", index.location, index.doc_count())
    return index


def create_app(settings: Optional[Settings] = None, index: Optional[SearchIndexPort] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.index is None:
            app.state.index = _open_index(settings)
        yield

    app = FastAPI(
        title="Archive Search API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.index = index

    # Read-only public API; no credentials involved
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(search.router)

    if settings.static_dir is not None:
        if settings.static_dir.is_dir():
            app.mount(settings.static_prefix, StaticFiles(directory=str(settings.static_dir)), name="static")
            logger.info("Serving %s from %s", settings.static_prefix, settings.static_dir)
        else:
            logger.warning("Static directory not found: %s", settings.static_dir)

    return app


configure_logging(get_settings().log_level)
app = create_app()
