# Purpose:
# Defines the /health endpoint for the search API.
# - Reports whether the index is loaded and how many documents it holds.
# - Useful for monitoring and deployment probes.
# app/routers/health.py
from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
def health(request: Request):
    index = getattr(request.app.state, "index", None)
    if index is None:
        return {"status": "degraded", "doc_count": 0}
    return {"status": "ok", "doc_count": index.doc_count()}
