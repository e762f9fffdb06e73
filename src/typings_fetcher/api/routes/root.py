from __future__ import annotations

from typing import Any

from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def root() -> dict[str, Any]:
    """Root discovery endpoint."""
    return {
        "meta": {
            "title": "Typings Fetcher API",
            "description": "Fetch the type declarations of an npm dependency as a single JSON payload.",
            "version": "0.1.0",
        },
        "links": {
            "self": "/",
            "typings": "/api/typings?depQuery={dependency}",
            "health": "/healthz/live",
            "openapi": "/openapi.json",
            "docs": "/docs",
        },
    }
