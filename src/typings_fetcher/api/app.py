from __future__ import annotations

from fastapi import FastAPI

from typings_fetcher.api.routes.health import router as health_router
from typings_fetcher.api.routes.root import router as root_router
from typings_fetcher.api.routes.typings import router as typings_router


def create_app() -> FastAPI:
    app = FastAPI(
        title="Typings Fetcher API",
        description="Fetch the type declarations of an npm dependency as a single JSON payload.",
        version="0.1.0",
    )

    app.include_router(root_router, include_in_schema=False)
    app.include_router(health_router, include_in_schema=False)
    app.include_router(typings_router)

    return app
