"""FastAPI application factory.

Lifespan
--------
On startup the app configures structured logging.  The extraction pipeline
keeps no state between requests, so there is nothing to open or close.

Routers
-------
    /extract   article extraction and selector diagnostics
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from quizsource.api.routers import extract as extract_router
from quizsource.log import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging once the server starts."""
    configure_logging()
    yield


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="quizsource API",
        description=(
            "Turns an article URL into clean text plus title, author and "
            "publish date, ready for quiz generation.  Also exposes a "
            "diagnostic view of the content-selector cascade."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(extract_router.router, prefix="/extract", tags=["extract"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn quizsource.api.app:app --reload
app = create_app()
