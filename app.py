"""Application factory and entry point.

Run with:
    uvicorn app:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from api import router, set_store
from settings import EngineSettings, configure_logging
from store import SessionStore


def create_app(
    store: SessionStore | None = None,
    settings: EngineSettings | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    Accepts an optional store and settings for testing; otherwise
    settings come from the CALC_* environment variables.
    """
    if settings is None:
        settings = EngineSettings.from_env()
    configure_logging(settings.log_level)

    if store is None:
        store = SessionStore(default_settings=settings)

    set_store(store)

    app = FastAPI(
        title="Dual Calculator API",
        description=(
            "Drives calculator engines remotely. Each session holds one "
            "engine with standard (decimal) and programmer (bitwise integer) "
            "modes; every command returns the text to render."
        ),
        version="0.1.0",
    )
    app.include_router(router)
    return app


# Default app instance for `uvicorn app:app`
app = create_app()
