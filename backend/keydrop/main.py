"""Keydrop API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map KeydropError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Document stores opened in the lifespan before the app serves; a load failure aborts startup

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Readiness gated on store load: no window where reads see an empty collection
      while a populated file sits on disk
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from keydrop.api.error_handlers import register_error_handlers
from keydrop.api.routes import health, messages, payload, users
from keydrop.config import get_settings
from keydrop.infrastructure.observability import setup_logging
from keydrop.infrastructure.store_manager import init_stores

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_stores(settings.data_dir)
    await manager.open()
    logger.info(f"Keydrop API started ({settings.environment})")
    yield
    await manager.close()
    logger.info("Keydrop API shutting down")


settings = get_settings()
app = FastAPI(
    title="Keydrop API",
    version="1.0.0",
    description="End-to-end encrypted message drop",
    docs_url=settings.docs_url,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(messages.router)
app.include_router(payload.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve with uvicorn on settings.port."""
    import uvicorn

    uvicorn.run("keydrop.main:app", host="0.0.0.0", port=settings.port)
