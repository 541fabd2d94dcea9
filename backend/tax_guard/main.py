"""Expose the Student Tax Guard FastAPI app."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import load_config
from .database import session_scope
from .migrations import run_database_migrations
from .routers import dashboard_router, invoices_router, settings_router
from .services import SettingsService

LOGGER = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    ensure_schema()
    yield


app = FastAPI(title="Student Tax Guard", lifespan=lifespan)

app.include_router(dashboard_router, tags=["dashboard"])
app.include_router(invoices_router, prefix="/invoices", tags=["invoices"])
app.include_router(settings_router, prefix="/settings", tags=["settings"])


def ensure_schema() -> None:
    """Apply pending migrations and seed default settings.

    Safe to run on every startup: an existing threshold is never overwritten.
    """

    LOGGER.info("Ensuring database schema is up to date before serving requests")
    run_database_migrations()
    config = load_config()
    with session_scope() as session:
        SettingsService.ensure_default_settings(session, config.default_social_limit)


@app.get("/health", tags=["health"])
def read_health() -> dict[str, str]:
    """Return a simple health check response."""
    return {"status": "ok"}
