"""Student Tax Guard FastAPI application package."""

from __future__ import annotations


def get_app():
    """Return the FastAPI application without importing it eagerly.

    Alembic imports the models through this package and must not pull in the
    routers or run the lifespan hooks.
    """

    from .main import app as fastapi_app

    return fastapi_app


__all__ = ["get_app"]
