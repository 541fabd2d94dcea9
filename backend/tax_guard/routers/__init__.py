"""Routers package."""

from .dashboard import router as dashboard_router
from .invoices import router as invoices_router
from .settings import router as settings_router

__all__ = [
    "dashboard_router",
    "invoices_router",
    "settings_router",
]
