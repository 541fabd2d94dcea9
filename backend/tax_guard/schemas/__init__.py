"""Expose Pydantic schemas for convenient imports."""

from .invoice import MAX_AMOUNT, InvoiceBase, InvoiceCreate
from .stats import StatsSnapshotRead

__all__ = [
    "MAX_AMOUNT",
    "InvoiceBase",
    "InvoiceCreate",
    "StatsSnapshotRead",
]
