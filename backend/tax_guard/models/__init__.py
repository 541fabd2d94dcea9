"""Expose SQLAlchemy models for convenient imports."""

from .invoice import Invoice
from .setting import Setting, SettingKey

__all__ = [
    "Invoice",
    "Setting",
    "SettingKey",
]
