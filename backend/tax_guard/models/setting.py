"""Key/value settings persisted alongside invoices."""

from __future__ import annotations

import enum

from sqlalchemy import Column, String

from ..database import Base


class SettingKey(str, enum.Enum):
    """Known setting keys."""

    SOCIAL_LIMIT_AMOUNT = "social_limit_amount"


class Setting(Base):
    """A single configuration value stored by key."""

    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)
