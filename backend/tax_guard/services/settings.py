"""Service helpers to read and update stored settings."""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models
from .stats_engine import DEFAULT_SOCIAL_LIMIT, InvalidConfigurationError

LOGGER = logging.getLogger(__name__)


def parse_social_limit(raw: Any) -> int:
    """Parse a threshold value into a non-negative integer.

    Raises :class:`InvalidConfigurationError` for empty, non-numeric or
    negative input.
    """

    if isinstance(raw, bool):
        raise InvalidConfigurationError(f"social limit must be a whole number, got {raw!r}")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw if raw is not None else "").strip()
        if not text:
            raise InvalidConfigurationError("social limit is required")
        if not (text.isascii() and text.isdigit()):
            raise InvalidConfigurationError(f"social limit must be a whole number, got {text!r}")
        value = int(text)
    if value < 0:
        raise InvalidConfigurationError(f"social limit must be non-negative, got {value}")
    return value


class SettingsService:
    """Read and write key/value settings with upsert semantics."""

    @staticmethod
    def get_setting(db: Session, key: str) -> Optional[str]:
        setting = db.get(models.Setting, key)
        return setting.value if setting is not None else None

    @staticmethod
    def upsert_setting(db: Session, key: str, value: str) -> models.Setting:
        """Create the setting or replace its value; at most one row exists per key."""

        setting = db.get(models.Setting, key)
        if setting is None:
            setting = models.Setting(key=key, value=value)
            db.add(setting)
        else:
            setting.value = value
        try:
            db.commit()
        except IntegrityError:
            # Another writer inserted the key first; overwrite its row instead.
            db.rollback()
            LOGGER.debug("Setting %s was inserted concurrently; retrying as update", key)
            setting = db.get(models.Setting, key, populate_existing=True)
            if setting is None:
                raise
            setting.value = value
            try:
                db.commit()
            except SQLAlchemyError:
                db.rollback()
                raise
        except SQLAlchemyError:
            db.rollback()
            raise
        LOGGER.info("Stored setting %s=%s", key, value)
        return setting

    @classmethod
    def get_social_limit(cls, db: Session, default: int = DEFAULT_SOCIAL_LIMIT) -> int:
        """Return the stored social-security threshold or ``default`` when unset."""

        raw = cls.get_setting(db, models.SettingKey.SOCIAL_LIMIT_AMOUNT.value)
        if raw is None:
            return default
        return parse_social_limit(raw)

    @classmethod
    def update_social_limit(cls, db: Session, raw_value: Any) -> int:
        value = parse_social_limit(raw_value)
        cls.upsert_setting(db, models.SettingKey.SOCIAL_LIMIT_AMOUNT.value, str(value))
        return value

    @staticmethod
    def ensure_default_settings(db: Session, social_limit: int = DEFAULT_SOCIAL_LIMIT) -> bool:
        """Seed the default threshold when absent; existing values are never overwritten.

        Returns ``True`` when a row was inserted.
        """

        key = models.SettingKey.SOCIAL_LIMIT_AMOUNT.value
        if db.get(models.Setting, key) is not None:
            return False
        db.add(models.Setting(key=key, value=str(social_limit)))
        db.flush()
        LOGGER.info("Seeded default %s=%s", key, social_limit)
        return True
