"""Bring the ledger database up to the bundled Alembic head at startup."""

from __future__ import annotations

import fcntl
import logging
import os
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from .database import SQLALCHEMY_DATABASE_URL, build_engine_kwargs

LOGGER = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent
LOCK_PATH = BASE_DIR / ".alembic-migration.lock"
LOCK_TIMEOUT_ENV = "ALEMBIC_MIGRATION_LOCK_TIMEOUT"
DEFAULT_LOCK_TIMEOUT = 30.0
LOCK_RETRY_DELAY = 0.25

# Tables a ledger created before Alembic already carries.
LEGACY_TABLES = frozenset({"invoices", "settings"})


def _read_lock_timeout() -> float:
    raw = os.getenv(LOCK_TIMEOUT_ENV)
    if not raw:
        return DEFAULT_LOCK_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    if value <= 0:
        LOGGER.warning(
            "Invalid %s=%s; falling back to %.1f seconds", LOCK_TIMEOUT_ENV, raw, DEFAULT_LOCK_TIMEOUT
        )
        return DEFAULT_LOCK_TIMEOUT
    return value


@contextmanager
def _migration_lock(path: Path, *, timeout: float) -> Iterator[None]:
    """Hold an exclusive ``flock`` on ``path`` so only one process migrates at a time."""

    path.parent.mkdir(parents=True, exist_ok=True)
    deadline = time.monotonic() + timeout
    with path.open("a+") as handle:
        LOGGER.debug("Acquiring Alembic migration lock at %s", path)
        while True:
            try:
                fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
                break
            except BlockingIOError as error:
                if time.monotonic() >= deadline:
                    raise TimeoutError("Timed out waiting for Alembic migration lock") from error
                time.sleep(LOCK_RETRY_DELAY)
        try:
            yield
        finally:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
            LOGGER.debug("Released Alembic migration lock at %s", path)


def build_alembic_config(database_url: str | None = None) -> Config:
    """Return an Alembic ``Config`` pointing at the bundled migration scripts."""

    config = Config(str(BASE_DIR / "alembic.ini"))
    config.set_main_option("script_location", str(BASE_DIR / "alembic"))
    config.set_main_option(
        "sqlalchemy.url",
        database_url or os.getenv("DATABASE_URL") or SQLALCHEMY_DATABASE_URL,
    )
    return config


def _is_unversioned_ledger(database_url: str) -> bool:
    engine = create_engine(database_url, **build_engine_kwargs(database_url))
    try:
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
    return "alembic_version" not in tables and LEGACY_TABLES <= tables


def run_database_migrations() -> None:
    """Stamp a pre-Alembic ledger as current, otherwise upgrade to head.

    The initial revision creates its tables with ``IF NOT EXISTS``, so a
    partially created database is completed by the upgrade.
    """

    config = build_alembic_config()
    database_url = config.get_main_option("sqlalchemy.url")

    with _migration_lock(LOCK_PATH, timeout=_read_lock_timeout()):
        if _is_unversioned_ledger(database_url):
            LOGGER.info("Stamping existing ledger at %s with the current revision", database_url)
            command.stamp(config, "head")
            return
        LOGGER.info("Running database migrations at %s", database_url)
        command.upgrade(config, "head")
