from __future__ import annotations

import os
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

# Ensure the project root (which exposes the ``backend`` package) is on ``sys.path``
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# The lifespan hook migrates ``DATABASE_URL``; keep it away from the real ledger.
_STARTUP_DB_DIR = tempfile.mkdtemp(prefix="tax_guard_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_STARTUP_DB_DIR, 'startup.db').as_posix()}"

from backend.tax_guard import database, models  # noqa: E402
from backend.tax_guard.database import Base, get_db  # noqa: E402
from backend.tax_guard.main import app  # noqa: E402

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture(scope="session", autouse=True)
def setup_database() -> Generator[None, None, None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    database.engine.dispose()
    shutil.rmtree(_STARTUP_DB_DIR, ignore_errors=True)


@pytest.fixture(autouse=True)
def _clear_config_env(monkeypatch) -> None:
    monkeypatch.delenv("REVENUE_BASIS", raising=False)
    monkeypatch.delenv("DEFAULT_SOCIAL_LIMIT", raising=False)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)
    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            db_session.expire_all()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def make_invoice(db_session: Session) -> Callable[..., models.Invoice]:
    def _make(
        amount: int,
        *,
        date: str = "2025-01-15",
        client_name: str = "Klient s.r.o.",
        is_paid: bool = True,
    ) -> models.Invoice:
        invoice = models.Invoice(
            date=date, amount=amount, client_name=client_name, is_paid=is_paid
        )
        db_session.add(invoice)
        db_session.commit()
        db_session.refresh(invoice)
        return invoice

    return _make
