from __future__ import annotations

import pytest

from backend.tax_guard.config import AppConfig, load_config
from backend.tax_guard.services import DEFAULT_SOCIAL_LIMIT, RevenueBasis


def test_load_config_defaults(monkeypatch):
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.delenv("PORT", raising=False)

    config = load_config()

    assert config == AppConfig()
    assert config.revenue_basis is RevenueBasis.ALL
    assert config.default_social_limit == DEFAULT_SOCIAL_LIMIT
    assert config.port == 3000


def test_load_config_reads_environment(monkeypatch):
    monkeypatch.setenv("REVENUE_BASIS", " Paid ")
    monkeypatch.setenv("DEFAULT_SOCIAL_LIMIT", "111000")
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "8080")

    config = load_config()

    assert config.revenue_basis is RevenueBasis.PAID
    assert config.default_social_limit == 111_000
    assert config.host == "127.0.0.1"
    assert config.port == 8080


@pytest.mark.parametrize(
    ("name", "value", "message"),
    [
        ("REVENUE_BASIS", "invoiced", "REVENUE_BASIS must be one of: all, paid"),
        ("DEFAULT_SOCIAL_LIMIT", "lots", "DEFAULT_SOCIAL_LIMIT must be an integer"),
        ("DEFAULT_SOCIAL_LIMIT", "-1", "DEFAULT_SOCIAL_LIMIT must be non-negative"),
        ("PORT", "http", "PORT must be an integer"),
    ],
)
def test_load_config_rejects_invalid_values(monkeypatch, name, value, message):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=message):
        load_config()
