"""Runtime configuration read from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .services.stats_engine import DEFAULT_SOCIAL_LIMIT, RevenueBasis

REVENUE_BASIS_ENV = "REVENUE_BASIS"
DEFAULT_SOCIAL_LIMIT_ENV = "DEFAULT_SOCIAL_LIMIT"
HOST_ENV = "HOST"
PORT_ENV = "PORT"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000


def _read_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    return value


def _read_revenue_basis_env(name: str, default: RevenueBasis) -> RevenueBasis:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return RevenueBasis(raw.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(basis.value for basis in RevenueBasis)
        raise ValueError(f"{name} must be one of: {allowed}") from exc


@dataclass(frozen=True)
class AppConfig:
    """Settings the host resolves before computing a dashboard snapshot."""

    revenue_basis: RevenueBasis = RevenueBasis.ALL
    default_social_limit: int = DEFAULT_SOCIAL_LIMIT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


def load_config() -> AppConfig:
    """Build an :class:`AppConfig` from the current environment."""

    return AppConfig(
        revenue_basis=_read_revenue_basis_env(REVENUE_BASIS_ENV, RevenueBasis.ALL),
        default_social_limit=_read_int_env(DEFAULT_SOCIAL_LIMIT_ENV, DEFAULT_SOCIAL_LIMIT),
        host=os.getenv(HOST_ENV, DEFAULT_HOST).strip() or DEFAULT_HOST,
        port=_read_int_env(PORT_ENV, DEFAULT_PORT),
    )


def get_config() -> AppConfig:
    """FastAPI dependency returning the configuration for the current request."""

    return load_config()
