"""Service layer encapsulating business logic for API routers."""

from .stats_engine import (
    DEFAULT_SOCIAL_LIMIT,
    InvalidAmountError,
    InvalidConfigurationError,
    RevenueBasis,
    SocialSecurityStatus,
    StatsEngine,
    StatsEngineError,
    StatsSnapshot,
)
from .invoices import InvalidInvoiceError, InvoiceService, InvoiceServiceError, parse_amount
from .settings import SettingsService, parse_social_limit
from .dashboard import (
    SOCIAL_SECURITY_LABELS,
    DashboardContext,
    DashboardService,
    format_currency,
)

__all__ = [
    "DEFAULT_SOCIAL_LIMIT",
    "InvalidAmountError",
    "InvalidConfigurationError",
    "RevenueBasis",
    "SocialSecurityStatus",
    "StatsEngine",
    "StatsEngineError",
    "StatsSnapshot",
    "InvalidInvoiceError",
    "InvoiceService",
    "InvoiceServiceError",
    "parse_amount",
    "SettingsService",
    "parse_social_limit",
    "SOCIAL_SECURITY_LABELS",
    "DashboardContext",
    "DashboardService",
    "format_currency",
]
