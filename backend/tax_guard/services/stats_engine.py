"""Tax and social-security figures derived from a set of invoices.

The engine is a pure function of its inputs: it never touches the database,
the environment or module state, so the host loads invoices and the threshold
once per request and passes them in explicitly.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Optional

DEFAULT_SOCIAL_LIMIT = 105_000

# Flat-rate expense deduction applied to revenue.
EXPENSE_RATE = Decimal("0.6")
# Half of the profit forms the health insurance assessment base.
HEALTH_ASSESSMENT_RATIO = Decimal("0.5")
HEALTH_CONTRIBUTION_RATE = Decimal("0.135")


class StatsEngineError(ValueError):
    """Raised when the engine receives input it cannot compute figures for."""


class InvalidConfigurationError(StatsEngineError):
    """Raised when the social-security threshold is negative or not an integer."""


class InvalidAmountError(StatsEngineError):
    """Raised when an invoice amount is negative or not a whole number."""


class RevenueBasis(str, enum.Enum):
    """Which invoices count towards revenue."""

    ALL = "all"
    PAID = "paid"


class SocialSecurityStatus(str, enum.Enum):
    """Locale-independent social-security outcome."""

    MUST_PAY = "MUST_PAY"
    ZERO_UNDER_LIMIT = "ZERO_UNDER_LIMIT"


@dataclass(frozen=True)
class StatsSnapshot:
    """Financial figures computed for one read of the ledger."""

    revenue: int
    expenses: Decimal
    profit: Decimal
    health_insurance: int
    social_limit: int
    over_limit: bool
    social_security_status: SocialSecurityStatus
    invoice_count: int
    revenue_basis: RevenueBasis


def validate_threshold(threshold: Any) -> int:
    """Return ``threshold`` as a non-negative ``int`` or raise ``InvalidConfigurationError``."""

    if isinstance(threshold, bool) or not isinstance(threshold, int):
        raise InvalidConfigurationError(
            f"social limit must be a non-negative integer, got {threshold!r}"
        )
    if threshold < 0:
        raise InvalidConfigurationError(
            f"social limit must be a non-negative integer, got {threshold}"
        )
    return threshold


class StatsEngine:
    """Compute :class:`StatsSnapshot` values from invoices and a threshold."""

    @staticmethod
    def _counted_amounts(invoices: Iterable[Any], revenue_basis: RevenueBasis) -> list[int]:
        amounts: list[int] = []
        for invoice in invoices:
            if revenue_basis is RevenueBasis.PAID and not invoice.is_paid:
                continue
            amount = invoice.amount
            if amount < 0:
                raise InvalidAmountError(f"invoice amount must be non-negative, got {amount}")
            amounts.append(int(amount))
        return amounts

    @staticmethod
    def health_insurance_for(profit: Decimal) -> int:
        """Contribution on half of ``profit`` at 13.5 %, rounded up to a whole unit."""

        return math.ceil(profit * HEALTH_ASSESSMENT_RATIO * HEALTH_CONTRIBUTION_RATE)

    @classmethod
    def compute(
        cls,
        invoices: Iterable[Any],
        threshold: Optional[int] = None,
        *,
        revenue_basis: RevenueBasis = RevenueBasis.ALL,
    ) -> StatsSnapshot:
        """Derive revenue, expenses, profit, insurance and social-security status.

        Parameters
        ----------
        invoices:
            Objects exposing ``amount`` and ``is_paid``. Order is irrelevant.
        threshold:
            Social-security limit compared against profit. ``None`` applies
            :data:`DEFAULT_SOCIAL_LIMIT`.
        revenue_basis:
            ``RevenueBasis.ALL`` counts every invoice, ``RevenueBasis.PAID``
            only those flagged as paid.
        """

        social_limit = DEFAULT_SOCIAL_LIMIT if threshold is None else validate_threshold(threshold)
        basis = RevenueBasis(revenue_basis)

        amounts = cls._counted_amounts(invoices, basis)
        revenue = sum(amounts)
        expenses = revenue * EXPENSE_RATE
        profit = revenue - expenses
        health_insurance = cls.health_insurance_for(profit)
        over_limit = profit > social_limit
        status = (
            SocialSecurityStatus.MUST_PAY if over_limit else SocialSecurityStatus.ZERO_UNDER_LIMIT
        )

        return StatsSnapshot(
            revenue=revenue,
            expenses=expenses,
            profit=profit,
            health_insurance=health_insurance,
            social_limit=social_limit,
            over_limit=over_limit,
            social_security_status=status,
            invoice_count=len(amounts),
            revenue_basis=basis,
        )
