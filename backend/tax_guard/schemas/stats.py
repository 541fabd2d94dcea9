from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class StatsSnapshotRead(BaseModel):
    """Computed dashboard figures exposed over the JSON API."""

    revenue: int = Field(..., ge=0)
    expenses: Decimal = Field(..., ge=0)
    profit: Decimal = Field(..., ge=0)
    health_insurance: int = Field(..., ge=0)
    social_limit: int = Field(..., ge=0)
    over_limit: bool
    social_security_status: str
    invoice_count: int = Field(..., ge=0)
    revenue_basis: str

    model_config = ConfigDict(from_attributes=True)
