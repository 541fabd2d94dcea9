from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

# Largest value the INTEGER column can bind (signed 64-bit).
MAX_AMOUNT = 2**63 - 1


class InvoiceBase(BaseModel):
    date: str = Field(..., min_length=1, description="Issue date in YYYY-MM-DD format")
    amount: int = Field(
        ..., ge=0, le=MAX_AMOUNT, description="Invoiced amount in whole currency units"
    )
    client_name: str = Field(..., min_length=1, description="Name of the invoiced client")

    @field_validator("date", "client_name", mode="before")
    @classmethod
    def _strip_text(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class InvoiceCreate(InvoiceBase):
    """Schema used to record a new invoice."""

    pass
