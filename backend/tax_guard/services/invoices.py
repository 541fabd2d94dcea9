"""Business logic for invoices."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models, schemas
from ..schemas import MAX_AMOUNT
from .stats_engine import InvalidAmountError

LOGGER = logging.getLogger(__name__)


class InvoiceServiceError(RuntimeError):
    """Raised when invoice operations cannot be completed."""


class InvalidInvoiceError(InvoiceServiceError, ValueError):
    """Raised when a submitted invoice is missing required fields."""


def parse_amount(raw: Any) -> int:
    """Parse a submitted amount into a non-negative whole number.

    Accepts integers and ASCII digit strings with optional surrounding
    whitespace, up to :data:`MAX_AMOUNT`. Anything else, including fractions,
    signs and digit separators, raises :class:`InvalidAmountError` instead of
    being coerced to zero.
    """

    if isinstance(raw, bool):
        raise InvalidAmountError(f"amount must be a whole number, got {raw!r}")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw if raw is not None else "").strip()
        if not text:
            raise InvalidAmountError("amount is required")
        if not (text.isascii() and text.isdigit()):
            raise InvalidAmountError(f"amount must be a whole number, got {text!r}")
        value = int(text)
    if value < 0:
        raise InvalidAmountError(f"amount must be non-negative, got {value}")
    if value > MAX_AMOUNT:
        raise InvalidAmountError(f"amount must not exceed {MAX_AMOUNT}, got {value}")
    return value


class InvoiceService:
    """Encapsulates persistence operations for invoices."""

    @staticmethod
    def build_invoice(date: Any, amount: Any, client_name: Any) -> schemas.InvoiceCreate:
        """Validate raw form values and return an :class:`InvoiceCreate` payload."""

        parsed_amount = parse_amount(amount)
        try:
            return schemas.InvoiceCreate(
                date=date if date is not None else "",
                amount=parsed_amount,
                client_name=client_name if client_name is not None else "",
            )
        except ValidationError as exc:
            fields = sorted({str(error["loc"][0]) for error in exc.errors() if error.get("loc")})
            raise InvalidInvoiceError(f"invalid invoice fields: {', '.join(fields)}") from exc

    @staticmethod
    def list_invoices(db: Session) -> List[models.Invoice]:
        """Return invoices newest date first, ties in insertion order."""

        return (
            db.query(models.Invoice)
            .order_by(models.Invoice.date.desc(), models.Invoice.id.asc())
            .all()
        )

    @staticmethod
    def get_invoice(db: Session, invoice_id: int) -> Optional[models.Invoice]:
        return db.query(models.Invoice).filter(models.Invoice.id == invoice_id).first()

    @staticmethod
    def create_invoice(db: Session, data: schemas.InvoiceCreate) -> models.Invoice:
        invoice = models.Invoice(**data.model_dump(), is_paid=True)
        db.add(invoice)
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        db.refresh(invoice)
        LOGGER.info(
            "Recorded invoice %s for %s dated %s", invoice.id, invoice.client_name, invoice.date
        )
        return invoice

    @staticmethod
    def delete_invoice(db: Session, invoice_id: int) -> bool:
        """Delete an invoice by id; unknown ids are a no-op and return ``False``."""

        invoice = InvoiceService.get_invoice(db, invoice_id)
        if invoice is None:
            LOGGER.warning("Invoice %s not found; nothing to delete", invoice_id)
            return False
        db.delete(invoice)
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        LOGGER.info("Deleted invoice %s", invoice_id)
        return True
