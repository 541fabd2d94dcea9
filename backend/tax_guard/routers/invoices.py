"""Router exposing invoice mutations."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, HTTPException, status
from fastapi.responses import HTMLResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import AppConfig, get_config
from ..database import get_db
from ..services import InvalidAmountError, InvoiceService, InvoiceServiceError
from .dashboard import render_dashboard

LOGGER = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_class=HTMLResponse)
def create_invoice(
    date: str = Form(""),
    amount: str = Form(""),
    client_name: str = Form(""),
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_config),
) -> HTMLResponse:
    """Record an invoice and return the re-rendered dashboard."""

    try:
        invoice_in = InvoiceService.build_invoice(date, amount, client_name)
    except (InvalidAmountError, InvoiceServiceError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    try:
        InvoiceService.create_invoice(db, invoice_in)
    except SQLAlchemyError as exc:
        LOGGER.exception("Failed to store invoice", exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Invoice could not be saved",
        ) from exc
    return render_dashboard(db, config)


@router.delete("/{invoice_id}", response_class=HTMLResponse)
def delete_invoice(
    invoice_id: int,
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_config),
) -> HTMLResponse:
    """Delete an invoice; unknown ids still re-render the dashboard."""

    try:
        InvoiceService.delete_invoice(db, invoice_id)
    except SQLAlchemyError as exc:
        LOGGER.exception("Failed to delete invoice %s", invoice_id, exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Invoice could not be deleted",
        ) from exc
    return render_dashboard(db, config)
