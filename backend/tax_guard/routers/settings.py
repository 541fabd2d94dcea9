"""Router exposing the social-security threshold setting."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, HTTPException, status
from fastapi.responses import HTMLResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import AppConfig, get_config
from ..database import get_db
from ..services import InvalidConfigurationError, SettingsService
from .dashboard import render_dashboard

LOGGER = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_class=HTMLResponse)
def update_settings(
    social_limit_amount: str = Form(""),
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_config),
) -> HTMLResponse:
    try:
        SettingsService.update_social_limit(db, social_limit_amount)
    except InvalidConfigurationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        LOGGER.exception("Failed to store social limit", exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Settings could not be saved",
        ) from exc
    return render_dashboard(db, config)
