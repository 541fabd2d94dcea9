"""Router exposing the rendered dashboard and its figures."""

from __future__ import annotations

import dataclasses
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import schemas
from ..config import AppConfig, get_config
from ..database import get_db
from ..services import DashboardContext, DashboardService, InvalidConfigurationError

LOGGER = logging.getLogger(__name__)

router = APIRouter()


def load_dashboard(db: Session, config: AppConfig) -> DashboardContext:
    """Load a fresh snapshot, translating storage problems into HTTP 500."""

    try:
        return DashboardService.build_context(db, config)
    except SQLAlchemyError as exc:
        LOGGER.exception("Failed to load dashboard data", exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Dashboard data could not be loaded",
        ) from exc
    except InvalidConfigurationError as exc:
        LOGGER.exception("Stored social limit is invalid", exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc


def render_dashboard(db: Session, config: AppConfig) -> HTMLResponse:
    context = load_dashboard(db, config)
    return HTMLResponse(content=DashboardService.render(context))


@router.get("/", response_class=HTMLResponse)
def read_dashboard(
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_config),
) -> HTMLResponse:
    """Return the full dashboard page."""
    return render_dashboard(db, config)


@router.get("/stats", response_model=schemas.StatsSnapshotRead)
def read_stats(
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_config),
) -> schemas.StatsSnapshotRead:
    stats = load_dashboard(db, config).stats
    payload = dataclasses.asdict(stats)
    payload["social_security_status"] = stats.social_security_status.value
    payload["revenue_basis"] = stats.revenue_basis.value
    return schemas.StatsSnapshotRead(**payload)
