"""Display settings API router."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rateboard.core.db import get_session
from rateboard.models import DisplaySettings as DisplaySettingsModel
from rateboard.schemas import DisplaySettings, DisplaySettingsCreate, DisplaySettingsUpdate
from rateboard.services import DisplaySettingsService


router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/display", response_model=Optional[DisplaySettings])
def get_display_settings(db: Session = Depends(get_session)) -> Optional[DisplaySettingsModel]:
    return DisplaySettingsService(db).get_current()


@router.post("/display", response_model=DisplaySettings, status_code=status.HTTP_201_CREATED)
def create_display_settings(
    payload: DisplaySettingsCreate,
    db: Session = Depends(get_session),
) -> DisplaySettingsModel:
    """Store a new settings version and make it current."""
    return DisplaySettingsService(db).create(payload)


@router.put("/display", response_model=DisplaySettings)
def upsert_display_settings(
    payload: DisplaySettingsUpdate,
    db: Session = Depends(get_session),
) -> DisplaySettingsModel:
    """Patch the current settings, creating them from defaults on first use."""
    return DisplaySettingsService(db).upsert(payload)


@router.put("/display/{settings_id}", response_model=DisplaySettings)
def update_display_settings(
    settings_id: int,
    payload: DisplaySettingsUpdate,
    db: Session = Depends(get_session),
) -> DisplaySettingsModel:
    settings = DisplaySettingsService(db).update(settings_id, payload)
    if settings is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Display settings not found")
    return settings
