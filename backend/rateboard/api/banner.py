"""Banner API router."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rateboard.core.db import get_session
from rateboard.models import BannerSettings as BannerSettingsModel
from rateboard.schemas import BannerSettings, BannerSettingsCreate, BannerSettingsUpdate
from rateboard.services import BannerService


router = APIRouter(prefix="/banner", tags=["banner"])


@router.get("/", response_model=Optional[BannerSettings])
def get_banner(db: Session = Depends(get_session)) -> Optional[BannerSettingsModel]:
    return BannerService(db).get_current()


@router.post("/", response_model=BannerSettings, status_code=status.HTTP_201_CREATED)
def create_banner(payload: BannerSettingsCreate, db: Session = Depends(get_session)) -> BannerSettingsModel:
    """Record a newly uploaded banner and retire the previous one."""
    return BannerService(db).create(payload)


@router.put("/{banner_id}", response_model=BannerSettings)
def update_banner(
    banner_id: int,
    payload: BannerSettingsUpdate,
    db: Session = Depends(get_session),
) -> BannerSettingsModel:
    banner = BannerService(db).update(banner_id, payload)
    if banner is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Banner not found")
    return banner
