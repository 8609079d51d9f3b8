"""System info API router used by the mobile control page."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rateboard.core.db import get_session
from rateboard.schemas import SystemInfo
from rateboard.services import (
    BannerService,
    DisplaySettingsService,
    MediaService,
    PromoService,
    RateService,
)


router = APIRouter(prefix="/system", tags=["system"])


@router.get("/info", response_model=SystemInfo)
def system_info(db: Session = Depends(get_session)) -> SystemInfo:
    media = MediaService(db)
    promo = PromoService(db)
    counts = {
        "rate_quotes": RateService(db).count(),
        "display_settings": DisplaySettingsService(db).count(),
        "banner_settings": BannerService(db).count(),
        "media_items": media.count(),
        "promo_images": promo.count(),
    }
    return SystemInfo(
        status="online",
        server_time=datetime.now(timezone.utc),
        record_counts=counts,
        active_media=len(media.list(active_only=True)),
        active_promos=len(promo.list(active_only=True)),
    )
