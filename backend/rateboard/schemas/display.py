"""Schemas for display settings and the banner."""

from __future__ import annotations

from typing import Optional
from datetime import datetime

from pydantic import BaseModel, Field, ConfigDict

from rateboard.domain import defaults
from rateboard.domain.defaults import MIN_DURATION_SECONDS
from rateboard.domain.enums import Orientation

from .common import PartialUpdate


class DisplaySettingsBase(BaseModel):
    orientation: Orientation = Field(default=Orientation.HORIZONTAL, description="'horizontal' or 'vertical'")
    background_color: str = Field(default=defaults.DEFAULT_BACKGROUND_COLOR, min_length=1, max_length=32)
    text_color: str = Field(default=defaults.DEFAULT_TEXT_COLOR, min_length=1, max_length=32)
    rate_font_size: str = Field(default=defaults.DEFAULT_RATE_FONT_SIZE, min_length=1, max_length=32)
    show_media: bool = Field(default=defaults.DEFAULT_SHOW_MEDIA, description="Rotate media between rate intervals")
    rates_display_duration_seconds: int = Field(
        default=defaults.DEFAULT_RATES_DISPLAY_SECONDS,
        ge=MIN_DURATION_SECONDS,
        description="How long the rate board stays up before the next media item",
    )
    default_media_duration_seconds: int = Field(default=defaults.DEFAULT_MEDIA_DURATION_SECONDS, ge=MIN_DURATION_SECONDS)
    default_promo_duration_seconds: int = Field(default=defaults.DEFAULT_PROMO_DURATION_SECONDS, ge=MIN_DURATION_SECONDS)
    refresh_interval_seconds: int = Field(
        default=defaults.DEFAULT_REFRESH_INTERVAL_SECONDS,
        ge=MIN_DURATION_SECONDS,
        description="Polling interval of the display client",
    )


class DisplaySettingsCreate(DisplaySettingsBase):
    pass


class DisplaySettingsUpdate(PartialUpdate):
    orientation: Optional[Orientation] = None
    background_color: Optional[str] = Field(None, min_length=1, max_length=32)
    text_color: Optional[str] = Field(None, min_length=1, max_length=32)
    rate_font_size: Optional[str] = Field(None, min_length=1, max_length=32)
    show_media: Optional[bool] = None
    rates_display_duration_seconds: Optional[int] = Field(None, ge=MIN_DURATION_SECONDS)
    default_media_duration_seconds: Optional[int] = Field(None, ge=MIN_DURATION_SECONDS)
    default_promo_duration_seconds: Optional[int] = Field(None, ge=MIN_DURATION_SECONDS)
    refresh_interval_seconds: Optional[int] = Field(None, ge=MIN_DURATION_SECONDS)


class DisplaySettings(DisplaySettingsBase):
    id: int
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BannerSettingsBase(BaseModel):
    image_url: Optional[str] = Field(None, max_length=500, description="URL issued by the upload handler")
    height_px: int = Field(default=defaults.DEFAULT_BANNER_HEIGHT_PX, ge=0)


class BannerSettingsCreate(BannerSettingsBase):
    pass


class BannerSettingsUpdate(PartialUpdate):
    nullable_fields = frozenset({"image_url"})

    image_url: Optional[str] = Field(None, max_length=500)
    height_px: Optional[int] = Field(None, ge=0)


class BannerSettings(BannerSettingsBase):
    id: int
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
