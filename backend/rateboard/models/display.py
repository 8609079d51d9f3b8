"""Display settings and banner: singleton-style families with an active flag."""

from __future__ import annotations

from sqlalchemy import Boolean, CheckConstraint, Column, Integer, String

from rateboard.core.db import Base
from rateboard.domain import defaults
from .common import VersionedMixin, single_active_index


class DisplaySettings(Base, VersionedMixin):
    """Look and timing of the TV board. Only the active row is "current"."""

    __tablename__ = "display_settings"

    orientation = Column(String(20), nullable=False, default=defaults.DEFAULT_ORIENTATION)
    background_color = Column(String(32), nullable=False, default=defaults.DEFAULT_BACKGROUND_COLOR)
    text_color = Column(String(32), nullable=False, default=defaults.DEFAULT_TEXT_COLOR)
    rate_font_size = Column(String(32), nullable=False, default=defaults.DEFAULT_RATE_FONT_SIZE)
    show_media = Column(Boolean, nullable=False, default=defaults.DEFAULT_SHOW_MEDIA)
    rates_display_duration_seconds = Column(Integer, nullable=False, default=defaults.DEFAULT_RATES_DISPLAY_SECONDS)
    default_media_duration_seconds = Column(Integer, nullable=False, default=defaults.DEFAULT_MEDIA_DURATION_SECONDS)
    default_promo_duration_seconds = Column(Integer, nullable=False, default=defaults.DEFAULT_PROMO_DURATION_SECONDS)
    refresh_interval_seconds = Column(Integer, nullable=False, default=defaults.DEFAULT_REFRESH_INTERVAL_SECONDS)

    __table_args__ = (
        single_active_index("display_settings"),
        CheckConstraint("orientation IN ('horizontal','vertical')", name="ck_display_settings_orientation"),
        CheckConstraint("rates_display_duration_seconds >= 1", name="ck_display_settings_rates_duration"),
        CheckConstraint("refresh_interval_seconds >= 1", name="ck_display_settings_refresh"),
    )

    def __repr__(self) -> str:
        return f"<DisplaySettings(id={self.id}, orientation='{self.orientation}', show_media={self.show_media})>"


class BannerSettings(Base, VersionedMixin):
    __tablename__ = "banner_settings"

    image_url = Column(String(500), nullable=True)
    height_px = Column(Integer, nullable=False, default=defaults.DEFAULT_BANNER_HEIGHT_PX)

    __table_args__ = (
        single_active_index("banner_settings"),
        CheckConstraint("height_px >= 0", name="ck_banner_settings_height"),
    )

    def __repr__(self) -> str:
        return f"<BannerSettings(id={self.id}, image_url='{self.image_url}', is_active={self.is_active})>"
