"""Playlist families: many rows may be active, played back by order_index."""

from __future__ import annotations

from sqlalchemy import BigInteger, CheckConstraint, Column, Integer, String

from rateboard.core.db import Base
from rateboard.domain import defaults
from .common import VersionedMixin


class MediaItem(Base, VersionedMixin):
    """Image or video shown full-screen between rate intervals."""

    __tablename__ = "media_items"

    name = Column(String(255), nullable=False)
    url = Column(String(500), nullable=False)
    kind = Column(String(10), nullable=False)  # "image" | "video"
    duration_seconds = Column(Integer, nullable=False, default=defaults.DEFAULT_MEDIA_DURATION_SECONDS)
    order_index = Column(Integer, nullable=False, index=True)
    size_bytes = Column(BigInteger, nullable=True)
    mime_type = Column(String(100), nullable=True)

    __table_args__ = (
        CheckConstraint("kind IN ('image','video')", name="ck_media_items_kind"),
        CheckConstraint("duration_seconds >= 1", name="ck_media_items_duration"),
    )

    def __repr__(self) -> str:
        return f"<MediaItem(id={self.id}, name='{self.name}', order_index={self.order_index})>"


class PromoImage(Base, VersionedMixin):
    """Slide in the promo panel rendered inside the rates view."""

    __tablename__ = "promo_images"

    name = Column(String(255), nullable=False)
    url = Column(String(500), nullable=False)
    duration_seconds = Column(Integer, nullable=False, default=defaults.DEFAULT_PROMO_DURATION_SECONDS)
    transition_effect = Column(String(20), nullable=False, default=defaults.DEFAULT_TRANSITION_EFFECT)
    order_index = Column(Integer, nullable=False, index=True)
    size_bytes = Column(BigInteger, nullable=True)

    __table_args__ = (
        CheckConstraint("duration_seconds >= 1", name="ck_promo_images_duration"),
    )

    def __repr__(self) -> str:
        return f"<PromoImage(id={self.id}, name='{self.name}', order_index={self.order_index})>"
