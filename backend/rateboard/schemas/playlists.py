"""Schemas for the media and promo playlists."""

from __future__ import annotations

from typing import List, Optional
from datetime import datetime

from pydantic import BaseModel, Field, ConfigDict

from rateboard.domain import defaults
from rateboard.domain.defaults import MIN_DURATION_SECONDS
from rateboard.domain.enums import MediaKind, TransitionEffect

from .common import PartialUpdate


class MediaItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    url: str = Field(..., min_length=1, max_length=500, description="URL issued by the upload handler")
    duration_seconds: int = Field(default=defaults.DEFAULT_MEDIA_DURATION_SECONDS, ge=MIN_DURATION_SECONDS)
    is_active: bool = True
    size_bytes: Optional[int] = Field(None, ge=0)
    mime_type: Optional[str] = Field(None, max_length=100)


class MediaItemCreate(MediaItemBase):
    kind: Optional[MediaKind] = Field(None, description="Derived from mime_type when omitted")


class MediaItemUpdate(PartialUpdate):
    nullable_fields = frozenset({"size_bytes", "mime_type"})

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    url: Optional[str] = Field(None, min_length=1, max_length=500)
    kind: Optional[MediaKind] = None
    duration_seconds: Optional[int] = Field(None, ge=MIN_DURATION_SECONDS)
    order_index: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None
    size_bytes: Optional[int] = Field(None, ge=0)
    mime_type: Optional[str] = Field(None, max_length=100)


class MediaItem(MediaItemBase):
    id: int
    kind: MediaKind
    order_index: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PromoImageBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    url: str = Field(..., min_length=1, max_length=500, description="URL issued by the upload handler")
    duration_seconds: int = Field(default=defaults.DEFAULT_PROMO_DURATION_SECONDS, ge=MIN_DURATION_SECONDS)
    transition_effect: TransitionEffect = TransitionEffect.FADE
    is_active: bool = True
    size_bytes: Optional[int] = Field(None, ge=0)


class PromoImageCreate(PromoImageBase):
    pass


class PromoImageUpdate(PartialUpdate):
    nullable_fields = frozenset({"size_bytes"})

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    url: Optional[str] = Field(None, min_length=1, max_length=500)
    duration_seconds: Optional[int] = Field(None, ge=MIN_DURATION_SECONDS)
    transition_effect: Optional[TransitionEffect] = None
    order_index: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None
    size_bytes: Optional[int] = Field(None, ge=0)


class PromoImage(PromoImageBase):
    id: int
    order_index: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PlaylistReorder(BaseModel):
    ids: List[int] = Field(..., description="Item ids in the desired playback order")
