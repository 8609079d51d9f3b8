from __future__ import annotations

from typing import Any, Dict

from rateboard.domain.enums import MediaKind
from rateboard.models import MediaItem, PromoImage
from rateboard.schemas import (
    MediaItemCreate,
    MediaItemUpdate,
    PromoImageCreate,
    PromoImageUpdate,
)
from .versioning import PlaylistStore


def media_kind_for(mime_type: str | None) -> str:
    if mime_type and mime_type.lower().startswith("image/"):
        return MediaKind.IMAGE.value
    return MediaKind.VIDEO.value


class MediaService(PlaylistStore[MediaItem]):
    """Full-screen media playlist shown between rate intervals."""

    model = MediaItem
    create_schema = MediaItemCreate
    update_schema = MediaItemUpdate
    family = "media_item"

    def _prepare_create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        if not fields.get("kind"):
            fields["kind"] = media_kind_for(fields.get("mime_type"))
        return fields


class PromoService(PlaylistStore[PromoImage]):
    """Promo slideshow playlist, independent of the media playlist."""

    model = PromoImage
    create_schema = PromoImageCreate
    update_schema = PromoImageUpdate
    family = "promo_image"
