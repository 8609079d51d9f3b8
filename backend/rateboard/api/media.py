"""Media playlist API router."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from rateboard.core.db import get_session
from rateboard.models import MediaItem as MediaItemModel
from rateboard.schemas import MediaItem, MediaItemCreate, MediaItemUpdate, PlaylistReorder
from rateboard.services import MediaService


router = APIRouter(prefix="/media", tags=["media"])


@router.get("/", response_model=List[MediaItem])
def list_media(active: bool = False, db: Session = Depends(get_session)) -> List[MediaItemModel]:
    """List the playlist in playback order; `active=true` hides disabled items."""
    return MediaService(db).list(active_only=active)


@router.post("/", response_model=MediaItem, status_code=status.HTTP_201_CREATED)
def create_media(payload: MediaItemCreate, db: Session = Depends(get_session)) -> MediaItemModel:
    return MediaService(db).create(payload)


@router.post("/reorder", response_model=List[MediaItem])
def reorder_media(payload: PlaylistReorder, db: Session = Depends(get_session)) -> List[MediaItemModel]:
    return MediaService(db).reorder(payload.ids)


@router.get("/{item_id}", response_model=MediaItem)
def get_media(item_id: int, db: Session = Depends(get_session)) -> MediaItemModel:
    return MediaService(db).get_or_raise(item_id)


@router.put("/{item_id}", response_model=MediaItem)
def update_media(item_id: int, payload: MediaItemUpdate, db: Session = Depends(get_session)) -> MediaItemModel:
    item = MediaService(db).update(item_id, payload)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media item not found")
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_media(item_id: int, db: Session = Depends(get_session)) -> Response:
    if not MediaService(db).delete(item_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media item not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
