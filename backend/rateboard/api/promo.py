"""Promo playlist API router."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from rateboard.core.db import get_session
from rateboard.models import PromoImage as PromoImageModel
from rateboard.schemas import PromoImage, PromoImageCreate, PromoImageUpdate, PlaylistReorder
from rateboard.services import PromoService


router = APIRouter(prefix="/promo", tags=["promo"])


@router.get("/", response_model=List[PromoImage])
def list_promo(active: bool = False, db: Session = Depends(get_session)) -> List[PromoImageModel]:
    """List promo slides in playback order."""
    return PromoService(db).list(active_only=active)


@router.post("/", response_model=PromoImage, status_code=status.HTTP_201_CREATED)
def create_promo(payload: PromoImageCreate, db: Session = Depends(get_session)) -> PromoImageModel:
    return PromoService(db).create(payload)


@router.post("/reorder", response_model=List[PromoImage])
def reorder_promo(payload: PlaylistReorder, db: Session = Depends(get_session)) -> List[PromoImageModel]:
    return PromoService(db).reorder(payload.ids)


@router.get("/{item_id}", response_model=PromoImage)
def get_promo(item_id: int, db: Session = Depends(get_session)) -> PromoImageModel:
    return PromoService(db).get_or_raise(item_id)


@router.put("/{item_id}", response_model=PromoImage)
def update_promo(item_id: int, payload: PromoImageUpdate, db: Session = Depends(get_session)) -> PromoImageModel:
    item = PromoService(db).update(item_id, payload)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Promotional image not found")
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_promo(item_id: int, db: Session = Depends(get_session)) -> Response:
    if not PromoService(db).delete(item_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Promotional image not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
