"""Rates API router."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rateboard.core.db import get_session
from rateboard.models import RateQuote as RateQuoteModel
from rateboard.schemas import RateQuote, RateQuoteCreate, RateQuoteUpdate
from rateboard.services import RateService


router = APIRouter(prefix="/rates", tags=["rates"])


@router.get("/current", response_model=Optional[RateQuote])
def get_current_rates(db: Session = Depends(get_session)) -> Optional[RateQuoteModel]:
    """Return the quote the board should show, or null before the first submission."""
    return RateService(db).get_current()


@router.post("/", response_model=RateQuote, status_code=status.HTTP_201_CREATED)
def create_rates(payload: RateQuoteCreate, db: Session = Depends(get_session)) -> RateQuoteModel:
    return RateService(db).create(payload)


@router.put("/{rate_id}", response_model=RateQuote)
def update_rates(rate_id: int, payload: RateQuoteUpdate, db: Session = Depends(get_session)) -> RateQuoteModel:
    quote = RateService(db).update(rate_id, payload)
    if quote is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rate quote not found")
    return quote
