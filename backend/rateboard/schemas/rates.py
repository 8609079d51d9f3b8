"""Schemas for gold/silver rate quotes."""

from __future__ import annotations

from typing import Optional
from datetime import datetime

from pydantic import BaseModel, Field, ConfigDict

from .common import PartialUpdate


def _rate(description: str):
    return Field(..., ge=0, allow_inf_nan=False, description=description)


def _optional_rate(description: str):
    return Field(None, ge=0, allow_inf_nan=False, description=description)


class RateQuoteBase(BaseModel):
    gold_24k_sale: float = _rate("24K gold sale price per 10g")
    gold_24k_purchase: float = _rate("24K gold purchase price per 10g")
    gold_22k_sale: float = _rate("22K gold sale price per 10g")
    gold_22k_purchase: float = _rate("22K gold purchase price per 10g")
    gold_18k_sale: float = _rate("18K gold sale price per 10g")
    gold_18k_purchase: float = _rate("18K gold purchase price per 10g")
    silver_per_kg_sale: float = _rate("Silver sale price per kg")
    silver_per_kg_purchase: float = _rate("Silver purchase price per kg")


class RateQuoteCreate(RateQuoteBase):
    pass


class RateQuoteUpdate(PartialUpdate):
    """Partial correction of a quote; never changes which quote is active."""

    gold_24k_sale: Optional[float] = _optional_rate("24K gold sale price per 10g")
    gold_24k_purchase: Optional[float] = _optional_rate("24K gold purchase price per 10g")
    gold_22k_sale: Optional[float] = _optional_rate("22K gold sale price per 10g")
    gold_22k_purchase: Optional[float] = _optional_rate("22K gold purchase price per 10g")
    gold_18k_sale: Optional[float] = _optional_rate("18K gold sale price per 10g")
    gold_18k_purchase: Optional[float] = _optional_rate("18K gold purchase price per 10g")
    silver_per_kg_sale: Optional[float] = _optional_rate("Silver sale price per kg")
    silver_per_kg_purchase: Optional[float] = _optional_rate("Silver purchase price per kg")


class RateQuote(RateQuoteBase):
    id: int
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
