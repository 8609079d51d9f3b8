"""Tests for Pydantic schemas."""

from __future__ import annotations

import math
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from rateboard.schemas import (
    DisplaySettingsCreate,
    DisplaySettingsUpdate,
    MediaItem,
    MediaItemCreate,
    PromoImageCreate,
    RateQuote,
    RateQuoteCreate,
    RateQuoteUpdate,
)


def test_rate_create_rejects_non_finite_and_negative(rate_payload) -> None:
    for bad in (-0.01, math.inf, -math.inf, math.nan):
        with pytest.raises(ValidationError):
            RateQuoteCreate(**dict(rate_payload, gold_24k_sale=bad))


def test_rate_create_accepts_zero(rate_payload) -> None:
    quote = RateQuoteCreate(**dict(rate_payload, silver_per_kg_purchase=0))
    assert quote.silver_per_kg_purchase == 0


def test_rate_update_is_partial() -> None:
    update = RateQuoteUpdate(gold_18k_sale=100)
    assert update.model_dump(exclude_unset=True) == {"gold_18k_sale": 100}


def test_rate_response_from_attributes(rate_payload) -> None:
    now = datetime.now(timezone.utc)

    class Row:
        pass

    row = Row()
    for key, value in dict(rate_payload, id=3, is_active=True, created_at=now).items():
        setattr(row, key, value)
    quote = RateQuote.model_validate(row)
    assert quote.id == 3
    assert quote.created_at == now


def test_display_settings_defaults_serialize_to_plain_values() -> None:
    dumped = DisplaySettingsCreate().model_dump(mode="json")
    assert dumped["orientation"] == "horizontal"
    assert dumped["show_media"] is True
    assert dumped["rates_display_duration_seconds"] == 15


def test_display_settings_minimum_durations() -> None:
    with pytest.raises(ValidationError):
        DisplaySettingsCreate(rates_display_duration_seconds=0)
    with pytest.raises(ValidationError):
        DisplaySettingsUpdate(refresh_interval_seconds=0)
    assert DisplaySettingsUpdate(refresh_interval_seconds=1).refresh_interval_seconds == 1


def test_media_create_kind_optional() -> None:
    item = MediaItemCreate(name="a", url="/a.png")
    assert item.kind is None
    assert item.duration_seconds == 30
    assert item.is_active is True


def test_media_response_requires_kind_and_order() -> None:
    with pytest.raises(ValidationError):
        MediaItem(id=1, name="a", url="/a.png", created_at=datetime.now(timezone.utc))


def test_promo_transition_effect_enum() -> None:
    assert PromoImageCreate(name="p", url="/p.png", transition_effect="zoom-in").transition_effect.value == "zoom-in"
    with pytest.raises(ValidationError):
        PromoImageCreate(name="p", url="/p.png", transition_effect="spin")
