from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, Float

from rateboard.core.db import Base
from .common import VersionedMixin, single_active_index

RATE_FIELDS = (
    "gold_24k_sale",
    "gold_24k_purchase",
    "gold_22k_sale",
    "gold_22k_purchase",
    "gold_18k_sale",
    "gold_18k_purchase",
    "silver_per_kg_sale",
    "silver_per_kg_purchase",
)


class RateQuote(Base, VersionedMixin):
    """One submission of gold/silver rates; the active row is what the board shows."""

    __tablename__ = "rate_quotes"

    gold_24k_sale = Column(Float, nullable=False)
    gold_24k_purchase = Column(Float, nullable=False)
    gold_22k_sale = Column(Float, nullable=False)
    gold_22k_purchase = Column(Float, nullable=False)
    gold_18k_sale = Column(Float, nullable=False)
    gold_18k_purchase = Column(Float, nullable=False)
    silver_per_kg_sale = Column(Float, nullable=False)
    silver_per_kg_purchase = Column(Float, nullable=False)

    __table_args__ = (
        single_active_index("rate_quotes"),
        *(CheckConstraint(f"{name} >= 0", name=f"ck_rate_quotes_{name}") for name in RATE_FIELDS),
    )

    def __repr__(self) -> str:
        return f"<RateQuote(id={self.id}, gold_24k_sale={self.gold_24k_sale}, is_active={self.is_active})>"
