from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, text


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class VersionedMixin:
    """Columns shared by every record family that carries an active flag."""

    id = Column(Integer, primary_key=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime, nullable=False, default=_utcnow, index=True)


def single_active_index(table_name: str) -> Index:
    """Partial unique index: at most one row of the table may be active."""
    return Index(
        f"ux_{table_name}_single_active",
        "is_active",
        unique=True,
        sqlite_where=text("is_active = 1"),
        postgresql_where=text("is_active"),
    )
