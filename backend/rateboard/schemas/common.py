"""Shared base for partial-update payloads."""

from __future__ import annotations

from typing import ClassVar, FrozenSet

from pydantic import BaseModel, model_validator


class PartialUpdate(BaseModel):
    """Omitted fields are left alone; an explicit null clears a nullable column.

    Subclasses list the columns that may be cleared in `nullable_fields`. A null
    sent for any other field is rejected instead of being silently dropped.
    """

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_null_on_required_columns(self) -> "PartialUpdate":
        cleared = sorted(
            name for name in self.model_fields_set if getattr(self, name) is None and name not in self.nullable_fields
        )
        if cleared:
            raise ValueError(f"Fields cannot be null: {', '.join(cleared)}")
        return self
