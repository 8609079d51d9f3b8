from __future__ import annotations

from typing import Any, Mapping, Union

from pydantic import BaseModel

from rateboard.models import BannerSettings, DisplaySettings
from rateboard.schemas import (
    BannerSettingsCreate,
    BannerSettingsUpdate,
    DisplaySettingsCreate,
    DisplaySettingsUpdate,
)
from .versioning import SingletonStore, family_lock


class DisplaySettingsService(SingletonStore[DisplaySettings]):
    """Display settings versions. Current = the active row (explicit flag)."""

    model = DisplaySettings
    create_schema = DisplaySettingsCreate
    update_schema = DisplaySettingsUpdate
    family = "display_settings"

    def upsert(self, patch: Union[BaseModel, Mapping[str, Any]]) -> DisplaySettings:
        """Patch the current settings in place, or create the first version from defaults + patch."""
        fields = self._validate(patch, partial=True)
        with family_lock(self.family):
            current = self.get_current()
            if current is not None:
                updated = self.update(current.id, fields)
                if updated is not None:
                    return updated
            return self.create(fields)


class BannerService(SingletonStore[BannerSettings]):
    model = BannerSettings
    create_schema = BannerSettingsCreate
    update_schema = BannerSettingsUpdate
    family = "banner_settings"
