"""Pydantic schemas package.

Public re-exports keep import paths short: `from rateboard.schemas import RateQuoteCreate`.
"""

from .rates import (
    RateQuoteBase,
    RateQuoteCreate,
    RateQuoteUpdate,
    RateQuote,
)  # noqa: F401
from .display import (
    DisplaySettingsBase,
    DisplaySettingsCreate,
    DisplaySettingsUpdate,
    DisplaySettings,
    BannerSettingsBase,
    BannerSettingsCreate,
    BannerSettingsUpdate,
    BannerSettings,
)  # noqa: F401
from .playlists import (
    MediaItemBase,
    MediaItemCreate,
    MediaItemUpdate,
    MediaItem,
    PromoImageBase,
    PromoImageCreate,
    PromoImageUpdate,
    PromoImage,
    PlaylistReorder,
)  # noqa: F401
from .system import SystemInfo  # noqa: F401
