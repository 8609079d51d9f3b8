"""SQLAlchemy models package.

from rateboard.models import (
    RateQuote, DisplaySettings, BannerSettings, MediaItem, PromoImage,
)
"""

from .rates import RateQuote, RATE_FIELDS  # noqa: F401
from .display import DisplaySettings, BannerSettings  # noqa: F401
from .playlists import MediaItem, PromoImage  # noqa: F401
