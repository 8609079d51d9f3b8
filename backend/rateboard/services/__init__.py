"""Service layer for the record families.

Exposes:
- RateService
- DisplaySettingsService
- BannerService
- MediaService
- PromoService
"""

from .rates import RateService
from .display import DisplaySettingsService, BannerService
from .playlists import MediaService, PromoService

__all__ = [
    "RateService",
    "DisplaySettingsService",
    "BannerService",
    "MediaService",
    "PromoService",
]
