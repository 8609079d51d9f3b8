"""API routers package."""

from . import health, rates, settings, media, promo, banner, system  # noqa: F401
