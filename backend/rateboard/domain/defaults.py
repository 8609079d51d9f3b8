"""Default values used when a record or a field has never been submitted."""

from __future__ import annotations

from rateboard.domain.enums import Orientation, TransitionEffect

MIN_DURATION_SECONDS = 1

DEFAULT_ORIENTATION = Orientation.HORIZONTAL.value
DEFAULT_BACKGROUND_COLOR = "#FFF8E1"
DEFAULT_TEXT_COLOR = "#212529"
DEFAULT_RATE_FONT_SIZE = "text-4xl"
DEFAULT_SHOW_MEDIA = True
DEFAULT_RATES_DISPLAY_SECONDS = 15
DEFAULT_REFRESH_INTERVAL_SECONDS = 30
DEFAULT_MEDIA_DURATION_SECONDS = 30
DEFAULT_PROMO_DURATION_SECONDS = 5
DEFAULT_TRANSITION_EFFECT = TransitionEffect.FADE.value
DEFAULT_BANNER_HEIGHT_PX = 120
