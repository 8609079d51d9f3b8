"""Rotation of the unattended display between the rate board and media.

Top-level states are ``ShowingRates`` and ``ShowingMedia(index)``. A promo
slideshow advances on its own timer next to them. Data arrives through
``load()`` (the poller calls it after every round-trip); timers move the
states forward in between, independent of network latency.

Rules:
- Rates -> Media after ``rates_display_duration_seconds``, only if
  ``show_media`` is on and the media playlist is non-empty; otherwise the rates
  timer is simply re-armed.
- Media(i) -> Rates after item i's own ``duration_seconds``; the media index
  moves on by one (circularly) when leaving Media.
- Every timer is re-armed with the duration of the state being entered.
- Until settings and the media playlist have been loaded, no rotation timer
  runs. An emptied playlist while on Media returns to Rates at once.
- Indices past the end of a shrunken playlist are clamped to 0 on the next
  evaluation.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from rateboard.core.logging import log_event
from rateboard.domain import defaults
from rateboard.domain.defaults import MIN_DURATION_SECONDS
from .timers import TimerSlots

logger = logging.getLogger(__name__)

ROTATION_SLOT = "rotation"
PROMO_SLOT = "promo"


@dataclass(frozen=True)
class ShowingRates:
    pass


@dataclass(frozen=True)
class ShowingMedia:
    index: int


DisplayState = Union[ShowingRates, ShowingMedia]


def _field(data: Any, name: str) -> Any:
    if isinstance(data, Mapping):
        return data.get(name)
    return getattr(data, name, None)


def _duration(value: Any, fallback: float) -> float:
    """Coerce a duration; anything missing, non-numeric or below the minimum uses `fallback`."""
    if isinstance(value, bool):
        return fallback
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(seconds) or seconds < MIN_DURATION_SECONDS:
        return fallback
    return seconds


@dataclass(frozen=True)
class RotationSettings:
    show_media: bool = defaults.DEFAULT_SHOW_MEDIA
    rates_display_duration_seconds: float = defaults.DEFAULT_RATES_DISPLAY_SECONDS
    default_media_duration_seconds: float = defaults.DEFAULT_MEDIA_DURATION_SECONDS
    default_promo_duration_seconds: float = defaults.DEFAULT_PROMO_DURATION_SECONDS
    refresh_interval_seconds: float = defaults.DEFAULT_REFRESH_INTERVAL_SECONDS

    @classmethod
    def from_payload(cls, data: Any) -> Optional["RotationSettings"]:
        """Build from an API payload or ORM row; malformed fields fall back to defaults."""
        if data is None:
            return None
        base = cls()
        show_media = _field(data, "show_media")
        return cls(
            show_media=show_media if isinstance(show_media, bool) else base.show_media,
            rates_display_duration_seconds=_duration(
                _field(data, "rates_display_duration_seconds"), base.rates_display_duration_seconds
            ),
            default_media_duration_seconds=_duration(
                _field(data, "default_media_duration_seconds"), base.default_media_duration_seconds
            ),
            default_promo_duration_seconds=_duration(
                _field(data, "default_promo_duration_seconds"), base.default_promo_duration_seconds
            ),
            refresh_interval_seconds=_duration(
                _field(data, "refresh_interval_seconds"), base.refresh_interval_seconds
            ),
        )


@dataclass(frozen=True)
class Slide:
    """One playable item of the media or promo playlist."""

    url: str
    duration_seconds: Optional[float] = None
    id: Optional[int] = None
    name: Optional[str] = None
    kind: str = "image"
    transition_effect: str = defaults.DEFAULT_TRANSITION_EFFECT

    @classmethod
    def from_payload(cls, data: Any) -> Optional["Slide"]:
        url = _field(data, "url")
        if not isinstance(url, str) or not url:
            return None
        raw_duration = _field(data, "duration_seconds")
        return cls(
            url=url,
            duration_seconds=_duration(raw_duration, 0.0) or None,
            id=_field(data, "id"),
            name=_field(data, "name"),
            kind=str(_field(data, "kind") or "image"),
            transition_effect=str(_field(data, "transition_effect") or defaults.DEFAULT_TRANSITION_EFFECT),
        )


def slides_from_payload(items: Optional[Iterable[Any]]) -> Optional[List[Slide]]:
    """Parse a playlist; None stays None (not loaded), malformed entries are skipped."""
    if items is None:
        return None
    slides: List[Slide] = []
    for item in items:
        slide = Slide.from_payload(item)
        if slide is not None:
            slides.append(slide)
    return slides


@dataclass(frozen=True)
class DisplaySnapshot:
    """What the screen should render right now."""

    state: DisplayState
    media: Optional[Slide]
    promo: Optional[Slide]
    promo_index: int
    pending: bool


class RotationScheduler:
    """Single-threaded state machine; all mutation happens in `load` or timer callbacks."""

    def __init__(
        self,
        timers: TimerSlots,
        *,
        on_change: Optional[Callable[[DisplaySnapshot], None]] = None,
    ) -> None:
        self._timers = timers
        self._on_change = on_change
        self._state: DisplayState = ShowingRates()
        self._settings: Optional[RotationSettings] = None
        self._media: Optional[List[Slide]] = None
        self._promos: Optional[List[Slide]] = None
        self._media_index = 0
        self._promo_index = 0
        self._closed = False

    # Read side
    @property
    def state(self) -> DisplayState:
        return self._state

    @property
    def promo_index(self) -> int:
        return self._promo_index

    @property
    def settings(self) -> Optional[RotationSettings]:
        return self._settings

    @property
    def pending(self) -> bool:
        """True while rotation waits for its first settings and media data."""
        return self._settings is None or self._media is None

    def snapshot(self) -> DisplaySnapshot:
        media = None
        if isinstance(self._state, ShowingMedia) and self._state.index < len(self._media or []):
            media = self._media[self._state.index]
        promo = None
        if self._promo_index < len(self._promos or []):
            promo = self._promos[self._promo_index]
        return DisplaySnapshot(
            state=self._state,
            media=media,
            promo=promo,
            promo_index=self._promo_index,
            pending=self.pending,
        )

    # Data in
    def load(
        self,
        *,
        settings: Any = None,
        media: Optional[Iterable[Any]] = None,
        promos: Optional[Iterable[Any]] = None,
    ) -> None:
        """Replace the known data and run one evaluation tick. None means "not available"."""
        if self._closed:
            return
        self._settings = settings if isinstance(settings, RotationSettings) else RotationSettings.from_payload(settings)
        self._media = slides_from_payload(media)
        self._promos = slides_from_payload(promos)
        self._evaluate()

    def close(self) -> None:
        """Tear down: clear every pending timer; later callbacks and loads are ignored."""
        self._closed = True
        self._timers.cancel(ROTATION_SLOT)
        self._timers.cancel(PROMO_SLOT)

    # Evaluation tick
    def _evaluate(self) -> None:
        media_count = len(self._media or [])
        if self._media_index >= media_count:
            self._media_index = 0
        promo_clamped = self._promo_index >= len(self._promos or [])
        if promo_clamped:
            self._promo_index = 0

        if isinstance(self._state, ShowingMedia):
            if media_count == 0:
                self._enter_rates()
            elif self._state.index != self._media_index:
                # Playlist shrank under the current item; keep the running timer
                self._set_state(ShowingMedia(self._media_index))
        elif self._settings is None or self._media is None:
            self._timers.cancel(ROTATION_SLOT)
        elif not self._timers.is_armed(ROTATION_SLOT):
            self._enter_rates()

        self._evaluate_promos(promo_clamped)

    def _evaluate_promos(self, clamped: bool) -> None:
        if not self._promos:
            self._timers.cancel(PROMO_SLOT)
            return
        if clamped and self._timers.is_armed(PROMO_SLOT):
            # The slide on screen was removed; start over with the first one
            self._arm_promo()
            self._notify()
        elif not self._timers.is_armed(PROMO_SLOT):
            self._arm_promo()

    # Transitions
    def _can_rotate(self) -> bool:
        return bool(self._settings and self._settings.show_media and self._media)

    def _enter_rates(self) -> None:
        self._set_state(ShowingRates())
        if self._settings is None or self._media is None:
            self._timers.cancel(ROTATION_SLOT)
            return
        self._timers.arm(ROTATION_SLOT, self._settings.rates_display_duration_seconds, self._on_rotation_timer)

    def _enter_media(self) -> None:
        assert self._media
        if self._media_index >= len(self._media):
            self._media_index = 0
        slide = self._media[self._media_index]
        fallback = (self._settings or RotationSettings()).default_media_duration_seconds
        self._set_state(ShowingMedia(self._media_index))
        self._timers.arm(ROTATION_SLOT, slide.duration_seconds or fallback, self._on_rotation_timer)

    def _on_rotation_timer(self) -> None:
        if self._closed:
            return
        if isinstance(self._state, ShowingRates):
            if self._can_rotate():
                self._enter_media()
            else:
                self._enter_rates()
            return
        media_count = len(self._media or [])
        self._media_index = (self._state.index + 1) % media_count if media_count else 0
        self._enter_rates()

    def _arm_promo(self) -> None:
        assert self._promos
        slide = self._promos[self._promo_index]
        fallback = (self._settings or RotationSettings()).default_promo_duration_seconds
        self._timers.arm(PROMO_SLOT, slide.duration_seconds or fallback, self._on_promo_timer)

    def _on_promo_timer(self) -> None:
        if self._closed or not self._promos:
            return
        self._promo_index = (self._promo_index + 1) % len(self._promos)
        self._arm_promo()
        log_event("promo_advanced", log=logger, level=logging.DEBUG, promo_index=self._promo_index)
        self._notify()

    def _set_state(self, state: DisplayState) -> None:
        if state == self._state:
            return
        previous = self._state
        self._state = state
        log_event(
            "display_state_changed",
            log=logger,
            level=logging.DEBUG,
            previous=previous,
            current=state,
        )
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.snapshot())
