from __future__ import annotations

from enum import Enum


class Orientation(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class TransitionEffect(str, Enum):
    FADE = "fade"
    SLIDE_LEFT = "slide-left"
    SLIDE_RIGHT = "slide-right"
    ZOOM_IN = "zoom-in"
    ZOOM_OUT = "zoom-out"
    FLIP_X = "flip-x"
    FLIP_Y = "flip-y"
    ROTATE_IN = "rotate-in"
    ROTATE_OUT = "rotate-out"
    BOUNCE = "bounce"
