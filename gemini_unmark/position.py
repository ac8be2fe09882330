import numbers
import operator
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional, Union

from . import config
from .errors import InvalidDimensions, InvalidRectangle


@dataclass(frozen=True)
class WatermarkTier:
    logo_size: int
    margin_right: int
    margin_bottom: int


SMALL_TIER = WatermarkTier(config.SMALL_LOGO_SIZE, config.SMALL_MARGIN, config.SMALL_MARGIN)
LARGE_TIER = WatermarkTier(config.LARGE_LOGO_SIZE, config.LARGE_MARGIN, config.LARGE_MARGIN)


@dataclass(frozen=True)
class Rectangle:
    """Watermark bounding box in image pixel coordinates."""

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def coerce(cls, value) -> "Rectangle":
        """Accept a Rectangle, a {x, y, width, height} mapping or a 4-sequence."""
        if isinstance(value, cls):
            return value
        try:
            if isinstance(value, Mapping):
                parts = (value["x"], value["y"], value["width"], value["height"])
            else:
                parts = tuple(value)
                if len(parts) != 4:
                    raise ValueError(f"expected 4 values, got {len(parts)}")
            return cls(*(_as_int(p) for p in parts))
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidRectangle(f"Cannot read rectangle from {value!r}: {e}") from e

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def clip(self, image_width: int, image_height: int) -> "Rectangle":
        """Intersect with the image bounds. The result may be empty."""
        left = max(self.x, 0)
        top = max(self.y, 0)
        right = min(self.x + self.width, image_width)
        bottom = min(self.y + self.height, image_height)
        return Rectangle(left, top, max(right - left, 0), max(bottom - top, 0))

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


def _as_int(value) -> int:
    if isinstance(value, bool):
        raise TypeError("booleans are not coordinates")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{value} is not an integer")
        return int(value)
    return operator.index(value)


def validate_dimensions(width, height):
    if not all(isinstance(v, numbers.Integral) and not isinstance(v, bool) for v in (width, height)):
        raise InvalidDimensions(f"Image dimensions must be integers, got {width!r}x{height!r}")
    if width <= 0 or height <= 0:
        raise InvalidDimensions(f"Image dimensions must be positive, got {width}x{height}")


def detect_tier(width: int, height: int) -> WatermarkTier:
    validate_dimensions(width, height)
    if width > config.LARGE_IMAGE_THRESHOLD and height > config.LARGE_IMAGE_THRESHOLD:
        return LARGE_TIER
    return SMALL_TIER


def detect_rectangle(width: int, height: int, tier: Optional[WatermarkTier] = None) -> Rectangle:
    # Anchored to the bottom-right corner. Small images give negative
    # coordinates on purpose; clipping happens at removal time.
    validate_dimensions(width, height)
    if tier is None:
        tier = detect_tier(width, height)
    return Rectangle(
        x=width - tier.margin_right - tier.logo_size,
        y=height - tier.margin_bottom - tier.logo_size,
        width=tier.logo_size,
        height=tier.logo_size,
    )


@dataclass(frozen=True)
class Detected:
    """Use the rectangle the size rule predicts."""

    def resolve(self, width: int, height: int) -> Rectangle:
        return detect_rectangle(width, height)


@dataclass(frozen=True)
class Explicit:
    """Use a caller-supplied rectangle, e.g. one dragged in an editor."""

    rectangle: Rectangle

    def __post_init__(self):
        object.__setattr__(self, "rectangle", Rectangle.coerce(self.rectangle))

    def resolve(self, width: int, height: int) -> Rectangle:
        return self.rectangle


RectangleSource = Union[Detected, Explicit]


def rectangle_source(override=None) -> RectangleSource:
    if override is None:
        return Detected()
    if isinstance(override, (Detected, Explicit)):
        return override
    return Explicit(Rectangle.coerce(override))
