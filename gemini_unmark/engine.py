"""
Watermark engine: detection, alpha map calibration and removal.

    engine = Engine.create()
    info = engine.describe(width, height)
    clean = engine.remove(pixels)                      # detected position
    clean = engine.remove(pixels, override=(x, y, w, h))  # user-drawn box
"""

import logging
from dataclasses import dataclass

import numpy as np
from PIL import Image

from .alpha_map import AlphaCalibrator
from .assets import ReferenceAssets
from .blend import remove_watermark
from .errors import InvalidDimensions, InvalidPixelBuffer
from .position import Rectangle, WatermarkTier, detect_rectangle, detect_tier, rectangle_source

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WatermarkInfo:
    tier: WatermarkTier
    rectangle: Rectangle

    @property
    def logo_size(self):
        return self.tier.logo_size

    def to_dict(self):
        return {
            "logo_size": self.tier.logo_size,
            "rectangle": self.rectangle.to_dict(),
            "config": {
                "logo_size": self.tier.logo_size,
                "margin_right": self.tier.margin_right,
                "margin_bottom": self.tier.margin_bottom,
            },
        }


def describe_watermark(width: int, height: int) -> WatermarkInfo:
    """Tier and rectangle for an image size; needs no reference captures."""
    tier = detect_tier(width, height)
    return WatermarkInfo(tier=tier, rectangle=detect_rectangle(width, height, tier))


class Engine:
    """Owns the reference captures and the alpha map cache."""

    def __init__(self, assets: ReferenceAssets):
        self.assets = assets
        self.calibrator = AlphaCalibrator(assets)

    @classmethod
    def create(cls, mask_dir=None, download=True) -> "Engine":
        """Load (and if needed download) both captures; raises InitializationFailure."""
        return cls(ReferenceAssets.from_directory(mask_dir, download=download))

    def describe(self, width: int, height: int) -> WatermarkInfo:
        return describe_watermark(width, height)

    def get_alpha_map(self, width, height=None):
        return self.calibrator.get_alpha_map(width, height)

    def remove(self, pixels, width=None, height=None, override=None) -> np.ndarray:
        """
        Return a copy of `pixels` with the watermark removed.

        `override` is None (use the detected position), a Rectangle, a
        {x, y, width, height} mapping or an (x, y, width, height) tuple.
        Pixels outside the resolved rectangle are returned unchanged.
        """
        ih, iw = _check_pixels(pixels)
        if (width is not None and width != iw) or (height is not None and height != ih):
            raise InvalidDimensions(
                f"Declared size {width}x{height} does not match buffer {iw}x{ih}"
            )
        if iw <= 0 or ih <= 0:
            raise InvalidDimensions(f"Image dimensions must be positive, got {iw}x{ih}")

        rectangle = rectangle_source(override).resolve(iw, ih)
        result = np.array(pixels, dtype=np.uint8, copy=True)

        if rectangle.is_empty or rectangle.clip(iw, ih).is_empty:
            logger.debug("Rectangle %s lies outside %dx%d image, nothing to do", rectangle, iw, ih)
            return result

        alpha_map = self.calibrator.get_alpha_map(rectangle.width, rectangle.height)
        remove_watermark(result, rectangle, alpha_map)
        logger.info(
            "Removed watermark at (%d, %d) size %dx%d",
            rectangle.x, rectangle.y, rectangle.width, rectangle.height,
        )
        return result

    def remove_from_image(self, image: Image.Image, override=None) -> Image.Image:
        """Same as remove() for a PIL image; RGB stays RGB, anything else becomes RGBA."""
        if image.mode not in ('RGB', 'RGBA'):
            image = image.convert('RGBA')
        pixels = np.array(image)
        return Image.fromarray(self.remove(pixels, override=override))


def _check_pixels(pixels):
    if not isinstance(pixels, np.ndarray):
        raise InvalidPixelBuffer(f"Expected a numpy array, got {type(pixels).__name__}")
    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise InvalidPixelBuffer(f"Expected an (H, W, 3) or (H, W, 4) array, got shape {pixels.shape}")
    if pixels.dtype != np.uint8:
        raise InvalidPixelBuffer(f"Expected 8-bit samples, got {pixels.dtype}")
    return pixels.shape[:2]
