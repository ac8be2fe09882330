"""
Gemini watermark removal engine.

Detects where the semi-transparent logo sits, calibrates its per-pixel
opacity from two reference captures, and reverses the alpha blending.
"""

from .alpha_map import AlphaCalibrator, calculate_alpha
from .assets import ReferenceAssets, fetch_reference_captures, load_capture
from .batch import BatchItem, BatchResult, remove_batch
from .blend import remove_watermark
from .engine import Engine, WatermarkInfo, describe_watermark
from .errors import (
    InitializationFailure,
    InvalidDimensions,
    InvalidPixelBuffer,
    InvalidRectangle,
    WatermarkError,
)
from .position import (
    Detected,
    Explicit,
    Rectangle,
    WatermarkTier,
    detect_rectangle,
    detect_tier,
)

__version__ = "0.1.0"

__all__ = [
    "AlphaCalibrator",
    "BatchItem",
    "BatchResult",
    "Detected",
    "Engine",
    "Explicit",
    "InitializationFailure",
    "InvalidDimensions",
    "InvalidPixelBuffer",
    "InvalidRectangle",
    "Rectangle",
    "ReferenceAssets",
    "WatermarkError",
    "WatermarkInfo",
    "WatermarkTier",
    "calculate_alpha",
    "describe_watermark",
    "detect_rectangle",
    "detect_tier",
    "fetch_reference_captures",
    "load_capture",
    "remove_batch",
    "remove_watermark",
]
