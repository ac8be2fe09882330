import logging
import threading

import numpy as np
from PIL import Image

from . import config
from .errors import InvalidDimensions

logger = logging.getLogger(__name__)


def calculate_alpha(capture):
    """
    Per-pixel opacity of the logo from a capture over the black backdrop.

    formula: alpha = (max(r, g, b) - backdrop) / (logo - backdrop), clamped to [0, 1]
    """
    if capture.mode != 'RGB':
        capture = capture.convert('RGB')
    arr = np.asarray(capture, dtype=np.float32)
    deviation = np.max(arr, axis=2) - config.BACKDROP_VALUE
    alpha_map = deviation / (config.LOGO_VALUE - config.BACKDROP_VALUE)
    return np.clip(alpha_map, 0.0, 1.0)


class AlphaCalibrator:
    """
    Derives alpha maps of any size from the reference captures.

    Maps are memoized per (width, height) and never evicted. The lock makes
    the first caller for a size compute it while concurrent callers wait.
    """

    def __init__(self, assets):
        self._assets = assets
        self._cache = {}
        self._lock = threading.Lock()

    def get_alpha_map(self, width, height=None):
        if height is None:
            height = width
        key = (width, height)
        alpha_map = self._cache.get(key)
        if alpha_map is not None:
            return alpha_map

        with self._lock:
            alpha_map = self._cache.get(key)
            if alpha_map is None:
                alpha_map = self._derive(width, height)
                self._cache[key] = alpha_map
        return alpha_map

    def _derive(self, width, height):
        if width <= 0 or height <= 0:
            raise InvalidDimensions(f"Alpha map size must be positive, got {width}x{height}")
        logger.debug("Alpha map cache miss for %dx%d", width, height)

        capture = self._assets.capture_for(width, height)
        if capture.size != (width, height):
            capture = capture.resize((width, height), Image.Resampling.BILINEAR)

        alpha_map = calculate_alpha(capture)
        # Shared between callers; nobody may write into it
        alpha_map.flags.writeable = False
        return alpha_map

    @property
    def cached_sizes(self):
        return sorted(self._cache)
