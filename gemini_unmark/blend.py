import numpy as np

from . import config


def remove_watermark(pixels, rectangle, alpha_map):
    """
    Reverse alpha blending of the white logo inside `rectangle`, in place.

    Formula: original = (observed - alpha * LOGO) / (1 - alpha)

    Args:
        pixels: uint8 array (H, W, 3) or (H, W, 4); the alpha channel is left alone
        rectangle: Rectangle the map was derived for, may stick out of the image
        alpha_map: float array shaped (rectangle.height, rectangle.width)

    Returns:
        `pixels`, modified only inside the clipped rectangle
    """
    if alpha_map.shape != (rectangle.height, rectangle.width):
        raise ValueError(
            f"Alpha map {alpha_map.shape[1]}x{alpha_map.shape[0]} does not match "
            f"rectangle {rectangle.width}x{rectangle.height}"
        )

    ih, iw = pixels.shape[:2]
    clipped = rectangle.clip(iw, ih)
    if clipped.is_empty:
        return pixels

    # Part of the map that lands inside the image
    ox, oy = clipped.x - rectangle.x, clipped.y - rectangle.y
    alpha = alpha_map[oy:oy + clipped.height, ox:ox + clipped.width].astype(np.float64)
    alpha_expanded = alpha[:, :, np.newaxis]

    bx, by = clipped.x, clipped.y
    patch = pixels[by:by + clipped.height, bx:bx + clipped.width, :3].astype(np.float64)

    # Fully opaque pixels carry nothing of the original, pass them through
    opaque = alpha_expanded >= 1.0
    numerator = patch - config.LOGO_VALUE * alpha_expanded
    denominator = np.where(opaque, 1.0, 1.0 - alpha_expanded)
    restored = np.where(opaque, patch, numerator / denominator)

    pixels[by:by + clipped.height, bx:bx + clipped.width, :3] = \
        np.clip(np.rint(restored), 0, 255).astype(np.uint8)
    return pixels
