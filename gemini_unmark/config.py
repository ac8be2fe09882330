import os

# Watermark rules: both sides above the threshold -> 96px logo, else 48px
LARGE_IMAGE_THRESHOLD = 1024

SMALL_LOGO_SIZE = 48
SMALL_MARGIN = 32
LARGE_LOGO_SIZE = 96
LARGE_MARGIN = 64

# Captures: the 96px one is used when the requested map is larger than this
CAPTURE_SELECT_THRESHOLD = 72

# The logo is pure white, captured over a pure black backdrop
LOGO_VALUE = 255.0
BACKDROP_VALUE = 0.0

MASK_URLS = {
    48: "https://raw.githubusercontent.com/journey-ad/gemini-watermark-remover/main/src/assets/bg_48.png",
    96: "https://raw.githubusercontent.com/journey-ad/gemini-watermark-remover/main/src/assets/bg_96.png"
}
CAPTURE_SIZES = tuple(sorted(MASK_URLS))

MASK_DIR_ENV = "GEMINI_UNMARK_MASK_DIR"
DEFAULT_MASK_DIR = os.path.expanduser("~/.gemini/assets/masks")


def mask_dir(override=None):
    """Directory holding bg_48.png / bg_96.png."""
    if override:
        return os.path.expanduser(override)
    return os.path.expanduser(os.environ.get(MASK_DIR_ENV) or DEFAULT_MASK_DIR)


def mask_filename(size):
    return f"bg_{size}.png"
