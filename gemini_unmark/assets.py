"""
Reference captures of the watermark logo.

Each capture is the logo as rendered over a pure black backdrop, at its
native size (48x48 and 96x96). Their pixels are the only model of the
watermark the engine has.
"""

import io
import logging
import os
import urllib.request
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from . import config
from .errors import InitializationFailure

logger = logging.getLogger(__name__)


def load_capture(source, size):
    """
    Decode one capture and check its native size.

    `source` may be a path, raw bytes, a binary file object or a PIL image.
    Returns an RGB image.
    """
    try:
        if isinstance(source, Image.Image):
            img = source.copy()
        elif isinstance(source, (bytes, bytearray, memoryview)):
            img = Image.open(io.BytesIO(bytes(source)))
        else:
            img = Image.open(source)
        img.load()
        if img.mode != 'RGB':
            img = img.convert('RGB')
    except (OSError, UnidentifiedImageError, ValueError) as e:
        raise InitializationFailure(f"Cannot load {size}px reference capture: {e}") from e

    if img.size != (size, size):
        raise InitializationFailure(
            f"Reference capture for {size}px has size {img.size[0]}x{img.size[1]}"
        )
    logger.debug("Loaded %dpx reference capture", size)
    return img


@dataclass(frozen=True)
class ReferenceAssets:
    capture_48: Image.Image
    capture_96: Image.Image

    @classmethod
    def load(cls, source_48, source_96):
        return cls(load_capture(source_48, 48), load_capture(source_96, 96))

    @classmethod
    def from_directory(cls, directory=None, download=True):
        paths = fetch_reference_captures(directory, download=download)
        return cls.load(paths[48], paths[96])

    def capture_for(self, width, height):
        # Closer native resolution wins
        if max(width, height) > config.CAPTURE_SELECT_THRESHOLD:
            return self.capture_96
        return self.capture_48


def fetch_reference_captures(directory=None, download=True):
    """
    Make sure both captures exist on disk and return {size: path}.

    Missing files are downloaded from MASK_URLS unless `download` is False.
    """
    directory = config.mask_dir(directory)
    paths = {}
    for size in config.CAPTURE_SIZES:
        path = os.path.join(directory, config.mask_filename(size))
        if not os.path.exists(path):
            if not download:
                raise InitializationFailure(f"Reference capture not found: {path}")
            _download(config.MASK_URLS[size], path, size)
        paths[size] = path
    return paths


def _download(url, path, size):
    logger.info("Downloading %dpx mask from %s", size, url)
    tmp_path = path + ".part"
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        urllib.request.urlretrieve(url, tmp_path)
        os.replace(tmp_path, path)
    except OSError as e:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise InitializationFailure(f"Error downloading {size}px mask: {e}") from e
