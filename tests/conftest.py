import numpy as np
import pytest
from PIL import Image

from gemini_unmark import Engine, ReferenceAssets

MID_GRAY = 128


def solid_capture(size, value):
    return Image.new("RGB", (size, size), (value, value, value))


def save_masks(directory, value_48=MID_GRAY, value_96=MID_GRAY):
    solid_capture(48, value_48).save(directory / "bg_48.png")
    solid_capture(96, value_96).save(directory / "bg_96.png")
    return directory


@pytest.fixture
def gray_assets():
    return ReferenceAssets.load(solid_capture(48, MID_GRAY), solid_capture(96, MID_GRAY))


@pytest.fixture
def engine(gray_assets):
    return Engine(gray_assets)


@pytest.fixture
def mask_dir(tmp_path):
    masks = tmp_path / "masks"
    masks.mkdir()
    return save_masks(masks)


@pytest.fixture
def random_pixels():
    rng = np.random.default_rng(1234)

    def make(width, height, channels=3):
        return rng.integers(0, 256, size=(height, width, channels), dtype=np.uint8)

    return make
