import pytest

from gemini_unmark import InvalidDimensions, InvalidRectangle, Rectangle, detect_rectangle, detect_tier
from gemini_unmark.position import Detected, Explicit, LARGE_TIER, SMALL_TIER, rectangle_source


class TestDetectTier:
    def test_both_sides_above_threshold_use_large_logo(self):
        assert detect_tier(1025, 1025) == LARGE_TIER
        assert detect_tier(2000, 3000).logo_size == 96

    @pytest.mark.parametrize("width,height", [(1024, 1025), (1025, 1024), (1024, 1024), (800, 600), (4000, 500)])
    def test_otherwise_small_logo(self, width, height):
        assert detect_tier(width, height) == SMALL_TIER

    def test_margins(self):
        assert (SMALL_TIER.margin_right, SMALL_TIER.margin_bottom) == (32, 32)
        assert (LARGE_TIER.margin_right, LARGE_TIER.margin_bottom) == (64, 64)

    @pytest.mark.parametrize("width,height", [(0, 100), (100, 0), (-5, 100), (100, -1)])
    def test_non_positive_dimensions_rejected(self, width, height):
        with pytest.raises(InvalidDimensions):
            detect_tier(width, height)

    def test_non_integer_dimensions_rejected(self):
        with pytest.raises(InvalidDimensions):
            detect_tier(100.5, 100)


class TestDetectRectangle:
    def test_small_tier_anchored_bottom_right(self):
        assert detect_rectangle(800, 600) == Rectangle(720, 520, 48, 48)

    def test_large_tier_anchored_bottom_right(self):
        assert detect_rectangle(2000, 2000) == Rectangle(1840, 1840, 96, 96)

    def test_tiny_image_gives_negative_coordinates(self):
        rect = detect_rectangle(50, 40)
        assert rect == Rectangle(50 - 80, 40 - 80, 48, 48)


class TestRectangle:
    def test_coerce_mapping(self):
        assert Rectangle.coerce({"x": 1, "y": 2, "width": 3, "height": 4}) == Rectangle(1, 2, 3, 4)

    def test_coerce_sequence_and_integral_floats(self):
        assert Rectangle.coerce((1, 2, 3.0, 4)) == Rectangle(1, 2, 3, 4)

    def test_coerce_passes_rectangle_through(self):
        rect = Rectangle(1, 2, 3, 4)
        assert Rectangle.coerce(rect) is rect

    @pytest.mark.parametrize("value", [
        {"x": 1, "y": 2, "width": 3},
        (1, 2, 3),
        (1, 2, 3, "4"),
        (1, 2, 3.5, 4),
        (True, 0, 10, 10),
        None,
    ])
    def test_coerce_rejects_malformed(self, value):
        with pytest.raises(InvalidRectangle):
            Rectangle.coerce(value)

    def test_clip_inside_is_identity(self):
        assert Rectangle(10, 10, 20, 20).clip(100, 100) == Rectangle(10, 10, 20, 20)

    def test_clip_past_bottom_right(self):
        assert Rectangle(90, 95, 20, 20).clip(100, 100) == Rectangle(90, 95, 10, 5)

    def test_clip_past_top_left(self):
        assert Rectangle(-5, -10, 20, 20).clip(100, 100) == Rectangle(0, 0, 15, 10)

    def test_clip_fully_outside_is_empty(self):
        assert Rectangle(200, 200, 20, 20).clip(100, 100).is_empty

    def test_negative_size_is_empty(self):
        assert Rectangle(10, 10, -4, 10).is_empty
        assert Rectangle(10, 10, -4, 10).clip(100, 100).is_empty

    def test_to_dict(self):
        assert Rectangle(1, 2, 3, 4).to_dict() == {"x": 1, "y": 2, "width": 3, "height": 4}


class TestRectangleSource:
    def test_none_means_detected(self):
        source = rectangle_source(None)
        assert isinstance(source, Detected)
        assert source.resolve(800, 600) == Rectangle(720, 520, 48, 48)

    def test_override_is_explicit(self):
        source = rectangle_source({"x": 5, "y": 6, "width": 7, "height": 8})
        assert source == Explicit(Rectangle(5, 6, 7, 8))
        assert source.resolve(800, 600) == Rectangle(5, 6, 7, 8)


def test_explicit_tier_still_validates_dimensions():
    with pytest.raises(InvalidDimensions):
        detect_rectangle(0, 0, SMALL_TIER)


class TestExplicit:
    def test_coerces_tuple_and_mapping(self):
        assert Explicit((0, 0, 10, 10)).rectangle == Rectangle(0, 0, 10, 10)
        assert Explicit({"x": 1, "y": 2, "width": 3, "height": 4}).rectangle == Rectangle(1, 2, 3, 4)

    def test_rejects_malformed(self):
        with pytest.raises(InvalidRectangle):
            Explicit((1, 2))
