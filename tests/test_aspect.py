"""Tests for aspect-ratio constraints and the preset switch action."""

import pytest

from intent.crop.aspect import constrain, fit_to_aspect_ratio
from intent.domain.models import AspectRatio, CropRect

RATIOS = [AspectRatio.FOUR_THREE, AspectRatio.SIXTEEN_NINE, AspectRatio.ONE_ONE, AspectRatio.THREE_TWO]
RECTS = [
    CropRect(0.1, 0.1, 0.8, 0.8),
    CropRect(0.1, 0.1, 0.8, 0.4),
    CropRect(0.0, 0.3, 0.2, 0.7),
    CropRect(0.5, 0.0, 0.5, 1.0),
]


@pytest.mark.parametrize("ratio", RATIOS)
@pytest.mark.parametrize("rect", RECTS)
def test_constrain_matches_ratio_without_growing(rect, ratio):
    """The result has the target ratio and never more area than the input."""
    result = constrain(rect, ratio)
    assert result.width / result.height == pytest.approx(ratio.ratio)
    assert result.area <= rect.area + 1e-12
    assert (result.x, result.y) == (rect.x, rect.y)


def test_constrain_free_is_identity():
    rect = CropRect(0.1, 0.2, 0.3, 0.4)
    assert constrain(rect, AspectRatio.FREE) is rect
    assert constrain(rect, None) is rect


def test_constrain_reduces_the_wider_dimension():
    """A too-wide rectangle loses width, a too-tall one loses height."""
    wide = constrain(CropRect(0.1, 0.1, 0.8, 0.4), AspectRatio.ONE_ONE)
    assert (wide.width, wide.height) == pytest.approx((0.4, 0.4))
    tall = constrain(CropRect(0.1, 0.1, 0.4, 0.8), AspectRatio.ONE_ONE)
    assert (tall.width, tall.height) == pytest.approx((0.4, 0.4))


@pytest.mark.parametrize("ratio", RATIOS)
@pytest.mark.parametrize("rect", RECTS)
def test_fit_preserves_center_and_bounds(rect, ratio):
    """Switching presets keeps the centre and stays inside the unit square."""
    result = fit_to_aspect_ratio(rect, ratio)
    assert result.width / result.height == pytest.approx(ratio.ratio)
    assert result.center == pytest.approx(rect.center)
    assert result.is_valid(0.1)


def test_fit_one_one_recenters_wide_rect():
    """1:1 applied to a wide rectangle shrinks the width about the centre."""
    result = fit_to_aspect_ratio(CropRect(0.1, 0.1, 0.8, 0.4), AspectRatio.ONE_ONE)
    assert result.as_tuple() == pytest.approx((0.3, 0.1, 0.4, 0.4))
    assert result.center == pytest.approx((0.5, 0.3))


def test_fit_free_keeps_rect():
    rect = CropRect(0.1, 0.1, 0.8, 0.4)
    assert fit_to_aspect_ratio(rect, AspectRatio.FREE) == rect


def test_fit_near_border_keeps_minimum_size():
    """A thin rectangle on the left border slides inside instead of collapsing."""
    rect = CropRect(0.0, 0.1, 0.1, 0.8)
    result = fit_to_aspect_ratio(rect, AspectRatio.SIXTEEN_NINE)
    assert result.is_valid(0.1)
    assert result.height == pytest.approx(0.1)
    assert result.width == pytest.approx(0.1 * 16 / 9)
    assert result.x == 0.0


def test_aspect_ratio_parse():
    assert AspectRatio.parse(None) is AspectRatio.FREE
    assert AspectRatio.parse("16:9") is AspectRatio.SIXTEEN_NINE
    assert AspectRatio.parse("one_one") is AspectRatio.ONE_ONE
    with pytest.raises(ValueError):
        AspectRatio.parse("5:4")
