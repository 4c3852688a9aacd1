"""Tests for output dimension resolution."""

import pytest

from batch_resizer.core.dimensions import resolve_dimensions
from batch_resizer.core.exceptions import DegenerateImageError, InvalidPresetError


class TestExactResize:
    """Tests with maintain_aspect_ratio=False."""

    @pytest.mark.parametrize(
        "original",
        [(1920, 1080), (1, 1), (10, 5000), (640, 480)],
    )
    def test_returns_target_regardless_of_original(self, original):
        """Test that the target size is returned unchanged."""
        assert resolve_dimensions(*original, 1080, 1920, False) == (1080, 1920)

    def test_upscale_is_allowed(self):
        """Test that a target larger than the source is returned as-is."""
        assert resolve_dimensions(100, 100, 1500, 500, False) == (1500, 500)


class TestAspectPreservingResize:
    """Tests with maintain_aspect_ratio=True."""

    def test_width_is_exact_when_target_width_is_smaller(self):
        """Test 340x570 target on a landscape source keeps width 340."""
        width, height = resolve_dimensions(1920, 1080, 340, 570, True)
        assert width == 340
        assert height == round(340 * 1080 / 1920)

    def test_height_is_exact_when_target_height_is_smaller(self):
        """Test 1040x570 target keeps height 570."""
        width, height = resolve_dimensions(1000, 500, 1040, 570, True)
        assert height == 570
        assert width == 1140

    def test_square_target_uses_width(self):
        """Test that equal target sides make the width exact."""
        assert resolve_dimensions(400, 200, 150, 150, True) == (150, 75)
        assert resolve_dimensions(200, 400, 150, 150, True) == (150, 300)

    @pytest.mark.parametrize(
        "ow,oh,tw,th",
        [
            (1920, 1080, 800, 1200),
            (3000, 2000, 340, 570),
            (7, 3, 100, 101),
            (1, 1000, 50, 60),
        ],
    )
    def test_width_exact_property(self, ow, oh, tw, th):
        """Test resolved width == tw and height == round(tw * oh / ow)."""
        width, height = resolve_dimensions(ow, oh, tw, th, True)
        assert width == tw
        assert height == max(1, int(tw * oh / ow + 0.5))
        assert height >= 1

    @pytest.mark.parametrize(
        "ow,oh,tw,th",
        [
            (1920, 1080, 1920, 1080),
            (1080, 1920, 1280, 720),
            (5, 9, 1500, 500),
        ],
    )
    def test_height_exact_property(self, ow, oh, tw, th):
        """Test resolved height == th when th < tw."""
        width, height = resolve_dimensions(ow, oh, tw, th, True)
        assert height == th
        assert width == max(1, int(th * ow / oh + 0.5))

    def test_rounds_half_away_from_zero(self):
        """Test that an exact .5 rounds up rather than to even."""
        # 50 * 3 / 4 = 37.5 -> 38
        assert resolve_dimensions(4, 3, 50, 60, True) == (50, 38)
        # 10 * 1 / 4 = 2.5 -> 3 (round() would give 2)
        assert resolve_dimensions(4, 1, 10, 20, True) == (10, 3)

    def test_derived_side_is_clamped_to_one(self):
        """Test extremely elongated sources never produce a zero side."""
        assert resolve_dimensions(100000, 1, 100, 200, True) == (100, 1)
        assert resolve_dimensions(1, 100000, 300, 200, True) == (1, 200)

    def test_is_deterministic(self):
        """Test repeated calls give the same answer."""
        first = resolve_dimensions(1234, 567, 890, 1000, True)
        assert all(
            resolve_dimensions(1234, 567, 890, 1000, True) == first for _ in range(5)
        )


class TestDegenerateInputs:
    """Tests for zero-area sources and invalid targets."""

    @pytest.mark.parametrize("maintain", [True, False])
    def test_zero_width_source(self, maintain):
        """Test zero width raises DegenerateImageError."""
        with pytest.raises(DegenerateImageError):
            resolve_dimensions(0, 100, 50, 50, maintain)

    @pytest.mark.parametrize("maintain", [True, False])
    def test_zero_height_source(self, maintain):
        """Test zero height raises DegenerateImageError."""
        with pytest.raises(DegenerateImageError):
            resolve_dimensions(100, 0, 50, 50, maintain)

    @pytest.mark.parametrize("target", [(0, 100), (100, 0), (-5, 100)])
    def test_non_positive_target(self, target):
        """Test a zero or negative target raises InvalidPresetError."""
        with pytest.raises(InvalidPresetError):
            resolve_dimensions(100, 100, *target, True)
