"""
Unit tests for coordinate_mapper module.

Tests mapping from display coordinates to image and buffer pixels,
including display scaling and device pixel ratio.
"""

import pytest

from BC_Libs.FillLib.coordinate_mapper import (
    CoordinateMapper,
    DisplayRect,
    fit_to_container,
    js_round,
)


class TestJsRound:
    """Tests for js_round function."""

    @pytest.mark.parametrize("value, expected", [
        (2.5, 3),
        (3.5, 4),
        (2.4999, 2),
        (-2.5, -2),
        (-2.6, -3),
        (0.0, 0),
        (0.49999999999999994, 0),
        (-0.5, 0),
        (1e16 + 2, 10000000000000002),
    ])
    def test_rounds_halves_up(self, value, expected):
        assert js_round(value) == expected


class TestCoordinateMapper:
    """Tests for CoordinateMapper class."""

    def test_identity_mapping(self):
        mapper = CoordinateMapper(100, 50)
        rect = DisplayRect(0, 0, 100, 50)

        assert mapper.to_buffer(10, 20, rect) == (10, 20)

    def test_subtracts_rect_origin(self):
        mapper = CoordinateMapper(100, 50)
        rect = DisplayRect(30, 40, 100, 50)

        assert mapper.to_image(35, 47, rect) == (5, 7)

    def test_scales_displayed_size(self):
        """A picture shown at half size maps taps back to full size."""
        mapper = CoordinateMapper(200, 100)
        rect = DisplayRect(0, 0, 100, 50)

        assert mapper.to_image(25, 10, rect) == (50, 20)

    def test_device_pixel_ratio(self):
        mapper = CoordinateMapper(100, 100, device_pixel_ratio=2.0)
        rect = DisplayRect(0, 0, 100, 100)

        assert mapper.to_image(10, 15, rect) == (10, 15)
        assert mapper.to_buffer(10, 15, rect) == (20, 30)

    def test_fractional_device_pixel_ratio_rounds(self):
        mapper = CoordinateMapper(100, 100, device_pixel_ratio=1.5)
        rect = DisplayRect(0, 0, 100, 100)

        assert mapper.to_buffer(3, 5, rect) == (5, 8)

    def test_does_not_clamp(self):
        """Points outside the picture map outside the buffer."""
        mapper = CoordinateMapper(100, 100)
        rect = DisplayRect(10, 10, 100, 100)

        assert mapper.to_buffer(5, 5, rect) == (-5, -5)
        assert mapper.to_buffer(150, 300, rect) == (140, 290)

    def test_zero_sized_rect_raises(self):
        mapper = CoordinateMapper(100, 100)

        with pytest.raises(ValueError):
            mapper.to_image(1, 1, DisplayRect(0, 0, 0, 100))

    def test_rejects_invalid_dimensions(self):
        with pytest.raises(ValueError):
            CoordinateMapper(0, 10)
        with pytest.raises(ValueError):
            CoordinateMapper(10, 10, device_pixel_ratio=0)


class TestFitToContainer:
    """Tests for fit_to_container function."""

    def test_fits_wide_image(self):
        assert fit_to_container(200, 100, 400, 400) == (400, 200)

    def test_fits_tall_image(self):
        assert fit_to_container(100, 200, 400, 300) == (150, 300)

    def test_returns_none_when_not_laid_out(self):
        assert fit_to_container(100, 100, 0, 300) is None
        assert fit_to_container(0, 100, 300, 300) is None
