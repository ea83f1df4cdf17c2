"""
Unit tests for pixel_buffer module.

Tests buffer construction, pixel access, snapshots and the read-only
original captured at load time.
"""

import numpy as np
import pytest
from PIL import Image

from BC_Libs.FillLib.pixel_buffer import PixelBuffer


class TestConstruction:
    """Tests for PixelBuffer constructors."""

    def test_blank_buffer_dimensions(self):
        """Should allocate height x width x 4 bytes filled with the color."""
        buffer = PixelBuffer.blank(7, 3, (10, 20, 30, 40))

        assert buffer.width == 7
        assert buffer.height == 3
        assert buffer.size == (7, 3)
        assert buffer.pixels.shape == (3, 7, 4)
        assert buffer.get_pixel(6, 2) == (10, 20, 30, 40)

    def test_from_bytes_is_row_major(self):
        """Should interpret bytes as interleaved RGBA, row by row."""
        data = bytes([
            1, 2, 3, 4,   5, 6, 7, 8,
            9, 10, 11, 12,   13, 14, 15, 16,
        ])

        buffer = PixelBuffer.from_bytes(data, 2, 2)

        assert buffer.get_pixel(1, 0) == (5, 6, 7, 8)
        assert buffer.get_pixel(0, 1) == (9, 10, 11, 12)
        assert buffer.to_bytes() == data

    def test_from_bytes_rejects_wrong_length(self):
        """Should reject byte sequences that do not match the size."""
        with pytest.raises(ValueError):
            PixelBuffer.from_bytes(b"\x00" * 15, 2, 2)

    def test_from_image_converts_to_rgba(self):
        """Should convert non-RGBA images to RGBA."""
        image = Image.new("RGB", (4, 2), (12, 34, 56))

        buffer = PixelBuffer.from_image(image)

        assert buffer.size == (4, 2)
        assert buffer.get_pixel(3, 1) == (12, 34, 56, 255)

    def test_from_image_rejects_non_images(self):
        with pytest.raises(TypeError):
            PixelBuffer.from_image("not an image")

    def test_rejects_bad_shapes(self):
        """Should reject arrays that are not (h, w, 4)."""
        with pytest.raises(ValueError):
            PixelBuffer(np.zeros((4, 4, 3), dtype=np.uint8))
        with pytest.raises(ValueError):
            PixelBuffer(np.zeros((0, 4, 4), dtype=np.uint8))

    def test_rejects_mismatched_original(self):
        with pytest.raises(ValueError):
            PixelBuffer(np.zeros((4, 4, 4), dtype=np.uint8), np.zeros((4, 5, 4), dtype=np.uint8))

    def test_copies_input_array(self):
        """Should not alias the array it was built from."""
        source = np.full((2, 2, 4), 255, dtype=np.uint8)
        buffer = PixelBuffer(source)

        source[0, 0] = (0, 0, 0, 0)

        assert buffer.get_pixel(0, 0) == (255, 255, 255, 255)


class TestOriginal:
    """Tests for the pristine copy captured at load."""

    def test_original_unchanged_by_edits(self):
        buffer = PixelBuffer.blank(3, 3)

        buffer.set_pixel(1, 1, (255, 0, 0, 255))

        assert buffer.get_pixel(1, 1) == (255, 0, 0, 255)
        assert buffer.get_original_pixel(1, 1) == (255, 255, 255, 255)

    def test_original_is_read_only(self):
        buffer = PixelBuffer.blank(3, 3)

        with pytest.raises(ValueError):
            buffer.original[0, 0] = (0, 0, 0, 0)

    def test_reset_to_original(self):
        buffer = PixelBuffer.blank(3, 3)
        buffer.pixels[:, :] = (1, 2, 3, 4)

        buffer.reset_to_original()

        assert np.array_equal(buffer.pixels, buffer.original)


class TestSnapshots:
    """Tests for snapshot and restore."""

    def test_snapshot_is_a_copy(self):
        """Later edits must not alias a snapshot."""
        buffer = PixelBuffer.blank(3, 3)
        snapshot = buffer.snapshot()

        buffer.set_pixel(0, 0, (0, 0, 0, 255))

        assert tuple(snapshot[0, 0]) == (255, 255, 255, 255)

    def test_restore_keeps_pixels_object(self):
        """Should copy into the existing array instead of replacing it."""
        buffer = PixelBuffer.blank(3, 3)
        pixels = buffer.pixels
        snapshot = buffer.snapshot()
        buffer.set_pixel(2, 2, (9, 9, 9, 9))

        buffer.restore(snapshot)

        assert buffer.pixels is pixels
        assert buffer.get_pixel(2, 2) == (255, 255, 255, 255)

    def test_restore_rejects_wrong_shape(self):
        buffer = PixelBuffer.blank(3, 3)

        with pytest.raises(ValueError):
            buffer.restore(np.zeros((2, 2, 4), dtype=np.uint8))


class TestAccessors:
    """Tests for bounds checks and image conversion."""

    @pytest.mark.parametrize("x, y, expected", [
        (0, 0, True),
        (4, 2, True),
        (5, 0, False),
        (0, 3, False),
        (-1, 0, False),
        (0, -1, False),
    ])
    def test_in_bounds(self, x, y, expected):
        buffer = PixelBuffer.blank(5, 3)
        assert buffer.in_bounds(x, y) is expected

    def test_to_image(self):
        buffer = PixelBuffer.blank(4, 2, (1, 2, 3, 255))

        image = buffer.to_image()

        assert image.mode == "RGBA"
        assert image.size == (4, 2)
        assert image.getpixel((3, 1)) == (1, 2, 3, 255)
