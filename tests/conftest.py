"""
Pytest configuration and shared fixtures for Brush Color tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import pytest

from BC_Libs.FillLib.pixel_buffer import PixelBuffer


@pytest.fixture
def white_buffer():
    """10x10 all-white buffer with no outlines."""
    return PixelBuffer.blank(10, 10)


@pytest.fixture
def bordered_buffer():
    """
    10x10 buffer with a 1-pixel black border and a white interior.

    Returns:
        PixelBuffer whose original is the bordered picture
    """
    buffer = PixelBuffer.blank(10, 10)
    pixels = buffer.pixels
    pixels[0, :] = (0, 0, 0, 255)
    pixels[-1, :] = (0, 0, 0, 255)
    pixels[:, 0] = (0, 0, 0, 255)
    pixels[:, -1] = (0, 0, 0, 255)
    return PixelBuffer(pixels)


@pytest.fixture
def split_buffer():
    """
    12x8 buffer split by a vertical black line at x=6.

    The left half is white and the right half is light blue.
    """
    buffer = PixelBuffer.blank(12, 8)
    buffer.pixels[:, 6] = (0, 0, 0, 255)
    buffer.pixels[:, 7:] = (200, 220, 255, 255)
    return PixelBuffer(buffer.pixels)
