"""Pytest configuration and fixtures."""
import numpy as np
import pytest

from tracevec.types import PixelBuffer


def blank_rgba(h: int, w: int) -> np.ndarray:
    """Fully transparent (H, W, 4) canvas."""
    return np.zeros((h, w, 4), dtype=np.uint8)


def fill(canvas: np.ndarray, rgba, y0: int, y1: int, x0: int, x1: int) -> np.ndarray:
    """Paint an axis-aligned rectangle [y0:y1, x0:x1] with one RGBA color."""
    canvas[y0:y1, x0:x1] = rgba
    return canvas


@pytest.fixture
def canvas():
    """Factory for transparent canvases."""
    return blank_rgba


@pytest.fixture
def solid_buffer():
    """8x6 image, entirely opaque red."""
    pixels = fill(blank_rgba(6, 8), (255, 0, 0, 255), 0, 6, 0, 8)
    return PixelBuffer(pixels=pixels)


@pytest.fixture
def ring_buffer():
    """12x12 opaque red square with a transparent 4x4 hole in the middle."""
    pixels = fill(blank_rgba(12, 12), (255, 0, 0, 255), 0, 12, 0, 12)
    fill(pixels, (0, 0, 0, 0), 4, 8, 4, 8)
    return PixelBuffer(pixels=pixels)


@pytest.fixture
def transparent_buffer():
    """10x10 image with no visible pixels."""
    return PixelBuffer(pixels=blank_rgba(10, 10))


@pytest.fixture
def multicolor_buffer():
    """20x20 blue background with a 6x6 red and a 3x3 green square."""
    pixels = fill(blank_rgba(20, 20), (0, 0, 255, 255), 0, 20, 0, 20)
    fill(pixels, (255, 0, 0, 255), 2, 8, 2, 8)
    fill(pixels, (0, 255, 0, 255), 12, 15, 12, 15)
    return PixelBuffer(pixels=pixels)
