"""
Pytest configuration and fixtures
"""
import os

os.environ.setdefault("MPLBACKEND", "Agg")

import cv2
import numpy as np
import pytest

from kaleido import PixelBuffer


@pytest.fixture
def gradient_buffer():
    """8x6 buffer with distinct values per channel"""
    h, w = 6, 8
    rows, cols = np.mgrid[0:h, 0:w]
    img = np.stack([cols * 30, rows * 40, (cols + rows) * 10], axis=-1).astype(np.uint8)
    return PixelBuffer.from_array(img)


@pytest.fixture
def uniform_buffer():
    """40x40 buffer filled with (200, 200, 200)"""
    return PixelBuffer.filled(40, 40, (200, 200, 200))


@pytest.fixture
def jpeg_file(tmp_path):
    """A small JPEG on disk"""
    img = np.full((48, 64, 3), (30, 120, 210), dtype=np.uint8)
    img[:, 32:] = (220, 60, 20)
    path = tmp_path / "input.jpg"
    assert cv2.imwrite(str(path), img)
    return path
