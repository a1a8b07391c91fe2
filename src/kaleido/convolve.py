from __future__ import annotations
import logging
import math

import cv2
import numpy as np

from .buffer import PixelBuffer

logger = logging.getLogger(__name__)

# Not strict truncation: sums within 1e-7 below an integer round up to it, so a
# flat region survives weights that add up to 1 - ulp.
_TRUNC_EPS = 1e-7


class ConvolutionFilter:
    """
    Gaussian blur with clamp-to-edge borders.

    Reads from a snapshot of the input and writes the result back in one go,
    so the outcome does not depend on traversal order.
    """

    @staticmethod
    def gaussian_kernel(radius: int) -> np.ndarray:
        """(2r+1)^2 weights exp(-(dx^2+dy^2)/2), normalised to sum 1. Indexed [dy+r, dx+r]."""
        r = max(0, int(radius))
        width = 2 * r + 1
        kernel = np.zeros((width, width), dtype=np.float64)
        for col in range(width):
            for row in range(col + 1):
                value = math.exp(-((col - r) ** 2 + (row - r) ** 2) / 2.0)
                kernel[row, col] = value
                # symmetric under 180 degree rotation
                kernel[width - row - 1, width - col - 1] = value
        return kernel / kernel.sum()

    @classmethod
    def blur(cls, buffer: PixelBuffer, radius: int) -> None:
        r = max(0, int(radius))
        if r == 0 or buffer.empty:
            return

        kernel = cls.gaussian_kernel(r)
        src = buffer.pixels.astype(np.float64)
        # kernel is symmetric, so correlation == convolution
        acc = cv2.filter2D(src, -1, kernel, borderType=cv2.BORDER_REPLICATE)

        buffer.pixels[...] = np.clip(np.floor(acc + _TRUNC_EPS), 0, 255).astype(np.uint8)
        logger.debug("Blurred %r with radius %d", buffer, r)


def gaussian_kernel(radius: int) -> np.ndarray:
    return ConvolutionFilter.gaussian_kernel(radius)


def blur(buffer: PixelBuffer, radius: int) -> None:
    ConvolutionFilter.blur(buffer, radius)
