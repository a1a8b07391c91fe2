from __future__ import annotations
import logging

import numpy as np

from .buffer import PixelBuffer

logger = logging.getLogger(__name__)


def scaled_dim(dim: int, percent: int) -> int:
    """Rational scale ``percent/100`` applied with floor."""
    return int(dim) * int(percent) // 100


class Resampler:
    """Builds rescaled copies of a buffer by bilinear lookup."""

    @staticmethod
    def rescale(source: PixelBuffer, percent: int) -> PixelBuffer:
        percent = int(percent)
        if percent <= 0:
            return PixelBuffer()
        if percent == 100:
            return source.copy()

        w = scaled_dim(source.width, percent)
        h = scaled_dim(source.height, percent)
        out = PixelBuffer()
        out.resize(w, h)
        if out.empty:
            return out

        # destination -> source coordinate factor
        step = np.float32(100.0) / np.float32(percent)
        cols = np.arange(w, dtype=np.float32) * step
        rows = np.arange(h, dtype=np.float32) * step
        xs, ys = np.meshgrid(cols, rows)
        out.pixels[...] = source.sample(xs, ys).reshape(h, w, 3)
        logger.debug("Rescaled %dx%d -> %dx%d (%d%%)", source.width, source.height, w, h, percent)
        return out


def rescale(source: PixelBuffer, percent: int) -> PixelBuffer:
    return Resampler.rescale(source, percent)
