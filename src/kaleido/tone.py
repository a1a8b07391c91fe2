from __future__ import annotations
import logging

import numpy as np

from .buffer import PixelBuffer

logger = logging.getLogger(__name__)

MIN_GAMMA = 0.01


class ToneAdjuster:
    """In-place per-byte tone curves. Bad parameters are clamped, never rejected."""

    @staticmethod
    def gamma_table(g: float) -> np.ndarray:
        """256-entry lookup: round((c/255)^g * 255), half away from zero."""
        if g < 0:
            g = MIN_GAMMA
        levels = np.arange(256, dtype=np.float64) / 255.0
        curve = np.floor(np.power(levels, g) * 255.0 + 0.5)
        return np.clip(curve, 0, 255).astype(np.uint8)

    @classmethod
    def gamma(cls, buffer: PixelBuffer, g: float) -> None:
        store = buffer.storage
        if store is None:
            return
        store[:] = cls.gamma_table(g)[store]
        logger.debug("Applied gamma %.3f to %r", g, buffer)

    @staticmethod
    def dim(buffer: PixelBuffer, percent: int) -> None:
        """Scale every channel to ``percent``% brightness; >= 100 is a no-op."""
        percent = int(percent)
        if percent < 0:
            percent = 0
        if percent > 99:
            return
        store = buffer.storage
        if store is None:
            return
        if percent == 0:
            store[:] = 0
        else:
            store[:] = (store.astype(np.uint16) * percent // 100).astype(np.uint8)
        logger.debug("Dimmed %r to %d%%", buffer, percent)


def gamma(buffer: PixelBuffer, g: float) -> None:
    ToneAdjuster.gamma(buffer, g)


def dim(buffer: PixelBuffer, percent: int) -> None:
    ToneAdjuster.dim(buffer, percent)
