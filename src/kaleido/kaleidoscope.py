from __future__ import annotations
import logging
import math
from typing import Optional

import numpy as np

from .buffer import PixelBuffer
from .convolve import blur
from .geometry import Wedge, rotate_points
from .helpers import KaleidoscopeConfig
from .resample import rescale
from .tone import dim, gamma

logger = logging.getLogger(__name__)


def normalize_sectors(sectors: int) -> int:
    """Fewer than 4 sectors means 6; odd counts round up to even."""
    sectors = int(sectors)
    if sectors < 4:
        sectors = 6
    if sectors % 2:
        sectors += 1
    return sectors


class KaleidoscopeComposer:
    """
    Mosaic effect:
      1) keep a half-size copy of the untouched source
      2) gamma -> dim -> blur the source in place (background)
      3) paint every wedge around the centre from the copy, rotating
         each pixel back into the first wedge's frame
    Later wedges overwrite shared edge pixels of earlier ones.
    """

    def __init__(self, config: Optional[KaleidoscopeConfig] = None) -> None:
        self.config = config or KaleidoscopeConfig()

    def apply(self, buffer: PixelBuffer, sectors: Optional[int] = None) -> PixelBuffer:
        cfg = self.config
        sectors = normalize_sectors(cfg.sectors if sectors is None else sectors)

        # order matters: the copy must see the unadjusted source
        scaled = rescale(buffer, cfg.scaled_percent)
        gamma(buffer, cfg.gamma)
        dim(buffer, cfg.dim_percent)
        blur(buffer, cfg.blur_radius)

        sector_angle = np.float32(2 * math.pi / sectors)
        wedge = Wedge.initial(buffer.width, buffer.height, sector_angle, scaled.height)
        logger.debug("Composing %d sectors over %r", sectors, buffer)

        for sector in range(sectors):
            angle_offset = np.float32(sector) * sector_angle
            self._paint_wedge(buffer, scaled, wedge, angle_offset)
            wedge = wedge.advance(sector_angle)
        return buffer

    @staticmethod
    def _paint_wedge(buffer: PixelBuffer, scaled: PixelBuffer, wedge: Wedge,
                     angle_offset: np.float32) -> None:
        if buffer.empty:
            return
        xmin, xmax, ymin, ymax = wedge.bounds()
        # int() truncates toward zero; writes outside the image are dropped
        col0 = max(int(xmin), 0)
        col1 = min(math.floor(xmax), buffer.width - 1)
        row0 = max(int(ymin), 0)
        row1 = min(math.floor(ymax), buffer.height - 1)
        if col0 > col1 or row0 > row1:
            return

        xs, ys = np.meshgrid(np.arange(col0, col1 + 1, dtype=np.float32),
                             np.arange(row0, row1 + 1, dtype=np.float32))
        inside = wedge.contains(xs, ys)
        if not inside.any():
            return
        px, py = xs[inside], ys[inside]

        apex = wedge.apex
        rx, ry = rotate_points(px, py, apex, -angle_offset)
        sx = (rx - apex.x) + np.float32(scaled.width // 2)
        sy = ry - apex.y

        buffer.pixels[py.astype(np.int64), px.astype(np.int64)] = scaled.sample(sx, sy)


def kaleidoscope(buffer: PixelBuffer, sectors: Optional[int] = None,
                 config: Optional[KaleidoscopeConfig] = None) -> PixelBuffer:
    return KaleidoscopeComposer(config).apply(buffer, sectors)
