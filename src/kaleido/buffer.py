from __future__ import annotations
import logging
from typing import Iterable, Optional, Tuple, Union

import numpy as np

from .pixel import PIXEL_SIZE, SENTINEL, Pixel

logger = logging.getLogger(__name__)

Number = Union[int, float, np.integer, np.floating]


class PixelBuffer:
    """
    Row-major RGB raster, 3 bytes per pixel, no stride padding.

    Storage is a flat uint8 array of ``w*h*3`` bytes, or None when
    ``w*h == 0``. ``resize`` only reallocates when the pixel count changes,
    so two shapes with the same count (10x10 -> 20x5) share the old store
    and its stale row stride until the caller overwrites it.
    """

    def __init__(self, width: int = 0, height: int = 0) -> None:
        self._w = 0
        self._h = 0
        self._store: Optional[np.ndarray] = None
        if width or height:
            self.resize(width, height)

    # construction / ownership

    @classmethod
    def from_array(cls, img_rgb: np.ndarray) -> "PixelBuffer":
        """Build a buffer from an (h, w, 3) uint8 array (copied)."""
        arr = np.asarray(img_rgb)
        if arr.ndim != 3 or arr.shape[2] != PIXEL_SIZE:
            raise ValueError(f"Expected an (h, w, 3) array, got shape {arr.shape}")
        h, w = arr.shape[:2]
        buf = cls()
        buf.resize(w, h)
        if buf._store is not None:
            buf._store[:] = arr.astype(np.uint8, copy=False).reshape(-1)
        return buf

    @classmethod
    def filled(cls, width: int, height: int, pixel: Iterable[int]) -> "PixelBuffer":
        buf = cls(width, height)
        buf.fill(pixel)
        return buf

    def copy(self) -> "PixelBuffer":
        """Deep duplicate of dimensions and pixel content."""
        out = PixelBuffer()
        out.resize(self._w, self._h)
        if self._store is not None:
            out._store[:] = self._store
        return out

    def take(self) -> "PixelBuffer":
        """Move: return a new owner of this storage and leave self empty."""
        out = PixelBuffer()
        out._w, out._h, out._store = self._w, self._h, self._store
        self._w, self._h, self._store = 0, 0, None
        return out

    def resize(self, new_w: int, new_h: int) -> None:
        new_w = max(0, int(new_w))
        new_h = max(0, int(new_h))
        if new_w * new_h != self._w * self._h:
            nbytes = new_w * new_h * PIXEL_SIZE
            self._store = np.zeros(nbytes, dtype=np.uint8) if nbytes > 0 else None
            logger.debug("Reallocated pixel store: %dx%d (%d bytes)", new_w, new_h, nbytes)
        self._w = new_w
        self._h = new_h

    # geometry & raw access

    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    @property
    def size(self) -> Tuple[int, int]:
        return (self._w, self._h)

    @property
    def empty(self) -> bool:
        return self._store is None

    @property
    def nbytes(self) -> int:
        return 0 if self._store is None else int(self._store.size)

    @property
    def storage(self) -> Optional[np.ndarray]:
        """The flat uint8 store itself (not a copy), or None."""
        return self._store

    @property
    def pixels(self) -> np.ndarray:
        """Writable (h, w, 3) view over the store."""
        if self._store is None:
            return np.zeros((self._h, self._w, PIXEL_SIZE), dtype=np.uint8)
        return self._store.reshape(self._h, self._w, PIXEL_SIZE)

    def to_array(self) -> np.ndarray:
        return self.pixels.copy()

    def fill(self, pixel: Iterable[int]) -> None:
        if self._store is not None:
            self.pixels[...] = Pixel.of(pixel).as_tuple()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        if self.size != other.size:
            return False
        if self._store is None or other._store is None:
            return self._store is None and other._store is None
        return bool(np.array_equal(self._store, other._store))

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"PixelBuffer({self._w}x{self._h})"

    # point access

    def get(self, col: Number, row: Number) -> Pixel:
        """Clamp-to-edge lookup; float coordinates are bilinearly blended."""
        if isinstance(col, (float, np.floating)) or isinstance(row, (float, np.floating)):
            return self.get_bilinear(col, row)
        if self._store is None:
            return SENTINEL
        col = min(max(int(col), 0), self._w - 1)
        row = min(max(int(row), 0), self._h - 1)
        offset = PIXEL_SIZE * (row * self._w + col)
        r, g, b = self._store[offset:offset + PIXEL_SIZE]
        return Pixel(int(r), int(g), int(b))

    def get_bilinear(self, col: Number, row: Number) -> Pixel:
        if self._store is None:
            return SENTINEL
        col, row = self._clamp_float(np.float32(col), np.float32(row))
        fx, cx = np.modf(col)
        fy, cy = np.modf(row)
        ci, ri = int(cx), int(cy)

        #  A ---- B
        #  |  x   |
        #  C ---- D
        A = self.get(ci, ri)
        B = self.get(ci + 1, ri)
        C = self.get(ci, ri + 1)
        D = self.get(ci + 1, ri + 1)

        fx, fy = float(fx), float(fy)
        AB = (1.0 - fx) * A + fx * B
        CD = (1.0 - fx) * C + fx * D
        return (1.0 - fy) * AB + fy * CD

    def set(self, col: int, row: int, pixel: Iterable[int]) -> None:
        """Write a pixel; out-of-range coordinates are silently ignored."""
        if col < 0 or col >= self._w or row < 0 or row >= self._h:
            return
        offset = PIXEL_SIZE * (int(row) * self._w + int(col))
        self._store[offset:offset + PIXEL_SIZE] = Pixel.of(pixel).as_tuple()

    # vectorised sampling

    def _clamp_float(self, col, row):
        if col < 0:
            col = np.float32(0.0)
        elif col >= self._w:
            col = np.float32(self._w - 1)
        if row < 0:
            row = np.float32(0.0)
        elif row >= self._h:
            row = np.float32(self._h - 1)
        return col, row

    def _gather(self, cols: np.ndarray, rows: np.ndarray) -> np.ndarray:
        cols = np.clip(cols, 0, self._w - 1)
        rows = np.clip(rows, 0, self._h - 1)
        return self.pixels[rows, cols].astype(np.int64)

    @staticmethod
    def _scaled(coef: np.ndarray, px: np.ndarray) -> np.ndarray:
        return (coef[:, None] * px.astype(np.float32)).astype(np.int64) & 0xFF

    def sample(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """
        Bilinear samples at many float coordinates at once.
        Returns an (N, 3) uint8 array equal to calling ``get_bilinear`` per point.
        """
        xs = np.asarray(xs, dtype=np.float32).ravel()
        ys = np.asarray(ys, dtype=np.float32).ravel()
        if self._store is None:
            return np.tile(np.array(SENTINEL.as_tuple(), dtype=np.uint8), (xs.size, 1))

        w1 = np.float32(self._w - 1)
        h1 = np.float32(self._h - 1)
        xs = np.where(xs < 0, np.float32(0.0), np.where(xs >= self._w, w1, xs)).astype(np.float32)
        ys = np.where(ys < 0, np.float32(0.0), np.where(ys >= self._h, h1, ys)).astype(np.float32)
        fx, cx = np.modf(xs)
        fy, cy = np.modf(ys)
        ci = cx.astype(np.int64)
        ri = cy.astype(np.int64)

        A = self._gather(ci, ri)
        B = self._gather(ci + 1, ri)
        C = self._gather(ci, ri + 1)
        D = self._gather(ci + 1, ri + 1)

        one = np.float32(1.0)
        AB = (self._scaled(one - fx, A) + self._scaled(fx, B)) & 0xFF
        CD = (self._scaled(one - fx, C) + self._scaled(fx, D)) & 0xFF
        out = (self._scaled(one - fy, AB) + self._scaled(fy, CD)) & 0xFF
        return out.astype(np.uint8)
