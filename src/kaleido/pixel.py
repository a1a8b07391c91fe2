from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

PIXEL_SIZE = 3  # bytes per pixel: R, G, B


@dataclass(frozen=True)
class Pixel:
    """
    8-bit RGB triple.

    Arithmetic wraps modulo 256 instead of saturating:
      - ``a + b`` adds per channel
      - ``coef * p`` multiplies in single precision, truncates toward zero
    Both are used to accumulate weighted sums during interpolation.
    """
    r: int = 0
    g: int = 0
    b: int = 0

    # numpy scalars must defer to __rmul__ instead of broadcasting
    __array_ufunc__ = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "r", int(self.r) & 0xFF)
        object.__setattr__(self, "g", int(self.g) & 0xFF)
        object.__setattr__(self, "b", int(self.b) & 0xFF)

    @classmethod
    def of(cls, value: Iterable[int]) -> "Pixel":
        if isinstance(value, Pixel):
            return value
        r, g, b = (int(v) for v in value)
        return cls(r, g, b)

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def __iter__(self):
        return iter(self.as_tuple())

    def __add__(self, other: "Pixel") -> "Pixel":
        if not isinstance(other, Pixel):
            return NotImplemented
        return Pixel(self.r + other.r, self.g + other.g, self.b + other.b)

    def __rmul__(self, coef: float) -> "Pixel":
        if isinstance(coef, Pixel):
            return NotImplemented
        c = np.float32(coef)
        return Pixel(
            int(c * np.float32(self.r)),
            int(c * np.float32(self.g)),
            int(c * np.float32(self.b)),
        )

    __mul__ = __rmul__


# returned when sampling a buffer that holds no storage
SENTINEL = Pixel(0, 0, 255)
