from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

import numpy as np

# All geometry is evaluated in single precision.
F32 = np.float32


@dataclass(frozen=True)
class Point2D:
    """Image-space point: origin top-left, x right, y down."""
    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", F32(self.x))
        object.__setattr__(self, "y", F32(self.y))


def rotate2d(src: Point2D, around: Point2D, angle: float) -> Point2D:
    xs, ys = rotate_points(np.array([src.x], F32), np.array([src.y], F32), around, angle)
    return Point2D(xs[0], ys[0])


def rotate_points(xs: np.ndarray, ys: np.ndarray, around: Point2D,
                  angle: float) -> Tuple[np.ndarray, np.ndarray]:
    """Rotate many points by ``angle`` radians around ``around``."""
    a = F32(angle)
    cosa = np.cos(a)
    sina = np.sin(a)
    dx = xs - around.x
    dy = ys - around.y
    return (cosa * dx - sina * dy + around.x,
            sina * dx + cosa * dy + around.y)


def _edge(px, py, qx, qy, xs, ys):
    return (qx - px) * (ys - py) - (qy - py) * (xs - px)


@dataclass(frozen=True)
class Wedge:
    """One kaleidoscope sector: the apex plus two base vertices."""
    apex: Point2D
    b1: Point2D
    b2: Point2D

    @classmethod
    def initial(cls, width: int, height: int, sector_angle: float,
                wedge_height: int) -> "Wedge":
        """Lower central wedge, base on the last image row."""
        cx = F32(width) / F32(2)
        cy = F32(height) / F32(2)
        half_base = np.tan(F32(sector_angle) / F32(2)) * F32(wedge_height)
        bottom = F32(height - 1)
        return cls(
            apex=Point2D(cx, cy),
            b1=Point2D(cx + half_base, bottom),
            b2=Point2D(cx - half_base, bottom),
        )

    @property
    def vertices(self) -> Tuple[Point2D, Point2D, Point2D]:
        return (self.apex, self.b1, self.b2)

    def advance(self, sector_angle: float) -> "Wedge":
        """Next wedge around the circle, sharing the ``b2`` edge."""
        return Wedge(self.apex, self.b2, rotate2d(self.b2, self.apex, sector_angle))

    def bounds(self) -> Tuple[float, float, float, float]:
        xs = [p.x for p in self.vertices]
        ys = [p.y for p in self.vertices]
        return min(xs), max(xs), min(ys), max(ys)

    def contains(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """
        Boundary-inclusive membership for arrays of points.
        Every edge test must agree in sign with the triangle's orientation
        (or be exactly zero).
        """
        a, b, c = self.vertices
        xs = np.asarray(xs, dtype=F32)
        ys = np.asarray(ys, dtype=F32)
        det = (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)
        return ((det * _edge(a.x, a.y, b.x, b.y, xs, ys) >= 0)
                & (det * _edge(b.x, b.y, c.x, c.y, xs, ys) >= 0)
                & (det * _edge(c.x, c.y, a.x, a.y, xs, ys) >= 0))

    def contains_point(self, p: Point2D) -> bool:
        return bool(self.contains(np.array([p.x]), np.array([p.y]))[0])
