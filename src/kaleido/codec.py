from __future__ import annotations
import logging
import os
from typing import Tuple

import cv2
import numpy as np

from .buffer import PixelBuffer
from .errors import LoadError, SaveError
from .helpers import ensure_parent_dir
from .resample import rescale

logger = logging.getLogger(__name__)


def decode(data: bytes) -> Tuple[int, int, np.ndarray]:
    """Decode compressed bytes into (width, height, flat RGB uint8 data)."""
    raw = np.frombuffer(data, dtype=np.uint8)
    if raw.size == 0:
        raise LoadError("Empty image data")
    try:
        img_bgr = cv2.imdecode(raw, cv2.IMREAD_COLOR)
    except cv2.error as e:
        raise LoadError(f"Decompressing image failed: {e}") from e
    if img_bgr is None:
        raise LoadError("Unsupported or corrupt image header")
    img_rgb = cv2.cvtColor(img_bgr, cv2.COLOR_BGR2RGB)
    h, w = img_rgb.shape[:2]
    return w, h, np.ascontiguousarray(img_rgb).reshape(-1)


def encode(data: np.ndarray, width: int, height: int, quality: int = 90) -> bytes:
    """Compress flat RGB data as JPEG. ``quality`` is clamped to [0, 100]."""
    quality = min(max(int(quality), 0), 100)
    if width <= 0 or height <= 0:
        raise SaveError(f"Cannot compress an empty {width}x{height} image")
    try:
        img_rgb = np.asarray(data, dtype=np.uint8).reshape(height, width, 3)
    except ValueError as e:
        raise SaveError(f"Pixel data does not match {width}x{height}: {e}") from e
    try:
        ok, encoded = cv2.imencode(
            ".jpg", cv2.cvtColor(img_rgb, cv2.COLOR_RGB2BGR),
            [int(cv2.IMWRITE_JPEG_QUALITY), quality],
        )
    except cv2.error as e:
        raise SaveError(f"Failed to compress the image: {e}") from e
    if not ok:
        raise SaveError("Failed to compress the image")
    return encoded.tobytes()


def load(path: str | os.PathLike, scale_percent: int = 100) -> PixelBuffer:
    """Read and decode an image file, optionally rescaled on load. Raises LoadError."""
    try:
        with open(path, "rb") as fh:
            data = fh.read()
    except OSError as e:
        raise LoadError(f"Could not load {path}: {e}") from e

    try:
        w, h, pixels = decode(data)
    except LoadError as e:
        raise LoadError(f"Could not load {path}: {e}") from e

    buffer = PixelBuffer.from_array(pixels.reshape(h, w, 3))
    logger.info("Loaded %s (%dx%d)", path, w, h)
    if scale_percent != 100:
        buffer = rescale(buffer, scale_percent)
        logger.info("Scaled on load to %d%% -> %dx%d", scale_percent, buffer.width, buffer.height)
    return buffer


def save(buffer: PixelBuffer, path: str | os.PathLike, quality: int = 90) -> None:
    """Encode ``buffer`` and write it to ``path``. Raises SaveError."""
    data = encode(buffer.pixels, buffer.width, buffer.height, quality)
    try:
        ensure_parent_dir(path)
        with open(path, "wb") as fh:
            fh.write(data)
    except OSError as e:
        raise SaveError(f"Could not write {path}: {e}") from e
    logger.info("Saved %s (%d bytes)", path, len(data))
