from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
import logging
import os


# Config dataclasses (lightweight & reusable)

@dataclass
class KaleidoscopeConfig:
    sectors: int = 6            # < 4 -> 6, odd -> next even
    scaled_percent: int = 50    # size of the tiled copy
    gamma: float = 1.2          # background tone curve
    dim_percent: int = 50       # background brightness
    blur_radius: int = 2        # background gaussian radius


@dataclass
class PipelineConfig:
    kaleidoscope: KaleidoscopeConfig = field(default_factory=KaleidoscopeConfig)
    quality: int = 90               # JPEG quality, clamped to [0, 100]
    load_scale_percent: int = 100   # rescale right after decoding
    show: bool = False
    log_level: int = logging.INFO


# filesystem helpers

def ensure_dir(path: str | os.PathLike) -> None:
    Path(path).mkdir(parents=True, exist_ok=True)


def ensure_parent_dir(path: str | os.PathLike) -> None:
    parent = Path(path).parent
    if str(parent) not in ("", "."):
        ensure_dir(parent)
