from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

import numpy as np


class KaleidoError(Exception):
    """Base for codec-boundary failures. ``kind`` tags the failure."""
    kind = "error"


class LoadError(KaleidoError):
    """Unreadable file, unsupported header or failed decode."""
    kind = "load"


class SaveError(KaleidoError):
    """Encoder setup, compression or write failure."""
    kind = "save"


@dataclass
class Outcome:
    ok: bool
    kind: Optional[str] = None      # None | 'load' | 'save'
    message: str = ""
    original: Optional[np.ndarray] = None   # kept only for previews
    result: Optional[np.ndarray] = None

    @classmethod
    def failure(cls, exc: KaleidoError) -> "Outcome":
        return cls(ok=False, kind=exc.kind, message=str(exc))
