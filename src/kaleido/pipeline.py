from __future__ import annotations
import logging
import os
from typing import Optional

from .codec import load, save
from .errors import KaleidoError, Outcome
from .helpers import PipelineConfig
from .kaleidoscope import KaleidoscopeComposer

logger = logging.getLogger(__name__)


def process_file(
    input_path: str | os.PathLike,
    output_path: str | os.PathLike,
    config: Optional[PipelineConfig] = None,
) -> Outcome:
    """
    load -> kaleidoscope -> save. Codec failures come back as a failed
    Outcome tagged 'load' or 'save'; nothing is written on a load failure.
    """
    cfg = config or PipelineConfig()
    try:
        buffer = load(input_path, cfg.load_scale_percent)
        original = buffer.to_array() if cfg.show else None

        KaleidoscopeComposer(cfg.kaleidoscope).apply(buffer)
        save(buffer, output_path, cfg.quality)
    except KaleidoError as e:
        logger.error("%s error: %s", e.kind.capitalize(), e)
        return Outcome.failure(e)

    return Outcome(
        ok=True,
        message=f"Wrote {output_path}",
        original=original,
        result=buffer.to_array() if cfg.show else None,
    )
