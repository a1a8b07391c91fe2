from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from .helpers import KaleidoscopeConfig, PipelineConfig
from .logging_config import setup_logging
from .pipeline import process_file

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_LOAD = 2
EXIT_SAVE = 3

_EXIT_BY_KIND = {"load": EXIT_LOAD, "save": EXIT_SAVE}


class _UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    """Reports bad arguments as a usage failure instead of exiting with 2."""

    def error(self, message: str) -> None:
        self.print_usage()
        raise _UsageError(message)


def build_argparser() -> argparse.ArgumentParser:
    p = _ArgumentParser(prog="kaleido", description="Kaleidoscope mosaic for JPEG images")
    g_io = p.add_argument_group("I/O")
    g_io.add_argument("input", nargs="?", help="Input image (e.g. input_file.jpg)")
    g_io.add_argument("output", nargs="?", help="Output JPEG (e.g. output_file.jpg)")
    g_io.add_argument("--quality", type=int, default=90, help="JPEG quality 0-100")
    g_io.add_argument("--scale", type=int, default=100, help="Rescale percent applied on load")
    g_io.add_argument("--show", action="store_true", help="Display input and result")

    g_fx = p.add_argument_group("Kaleidoscope")
    g_fx.add_argument("--sectors", type=int, default=6,
                      help="Number of wedges (< 4 -> 6, odd -> next even)")

    g_log = p.add_argument_group("Logging")
    g_log.add_argument("--log-level", default="INFO",
                       choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    g_log.add_argument("--log-file", default=None)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_argparser()
    try:
        args = parser.parse_args(argv)
    except _UsageError as e:
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return EXIT_USAGE
    if not args.input or not args.output:
        parser.print_usage()
        return EXIT_USAGE

    level = getattr(logging, args.log_level)
    setup_logging(level, args.log_file)

    cfg = PipelineConfig(
        kaleidoscope=KaleidoscopeConfig(sectors=args.sectors),
        quality=args.quality,
        load_scale_percent=args.scale,
        show=args.show,
        log_level=level,
    )
    outcome = process_file(args.input, args.output, cfg)
    if not outcome.ok:
        return _EXIT_BY_KIND.get(outcome.kind, EXIT_SAVE)

    if cfg.show and outcome.original is not None:
        from .viz import Visualizer  # matplotlib only when previewing
        Visualizer.before_after(outcome.original, outcome.result)
    return EXIT_OK
