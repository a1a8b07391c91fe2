from .helpers import KaleidoscopeConfig, PipelineConfig, ensure_dir
from .pixel import Pixel, SENTINEL
from .buffer import PixelBuffer
from .geometry import Point2D, Wedge, rotate2d
from .resample import Resampler, rescale
from .tone import ToneAdjuster, gamma, dim
from .convolve import ConvolutionFilter, gaussian_kernel, blur
from .kaleidoscope import KaleidoscopeComposer, kaleidoscope, normalize_sectors
from .errors import KaleidoError, LoadError, SaveError, Outcome
from .codec import decode, encode, load, save
from .pipeline import process_file
from .logging_config import setup_logging

__all__ = [
    "KaleidoscopeConfig", "PipelineConfig", "ensure_dir",
    "Pixel", "SENTINEL", "PixelBuffer",
    "Point2D", "Wedge", "rotate2d",
    "Resampler", "rescale",
    "ToneAdjuster", "gamma", "dim",
    "ConvolutionFilter", "gaussian_kernel", "blur",
    "KaleidoscopeComposer", "kaleidoscope", "normalize_sectors",
    "KaleidoError", "LoadError", "SaveError", "Outcome",
    "decode", "encode", "load", "save",
    "process_file",
    "setup_logging",
]
