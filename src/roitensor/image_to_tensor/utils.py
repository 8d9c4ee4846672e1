"""
utils.py

Small helpers shared by the pipeline-facing layers.

- `safe_log_exception(msg, exc, **ctx)` : logs a rejected input with a
  compact description of each context value; never raises, falling back
  to stderr if logging itself fails.
- `describe_raster(raster)` : one-line summary of a `Raster`.
- `describe_region(region)` : one-line summary of a `RegionDescriptor`.
- `describe_input(value)` : picks the right summary for rasters, regions,
  Pillow images and arrays, and `repr` for anything else.
"""
import logging
import sys
from typing import Any

import numpy as np
from PIL import Image

from roitensor.image_to_tensor.raster import Raster, RegionDescriptor

logger = logging.getLogger(__name__)


def describe_raster(raster) -> str:
    """e.g. ``'720x1280x3 stride=2160'``"""
    return f'{raster.width}x{raster.height}x{raster.channels} stride={raster.stride}'


def describe_region(region) -> str:
    """e.g. ``'center=(0.65, 0.4) size=(0.5, 0.5) rotation=0.0'``"""
    return (f'center=({region.center_x!r}, {region.center_y!r}) '
            f'size=({region.width!r}, {region.height!r}) rotation={region.rotation!r}')


def describe_input(value: Any) -> str:
    if isinstance(value, Raster):
        return describe_raster(value)
    if isinstance(value, RegionDescriptor):
        return describe_region(value)
    if isinstance(value, Image.Image):
        return f'{value.mode} image {value.width}x{value.height}'
    if isinstance(value, np.ndarray):
        # pixel data never goes into the log record
        return f'array shape={value.shape} dtype={value.dtype}'
    return repr(value)


def safe_log_exception(msg: str, exc: Exception, **ctx: Any) -> None:
    """Log `exc` with its context at ERROR level, including the traceback.

    Context values are summarized with `describe_input`. If logging fails
    for any reason a single line goes to `sys.stderr` instead.
    """
    try:
        if ctx:
            ctx_s = ' | '.join(f'{k}={describe_input(v)}' for k, v in ctx.items())
            logger.exception('%s | %s: %s | %s', msg, type(exc).__name__, exc, ctx_s)
        else:
            logger.exception('%s | %s: %s', msg, type(exc).__name__, exc)
    except Exception:
        try:
            sys.stderr.write(f'LOGGING FAILURE: {msg} {exc}\n')
        except Exception:
            pass
