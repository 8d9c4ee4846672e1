"""Public warmup helpers for the roitensor package.

Numba compiles the sampling and writer kernels on first use, once per
argument type combination. Pipelines with latency budgets can call
`run_global_warmup()` at start-up so the first real frame does not pay
for compilation.
"""
from __future__ import annotations

import logging
import time

import numpy as np

from roitensor.image_to_tensor.core import transform
from roitensor.image_to_tensor.raster import Raster, RegionDescriptor
from roitensor.image_to_tensor.sampler import BORDER_MODES, sample

logger = logging.getLogger(__name__)


def warmup_kernels(channels: int, border_mode: str) -> None:
    """Compile the kernels for one channel count / border mode pair."""
    pixels = np.zeros((4, 4, channels), dtype=np.uint8)
    raster = Raster(pixels)
    region = RegionDescriptor(0.5, 0.5, 1.0, 1.0, 0.1)
    transform(raster, region, 2, 2, True, (0.0, 1.0), border_mode=border_mode)
    sample(raster, 1.5, 1.5, border_mode=border_mode)


def run_global_warmup() -> None:
    """Compile kernels for RGB and RGBA rasters under every border mode.

    Strided views compile separately from contiguous arrays; they are
    warmed here too since padded buffers are common.
    """
    start = time.perf_counter()
    for channels in (3, 4):
        for border_mode in BORDER_MODES:
            warmup_kernels(channels, border_mode)
    padded = np.zeros((4, 6, 3), dtype=np.uint8)
    transform(Raster(padded[:, :4]), None, 2, 2, False, (0.0, 1.0))
    logger.info('roitensor kernels warmed up in %.2fs', time.perf_counter() - start)
