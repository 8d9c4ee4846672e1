"""Tensor writer: fills a (height, width, 3) float32 tensor from a raster.

Every destination pixel is mapped into the source through the affine map,
sampled bilinearly, range-mapped and stored. Rows are distributed over
numba's thread pool with `prange`; each output cell is written once by
exactly one iteration.
"""
import numpy as np
from affine import Affine
from numba import njit, prange

from roitensor.image_to_tensor.raster import Raster
from roitensor.image_to_tensor.sampler import _sample_into, parse_border_mode
from roitensor.image_to_tensor.value_range import ValueTransform

TENSOR_CHANNELS = 3
TENSOR_DTYPE = np.float32


@njit(parallel=True, cache=True)
def _write_kernel(pixels, a, b, c, d, e, f, scale, offset, lo, hi, zero_border, out):
    out_h = out.shape[0]
    out_w = out.shape[1]
    for y in prange(out_h):
        rgb = np.empty(3, dtype=np.float64)
        for x in range(out_w):
            src_x = a * x + b * y + c
            src_y = d * x + e * y + f
            _sample_into(pixels, src_x, src_y, zero_border, rgb)
            for ch in range(3):
                v = rgb[ch] * scale + offset
                if v < lo:
                    v = lo
                elif v > hi:
                    v = hi
                out[y, x, ch] = v


def write(raster: Raster, affine_map: Affine, value_transform: ValueTransform,
          out_width: int, out_height: int, border_mode: str = 'replicate') -> np.ndarray:
    """Populate and return a fresh (out_height, out_width, 3) float32 tensor.

    Alpha, when the raster has it, is never read. Values are clipped to
    the image of [0, 255] under `value_transform`.
    """
    zero_border = parse_border_mode(border_mode)
    lo, hi = value_transform.bounds()
    out = np.empty((int(out_height), int(out_width), TENSOR_CHANNELS), dtype=TENSOR_DTYPE)
    a, b, c, d, e, f = (float(v) for v in affine_map[:6])
    _write_kernel(raster.pixels, a, b, c, d, e, f,
                  float(value_transform.scale), float(value_transform.offset),
                  float(lo), float(hi), zero_border, out)
    return out
