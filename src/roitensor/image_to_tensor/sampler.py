"""Bilinear sampling of a uint8 raster at fractional pixel coordinates.

Coordinates are pixel indices: (3.0, 2.0) is exactly the center of column
3, row 2. Two out-of-bounds policies are available:

- ``'replicate'`` clamps the coordinate onto the image, so edge pixels
  extend outward indefinitely.
- ``'zero'`` treats every pixel outside the image as 0 in all channels.

The numba kernels here are shared with the tensor writer.
"""
import math

import numpy as np
from numba import njit

from roitensor.image_to_tensor.errors import InvalidBorderMode
from roitensor.image_to_tensor.raster import Raster

BORDER_MODES = {
    'replicate': 0,
    'zero': 1,
}


def parse_border_mode(border_mode) -> bool:
    """Return True for zero-fill borders, False for replicate."""
    try:
        code = BORDER_MODES[str(border_mode).lower()]
    except KeyError:
        raise InvalidBorderMode(
            f'unknown border mode {border_mode!r}; expected one of {sorted(BORDER_MODES)}') from None
    return code == BORDER_MODES['zero']


@njit(cache=True)
def _pixel_or_zero(pixels, xi, yi, c):
    h, w = pixels.shape[0], pixels.shape[1]
    if xi < 0 or yi < 0 or xi >= w or yi >= h:
        return 0.0
    return float(pixels[yi, xi, c])


@njit(cache=True)
def _sample_into(pixels, x, y, zero_border, out):
    """Write the interpolated value of the first ``out.shape[0]`` channels."""
    h, w = pixels.shape[0], pixels.shape[1]
    n = out.shape[0]
    if zero_border:
        # far outside (or NaN): all four neighbours are padding
        if not (x > -1.0 and y > -1.0 and x < w and y < h):
            for c in range(n):
                out[c] = 0.0
            return
        x0 = int(math.floor(x))
        y0 = int(math.floor(y))
        fx = x - x0
        fy = y - y0
        for c in range(n):
            top = _pixel_or_zero(pixels, x0, y0, c) * (1.0 - fx) + _pixel_or_zero(pixels, x0 + 1, y0, c) * fx
            bottom = _pixel_or_zero(pixels, x0, y0 + 1, c) * (1.0 - fx) + _pixel_or_zero(pixels, x0 + 1, y0 + 1, c) * fx
            out[c] = top * (1.0 - fy) + bottom * fy
        return

    # `not x >= 0` also sends NaN to the edge
    if not x >= 0.0:
        x = 0.0
    elif x > w - 1.0:
        x = w - 1.0
    if not y >= 0.0:
        y = 0.0
    elif y > h - 1.0:
        y = h - 1.0
    x0 = int(math.floor(x))
    y0 = int(math.floor(y))
    x1 = x0 + 1 if x0 + 1 < w else x0
    y1 = y0 + 1 if y0 + 1 < h else y0
    fx = x - x0
    fy = y - y0
    for c in range(n):
        top = pixels[y0, x0, c] * (1.0 - fx) + pixels[y0, x1, c] * fx
        bottom = pixels[y1, x0, c] * (1.0 - fx) + pixels[y1, x1, c] * fx
        out[c] = top * (1.0 - fy) + bottom * fy


@njit(cache=True)
def _sample_many(pixels, xs, ys, zero_border, out):
    for i in range(xs.shape[0]):
        _sample_into(pixels, xs[i], ys[i], zero_border, out[i])


def sample(raster: Raster, x: float, y: float, border_mode: str = 'replicate') -> np.ndarray:
    """Interpolated channel values (float64, unrounded) at source index (x, y).

    All raster channels are returned, alpha included.
    """
    zero_border = parse_border_mode(border_mode)
    x, y = float(x), float(y)
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ValueError(f'sample coordinates must be finite, got ({x!r}, {y!r})')
    out = np.empty(raster.channels, dtype=np.float64)
    _sample_into(raster.pixels, x, y, zero_border, out)
    return out


def sample_many(raster: Raster, xs, ys, border_mode: str = 'replicate') -> np.ndarray:
    """Vector form of `sample`; returns an (N, channels) float64 array."""
    zero_border = parse_border_mode(border_mode)
    xs_a = np.ascontiguousarray(xs, dtype=np.float64).reshape(-1)
    ys_a = np.ascontiguousarray(ys, dtype=np.float64).reshape(-1)
    if xs_a.shape != ys_a.shape:
        raise ValueError('xs and ys must have the same number of elements')
    if not (np.isfinite(xs_a).all() and np.isfinite(ys_a).all()):
        raise ValueError('sample coordinates must be finite')
    out = np.empty((xs_a.shape[0], raster.channels), dtype=np.float64)
    _sample_many(raster.pixels, xs_a, ys_a, zero_border, out)
    return out
