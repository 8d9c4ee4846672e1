"""
geometry.py

Affine geometry for region-of-interest extraction: builds the map from
output tensor pixel indices to source raster sampling coordinates.

Conventions used throughout:
- pixel index (i, j) refers to the pixel center; the continuous
  coordinate of that center is (i + 0.5, j + 0.5).
- the returned `affine.Affine` maps a destination index (x=col, y=row)
  straight to a source index, so a source value of 3.0 lands exactly on
  column 3.
- rotation is applied with the standard matrix [[cos, -sin], [sin, cos]]
  in pixel coordinates (x right, y down).

Public functions:
- `wrap_rotation(theta)` -> radians in [-pi, pi)
- `scale_factors(rw, rh, out_width, out_height, keep_aspect)` -> (sx, sy)
- `resolve(region, src_width, src_height, out_width, out_height, keep_aspect)` -> Affine
- `roi_corners(region, src_width, src_height)` -> (4, 2) array
- `letterbox_padding(region, src_width, src_height, out_width, out_height, keep_aspect)`
"""
import math
from typing import Tuple

import numpy as np
from affine import Affine

from roitensor.image_to_tensor.errors import InvalidOutputGeometry, InvalidRegion
from roitensor.image_to_tensor.raster import RegionDescriptor

ROTATION_DECIMALS = 12


def wrap_rotation(theta: float) -> float:
    """Wrap radians to [-pi, pi).

    The result is rounded to `ROTATION_DECIMALS` places so that angles a
    whole number of turns apart resolve to the same matrix.
    """
    return round((float(theta) + math.pi) % (2 * math.pi) - math.pi, ROTATION_DECIMALS)


def check_output_size(out_width, out_height) -> Tuple[int, int]:
    """Validate and return the tensor size as plain ints."""
    try:
        w = int(out_width)
        h = int(out_height)
    except (TypeError, ValueError):
        raise InvalidOutputGeometry(
            f'output size must be integers, got {out_width!r} x {out_height!r}') from None
    if isinstance(out_width, bool) or isinstance(out_height, bool) or w != out_width or h != out_height:
        raise InvalidOutputGeometry(f'output size must be integers, got {out_width!r} x {out_height!r}')
    if w <= 0 or h <= 0:
        raise InvalidOutputGeometry(f'output size must be positive, got {w} x {h}')
    return w, h


def _region_in_pixels(region: RegionDescriptor, src_width: int, src_height: int):
    cx, cy, rw, rh = region.to_pixels(src_width, src_height)
    # `not x > 0` also rejects NaN
    if not (rw > 0 and rh > 0) or not (math.isfinite(rw) and math.isfinite(rh)):
        raise InvalidRegion(f'region extent must be positive, got {rw!r} x {rh!r} pixels')
    if not (math.isfinite(cx) and math.isfinite(cy)):
        raise InvalidRegion(f'region center must be finite, got ({cx!r}, {cy!r})')
    rotation = float(region.rotation)
    if not math.isfinite(rotation):
        raise InvalidRegion(f'region rotation must be finite, got {rotation!r}')
    return cx, cy, rw, rh


def scale_factors(rw: float, rh: float, out_width: int, out_height: int,
                  keep_aspect: bool) -> Tuple[float, float]:
    """Source pixels per destination pixel along x and y.

    With `keep_aspect` a single factor is used, chosen so the whole
    rw x rh window fits inside the output.
    """
    sx = rw / out_width
    sy = rh / out_height
    if keep_aspect:
        s = max(sx, sy)
        return s, s
    return sx, sy


def resolve(region: RegionDescriptor, src_width: int, src_height: int,
            out_width: int, out_height: int, keep_aspect: bool) -> Affine:
    """Build the destination-index -> source-index affine map for `region`.

    Raises `InvalidRegion` for a zero, negative or non-finite extent and
    `InvalidOutputGeometry` for a non-positive tensor size.
    """
    out_width, out_height = check_output_size(out_width, out_height)
    cx, cy, rw, rh = _region_in_pixels(region, src_width, src_height)
    sx, sy = scale_factors(rw, rh, out_width, out_height, keep_aspect)
    theta = wrap_rotation(region.rotation)

    # Affine products apply right to left
    return (Affine.translation(cx - 0.5, cy - 0.5)
            * Affine.rotation(math.degrees(theta))
            * Affine.scale(sx, sy)
            * Affine.translation(0.5 - out_width / 2.0, 0.5 - out_height / 2.0))


def roi_corners(region: RegionDescriptor, src_width: int, src_height: int) -> np.ndarray:
    """Corners of the rotated region in continuous source pixel coordinates.

    Order: top-left, top-right, bottom-right, bottom-left (before rotation).
    """
    cx, cy, rw, rh = _region_in_pixels(region, src_width, src_height)
    rot = Affine.translation(cx, cy) * Affine.rotation(math.degrees(wrap_rotation(region.rotation)))
    half_w, half_h = rw / 2.0, rh / 2.0
    local = [(-half_w, -half_h), (half_w, -half_h), (half_w, half_h), (-half_w, half_h)]
    return np.array([rot * p for p in local], dtype=float)


def letterbox_padding(region: RegionDescriptor, src_width: int, src_height: int,
                      out_width: int, out_height: int,
                      keep_aspect: bool) -> Tuple[float, float, float, float]:
    """Normalized (left, top, right, bottom) share of the output lying outside the region.

    Always zero without `keep_aspect`; otherwise one axis is padded
    symmetrically.
    """
    out_width, out_height = check_output_size(out_width, out_height)
    _, _, rw, rh = _region_in_pixels(region, src_width, src_height)
    if not keep_aspect:
        return 0.0, 0.0, 0.0, 0.0
    sx, sy = scale_factors(rw, rh, out_width, out_height, True)
    pad_x = max(0.0, (1.0 - rw / (sx * out_width)) / 2.0)
    pad_y = max(0.0, (1.0 - rh / (sy * out_height)) / 2.0)
    return pad_x, pad_y, pad_x, pad_y
