"""
value_range.py

Affine (scale, offset) conversions between numeric value ranges.

The tensor path only ever maps the 8-bit source range [0, 255] into a
caller-chosen float range, but the general form is kept so tensors can be
mapped back to 8-bit for comparison against reference images.
"""
import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from roitensor.image_to_tensor.errors import InvalidRange
from roitensor.image_to_tensor.raster import RangeSpec

SOURCE_RANGE = (0.0, 255.0)


@dataclass(frozen=True)
class ValueTransform:
    """output = input * scale + offset"""
    scale: float
    offset: float

    def apply(self, values) -> np.ndarray:
        return np.asarray(values, dtype=np.float64) * self.scale + self.offset

    def bounds(self, from_min: float = SOURCE_RANGE[0],
               from_max: float = SOURCE_RANGE[1]) -> Tuple[float, float]:
        """Image of [from_min, from_max] under this transform, as (low, high)."""
        lo = from_min * self.scale + self.offset
        hi = from_max * self.scale + self.offset
        return (lo, hi) if lo <= hi else (hi, lo)


def _check_range(lo, hi, what: str) -> Tuple[float, float]:
    lo = float(lo)
    hi = float(hi)
    if not (math.isfinite(lo) and math.isfinite(hi)):
        raise InvalidRange(f'{what} range must be finite, got [{lo}, {hi}]')
    if lo >= hi:
        raise InvalidRange(f'{what} range needs min < max, got [{lo}, {hi}]')
    return lo, hi


def coerce_range(value_range) -> Tuple[float, float]:
    """Accept a `RangeSpec`, a mapping with min/max keys, or a (min, max) pair."""
    if isinstance(value_range, RangeSpec):
        return value_range.as_tuple()
    if isinstance(value_range, dict):
        try:
            return float(value_range['min']), float(value_range['max'])
        except KeyError as e:
            raise InvalidRange(f'range mapping is missing {e}') from None
    try:
        lo, hi = value_range
    except (TypeError, ValueError):
        raise InvalidRange(f'expected a (min, max) pair, got {value_range!r}') from None
    return float(lo), float(hi)


def get_value_range_transformation(from_min: float, from_max: float,
                                   to_min: float, to_max: float) -> ValueTransform:
    """Transform mapping from_min -> to_min and from_max -> to_max."""
    from_min, from_max = _check_range(from_min, from_max, 'input')
    to_min, to_max = _check_range(to_min, to_max, 'output')
    scale = (to_max - to_min) / (from_max - from_min)
    offset = to_min - from_min * scale
    return ValueTransform(scale=scale, offset=offset)


def derive_transform(range_min: float, range_max: float) -> ValueTransform:
    """Map 8-bit channel values onto [range_min, range_max].

    scale = (max - min) / 255, offset = min. Raises `InvalidRange` when
    ``range_min >= range_max``.
    """
    return get_value_range_transformation(SOURCE_RANGE[0], SOURCE_RANGE[1], range_min, range_max)


def tensor_to_rgb(tensor, range_min: float, range_max: float) -> np.ndarray:
    """Convert a float tensor in [range_min, range_max] back to uint8 pixels.

    Rounds to nearest (ties to even) and saturates to [0, 255], the same
    conversion used when comparing tensors against 8-bit reference crops.
    """
    t = get_value_range_transformation(range_min, range_max, *SOURCE_RANGE)
    values = t.apply(tensor)
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)
