"""Region-of-interest to tensor conversion.

`transform` is the single entry point pipelines call: it validates every
input up front, resolves the affine map once, derives the value-range
transform once and then fills a fresh float32 tensor. Nothing is cached
between calls and nothing is logged here.
"""
from typing import Optional, Tuple

import numpy as np
from affine import Affine

from roitensor.image_to_tensor.geometry import check_output_size, resolve
from roitensor.image_to_tensor.raster import Raster, RegionDescriptor
from roitensor.image_to_tensor.sampler import parse_border_mode
from roitensor.image_to_tensor.value_range import coerce_range, derive_transform
from roitensor.image_to_tensor.writer import write


def as_raster(image) -> Raster:
    """Accept a `Raster` or anything `Raster.from_array` understands."""
    if isinstance(image, Raster):
        return image
    return Raster.from_array(image)


def transform_with_map(raster, region: Optional[RegionDescriptor], out_width: int, out_height: int,
                       keep_aspect_ratio: bool, value_range,
                       border_mode: str = 'replicate') -> Tuple[np.ndarray, Affine]:
    """Like `transform` but also returns the destination -> source affine map."""
    raster = as_raster(raster)
    if region is None:
        region = RegionDescriptor.full_image()
    parse_border_mode(border_mode)
    out_width, out_height = check_output_size(out_width, out_height)
    range_min, range_max = coerce_range(value_range)
    value_transform = derive_transform(range_min, range_max)
    affine_map = resolve(region, raster.width, raster.height,
                         out_width, out_height, bool(keep_aspect_ratio))

    tensor = write(raster, affine_map, value_transform, out_width, out_height,
                   border_mode=border_mode)
    return tensor, affine_map


def transform(raster, region: Optional[RegionDescriptor], out_width: int, out_height: int,
              keep_aspect_ratio: bool, value_range, border_mode: str = 'replicate') -> np.ndarray:
    """Extract `region` from `raster` into an (out_height, out_width, 3) float32 tensor.

    Parameters
    - raster: `Raster` or (H, W, 3|4) uint8 array; alpha is dropped.
    - region: normalized `RegionDescriptor`; None means the whole image.
    - out_width, out_height: positive tensor size.
    - keep_aspect_ratio: scale uniformly so the region fits without distortion.
    - value_range: (min, max) pair or `RangeSpec`; 0 maps to min, 255 to max.
    - border_mode: 'replicate' (default) or 'zero' for samples outside the image.

    Raises `InvalidRegion`, `InvalidOutputGeometry`, `InvalidRange`,
    `UnsupportedChannelLayout` or `InvalidBorderMode` before any sampling.
    """
    tensor, _ = transform_with_map(raster, region, out_width, out_height,
                                   keep_aspect_ratio, value_range, border_mode=border_mode)
    return tensor
