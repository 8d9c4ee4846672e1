"""Pipeline-facing wrapper around `core.transform`.

A pipeline creates one `ImageToTensorCalculator` per stage from its
options and then calls `process` once per (image, region) pair it
receives. The calculator holds only its immutable options, so a single
instance may be shared between threads.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from affine import Affine
from PIL import Image

from roitensor.image_to_tensor.config import ImageToTensorOptions
from roitensor.image_to_tensor.core import as_raster, transform_with_map
from roitensor.image_to_tensor.errors import ImageToTensorError
from roitensor.image_to_tensor.geometry import letterbox_padding
from roitensor.image_to_tensor.raster import Raster, RegionDescriptor
from roitensor.image_to_tensor.utils import describe_raster, safe_log_exception

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TensorResult:
    """Output of one `process` call.

    - tensor: (height, width, 3) float32
    - affine_map: destination index -> source index
    - letterbox_padding: normalized (left, top, right, bottom) padding
    """
    tensor: np.ndarray
    affine_map: Affine
    letterbox_padding: Tuple[float, float, float, float]


class ImageToTensorCalculator:

    def __init__(self, options=None, **overrides):
        if options is None or isinstance(options, dict):
            merged = dict(options or {})
            merged.update(overrides)
            options = ImageToTensorOptions.from_dict(merged)
        elif overrides:
            merged = options.to_dict()
            merged.update(overrides)
            options = ImageToTensorOptions.from_dict(merged)
        self.options = options

    def __repr__(self):
        return f'ImageToTensorCalculator({self.options!r})'

    def process(self, image, region: Optional[RegionDescriptor] = None) -> TensorResult:
        """Convert `image` (Raster, uint8 array or RGB/RGBA Pillow image).

        The whole image is used when `region` is None. Invalid inputs are
        logged and re-raised unchanged.
        """
        opts = self.options
        if region is None:
            region = RegionDescriptor.full_image()
        raster = None
        try:
            raster = Raster.from_image(image) if isinstance(image, Image.Image) else as_raster(image)
            tensor, affine_map = transform_with_map(
                raster, region,
                opts.output_tensor_width, opts.output_tensor_height,
                opts.keep_aspect_ratio, (opts.range_min, opts.range_max),
                border_mode=opts.border_mode)
        except ImageToTensorError as e:
            safe_log_exception('image_to_tensor rejected input', e,
                               image=raster if raster is not None else image, region=region)
            raise

        padding = letterbox_padding(region, raster.width, raster.height,
                                    opts.output_tensor_width, opts.output_tensor_height,
                                    opts.keep_aspect_ratio)
        logger.debug('image_to_tensor: %s -> %dx%d tensor, padding=%s',
                     describe_raster(raster), opts.output_tensor_width,
                     opts.output_tensor_height, padding)
        return TensorResult(tensor=tensor, affine_map=affine_map, letterbox_padding=padding)
