# -*- coding: utf-8 -*-

"""
image_to_tensor/config.py

Central defaults for the image-to-tensor stage plus the options container
pipelines build from their own configuration.

Contents:
---------
1. IMAGE_TO_TENSOR_DEFAULTS:
   - Output tensor size, aspect policy, float range and border mode used
     when a caller leaves an option out.

2. ImageToTensorOptions:
   - Validated, immutable options. Build from keyword arguments or from a
     nested dictionary with `ImageToTensorOptions.from_dict`:

        opts = ImageToTensorOptions.from_dict({
            'output_tensor_width': 256,
            'output_tensor_height': 256,
            'keep_aspect_ratio': True,
            'output_tensor_float_range': {'min': -1.0, 'max': 1.0},
        })

If these values later come from a YAML file, only `from_dict` needs a
loader in front of it.
"""
import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from roitensor.image_to_tensor.geometry import check_output_size
from roitensor.image_to_tensor.raster import OutputGeometry, RangeSpec
from roitensor.image_to_tensor.sampler import parse_border_mode
from roitensor.image_to_tensor.value_range import coerce_range, derive_transform

logger = logging.getLogger(__name__)

# ───────────────────────────────────────────────────────────────────────────────
# 1) DEFAULTS
# ───────────────────────────────────────────────────────────────────────────────
IMAGE_TO_TENSOR_DEFAULTS = {
    'output_tensor_width': 256,         # tensor columns (px)
    'output_tensor_height': 256,        # tensor rows (px)
    'keep_aspect_ratio': False,         # uniform scale, pad with border samples
    'output_tensor_float_range': {      # 0 -> min, 255 -> max
        'min': 0.0,
        'max': 1.0,
    },
    'border_mode': 'replicate',         # 'replicate' | 'zero'
}


# ───────────────────────────────────────────────────────────────────────────────
# 2) OPTIONS
# ───────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class ImageToTensorOptions:
    output_tensor_width: int = IMAGE_TO_TENSOR_DEFAULTS['output_tensor_width']
    output_tensor_height: int = IMAGE_TO_TENSOR_DEFAULTS['output_tensor_height']
    keep_aspect_ratio: bool = IMAGE_TO_TENSOR_DEFAULTS['keep_aspect_ratio']
    range_min: float = IMAGE_TO_TENSOR_DEFAULTS['output_tensor_float_range']['min']
    range_max: float = IMAGE_TO_TENSOR_DEFAULTS['output_tensor_float_range']['max']
    border_mode: str = IMAGE_TO_TENSOR_DEFAULTS['border_mode']

    def __post_init__(self):
        w, h = check_output_size(self.output_tensor_width, self.output_tensor_height)
        derive_transform(self.range_min, self.range_max)
        parse_border_mode(self.border_mode)
        object.__setattr__(self, 'output_tensor_width', w)
        object.__setattr__(self, 'output_tensor_height', h)
        object.__setattr__(self, 'keep_aspect_ratio', bool(self.keep_aspect_ratio))
        object.__setattr__(self, 'range_min', float(self.range_min))
        object.__setattr__(self, 'range_max', float(self.range_max))
        object.__setattr__(self, 'border_mode', str(self.border_mode).lower())

    @property
    def output_geometry(self) -> OutputGeometry:
        return OutputGeometry(self.output_tensor_width, self.output_tensor_height,
                              self.keep_aspect_ratio)

    @property
    def value_range(self) -> RangeSpec:
        return RangeSpec(self.range_min, self.range_max)

    @classmethod
    def from_dict(cls, options: Optional[Dict[str, Any]] = None) -> 'ImageToTensorOptions':
        """Merge `options` over IMAGE_TO_TENSOR_DEFAULTS and validate.

        Unknown keys raise ValueError so typos do not silently fall back to
        defaults.
        """
        options = dict(options or {})
        unknown = set(options) - set(IMAGE_TO_TENSOR_DEFAULTS)
        if unknown:
            raise ValueError(f'unknown image_to_tensor options: {sorted(unknown)}')

        merged = copy.deepcopy(IMAGE_TO_TENSOR_DEFAULTS)
        float_range = options.pop('output_tensor_float_range', None)
        merged.update(options)
        if float_range is not None:
            range_min, range_max = coerce_range(float_range)
            merged['output_tensor_float_range'] = {'min': range_min, 'max': range_max}
        logger.debug('image_to_tensor options: %s', merged)

        return cls(
            output_tensor_width=merged['output_tensor_width'],
            output_tensor_height=merged['output_tensor_height'],
            keep_aspect_ratio=merged['keep_aspect_ratio'],
            range_min=merged['output_tensor_float_range']['min'],
            range_max=merged['output_tensor_float_range']['max'],
            border_mode=merged['border_mode'],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'output_tensor_width': self.output_tensor_width,
            'output_tensor_height': self.output_tensor_height,
            'keep_aspect_ratio': self.keep_aspect_ratio,
            'output_tensor_float_range': {'min': self.range_min, 'max': self.range_max},
            'border_mode': self.border_mode,
        }
