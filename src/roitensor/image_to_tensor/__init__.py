"""Rotated ROI crop, bilinear resample and value-range remap into a float tensor."""
from roitensor.image_to_tensor.calculator import ImageToTensorCalculator, TensorResult
from roitensor.image_to_tensor.config import IMAGE_TO_TENSOR_DEFAULTS, ImageToTensorOptions
from roitensor.image_to_tensor.core import transform, transform_with_map
from roitensor.image_to_tensor.errors import (
    ImageToTensorError,
    InvalidBorderMode,
    InvalidOutputGeometry,
    InvalidRange,
    InvalidRegion,
    UnsupportedChannelLayout,
)
from roitensor.image_to_tensor.geometry import letterbox_padding, resolve, roi_corners
from roitensor.image_to_tensor.raster import OutputGeometry, RangeSpec, Raster, RegionDescriptor
from roitensor.image_to_tensor.sampler import sample, sample_many
from roitensor.image_to_tensor.value_range import (
    ValueTransform,
    derive_transform,
    get_value_range_transformation,
    tensor_to_rgb,
)
from roitensor.image_to_tensor.writer import write

__all__ = [
    'IMAGE_TO_TENSOR_DEFAULTS',
    'ImageToTensorCalculator',
    'ImageToTensorError',
    'ImageToTensorOptions',
    'InvalidBorderMode',
    'InvalidOutputGeometry',
    'InvalidRange',
    'InvalidRegion',
    'OutputGeometry',
    'RangeSpec',
    'Raster',
    'RegionDescriptor',
    'TensorResult',
    'UnsupportedChannelLayout',
    'ValueTransform',
    'derive_transform',
    'get_value_range_transformation',
    'letterbox_padding',
    'resolve',
    'roi_corners',
    'sample',
    'sample_many',
    'tensor_to_rgb',
    'transform',
    'transform_with_map',
    'write',
]
