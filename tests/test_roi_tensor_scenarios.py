"""Crops checked against an independent Pillow rendering of the same region.

Regions mirror the reference image-to-tensor cases: medium and large
sub-rectangles, with and without rotation and aspect preservation.
"""
import math

import numpy as np
import pytest

from roitensor.image_to_tensor.core import transform_with_map
from roitensor.image_to_tensor.raster import RegionDescriptor
from roitensor.image_to_tensor.tests.fixtures import make_scene, reference_crop
from roitensor.image_to_tensor.value_range import tensor_to_rgb

MAX_ABS_DIFF = 5


@pytest.fixture(scope='module')
def input_rgb():
    return make_scene(720, 1280)


@pytest.fixture(scope='module')
def input_rgba():
    return make_scene(720, 1280, channels=4)


CASES = {
    'medium_sub_rect_keep_aspect': (RegionDescriptor(0.65, 0.4, 0.5, 0.5, 0.0), 0.0, 1.0, 256, 256, True, False),
    'medium_sub_rect_keep_aspect_with_rotation': (RegionDescriptor(0.65, 0.4, 0.5, 0.5, math.pi / 2), 0.0, 1.0, 256, 256, True, False),
    'medium_sub_rect_with_rotation': (RegionDescriptor(0.65, 0.4, 0.5, 0.5, -math.pi / 4), -1.0, 1.0, 256, 256, False, False),
    'large_sub_rect': (RegionDescriptor(0.5, 0.5, 1.5, 1.1, 0.0), 0.0, 1.0, 128, 128, False, False),
    'large_sub_rect_keep_aspect': (RegionDescriptor(0.5, 0.5, 1.5, 1.1, 0.0), 0.0, 1.0, 128, 128, True, False),
    'large_sub_rect_keep_aspect_with_rotation': (RegionDescriptor(0.5, 0.5, 1.5, 1.1, -math.pi / 12), 0.0, 1.0, 128, 128, True, True),
    'noop_except_range': (RegionDescriptor(0.5, 0.5, 1.0, 1.0, 0.0), 0.0, 1.0, 64, 128, True, True),
}


@pytest.mark.parametrize('name', sorted(CASES))
def test_matches_reference_rendering(name, input_rgb, input_rgba):
    region, range_min, range_max, width, height, keep_aspect, use_rgba = CASES[name]
    pixels = input_rgba if use_rgba else input_rgb
    tensor, _ = transform_with_map(pixels, region, width, height, keep_aspect,
                                   (range_min, range_max))
    assert tensor.shape == (height, width, 3)
    assert tensor.min() >= range_min and tensor.max() <= range_max

    result = tensor_to_rgb(tensor, range_min, range_max)
    expected = reference_crop(input_rgb, region, width, height, keep_aspect)
    diff = np.abs(result.astype(int) - expected.astype(int))
    assert diff.max() <= MAX_ABS_DIFF, name


def test_medium_sub_rect_keep_aspect_uses_unit_range(input_rgb):
    region = RegionDescriptor(0.65, 0.4, 0.5, 0.5, 0.0)
    tensor, _ = transform_with_map(input_rgb, region, 256, 256, True, (0.0, 1.0))
    assert tensor.min() >= 0.0
    assert tensor.max() <= 1.0
    # converting back with v * 255 stays on the 8-bit grid
    back = np.rint(tensor * 255.0)
    assert back.min() >= 0 and back.max() <= 255
