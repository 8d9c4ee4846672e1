import numpy as np
import pytest

from roitensor.image_to_tensor.errors import InvalidRange
from roitensor.image_to_tensor.raster import RangeSpec
from roitensor.image_to_tensor.value_range import (
    ValueTransform,
    coerce_range,
    derive_transform,
    get_value_range_transformation,
    tensor_to_rgb,
)


def test_derive_transform_closed_form():
    t = derive_transform(0.0, 1.0)
    assert t.scale == 1.0 / 255.0
    assert t.offset == 0.0
    t = derive_transform(-1.0, 1.0)
    assert abs(t.scale - 2.0 / 255.0) < 1e-15
    assert t.offset == -1.0
    assert np.allclose(t.apply([0, 255]), [-1.0, 1.0])


def test_inverted_or_empty_range_rejected():
    with pytest.raises(InvalidRange):
        derive_transform(1.0, 0.0)
    with pytest.raises(InvalidRange):
        derive_transform(0.5, 0.5)
    with pytest.raises(InvalidRange):
        derive_transform(0.0, float('inf'))


def test_general_transformation():
    t = get_value_range_transformation(-1.0, 1.0, 0.0, 255.0)
    assert np.allclose(t.apply([-1.0, 0.0, 1.0]), [0.0, 127.5, 255.0])
    with pytest.raises(InvalidRange):
        get_value_range_transformation(1.0, -1.0, 0.0, 255.0)


def test_bounds_ordered():
    assert ValueTransform(scale=2.0, offset=1.0).bounds() == (1.0, 511.0)
    assert ValueTransform(scale=-1.0, offset=0.0).bounds() == (-255.0, 0.0)


def test_tensor_to_rgb_inverts_derive_transform():
    pixels = np.arange(256, dtype=np.uint8).reshape(16, 16, 1).repeat(3, axis=-1)
    tensor = derive_transform(-1.0, 1.0).apply(pixels).astype(np.float32)
    back = tensor_to_rgb(tensor, -1.0, 1.0)
    assert back.dtype == np.uint8
    assert np.array_equal(back, pixels)


def test_tensor_to_rgb_saturates():
    back = tensor_to_rgb(np.array([[-5.0, 0.5, 5.0]]), 0.0, 1.0)
    assert back.tolist() == [[0, 128, 255]]


def test_coerce_range():
    assert coerce_range(RangeSpec(-1.0, 2.0)) == (-1.0, 2.0)
    assert coerce_range({'min': 0, 'max': 3}) == (0.0, 3.0)
    assert coerce_range((0, 1)) == (0.0, 1.0)
    with pytest.raises(InvalidRange):
        coerce_range({'min': 0})
    with pytest.raises(InvalidRange):
        coerce_range(5.0)
