"""
raster.py

Value types handed to the image-to-tensor transform.

- `Raster` : read-only view of an 8-bit RGB/RGBA image with an explicit
  row stride (rows may carry padding bytes).
- `RegionDescriptor` : normalized, possibly rotated region of interest.
- `OutputGeometry` : tensor size plus the keep-aspect-ratio flag.
- `RangeSpec` : float range the 0..255 channel values are mapped into.

None of these types copy pixel data unless the input layout forces it.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from PIL import Image

from roitensor.image_to_tensor.errors import UnsupportedChannelLayout

SUPPORTED_CHANNELS = (3, 4)


@dataclass(frozen=True)
class Raster:
    """An (height, width, channels) uint8 pixel grid owned by the caller.

    `pixels` may be a strided view into a larger buffer; `stride` reports
    the byte distance between the starts of consecutive rows.
    """
    pixels: np.ndarray

    def __post_init__(self):
        px = self.pixels
        if not isinstance(px, np.ndarray) or px.dtype != np.uint8:
            raise UnsupportedChannelLayout('raster pixels must be a uint8 numpy array')
        if px.ndim != 3 or px.shape[2] not in SUPPORTED_CHANNELS:
            raise UnsupportedChannelLayout(
                f'raster must be shaped (H, W, 3) or (H, W, 4), got {px.shape}')
        if px.shape[0] <= 0 or px.shape[1] <= 0:
            raise UnsupportedChannelLayout('raster must have a positive width and height')
        view = px.view()
        view.flags.writeable = False
        object.__setattr__(self, 'pixels', view)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def channels(self) -> int:
        return int(self.pixels.shape[2])

    @property
    def stride(self) -> int:
        return int(self.pixels.strides[0])

    @property
    def has_alpha(self) -> bool:
        return self.channels == 4

    @classmethod
    def from_array(cls, arr) -> 'Raster':
        """Wrap an (H, W, C) uint8 array, keeping its row stride when possible.

        Arrays whose pixels or channels are not packed (for example a
        channel-reversed view) are copied into a packed layout first.
        """
        a = np.asarray(arr)
        if a.ndim == 3 and a.dtype == np.uint8:
            packed = a.strides[2] == 1 and a.strides[1] == a.shape[2]
            if not packed or a.strides[0] < a.shape[1] * a.shape[2]:
                a = np.ascontiguousarray(a)
        return cls(a)

    @classmethod
    def from_buffer(cls, buf, width: int, height: int, channels: int,
                    stride: Optional[int] = None) -> 'Raster':
        """Wrap a flat byte buffer laid out row by row.

        `stride` defaults to ``width * channels``; larger values skip the
        padding bytes at the end of every row.
        """
        width = int(width)
        height = int(height)
        channels = int(channels)
        if channels not in SUPPORTED_CHANNELS:
            raise UnsupportedChannelLayout(f'unsupported channel count: {channels}')
        if width <= 0 or height <= 0:
            raise UnsupportedChannelLayout('raster must have a positive width and height')
        row_bytes = width * channels
        stride = row_bytes if stride is None else int(stride)
        if stride < row_bytes:
            raise UnsupportedChannelLayout(
                f'stride {stride} is shorter than a row of {row_bytes} bytes')

        flat = np.frombuffer(buf, dtype=np.uint8) if isinstance(buf, (bytes, bytearray, memoryview)) \
            else np.asarray(buf, dtype=np.uint8).reshape(-1)
        needed = stride * (height - 1) + row_bytes
        if flat.size < needed:
            raise UnsupportedChannelLayout(
                f'buffer holds {flat.size} bytes, layout needs {needed}')

        pixels = np.lib.stride_tricks.as_strided(
            flat, shape=(height, width, channels), strides=(stride, channels, 1),
            writeable=False)
        return cls(pixels)

    @classmethod
    def from_image(cls, img: Image.Image) -> 'Raster':
        """Wrap an already decoded Pillow image in RGB or RGBA mode."""
        if img.mode not in ('RGB', 'RGBA'):
            raise UnsupportedChannelLayout(f'unsupported image mode: {img.mode}')
        return cls(np.asarray(img, dtype=np.uint8))


@dataclass(frozen=True)
class RegionDescriptor:
    """Rotated rectangle in normalized image coordinates.

    center/size are fractions of the image width and height and may fall
    outside [0, 1]; rotation is in radians about the rectangle center.
    """
    center_x: float = 0.5
    center_y: float = 0.5
    width: float = 1.0
    height: float = 1.0
    rotation: float = 0.0

    @classmethod
    def full_image(cls) -> 'RegionDescriptor':
        return cls()

    def to_pixels(self, src_width: int, src_height: int) -> Tuple[float, float, float, float]:
        """Return (cx, cy, rw, rh) in source pixel units."""
        return (float(self.center_x) * src_width,
                float(self.center_y) * src_height,
                float(self.width) * src_width,
                float(self.height) * src_height)


@dataclass(frozen=True)
class OutputGeometry:
    width: int
    height: int
    keep_aspect_ratio: bool = False


@dataclass(frozen=True)
class RangeSpec:
    """Target float range for channel values; the source range is 0..255."""
    min: float = 0.0
    max: float = 1.0

    def as_tuple(self) -> Tuple[float, float]:
        return float(self.min), float(self.max)
