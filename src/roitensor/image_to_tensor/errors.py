"""Typed failures raised by the image-to-tensor transform.

All of them derive from ``ValueError`` so callers that already guard
against bad numeric input keep working.
"""


class ImageToTensorError(ValueError):
    """Base class for every rejected transform input."""


class InvalidRegion(ImageToTensorError):
    """Region width or height resolves to a non-positive pixel extent."""


class InvalidOutputGeometry(ImageToTensorError):
    """Requested tensor width or height is not a positive integer."""


class InvalidRange(ImageToTensorError):
    """Output value range with ``min >= max``."""


class UnsupportedChannelLayout(ImageToTensorError):
    """Source raster is not 8-bit RGB or RGBA."""


class InvalidBorderMode(ImageToTensorError):
    """Unknown out-of-bounds sampling policy."""
