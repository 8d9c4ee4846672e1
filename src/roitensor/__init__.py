"""
roitensor - region-of-interest extraction into model-ready float tensors.
"""

__version__ = "0.1.0"
