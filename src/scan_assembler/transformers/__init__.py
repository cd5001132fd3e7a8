"""Transformers for normalizing and watermarking page images."""

from .imagemagick_transformer import ImageMagickTransformer
from .transformer import PageTransformer

__all__ = [
    "PageTransformer",
    "ImageMagickTransformer",
]
