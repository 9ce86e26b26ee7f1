"""Pixel-level picture filters on top of numpy, OpenCV and Pillow."""

from .errors import (
    DimensionMismatchError,
    EmptyImageError,
    InvalidDimensionsError,
    LoadError,
    NonRectangularError,
    PictureError,
)
from .models.pixel import BLACK, WHITE, Pixel
from .models.picture import Picture
from .services.picture_service import PictureService
from .pipeline.batch_filter import filter_gallery

__all__ = [
    "BLACK",
    "WHITE",
    "DimensionMismatchError",
    "EmptyImageError",
    "InvalidDimensionsError",
    "LoadError",
    "NonRectangularError",
    "Picture",
    "PictureError",
    "PictureService",
    "Pixel",
    "filter_gallery",
]
