"""Exceptions raised while building or loading a Picture."""


class PictureError(Exception):
    """Base class for every picture_lab error."""


class LoadError(PictureError, OSError):
    """Image file is missing or could not be decoded."""


class InvalidDimensionsError(PictureError, ValueError):
    """Height or width is not a positive integer."""


class EmptyImageError(PictureError, ValueError):
    """Source grid has no rows or no columns."""


class NonRectangularError(PictureError, ValueError):
    """Source grid rows differ in length."""


class DimensionMismatchError(PictureError, ValueError):
    """A second picture does not cover the one being filtered."""
