from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Sequence, Union
import logging
import os

import numpy as np
from dotenv import load_dotenv

from ..errors import (
    DimensionMismatchError,
    EmptyImageError,
    InvalidDimensionsError,
    NonRectangularError,
)
from ..repositories.filter_repository import FilterRepository
from ..repositories.picture_repository import PictureRepository
from .pixel import WHITE, Color, Pixel

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

EDGE_THRESHOLD = float(os.getenv("EDGE_THRESHOLD", "25"))
OUTPUT_EXT = os.getenv("OUTPUT_IMG_EXT", ".jpg")
RANDOM_SEED = os.getenv("RANDOM_SEED")

GridSource = Union["Picture", np.ndarray, Sequence[Sequence[Union[Pixel, Color]]]]


def _grid_from_rows(rows: Sequence[Sequence[Union[Pixel, Color]]]) -> np.ndarray:
    if len(rows) == 0 or len(rows[0]) == 0:
        raise EmptyImageError("Can't have an empty image!")
    width = len(rows[0])
    for i, row in enumerate(rows):
        if len(row) != width:
            raise NonRectangularError(
                f"Pictures must be rectangles. len(rows[0]) != len(rows[{i}])!"
            )
    values = [
        [p.get_color() if isinstance(p, Pixel) else tuple(p) for p in row]
        for row in rows
    ]
    arr = np.asarray(values, dtype=np.int64)
    if arr.ndim != 3 or arr.shape[2] != 3:
        raise ValueError("Every pixel must be an (r, g, b) triple")
    return np.clip(arr, 0, 255).astype(np.uint8)


def _grid_from_array(arr: np.ndarray) -> np.ndarray:
    if arr.ndim != 3 or arr.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) array, got shape {arr.shape}")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise EmptyImageError("Can't have an empty image!")
    if arr.dtype == np.uint8:
        return np.array(arr, copy=True, order="C")
    return np.clip(arr, 0, 255).astype(np.uint8)


class Picture:
    """
    A rectangle of RGB pixels plus the filters that edit it.

    The grid is an (H, W, 3) uint8 array owned by this object. Pixels are
    read and written by value, so two pictures never share pixel storage.
    In-place filters return None, the rest return a new Picture.
    """

    def __init__(self, source: GridSource, path: Union[str, Path, None] = None):
        if isinstance(source, Picture):
            self._pixels = source._pixels.copy()
            path = path if path is not None else source.path
        elif isinstance(source, np.ndarray):
            self._pixels = _grid_from_array(source)
        else:
            self._pixels = _grid_from_rows(source)
        self.path: Optional[Path] = Path(path) if path is not None else None

    # ─── Construction ────────────────────────────────────────────────
    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Picture":
        """Decode an image file. Raises LoadError when missing or unreadable."""
        pixels = PictureRepository.read_pixels(path)
        logger.info("Loaded picture %s (%dx%d)", path, pixels.shape[1], pixels.shape[0])
        return cls(pixels, path=path)

    @classmethod
    def solid(cls, height: int, width: int, color: Union[Pixel, Color] = WHITE) -> "Picture":
        """A single-color picture, white unless told otherwise."""
        if height <= 0 or width <= 0:
            raise InvalidDimensionsError(
                f"Picture dimensions must be positive, got {height}x{width}"
            )
        pixels = np.empty((height, width, 3), dtype=np.uint8)
        pixels[:, :] = Pixel.from_color(color).get_color()
        return cls(pixels)

    def copy(self) -> "Picture":
        return Picture(self)

    # ─── Accessors ───────────────────────────────────────────────────
    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view of the grid, shape (H, W, 3), RGB order."""
        view = self._pixels.view()
        view.flags.writeable = False
        return view

    def _check_bounds(self, x: int, y: int) -> None:
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            raise IndexError(f"No pixel at ({x}, {y})")

    def get_pixel(self, x: int, y: int) -> Pixel:
        """Copy of the pixel at column x, row y."""
        self._check_bounds(x, y)
        return Pixel(*(int(v) for v in self._pixels[y, x]))

    def set_pixel(self, x: int, y: int, pixel: Union[Pixel, Color]) -> None:
        self._check_bounds(x, y)
        if pixel is None:
            raise TypeError("Pixel is None")
        self._pixels[y, x] = Pixel.from_color(pixel).get_color()

    def to_grid(self) -> List[List[Pixel]]:
        return [[Pixel(*(int(v) for v in px)) for px in row] for row in self._pixels]

    def save(self, path: Union[str, Path, None] = None) -> Path:
        """
        Encode the picture to disk. The codec follows the file suffix and a
        missing suffix gets OUTPUT_IMG_EXT appended.
        """
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError("No path given and the picture has no source path")
        if not target.suffix:
            target = target.with_name(target.name + OUTPUT_EXT)
        self.path = PictureRepository.write_pixels(self._pixels, target)
        return self.path

    def __eq__(self, other):
        if not isinstance(other, Picture):
            return NotImplemented
        return np.array_equal(self._pixels, other._pixels)

    __hash__ = None

    def __repr__(self):
        return f"Picture(height={self.height}, width={self.width}, path={self.path})"

    def _covering(self, other: "Picture", role: str) -> np.ndarray:
        if other.height < self.height or other.width < self.width:
            raise DimensionMismatchError(
                f"{role} is {other.height}x{other.width}, "
                f"needs at least {self.height}x{self.width}"
            )
        return other._pixels[:self.height, :self.width]

    # ─── Filters: in place ───────────────────────────────────────────
    def zero_blue(self) -> None:
        """Remove all blue from the picture."""
        self._pixels = FilterRepository.zero_blue(self._pixels)

    def keep_only_blue(self) -> None:
        self._pixels = FilterRepository.keep_only_blue(self._pixels)

    def negate(self) -> None:
        """Invert every channel."""
        self._pixels = FilterRepository.negate(self._pixels)

    def solarize(self, threshold: int) -> None:
        """Simulate film over-exposure: channels below threshold are inverted."""
        self._pixels = FilterRepository.solarize(self._pixels, threshold)

    def grayscale(self) -> None:
        self._pixels = FilterRepository.grayscale(self._pixels)

    def tint(self, red: float, green: float, blue: float) -> None:
        self._pixels = FilterRepository.tint(self._pixels, (red, green, blue))

    def posterize(self, span: int) -> None:
        """Reduce the number of levels per channel to 256 / span."""
        self._pixels = FilterRepository.posterize(self._pixels, span)

    def mirror_vertical(self) -> None:
        """Mirror about the vertical midline, left to right."""
        self._pixels = FilterRepository.mirror_vertical(self._pixels)

    def mirror_right_to_left(self) -> None:
        self._pixels = FilterRepository.mirror_right_to_left(self._pixels)

    def mirror_horizontal(self) -> None:
        """Mirror about the horizontal midline, top to bottom."""
        self._pixels = FilterRepository.mirror_horizontal(self._pixels)

    def vertical_flip(self) -> None:
        self._pixels = FilterRepository.vertical_flip(self._pixels)

    def edge_detection(self, threshold: float = EDGE_THRESHOLD) -> None:
        """Replace the picture with a black-on-white edge map."""
        self._pixels = FilterRepository.edge_detection(self._pixels, threshold)

    def chromakey(self, other: "Picture", color: Union[Pixel, Color], dist: float) -> None:
        """Copy `other`'s pixels wherever this picture is within `dist` of `color`."""
        background = self._covering(other, "Background")
        key = Pixel.from_color(color).get_color()
        self._pixels = FilterRepository.chromakey(self._pixels, background, key, dist)

    def encode(self, message: "Picture") -> None:
        """Hide a black/white message picture in this picture."""
        msg = self._covering(message, "Message")
        self._pixels = FilterRepository.encode(self._pixels, msg)

    # ─── Filters: new picture ────────────────────────────────────────
    def decode(self) -> "Picture":
        """Recover the hidden message: black where red is odd, white elsewhere."""
        return Picture(FilterRepository.decode(self._pixels))

    def simple_blur(self) -> "Picture":
        return self.blur(1)

    def blur(self, radius: int) -> "Picture":
        return Picture(FilterRepository.blur(self._pixels, radius))

    def glass_filter(self, dist: int, rng: Optional[np.random.Generator] = None) -> "Picture":
        """
        Simulate looking through a pane of glass.

        Args:
            dist: how far (in rows and columns) a source pixel may be.
            rng: numpy Generator; defaults to one seeded from RANDOM_SEED.
        """
        if rng is None:
            rng = np.random.default_rng(int(RANDOM_SEED) if RANDOM_SEED else None)
        return Picture(FilterRepository.glass_filter(self._pixels, dist, rng))
