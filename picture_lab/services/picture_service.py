from pathlib import Path
from typing import Iterable, Iterator, List, Tuple, Union
import logging

import numpy as np
from PIL import Image as PILImage

from ..errors import LoadError
from ..models.picture import GridSource, Picture
from ..models.pixel import WHITE, Color, Pixel
from ..repositories.picture_repository import PictureRepository

logger = logging.getLogger(__name__)


class PictureService:
    """I/O and gallery helpers.  No filter logic here."""
    def __init__(self):
        self.picture_repository = PictureRepository()

    def create(self, source: GridSource, path: Union[str, Path] = None) -> Picture:
        return Picture(source, path=path)

    def solid(self, height: int, width: int, color: Union[Pixel, Color] = WHITE) -> Picture:
        return Picture.solid(height, width, color)

    def load(self, path: Union[str, Path]) -> Picture:
        """Load a single image from disk into a Picture object."""
        return Picture.from_file(path)

    def save(self, picture: Picture, path: Union[str, Path] = None) -> Path:
        """
        Business-level method to save the picture, to `path` or its own path.
        """
        return picture.save(path)

    def get_dimensions(self, picture: Picture) -> Tuple[int, int]:
        return picture.height, picture.width

    def stream_gallery(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Picture]:
        """
        Yield pictures lazily instead of returning a gigantic list.
        Files that fail to decode are logged and skipped.
        """
        for path in self.picture_repository.list_image_paths(folder, recursive=recursive, exts=exts):
            try:
                picture = self.load(path)
            except LoadError as err:
                logger.warning("Skipping %s: %s", path.name, err)
                continue
            yield picture

    def load_gallery(
        self, folder: Union[str, Path], *, recursive: bool = False, exts: Iterable[str] | None = None
    ) -> List[Picture]:
        return list(self.stream_gallery(folder, recursive=recursive, exts=exts))

    # save_gallery accepts *any* iterable
    def save_gallery(self, gallery: Iterable[Picture]) -> List[Path]:
        return [self.save(picture) for picture in gallery]

    def to_pil_image(self, picture: Picture) -> PILImage.Image:
        """
        Convert Picture.pixels → PIL Image object.
        """
        return PILImage.fromarray(np.array(picture.pixels))
