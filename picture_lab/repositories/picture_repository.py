from pathlib import Path
from typing import Iterable, List, Union
import logging
import os

import cv2
import numpy as np
from PIL import Image as PILImage
from dotenv import load_dotenv

from ..errors import LoadError

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_EXTS = ".jpg,.jpeg,.png,.bmp,.gif,.tif,.tiff,.webp"


class PictureRepository:
    """
    Handles file I/O for pixel grids.  Decodes with OpenCV, encodes with Pillow.
    """
    def __init__(self):
        self.VALID_EXTS = {
            ext.strip().lower()
            for ext in os.getenv("VALID_IMAGE_EXTENSIONS", DEFAULT_EXTS).split(",")
            if ext.strip()
        }

    @staticmethod
    def read_pixels(path: Union[str, Path]) -> np.ndarray:
        """
        Decode an image file into an (H, W, 3) uint8 RGB array.

        Raises:
            LoadError: the file does not exist or OpenCV cannot decode it.
        """
        path = Path(path)
        if not path.is_file():
            raise LoadError(f"No picture at the location {path}")

        arr_bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if arr_bgr is None:
            raise LoadError(f"Image unreadable: {path}")

        logger.debug("Decoded %s (%dx%d)", path, arr_bgr.shape[1], arr_bgr.shape[0])
        return np.ascontiguousarray(arr_bgr[:, :, ::-1])

    @staticmethod
    def write_pixels(pixels: np.ndarray, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        PILImage.fromarray(np.ascontiguousarray(pixels)).save(path)
        logger.info("Saved picture to %s", path)
        return path

    def list_image_paths(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> List[Path]:
        """
        Image files under `folder` whose suffix is allowed, in sorted order.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise NotADirectoryError(folder)

        allowed = {e.lower() for e in (exts or self.VALID_EXTS)}
        pattern = "**/*" if recursive else "*"

        paths = []
        for p in sorted(folder.glob(pattern)):
            if not p.is_file():
                continue
            if p.suffix.lower() not in allowed:
                logger.debug("Skipping due to extension: %s", p)
                continue
            paths.append(p)
        return paths
