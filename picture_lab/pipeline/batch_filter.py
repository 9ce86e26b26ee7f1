# pipeline/batch_filter.py
"""
Batch Filter Pipeline
Applies one filter to every picture of a gallery and assigns output paths.
Nothing is written to disk here; save the result with PictureService.save_gallery.
"""
from pathlib import Path
from typing import Iterable, List
import logging
import os
import uuid

from dotenv import load_dotenv

from ..models.picture import Picture

# ------------------------------------------------------------------
# env‑vars
load_dotenv()
FILTERED_DIR = os.getenv("FILTERED_DIR_PATH", "data/filtered_gallery")
OUTPUT_EXT = os.getenv("OUTPUT_IMG_EXT", ".jpg")

logger = logging.getLogger(__name__)

IN_PLACE_FILTERS = frozenset({
    "zero_blue", "keep_only_blue", "negate", "solarize", "grayscale", "tint",
    "posterize", "mirror_vertical", "mirror_right_to_left", "mirror_horizontal",
    "vertical_flip", "edge_detection", "chromakey", "encode",
})
NEW_PICTURE_FILTERS = frozenset({"decode", "simple_blur", "blur", "glass_filter"})


# ------------------------------------------------------------------
def filter_gallery(
    gallery: Iterable[Picture],
    filter_name: str,
    *,
    output_dir: str | Path = FILTERED_DIR,
    ext: str = OUTPUT_EXT,
    **params,
) -> List[Picture]:
    """
    For every Picture in *gallery*:
        • apply `filter_name` with `params`
        • in-place filters edit the picture itself, the others replace it
        • point the result at output_dir/<stem>_<filter_name><ext>
    Returns the filtered pictures in gallery order.
    """
    if filter_name not in IN_PLACE_FILTERS | NEW_PICTURE_FILTERS:
        raise ValueError(f"Unknown filter: {filter_name}")

    output_dir = Path(output_dir)
    ext = ext or OUTPUT_EXT

    filtered = []
    for picture in gallery:
        result = getattr(picture, filter_name)(**params)
        if filter_name in IN_PLACE_FILTERS:
            result = picture

        stem = picture.path.stem if picture.path else uuid.uuid1().hex
        result.path = output_dir / f"{stem}_{filter_name}{ext}"
        logger.debug("Applied %s → %s", filter_name, result.path)
        filtered.append(result)

    logger.info("Applied %s to %d pictures", filter_name, len(filtered))
    return filtered
