"""
Image swapper.

Overwrites module images with data set images, keeping the module's
filename (and therefore its format) so module references stay valid.
"""

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path

from PIL import Image

from vmodreskin.config import IMAGES_DIRNAME, settings
from vmodreskin.models.catalog import AssetFilename

logger = logging.getLogger(__name__)

_JPEG_SUFFIXES = frozenset({".jpg", ".jpeg"})


def replace_image(
    target: Path,
    source: Path,
    size: tuple[int, int] | None = None,
    quality: int | None = None,
) -> None:
    """
    Replace target with the contents of source.

    Args:
        target: Module image to overwrite; its suffix picks the output format
        source: Data set image to copy from
        size: (width, height) to resize to, or None to keep source size
        quality: JPEG quality, defaults to settings.jpeg_quality
    """
    if quality is None:
        quality = settings.jpeg_quality

    with Image.open(source) as im:
        image = im.resize(size) if size else im.copy()

    if target.suffix.lower() in _JPEG_SUFFIXES:
        if image.mode != "RGB":
            image = image.convert("RGB")
        image.save(target, format="JPEG", quality=quality)
    else:
        image.save(target)


async def replace_images(
    pairs: Iterable[tuple[AssetFilename, str]],
    module_dir: Path,
    xwing_data_dir: Path,
    size: tuple[int, int] | None = None,
    workers: int | None = None,
) -> int:
    """
    Swap every matched image, several at a time.

    Pairs whose data set image is missing or unreadable are logged and left
    untouched.

    Args:
        pairs: (module filename, data set image path) pairs
        module_dir: Extracted module root
        xwing_data_dir: xwing-data root
        size: Optional (width, height) resize for every image
        workers: Concurrent swaps, defaults to settings.image_workers

    Returns:
        Number of images replaced
    """
    semaphore = asyncio.Semaphore(workers or settings.image_workers)
    module_images = module_dir / IMAGES_DIRNAME
    data_images = xwing_data_dir / IMAGES_DIRNAME

    async def swap(filename: AssetFilename, image_ref: str) -> bool:
        source = data_images / image_ref
        if not source.is_file():
            logger.warning("Data set image %s missing, keeping %s", image_ref, filename)
            return False
        async with semaphore:
            try:
                await asyncio.to_thread(replace_image, module_images / filename, source, size)
            except OSError as e:
                # UnidentifiedImageError is an OSError
                logger.warning("Could not swap %s from %s: %s", filename, image_ref, e)
                return False
        logger.debug("Swapped %s", filename)
        return True

    results = await asyncio.gather(*(swap(f, ref) for f, ref in pairs))
    swapped = sum(results)
    logger.info("Swap complete: %d images replaced", swapped)
    return swapped
