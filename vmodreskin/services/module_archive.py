"""
Module archive handling.

A .vmod file is a zip archive; card images live under images/.
"""

import logging
import zipfile
from pathlib import Path

from vmodreskin.config import IMAGES_DIRNAME
from vmodreskin.models.catalog import AssetFilename
from vmodreskin.models.failure import ArchiveError

logger = logging.getLogger(__name__)


def extract_zip(archive_path: Path, dest_dir: Path) -> Path:
    """
    Extract a zip archive into dest_dir.

    Raises:
        ArchiveError: If the archive is missing or not a zip file
    """
    if not archive_path.exists():
        raise ArchiveError(f"Archive not found: {archive_path}")

    dest_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Unzipping %s to %s", archive_path, dest_dir)

    try:
        with zipfile.ZipFile(archive_path) as archive:
            archive.extractall(dest_dir)
    except zipfile.BadZipFile as e:
        raise ArchiveError(f"Not a zip archive: {archive_path}", detail=str(e)) from e

    return dest_dir


def extract_module(vmod_path: Path, work_dir: Path) -> Path:
    """
    Extract a module next to itself, in a directory named after it.

    Returns:
        Path to the extracted module root
    """
    return extract_zip(vmod_path, work_dir / vmod_path.stem)


def list_module_images(module_dir: Path) -> list[AssetFilename]:
    """Sorted filenames of every file directly under the module's images/."""
    images_dir = module_dir / IMAGES_DIRNAME
    if not images_dir.is_dir():
        raise ArchiveError(f"Module has no {IMAGES_DIRNAME}/ directory: {module_dir}")
    return sorted(p.name for p in images_dir.iterdir() if p.is_file())


def repack_module(module_dir: Path, vmod_path: Path) -> Path:
    """
    Zip a module directory back into a .vmod file.

    Entries are stored relative to the module root, matching the layout
    VASSAL expects. An existing file at vmod_path is replaced.
    """
    vmod_path.parent.mkdir(parents=True, exist_ok=True)
    vmod_path.unlink(missing_ok=True)

    files = sorted(p for p in module_dir.rglob("*") if p.is_file())
    with zipfile.ZipFile(vmod_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for path in files:
            archive.write(path, path.relative_to(module_dir).as_posix())

    logger.info("New vmod file has been generated @ %s (%d files)", vmod_path, len(files))
    return vmod_path
