"""
Download the VASSAL module release and the xwing-data set.

Both are fetched over HTTPS with httpx and streamed to disk. The data set
is taken as GitHub's archive zip of the default branch rather than a clone.
"""

import logging
import shutil
from pathlib import Path

import httpx

from vmodreskin.config import VMOD_FILENAME_TEMPLATE, settings
from vmodreskin.models.failure import DownloadError
from vmodreskin.services.module_archive import extract_zip

logger = logging.getLogger(__name__)

XWING_DATA_DIRNAME = "xwing-data"

# Log download progress every this many percent
_PROGRESS_STEP = 10


def module_filename(version: str) -> str:
    return VMOD_FILENAME_TEMPLATE.format(version=version)


def module_release_url(version: str) -> str:
    """
    Release asset URL for a module version.

    Args:
        version: Module release tag (e.g., "8.0.0")
    """
    return settings.vmod_release_url_template.format(version=version)


async def download_file(url: str, dest: Path, client: httpx.AsyncClient) -> Path:
    """
    Stream a URL to a file, logging progress when the size is known.

    Raises:
        DownloadError: If the request fails or returns an error status
    """
    dest.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Downloading %s to %s", url, dest)

    try:
        async with client.stream("GET", url) as response:
            response.raise_for_status()
            total = int(response.headers.get("Content-Length", 0) or 0)
            received = 0
            next_report = _PROGRESS_STEP
            with open(dest, "wb") as f:
                async for chunk in response.aiter_bytes(8192):
                    f.write(chunk)
                    received += len(chunk)
                    if total and received * 100 // total >= next_report:
                        logger.info("Downloading %s: %d%%", dest.name, received * 100 // total)
                        next_report += _PROGRESS_STEP
    except httpx.HTTPStatusError as e:
        dest.unlink(missing_ok=True)
        raise DownloadError(
            f"Failed to download {url}: HTTP {e.response.status_code}",
        ) from e
    except httpx.RequestError as e:
        dest.unlink(missing_ok=True)
        raise DownloadError(f"Failed to download {url}", detail=str(e)) from e

    return dest


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"User-Agent": f"{settings.app_name}/1.0"},
        follow_redirects=True,
        timeout=settings.http_timeout,
    )


async def download_module(
    version: str,
    dest_dir: Path,
    *,
    client: httpx.AsyncClient | None = None,
    force: bool = False,
) -> Path:
    """
    Download a module release into dest_dir.

    Args:
        version: Module release tag
        dest_dir: Directory to save the .vmod into
        client: HTTP client to reuse; a new one is created if omitted
        force: If True, re-download even if the file exists

    Returns:
        Path to the .vmod file

    Raises:
        DownloadError: If download fails
    """
    dest = dest_dir / module_filename(version)
    if dest.exists() and not force:
        logger.info("Reusing existing module %s", dest)
        return dest

    url = module_release_url(version)
    if client is not None:
        return await download_file(url, dest, client)

    async with _client() as own_client:
        return await download_file(url, dest, own_client)


async def download_xwing_data(
    dest_dir: Path,
    *,
    client: httpx.AsyncClient | None = None,
    force: bool = False,
) -> Path:
    """
    Download and unpack the xwing-data set.

    Returns:
        Path to the data set root (the directory holding data/ and images/)

    Raises:
        DownloadError: If download fails
        ArchiveError: If the downloaded file is not a zip archive
    """
    target = dest_dir / XWING_DATA_DIRNAME
    if target.exists():
        if not force:
            logger.info("Reusing existing xwing-data at %s", target)
            return target
        shutil.rmtree(target)

    archive_path = dest_dir / f"{XWING_DATA_DIRNAME}.zip"
    url = settings.xwing_data_archive_url
    if client is not None:
        await download_file(url, archive_path, client)
    else:
        async with _client() as own_client:
            await download_file(url, archive_path, own_client)

    staging = dest_dir / f"{XWING_DATA_DIRNAME}-staging"
    shutil.rmtree(staging, ignore_errors=True)
    extract_zip(archive_path, staging)

    # GitHub archives wrap everything in one "<repo>-<branch>" directory
    entries = list(staging.iterdir())
    root = entries[0] if len(entries) == 1 and entries[0].is_dir() else staging
    shutil.move(str(root), str(target))
    shutil.rmtree(staging, ignore_errors=True)
    archive_path.unlink(missing_ok=True)

    logger.info("xwing-data available at %s", target)
    return target
