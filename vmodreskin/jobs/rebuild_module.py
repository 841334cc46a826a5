"""
Rebuild a VASSAL module with xwing-data card images.

Downloads the module release and the data set, resolves every card image,
swaps the matched images and zips the module back up.

Usage:
    python -m vmodreskin.jobs.rebuild_module --version 8.0.0
"""

import argparse
import asyncio
import logging
import shutil
from pathlib import Path

import httpx

from vmodreskin.config import settings
from vmodreskin.models.catalog import CardCategory
from vmodreskin.models.failure import ReskinError
from vmodreskin.models.report import ResolutionReport
from vmodreskin.parsers.xwing_data import load_catalogs
from vmodreskin.services.card_image_resolver import CardImageResolver
from vmodreskin.services.downloads import download_module, download_xwing_data
from vmodreskin.services.image_swapper import replace_images
from vmodreskin.services.module_archive import extract_module, list_module_images, repack_module
from vmodreskin.services.resolution_reporter import log_report, summarize
from vmodreskin.services.static_tables import load_static_tables

logger = logging.getLogger(__name__)


def _image_size(category: CardCategory) -> tuple[int, int] | None:
    if category == CardCategory.DAMAGE:
        return (settings.damage_card_width, settings.damage_card_height)
    return None


def write_summary(report: ResolutionReport, path: Path, version: str) -> None:
    """Write the run summary as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(summarize(report, module_version=version).model_dump_json(indent=2))
    logger.info("Wrote resolution summary to %s", path)


async def run_rebuild(
    version: str | None = None,
    work_dir: Path | None = None,
    tables_dir: Path | None = None,
    *,
    report_json: Path | None = None,
    dry_run: bool = False,
    keep_work_files: bool | None = None,
) -> ResolutionReport:
    """
    Run the whole rebuild.

    Args:
        version: Module release to rebuild, defaults to settings.vmod_version
        work_dir: Scratch directory, also where the new .vmod is written
        tables_dir: Directory with override and ignore tables
        report_json: Optional path for a JSON summary
        dry_run: Resolve and report only; no images swapped, nothing repacked
        keep_work_files: Keep the extracted module and data set afterwards

    Returns:
        The ResolutionReport for the run

    Raises:
        ReskinError: On invalid tables or catalogs, or failed downloads
    """
    version = version or settings.vmod_version
    work_dir = work_dir or settings.work_dir
    tables_dir = tables_dir or settings.tables_dir
    if keep_work_files is None:
        keep_work_files = settings.keep_work_files

    # Tables first: a bad table should fail before anything is downloaded
    tables = load_static_tables(tables_dir)

    work_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Using work directory %s", work_dir.resolve())

    async with httpx.AsyncClient(
        headers={"User-Agent": f"{settings.app_name}/1.0"},
        follow_redirects=True,
        timeout=settings.http_timeout,
    ) as client:
        xwing_data_dir = await download_xwing_data(work_dir, client=client)
        # The rebuilt module is written over the download, so never reuse one
        vmod_path = await download_module(version, work_dir, client=client, force=True)
    logger.info("Vassal module saved to: %s", vmod_path)

    shutil.rmtree(work_dir / vmod_path.stem, ignore_errors=True)
    module_dir = extract_module(vmod_path, work_dir)

    catalogs = load_catalogs(xwing_data_dir)
    logger.info("Loaded catalogs: %s", catalogs.summary())

    resolver = CardImageResolver(catalogs, tables)
    report = resolver.resolve_all(list_module_images(module_dir))
    log_report(report)

    if report_json is not None:
        write_summary(report, report_json, version)

    if dry_run:
        logger.info("Dry run: leaving %s untouched", vmod_path)
    else:
        for category in CardCategory:
            await replace_images(
                report[category].image_pairs(),
                module_dir,
                xwing_data_dir,
                size=_image_size(category),
            )
        repack_module(module_dir, vmod_path)

    if not keep_work_files:
        logger.info("Cleaning up...")
        shutil.rmtree(module_dir, ignore_errors=True)
        shutil.rmtree(xwing_data_dir, ignore_errors=True)

    return report


def main() -> None:
    """CLI entry point for rebuilding a module."""
    parser = argparse.ArgumentParser(
        description="Replace X-Wing VASSAL module card images with xwing-data images"
    )
    parser.add_argument(
        "--version",
        default=settings.vmod_version,
        help=f"Module release to rebuild (default: {settings.vmod_version})",
    )
    parser.add_argument(
        "--work-dir",
        type=Path,
        default=settings.work_dir,
        help=f"Scratch and output directory (default: {settings.work_dir})",
    )
    parser.add_argument(
        "--tables-dir",
        type=Path,
        default=settings.tables_dir,
        help="Directory with override, ignore and name-correction tables",
    )
    parser.add_argument(
        "--report-json",
        type=Path,
        default=None,
        help="Write a JSON resolution summary to this path",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve and report without swapping images or repacking",
    )
    parser.add_argument(
        "--keep",
        action="store_true",
        default=settings.keep_work_files,
        help="Keep the extracted module and data set",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        asyncio.run(
            run_rebuild(
                args.version,
                args.work_dir,
                args.tables_dir,
                report_json=args.report_json,
                dry_run=args.dry_run,
                keep_work_files=args.keep,
            )
        )
    except ReskinError as e:
        logger.error("Rebuild failed: %s", e)
        if e.suggestion:
            logger.error(e.suggestion)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
