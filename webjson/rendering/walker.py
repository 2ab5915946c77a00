"""Source tree traversal: render pages, mirror assets."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from ..core.errors import OutputDirectoryError
from ..core.models import BuildReport, SiteConfig
from ..storage.local import LocalDirectoryProvider
from ..storage.provider import DirectoryProvider
from .engine import render_page

logger = logging.getLogger(__name__)


class EntryKind(str, Enum):
    PAGE = "page"
    ASSET = "asset"
    DIRECTORY = "directory"
    EXCLUDED = "excluded"


def classify(path: Path, is_dir: bool, config: SiteConfig) -> EntryKind:
    """Classify a source tree entry.

    Directories starting with the excluded prefix hold templates, includes or
    drafts and are never traversed. Files with the page extension are page
    descriptors; every other file is an asset.
    """
    layout = config.layout
    if is_dir:
        if path.name.startswith(layout.excluded_prefix):
            return EntryKind.EXCLUDED
        return EntryKind.DIRECTORY
    if path.suffix == layout.page_extension:
        return EntryKind.PAGE
    return EntryKind.ASSET


def copy_asset(
    path: Path,
    config: SiteConfig,
    provider: DirectoryProvider,
    report: BuildReport | None = None,
) -> Path | None:
    """Copy a file byte-for-byte to its mirrored output path.

    Returns:
        Output file path, or None if the copy failed

    Raises:
        OutputDirectoryError: The output directory could not be created
    """
    report = report if report is not None else BuildReport()

    output_dir = config.mirror_dir(path.parent)
    try:
        provider.make_dirs(output_dir)
    except OSError as e:
        raise OutputDirectoryError(output_dir, str(e)) from e

    output_path = output_dir / path.name
    try:
        provider.copy_file(path, output_path)
    except OSError as e:
        logger.error(f"Failed to copy file: {path.name} ({e})")
        report.failures += 1
        return None

    logger.info(f"File copied: {path.name}")
    report.files_copied += 1
    return output_path


def process_directory(
    directory: Path,
    config: SiteConfig,
    provider: DirectoryProvider,
    report: BuildReport,
) -> None:
    """Process files in ``directory``, then recurse into its subdirectories.

    Raises:
        OutputDirectoryError: An output directory could not be created
    """
    relative = config.relative_dir(directory)
    logger.info(f"Processing directory: {relative}")
    report.directories += 1

    try:
        entries = provider.list_dir(directory)
    except OSError as e:
        logger.error(f"Failed to read directory: {relative} ({e})")
        report.failures += 1
        return

    subdirectories: list[Path] = []
    for entry in entries:
        kind = classify(entry, provider.is_dir(entry), config)
        if kind is EntryKind.PAGE:
            render_page(entry, config, provider, report)
        elif kind is EntryKind.ASSET:
            copy_asset(entry, config, provider, report)
        elif kind is EntryKind.DIRECTORY:
            subdirectories.append(entry)
        else:
            logger.debug(f"Skipping excluded directory: {entry.name}")

    for subdirectory in subdirectories:
        if subdirectory == config.output_root:
            logger.warning(f"Skipping output directory inside source: {subdirectory}")
            continue
        process_directory(subdirectory, config, provider, report)


def build_site(
    config: SiteConfig, provider: DirectoryProvider | None = None
) -> BuildReport:
    """Build the whole site from ``config.source_root``.

    Args:
        config: Site configuration
        provider: Filesystem access (default: local filesystem)

    Returns:
        Counters for the run

    Raises:
        OutputDirectoryError: An output directory could not be created
    """
    provider = provider if provider is not None else LocalDirectoryProvider()
    report = BuildReport()

    process_directory(config.source_root, config, provider, report)

    logger.info(
        f"Built {report.pages_rendered} page(s), copied {report.files_copied} file(s), "
        f"skipped {report.pages_skipped} page(s), {report.failures} failure(s)"
    )
    return report
