"""Page rendering: include expansion and property substitution."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Mapping, Optional

from ..core.errors import OutputDirectoryError, PageDescriptorError
from ..core.models import BuildReport, PageDescriptor, SiteConfig
from ..storage.provider import DirectoryProvider
from .tokens import (
    BUILTIN_PROPERTIES,
    RELATIVE_PATH,
    find_include_names,
    find_property_names,
    include_token,
    property_token,
)

logger = logging.getLogger(__name__)

IncludeLoader = Callable[[str], Optional[str]]

BYTE_ORDER_MARK = "\ufeff"


def expand_includes(text: str, load_include: IncludeLoader) -> str:
    """Replace every include token with the include's text.

    Each distinct include is loaded once. Included text is inserted verbatim
    and is not scanned again. Tokens for missing includes stay as they are.

    Args:
        text: Template text
        load_include: Returns an include's text by name, or None if missing

    Returns:
        Text with includes expanded
    """
    for name in find_include_names(text):
        logger.debug(f"Found reference to include: {name}")

        include_text = load_include(name)
        if include_text is None:
            logger.warning(f"Include not found: {name}")
            continue

        text = text.replace(include_token(name), include_text)

    return text


def substitute_properties(text: str, properties: Mapping[str, str]) -> str:
    """Replace each ``[{key}]`` token with its value, in mapping order.

    Built-in names are reserved and skipped.
    """
    for key, value in properties.items():
        if key in BUILTIN_PROPERTIES:
            logger.debug(f"Ignoring page property shadowing built-in: {key}")
            continue
        text = text.replace(property_token(key), value)
    return text


def relative_root(config: SiteConfig, page_dir: Path) -> str:
    """Posix path from ``page_dir`` back to the source root, slash-terminated."""
    depth = len(config.relative_dir(page_dir).parts)
    return "../" * depth if depth else "./"


def render_text(
    template: str,
    properties: Mapping[str, str],
    load_include: IncludeLoader,
    relative_path: str,
) -> str:
    """Render template text for one page.

    Includes are expanded first, then page properties are substituted, then
    built-ins. Built-ins always win: a page property called ``relative_path``
    never reaches the output.
    """
    html = expand_includes(template, load_include)
    html = substitute_properties(html, properties)
    return html.replace(property_token(RELATIVE_PATH), relative_path)


def read_source(path: Path, config: SiteConfig, provider: DirectoryProvider) -> str:
    """Read a source text file, dropping a leading byte-order mark."""
    text = provider.read_text(path, encoding=config.layout.encoding)
    return text.removeprefix(BYTE_ORDER_MARK)


def _include_loader(config: SiteConfig, provider: DirectoryProvider) -> IncludeLoader:
    def load_include(name: str) -> str | None:
        include_path = config.include_path(name)
        if not provider.is_file(include_path):
            return None
        try:
            return read_source(include_path, config, provider)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Unable to read include {name}: {e}")
            return None

    return load_include


def load_descriptor(
    page_path: Path, config: SiteConfig, provider: DirectoryProvider
) -> PageDescriptor:
    """Read and validate a page descriptor.

    Raises:
        PageDescriptorError: The file is unreadable, not JSON, or not a flat
            object of strings.
    """
    try:
        text = read_source(page_path, config, provider)
    except (OSError, UnicodeDecodeError) as e:
        raise PageDescriptorError(f"Unable to read page descriptor: {e}") from e
    return PageDescriptor.from_json(text)


def output_path_for(page_path: Path, config: SiteConfig) -> Path:
    """Mirrored output path of a page, with the output extension."""
    output_name = f"{page_path.stem}{config.layout.output_extension}"
    return config.mirror_dir(page_path.parent) / output_name


def render_page(
    page_path: Path,
    config: SiteConfig,
    provider: DirectoryProvider,
    report: BuildReport | None = None,
) -> Path | None:
    """Render a single page descriptor to its mirrored HTML file.

    Problems with this page (bad descriptor, missing template, write failure)
    are logged and the page is skipped.

    Args:
        page_path: Page descriptor file
        config: Site configuration
        provider: Filesystem access
        report: Counters to update, if any

    Returns:
        Output file path, or None if nothing was written

    Raises:
        OutputDirectoryError: The output directory could not be created
    """
    report = report if report is not None else BuildReport()

    try:
        descriptor = load_descriptor(page_path, config, provider)
    except PageDescriptorError as e:
        logger.error(f"Found JSON file: {page_path.name} - {e}. Skipping.")
        report.pages_skipped += 1
        return None

    template = descriptor.template
    if not template:
        logger.warning(
            f"Found JSON file: {page_path.name} - No template was specified. Skipping."
        )
        report.pages_skipped += 1
        return None

    logger.info(f"Found JSON file: {page_path.name} - Uses template: {template}")

    template_path = config.template_path(template)
    if not provider.is_file(template_path):
        logger.warning(f"Template not found: {template}")
        report.pages_skipped += 1
        return None

    try:
        template_text = read_source(template_path, config, provider)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Unable to read template {template}: {e}")
        report.pages_skipped += 1
        return None

    html = render_text(
        template_text,
        descriptor.properties,
        _include_loader(config, provider),
        relative_root(config, page_path.parent),
    )

    unresolved = find_property_names(html)
    if unresolved:
        logger.debug(f"Unresolved properties in {page_path.name}: {unresolved}")

    output_path = output_path_for(page_path, config)
    try:
        provider.make_dirs(output_path.parent)
    except OSError as e:
        raise OutputDirectoryError(output_path.parent, str(e)) from e

    try:
        provider.write_text(
            output_path, html, encoding=config.layout.encoding, mode=config.file_mode
        )
    except OSError as e:
        logger.error(f"Failed to output HTML file: {output_path.name} ({e})")
        report.failures += 1
        return None

    logger.info(f"Outputted HTML file: {output_path.name}")
    report.pages_rendered += 1
    return output_path
