"""Main CLI application."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.errors import ExitCode, OutputDirectoryError
from ..core.models import SiteConfig
from ..rendering import walker
from ..storage.local import LocalDirectoryProvider
from .parsers import parse_directory, parse_file_mode

logger = logging.getLogger(__name__)

BANNER = "WebJson - Use templates to convert JSON data to webpages."
USAGE = "Usage: webjson <source directory> <output directory>"

app = typer.Typer(
    name="webjson",
    help="Render JSON page descriptors through HTML templates into a static site.",
    add_completion=False,
)


@app.command()
def build(
    directories: Annotated[
        Optional[list[str]],
        typer.Argument(
            help="Source directory followed by output directory.",
            metavar="SOURCE OUTPUT",
            show_default=False,
        ),
    ] = None,
    file_mode: Annotated[
        str,
        typer.Option(
            "--mode",
            help="Permissions of rendered pages in octal (default: 0644).",
            metavar="OCTAL",
        ),
    ] = "0644",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Build a static site from SOURCE into OUTPUT."""
    typer.echo(BANNER)

    arguments = directories or []
    if len(arguments) != 2:
        typer.echo(USAGE)
        if not arguments:
            raise typer.Exit(code=ExitCode.OK)
        typer.echo("Invalid argument list.")
        raise typer.Exit(code=ExitCode.INVALID_ARGUMENTS)

    try:
        mode = parse_file_mode(file_mode)
    except typer.BadParameter as e:
        typer.echo(USAGE)
        typer.echo(f"Invalid argument list: {e.message}")
        raise typer.Exit(code=ExitCode.INVALID_ARGUMENTS) from e

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
        force=True,
    )

    provider = LocalDirectoryProvider()
    source_root, output_root = (parse_directory(value) for value in arguments)

    if not provider.is_dir(source_root):
        typer.echo("Invalid source directory.")
        raise typer.Exit(code=ExitCode.INVALID_SOURCE)

    # Absolute roots; nested-output detection compares paths
    config = SiteConfig(
        source_root=source_root.resolve(),
        output_root=output_root.resolve(),
        file_mode=mode,
    )
    logger.debug(f"Config: {config.model_dump()}")

    try:
        report = walker.build_site(config, provider)
    except OutputDirectoryError as e:
        logger.debug(str(e))
        typer.echo("Failed to create output directory.")
        raise typer.Exit(code=ExitCode.OUTPUT_DIRECTORY) from e

    logger.debug(f"Completed: {report.model_dump()}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
