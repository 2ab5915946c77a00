"""CLI argument parsers and validators."""

from __future__ import annotations

from pathlib import Path

import typer


def parse_file_mode(value: str) -> int:
    """Parse octal file mode string."""
    try:
        return int(value, 8)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid octal mode: {value!r}") from e


def parse_directory(value: str) -> Path:
    """Turn a directory argument into a path.

    A trailing separator (``/`` or ``\\``) is accepted and dropped; joining
    is done by ``pathlib`` from here on.
    """
    stripped = value.rstrip("/\\")
    return Path(stripped or value)
