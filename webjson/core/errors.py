"""Exceptions and process exit codes."""

from __future__ import annotations

from enum import IntEnum
from pathlib import Path


class ExitCode(IntEnum):
    OK = 0
    INVALID_ARGUMENTS = 1
    INVALID_SOURCE = 2
    OUTPUT_DIRECTORY = 3


class WebJsonError(Exception):
    """Base class for webjson errors."""


class PageDescriptorError(WebJsonError):
    """Raised when a page descriptor cannot be parsed or validated."""


class OutputDirectoryError(WebJsonError):
    """Raised when an output directory cannot be created.

    Fatal for the whole run: nothing below that directory can be written.
    """

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        message = f"Failed to create output directory: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
