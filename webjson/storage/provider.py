"""Directory provider protocol."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class DirectoryProvider(Protocol):
    """The filesystem operations a site build needs.

    Failures are reported by raising ``OSError`` (or a subclass).
    """

    def is_dir(self, path: Path) -> bool: ...

    def is_file(self, path: Path) -> bool: ...

    def list_dir(self, path: Path) -> list[Path]:
        """Return the children of ``path`` sorted by name."""
        ...

    def read_text(self, path: Path, encoding: str = "utf-8") -> str: ...

    def read_bytes(self, path: Path) -> bytes: ...

    def write_text(
        self, path: Path, text: str, encoding: str = "utf-8", mode: int = 0o644
    ) -> None: ...

    def copy_file(self, source: Path, destination: Path) -> None: ...

    def make_dirs(self, path: Path) -> None:
        """Create ``path`` and any missing parents; no-op if it exists."""
        ...
