"""Local filesystem provider."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path


def atomic_write_text(
    path: Path, text: str, encoding: str = "utf-8", mode: int = 0o644
) -> None:
    """Write text to a file atomically using a temporary file.

    The parent directory must already exist.

    Args:
        path: Destination file path
        text: Text content to write
        encoding: Text encoding
        mode: File permissions (octal)
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        # newline="" keeps template line endings untouched
        with os.fdopen(fd, "w", encoding=encoding, newline="") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, mode)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)


class LocalDirectoryProvider:
    """``DirectoryProvider`` backed by the real filesystem."""

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def list_dir(self, path: Path) -> list[Path]:
        return sorted(path.iterdir(), key=lambda child: child.name)

    def read_text(self, path: Path, encoding: str = "utf-8") -> str:
        with path.open(encoding=encoding, newline="") as handle:
            return handle.read()

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def write_text(
        self, path: Path, text: str, encoding: str = "utf-8", mode: int = 0o644
    ) -> None:
        atomic_write_text(path, text, encoding=encoding, mode=mode)

    def copy_file(self, source: Path, destination: Path) -> None:
        shutil.copyfile(source, destination)

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)
