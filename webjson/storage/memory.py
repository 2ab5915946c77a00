"""In-memory filesystem provider for deterministic builds and tests."""

from __future__ import annotations

import errno
import os
from pathlib import Path, PurePosixPath
from typing import Iterable, Mapping


def _key(path: os.PathLike[str] | str) -> PurePosixPath:
    return PurePosixPath(os.fspath(path))


class MemoryDirectoryProvider:
    """``DirectoryProvider`` holding files as bytes keyed by posix path.

    Args:
        files: Initial files; ``str`` values are stored UTF-8 encoded.
        deny_writes: Path prefixes under which creating directories or
            writing files raises ``PermissionError``.
        deny_reads: Directories whose listing raises ``PermissionError``.
    """

    def __init__(
        self,
        files: Mapping[str | os.PathLike[str], str | bytes] | None = None,
        deny_writes: Iterable[str | os.PathLike[str]] = (),
        deny_reads: Iterable[str | os.PathLike[str]] = (),
    ) -> None:
        self.files: dict[PurePosixPath, bytes] = {}
        self.dirs: set[PurePosixPath] = set()
        self.deny_writes = {_key(prefix) for prefix in deny_writes}
        self.deny_reads = {_key(path) for path in deny_reads}
        for path, content in (files or {}).items():
            if isinstance(content, str):
                content = content.encode("utf-8")
            self._store(_key(path), content)

    def _store(self, key: PurePosixPath, content: bytes) -> None:
        self.dirs.update(key.parents)
        self.files[key] = content

    def _check_writable(self, key: PurePosixPath) -> None:
        for prefix in self.deny_writes:
            if key == prefix or prefix in key.parents:
                raise PermissionError(errno.EACCES, "Permission denied", str(key))

    def _require_file(self, key: PurePosixPath) -> bytes:
        try:
            return self.files[key]
        except KeyError:
            raise FileNotFoundError(errno.ENOENT, "No such file", str(key)) from None

    def _require_parent(self, key: PurePosixPath) -> None:
        if key.parent not in self.dirs:
            raise FileNotFoundError(errno.ENOENT, "No such directory", str(key.parent))

    def is_dir(self, path: Path) -> bool:
        return _key(path) in self.dirs

    def is_file(self, path: Path) -> bool:
        return _key(path) in self.files

    def list_dir(self, path: Path) -> list[Path]:
        key = _key(path)
        if key not in self.dirs:
            raise FileNotFoundError(errno.ENOENT, "No such directory", str(key))
        if key in self.deny_reads:
            raise PermissionError(errno.EACCES, "Permission denied", str(key))
        children = {
            entry
            for entry in (*self.files, *self.dirs)
            if entry.parent == key and entry != key
        }
        return [Path(child) for child in sorted(children, key=lambda child: child.name)]

    def read_text(self, path: Path, encoding: str = "utf-8") -> str:
        return self._require_file(_key(path)).decode(encoding)

    def read_bytes(self, path: Path) -> bytes:
        return self._require_file(_key(path))

    def write_text(
        self, path: Path, text: str, encoding: str = "utf-8", mode: int = 0o644
    ) -> None:
        key = _key(path)
        self._check_writable(key)
        self._require_parent(key)
        self.files[key] = text.encode(encoding)

    def copy_file(self, source: Path, destination: Path) -> None:
        content = self._require_file(_key(source))
        key = _key(destination)
        self._check_writable(key)
        self._require_parent(key)
        self.files[key] = content

    def make_dirs(self, path: Path) -> None:
        key = _key(path)
        if key in self.dirs:
            return
        self._check_writable(key)
        if key in self.files:
            raise FileExistsError(errno.EEXIST, "File exists", str(key))
        self.dirs.add(key)
        self.dirs.update(key.parents)
