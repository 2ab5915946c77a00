"""Filesystem capabilities used by the walker and renderer."""

from .local import LocalDirectoryProvider
from .memory import MemoryDirectoryProvider
from .provider import DirectoryProvider

__all__ = ["DirectoryProvider", "LocalDirectoryProvider", "MemoryDirectoryProvider"]
