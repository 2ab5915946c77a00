from pathlib import Path

import pytest

from webjson.core.models import SiteConfig
from webjson.storage.memory import MemoryDirectoryProvider

SOURCE = Path("/site")
OUTPUT = Path("/out")


@pytest.fixture
def config():
    return SiteConfig(source_root=SOURCE, output_root=OUTPUT)


@pytest.fixture
def make_site():
    def _make(files, deny_writes=(), deny_reads=()):
        return MemoryDirectoryProvider(
            {SOURCE / path: content for path, content in files.items()},
            deny_writes=deny_writes,
            deny_reads=deny_reads,
        )

    return _make
