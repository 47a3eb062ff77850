"""
Shared pytest fixtures.

Filesystem fixtures are created below `tmp_path`. Probers that report
directories as zero bytes make aggregated sizes independent of how
large the host filesystem reports a directory entry.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from helpers import DEEP_LEVELS, ZeroDirProber


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo the log level a CLI invocation sets on the package logger."""
    yield
    logging.getLogger("sizetree").setLevel(logging.NOTSET)


@pytest.fixture
def zero_dir_prober() -> ZeroDirProber:
    return ZeroDirProber()


@pytest.fixture
def failing_prober() -> ZeroDirProber:
    """Prober that cannot read any entry named "secret"."""
    return ZeroDirProber(fail_names={"secret"})


@pytest.fixture
def sample_root(tmp_path: Path) -> Path:
    """
    Directory with two files and one subdirectory:

        root/small   1024 bytes
        root/medium  2048 bytes
        root/sub/big 4096 bytes
    """
    root: Path = tmp_path / "root"
    (root / "sub").mkdir(parents=True)

    (root / "small").write_bytes(b"s" * 1024)
    (root / "medium").write_bytes(b"m" * 2048)
    (root / "sub" / "big").write_bytes(b"b" * 4096)

    return root


@pytest.fixture
def deep_root(tmp_path: Path) -> Iterator[Path]:
    """
    DEEP_LEVELS nested "a" directories with a 100 byte file at the bottom.

    Created and removed one level at a time, nesting this deep is past
    the default recursion limit.
    """
    root: Path = tmp_path / "deep"
    root.mkdir()

    created: list[Path] = []
    current: Path = root
    for _ in range(DEEP_LEVELS):
        current = current / "a"
        current.mkdir()
        created.append(current)

    leaf: Path = current / "leaf"
    leaf.write_bytes(b"l" * 100)

    yield root

    leaf.unlink()
    for path in reversed(created):
        path.rmdir()
