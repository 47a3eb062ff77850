import logging
import os
from collections.abc import Callable, Hashable
from typing import Protocol

from .models import Probe

logger = logging.getLogger(__name__)


class SizeProber(Protocol):
    def probe(self, entry: os.DirEntry[str]) -> Probe | None: ...


def probe_entry(entry: os.DirEntry[str], identity: Callable[[os.stat_result], Hashable]) -> Probe | None:
    """
    Stat `entry` without following symlinks.

    Returns None when the metadata cannot be read, otherwise the size
    together with the identity derived from the stat result.
    """
    try:
        st: os.stat_result = entry.stat(follow_symlinks=False)
    except OSError as e:
        logger.debug(f"Cannot stat {entry.path}: {e}")
        return None

    return Probe(size=st.st_size, identity=identity(st))


def inode_identity(st: os.stat_result) -> Hashable:
    return (st.st_dev, st.st_ino)


def unique_identity(st: os.stat_result) -> Hashable:
    return object()


class InodeProber:
    """
    Probe entries on platforms with a real inode.

    The identity is (st_dev, st_ino), so two names for the same file
    compare equal while files on different devices never collide.
    Symbolic links are not followed.
    """

    def probe(self, entry: os.DirEntry[str]) -> Probe | None:
        return probe_entry(entry, inode_identity)


class UniqueProber:
    """Fallback without hard-link detection: every entry is its own identity."""

    def probe(self, entry: os.DirEntry[str]) -> Probe | None:
        return probe_entry(entry, unique_identity)


def default_prober() -> SizeProber:
    if os.name == "posix":
        return InodeProber()
    return UniqueProber()
