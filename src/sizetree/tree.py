import logging
import os
from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field

from .models import NodeArena, Probe, path_anchor
from .probe import SizeProber, default_prober

logger = logging.getLogger(__name__)


def normalize_root(path: str) -> str:
    """Strip trailing separators, keeping a bare "/" (or "C:\\") intact."""
    anchor: str = path_anchor(path)
    while len(path) > 1 and path != anchor and path.endswith(os.sep):
        path = path[:-1]
    return path


@dataclass(slots=True)
class _Frame:
    path: str
    own_size: int
    entries: list[os.DirEntry[str]]
    ok: bool
    children: list[int] = field(default_factory=list)
    position: int = 0


def _open_frame(path: str, own_size: int) -> _Frame:
    try:
        with os.scandir(path) as it:
            entries: list[os.DirEntry[str]] = list(it)
    except OSError as e:
        logger.debug(f"Cannot list {path}: {e}")
        return _Frame(path=path, own_size=own_size, entries=[], ok=False)

    return _Frame(path=path, own_size=own_size, entries=entries, ok=True)


def examine_dir(
    path: str, arena: NodeArena, prober: SizeProber, seen: set[Hashable]
) -> tuple[bool, list[int]]:
    """
    Build nodes for every entry below `path`.

    Returns whether every entry could be read, and the ids of the nodes
    created for the direct entries of `path`. Entries whose identity is
    already in `seen` are skipped, which counts hard-linked files once.

    The walk is depth first with an explicit stack of pending directories,
    so nesting depth is not bounded by the interpreter's recursion
    limit. A directory node is added once all of its entries are done.
    """
    stack: list[_Frame] = [_open_frame(path, 0)]

    while True:
        frame: _Frame = stack[-1]

        if frame.position < len(frame.entries):
            entry: os.DirEntry[str] = frame.entries[frame.position]
            frame.position += 1

            probe: Probe | None = prober.probe(entry)
            if probe is None:
                frame.ok = False
                continue

            if probe.identity in seen:
                continue
            seen.add(probe.identity)

            try:
                is_dir: bool = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False

            if is_dir:
                stack.append(_open_frame(entry.path, probe.size))
            else:
                frame.children.append(arena.add(entry.path, probe.size))
            continue

        stack.pop()
        if not stack:
            return frame.ok, frame.children

        parent: _Frame = stack[-1]
        parent.ok = parent.ok and frame.ok
        size: int = frame.own_size + sum(arena[c].size for c in frame.children)
        parent.children.append(arena.add(frame.path, size, frame.children))


def build_tree(root_path: str, arena: NodeArena, prober: SizeProber | None = None) -> tuple[bool, int]:
    """
    Measure everything reachable below `root_path`.

    The root node's size is the sum of its children; the root entry
    itself is not probed. Hard links are deduplicated within this one
    traversal only.
    """
    root: str = normalize_root(root_path)
    seen: set[Hashable] = set()

    ok, children = examine_dir(root, arena, prober or default_prober(), seen)
    size: int = sum(arena[c].size for c in children)

    if not ok:
        logger.debug(f"Some entries below {root} could not be read")

    return ok, arena.add(root, size, children)


def build_trees(
    root_paths: Iterable[str], prober: SizeProber | None = None
) -> tuple[bool, NodeArena, list[int]]:
    arena: NodeArena = NodeArena()
    roots: list[int] = []
    permissions: bool = True
    prober = prober or default_prober()

    for root_path in root_paths:
        ok, root_id = build_tree(root_path, arena, prober)
        permissions = permissions and ok
        roots.append(root_id)

    return permissions, arena, roots
