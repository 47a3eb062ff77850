import os
from collections.abc import Hashable, Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Probe:
    size: int
    identity: Hashable


@dataclass(slots=True)
class Node:
    path: str
    size: int
    children: list[int] = field(default_factory=list)


def path_anchor(path: str) -> str:
    """Filesystem root of `path`'s drive: "/" on POSIX, e.g. "C:\\" on Windows."""
    return os.path.splitdrive(path)[0] + os.sep


def path_depth(path: str) -> int:
    """
    Number of path separators in `path`.

    A root that is exactly its anchor counts as depth 0, so its
    entries (e.g. "/usr") sit one level below it.
    """
    if path == path_anchor(path):
        return 0
    return path.count(os.sep)


def sort_key(node: Node) -> tuple[int, int, str]:
    # Largest first, then shallowest, then by path.
    return (-node.size, path_depth(node.path), node.path)


class NodeArena:
    """
    Flat store of every node built during one invocation.

    Nodes reference their children by id (index into the arena), so a
    selection can hold plain ids while the tree keeps owning the nodes.
    Nodes are not changed once added, so sort keys are computed once.
    """

    def __init__(self) -> None:
        self.nodes: list[Node] = []
        self.keys: list[tuple[int, int, str]] = []

    def add(self, path: str, size: int, children: list[int] | None = None) -> int:
        node: Node = Node(path=path, size=size, children=children or [])
        self.nodes.append(node)
        self.keys.append(sort_key(node))
        return len(self.nodes) - 1

    def __getitem__(self, node_id: int) -> Node:
        return self.nodes[node_id]

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def key(self, node_id: int) -> tuple[int, int, str]:
        return self.keys[node_id]

    def depth(self, node_id: int) -> int:
        return self.keys[node_id][1]
