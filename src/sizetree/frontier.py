from .models import NodeArena


def select_largest(arena: NodeArena, roots: list[int], count: int) -> list[int]:
    """
    Pick the globally largest nodes without sorting the whole tree.

    Starts from the root nodes and, for `count` rounds, merges in the
    children of the node at the current rank before re-sorting. A child
    may outrank nodes that were ahead of its parent, which the full
    re-sort picks up.

    Parameters
    ----------
    arena : NodeArena
        Store holding the nodes referenced by `roots`.
    roots : list[int]
        Ids of the root nodes, one per scanned path.
    count : int
        Number of expansion rounds.

    Returns
    -------
    list[int]
        Node ids in display order. Holds `count + 1` ids when more than
        `count` nodes are known: the extra id is the top line.

    Raises
    ------
    ValueError
        If `count` is negative.
    """
    if count < 0:
        raise ValueError("count must be >= 0")

    frontier: list[int] = sorted(roots, key=arena.key)

    for processed in range(count):
        if processed == len(frontier):
            break

        frontier.extend(arena[frontier[processed]].children)
        frontier.sort(key=arena.key)

    if len(frontier) > count:
        return frontier[: count + 1]
    return frontier
