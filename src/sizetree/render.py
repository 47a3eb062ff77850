import typer

from .models import NodeArena

UNITS: list[tuple[str, int]] = [
    ("T", 1024**4),
    ("G", 1024**3),
    ("M", 1024**2),
    ("K", 1024),
]

PERMISSION_WARNING: str = "Did not have permissions for all directories"

BIGGEST_COLOR: int = 196
SIZE_COLOR: int = 7
NAME_COLOR: int = 7
NAME_BACKGROUND_BASE: int = 231
MAX_SHADE_DEPTH: int = 8


def human_readable(size: int) -> str:
    """
    Format a byte count with a K/M/G/T suffix.

    One decimal place is shown while the value in the chosen unit is
    below 10, e.g. 1536 -> "1.5K" but 1024 * 512 -> "512K".
    """
    for unit, marker in UNITS:
        if size >= marker:
            if size // marker < 10:
                return f"{size / marker:.1f}{unit}"
            return f"{size // marker}{unit}"
    return f"{size}B"


def _format_line(path: str, size: int, is_biggest: bool, depth: int, prefix: str, color: bool) -> str:
    padded_size: str = f"{human_readable(size):>5}"

    if not color:
        return f"{padded_size} {prefix} {path}"

    return "{} {} {}".format(
        typer.style(padded_size, fg=BIGGEST_COLOR if is_biggest else SIZE_COLOR),
        prefix,
        typer.style(path, fg=NAME_COLOR, bg=NAME_BACKGROUND_BASE + min(MAX_SHADE_DEPTH, depth)),
    )


def render_lines(arena: NodeArena, selected: list[int], color: bool = False) -> list[str]:
    """
    Draw the selected nodes as a tree rooted at the largest one.

    Only nodes present in `selected` are drawn. A selected node is shown
    under another when it is one of that node's children and exactly one
    level deeper. Siblings keep the order they have in `selected`.
    """
    lines: list[str] = []

    if not selected:
        return lines

    # Depth first, pre-order: (node id, first of its siblings, depth, prefix).
    pending: list[tuple[int, bool, int, str]] = [(selected[0], True, 1, "")]

    while pending:
        node_id, is_biggest, depth, prefix = pending.pop()
        node = arena[node_id]
        lines.append(_format_line(node.path, node.size, is_biggest, depth, prefix, color))

        child_prefix: str = prefix.replace("└──", "   ").replace("├──", "│  ")
        child_ids: set[int] = set(node.children)
        child_depth: int = arena.depth(node_id) + 1

        shown: list[int] = [
            other for other in selected if other in child_ids and arena.depth(other) == child_depth
        ]

        for i in reversed(range(len(shown))):
            tree_chars: str = "└──" if i == len(shown) - 1 else "├──"
            pending.append((shown[i], i == 0, depth + 1, child_prefix + tree_chars))

    return lines


def display(all_ok: bool, arena: NodeArena, selected: list[int], color: bool = False) -> None:
    if not all_ok:
        typer.echo(PERMISSION_WARNING, err=True)

    for line in render_lines(arena, selected, color=color):
        typer.echo(line)
