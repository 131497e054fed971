"""Tree reconstruction from (element, level) pairs.

A descendant at level k belongs to the last preceding line of its block whose
level is exactly k - 1, or to the main element when there is none. Parents are
resolved in one top-to-bottom pass (index-based parent pointers), then every
element is appended to its parent.

Sibling order is the one a deepest-first, prepend-to-parent reduction gives:
children of a descendant keep document order; children of the main element
are grouped by level, shallowest first, each group in document order. Only
level jumps (a line with no line one level up) make the grouping visible.
"""

from collections.abc import Sequence

from .dom import Element


def resolve_parents(levels: Sequence[int]) -> list[int | None]:
    """
    Compute the parent index of every line of a descendant block.

    Args:
        levels: Level of each line, in document order

    Returns:
        Parent index per line; None means "the main element"
    """
    last_at_level: dict[int, int] = {}
    parents: list[int | None] = []
    for index, level in enumerate(levels):
        parents.append(last_at_level.get(level - 1))
        last_at_level[level] = index
    return parents


def group_children(levels: Sequence[int]) -> dict[int | None, list[int]]:
    """
    Ordered child indexes of every parent of a descendant block.

    Args:
        levels: Level of each line, in document order

    Returns:
        {parent index or None (main element): child indexes in final order};
        parents without children are omitted
    """
    children: dict[int | None, list[int]] = {}
    for index, parent in enumerate(resolve_parents(levels)):
        children.setdefault(parent, []).append(index)
    if None in children:
        # stable: document order within a level
        children[None].sort(key=lambda index: levels[index])
    return children


def attach_children(main: Element, pairs: Sequence[tuple[Element, int]]) -> Element:
    """
    Nest a descendant block under its main element.

    Args:
        main: Element created from the main line
        pairs: (element, level) for each descendant line, in document order

    Returns:
        The main element, now holding the whole subtree
    """
    for parent_index, indexes in group_children([level for _, level in pairs]).items():
        parent = main if parent_index is None else pairs[parent_index][0]
        for index in indexes:
            parent.append_child(pairs[index][0])
    return main
