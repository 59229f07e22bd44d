"""Find routers in a live hierarchy by type name."""

from __future__ import annotations

import logging
import typing as t

from ribsviewer import exc

if t.TYPE_CHECKING:
    from collections.abc import Iterator

    from ribsviewer.node import Routing

logger = logging.getLogger(__name__)


def iter_nodes(root: Routing) -> Iterator[Routing]:
    """Yield ``root`` and its descendants, depth-first in pre-order.

    The walk keeps its own stack, so deep hierarchies do not hit the
    recursion limit.

    Raises
    ------
    :exc:`exc.CyclicHierarchyError`
        If a router is reached again while still on the current path.

    >>> from ribsviewer.node import Router
    >>> root = Router([Router([Router(name="A1")], name="A"), Router(name="B")], name="R")
    >>> [node.type_name for node in iter_nodes(root)]
    ['R', 'A', 'A1', 'B']
    """
    path = {id(root)}
    yield root
    stack = [(root, iter(root.children))]
    while stack:
        node, children = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            path.discard(id(node))
            continue
        key = id(child)
        if key in path:
            raise exc.CyclicHierarchyError(child.type_name)
        path.add(key)
        yield child
        stack.append((child, iter(child.children)))


def find_node(target: str, root: Routing) -> Routing | None:
    """Return the first router named ``target``, or None.

    The root is tested first, then each child subtree left to right. When
    several routers share a type name, only the first one in pre-order is
    ever returned.

    Examples
    --------
    >>> from ribsviewer.node import Router
    >>> first, second = Router(name="Dup"), Router(name="Dup")
    >>> root = Router([Router([first], name="A"), second], name="Root")
    >>> find_node("Dup", root) is first
    True
    >>> find_node("NoSuchType", root) is None
    True
    """
    for node in iter_nodes(root):
        if node.type_name == target:
            return node
    logger.debug("No router named %s", target)
    return None


__all__ = ["find_node", "iter_nodes"]
