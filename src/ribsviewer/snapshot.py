"""Immutable snapshots of a router hierarchy.

ribsviewer.snapshot
~~~~~~~~~~~~~~~~~~~

A :class:`Snapshot` mirrors one traversal of the live hierarchy: every node
becomes ``{name, children}`` where ``name`` is the router's type name,
suffixed with :data:`~ribsviewer.constants.VIEW_MARKER` when a view is
attached. Snapshots compare structurally and order-sensitively, which is all
the sampling loop needs to suppress redundant updates.

Usage
-----
```python
from ribsviewer.node import Router
from ribsviewer.snapshot import serialize, unchanged

root = Router(name="Root")
before = serialize(root)
root.attach_child(Router(name="A"))
after = serialize(root)

unchanged(before, after)  # False
after.to_json()  # '{"name":"Root","children":[{"name":"A","children":[]}]}'
```
"""

from __future__ import annotations

import dataclasses
import json
import logging
import typing as t

from ribsviewer import exc
from ribsviewer.constants import VIEW_MARKER

if t.TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from ribsviewer.node import Routing

logger = logging.getLogger(__name__)

SnapshotDict = dict[str, t.Any]


@dataclasses.dataclass(frozen=True)
class Snapshot:
    """Read-only copy of a router and its descendants at one instant.

    Examples
    --------
    >>> leaf = Snapshot(name="A")
    >>> Snapshot(name="Root", children=(leaf,)) == Snapshot("Root", (Snapshot("A"),))
    True
    >>> Snapshot("Root", (Snapshot("A"), Snapshot("B"))) == Snapshot(
    ...     "Root", (Snapshot("B"), Snapshot("A"))
    ... )
    False
    """

    name: str
    children: tuple[Snapshot, ...] = ()

    def __len__(self) -> int:
        """Return the number of nodes in this snapshot, itself included."""
        return sum(1 for _ in self.walk())

    def walk(self) -> Iterator[Snapshot]:
        """Yield this snapshot and its descendants in pre-order."""
        stack = [self]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    def to_dict(self) -> SnapshotDict:
        """Convert the snapshot to the wire shape.

        >>> Snapshot("Root", (Snapshot("A"),)).to_dict()
        {'name': 'Root', 'children': [{'name': 'A', 'children': []}]}
        """
        return {
            "name": self.name,
            "children": [child.to_dict() for child in self.children],
        }

    def to_json(self) -> str:
        """Encode the snapshot as a compact JSON string.

        Raises
        ------
        :exc:`exc.SnapshotEncodeError`
            If a name cannot be represented in JSON.

        >>> Snapshot("Root", (Snapshot("Home (View) "),)).to_json()
        '{"name":"Root","children":[{"name":"Home (View) ","children":[]}]}'
        """
        try:
            return json.dumps(
                self.to_dict(),
                ensure_ascii=False,
                separators=(",", ":"),
            )
        except (TypeError, ValueError, RecursionError) as e:
            raise exc.SnapshotEncodeError(e) from e

    @classmethod
    def from_dict(cls, data: Mapping[str, t.Any]) -> Snapshot:
        """Rebuild a snapshot from its wire shape.

        >>> Snapshot.from_dict({"name": "Root", "children": [{"name": "A"}]})
        Snapshot(name='Root', children=(Snapshot(name='A', children=()),))
        """
        return cls(
            name=data["name"],
            children=tuple(cls.from_dict(child) for child in data.get("children", [])),
        )


def display_name(node: Routing) -> str:
    """Return the name a router is shown with.

    >>> from ribsviewer.node import Router, ViewableRouter
    >>> display_name(Router(name="Foo"))
    'Foo'
    >>> display_name(ViewableRouter(name="Foo"))
    'Foo (View) '
    """
    if node.is_viewable:
        return f"{node.type_name}{VIEW_MARKER}"
    return node.type_name


def serialize(root: Routing) -> Snapshot:
    """Convert a live router hierarchy into a :class:`Snapshot`.

    Children keep the host's ordering. The walk keeps its own stack, so
    depth is not bounded by the recursion limit. The hierarchy is expected
    to be acyclic; a router reached again while it is still on the current
    path raises instead of looping forever. The same router appearing under
    two different parents is fine.

    Raises
    ------
    :exc:`exc.CyclicHierarchyError`
        If the hierarchy contains a cycle.

    Examples
    --------
    >>> from ribsviewer.node import Router, ViewableRouter
    >>> root = Router([Router(name="A"), ViewableRouter(name="B")], name="Root")
    >>> serialize(root).to_dict()
    {'name': 'Root', 'children': [{'name': 'A', 'children': []}, {'name': 'B (View) ', 'children': []}]}
    """
    path = {id(root)}
    done: list[Snapshot] = []
    stack: list[tuple[Routing, Iterator[Routing], list[Snapshot]]] = [
        (root, iter(root.children), []),
    ]
    while stack:
        node, children, built = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            path.discard(id(node))
            snapshot = Snapshot(name=display_name(node), children=tuple(built))
            (stack[-1][2] if stack else done).append(snapshot)
            continue
        key = id(child)
        if key in path:
            raise exc.CyclicHierarchyError(child.type_name)
        path.add(key)
        stack.append((child, iter(child.children), []))
    return done[0]


def unchanged(a: Snapshot | None, b: Snapshot | None) -> bool:
    """Return True if both snapshots describe the same hierarchy.

    ``None`` stands for "nothing sent yet" and only matches itself.

    >>> unchanged(Snapshot("Root"), Snapshot("Root"))
    True
    >>> unchanged(None, Snapshot("Root"))
    False
    """
    if a is None or b is None:
        return a is b

    pairs = [(a, b)]
    while pairs:
        left, right = pairs.pop()
        if left is right:
            continue
        if left.name != right.name or len(left.children) != len(right.children):
            return False
        pairs.extend(zip(left.children, right.children))
    return True


__all__ = ["Snapshot", "SnapshotDict", "display_name", "serialize", "unchanged"]
