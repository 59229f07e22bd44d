"""ribsviewer pytest plugin."""

from __future__ import annotations

import logging
import typing as t
from difflib import ndiff

import pytest

from ribsviewer.node import Router, ViewableRouter
from ribsviewer.snapshot import Snapshot
from ribsviewer.testing import MockChannel

if t.TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


def _outline(snapshot: Snapshot, depth: int = 0) -> list[str]:
    lines = [f"{'  ' * depth}{snapshot.name!r}"]
    for child in snapshot.children:
        lines.extend(_outline(child, depth + 1))
    return lines


def pytest_assertrepr_compare(
    config: pytest.Config,
    op: str,
    left: t.Any,
    right: t.Any,
) -> list[str] | None:
    """Show an outline diff when two :class:`Snapshot` objects differ."""
    if not isinstance(left, Snapshot) or not isinstance(right, Snapshot):
        return None
    if op != "==":
        return None

    lines = ["Snapshot comparison failed:"]
    if len(left) != len(right):
        lines.append(f"  nodes: {len(left)} != {len(right)}")
    lines.append("")
    lines.append("Outline diff:")
    lines.extend(ndiff(_outline(right), _outline(left)))
    return lines


@pytest.fixture
def router_factory() -> Callable[..., Router]:
    """Return a factory for named routers.

    ``viewable=True`` builds a :class:`~ribsviewer.node.ViewableRouter`.
    """

    def factory(
        name: str,
        *children: Router,
        viewable: bool = False,
        view: t.Any = None,
    ) -> Router:
        if viewable:
            return ViewableRouter(children, name=name, view=view)
        return Router(children, name=name)

    return factory


@pytest.fixture
def router_tree(router_factory: Callable[..., Router]) -> Router:
    """Return a small hierarchy.

    ::

        Root
        ├── LoggedIn (View)
        │   └── Home (View)
        └── Settings
    """
    return router_factory(
        "Root",
        router_factory(
            "LoggedIn",
            router_factory("Home", viewable=True),
            viewable=True,
        ),
        router_factory("Settings"),
    )


@pytest.fixture
def mock_channel() -> MockChannel:
    """Return a connected :class:`~ribsviewer.testing.MockChannel`."""
    return MockChannel(connected=True)


@pytest.fixture
def disconnected_channel() -> MockChannel:
    """Return a :class:`~ribsviewer.testing.MockChannel` that never connects."""
    return MockChannel(connected=False, connect_on_start=False)
