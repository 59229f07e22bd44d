"""Tests for ribsviewer.node."""

from __future__ import annotations

import logging
import typing as t

from ribsviewer.node import Router, Routing, ViewableRouter

if t.TYPE_CHECKING:
    import pytest


class Plain:
    """Host object that is not a Router but satisfies Routing."""

    def __init__(self, type_name: str, children: list[Plain] | None = None) -> None:
        self.type_name = type_name
        self.is_viewable = False
        self.children = children or []


def test_router_satisfies_protocol() -> None:
    """Router, ViewableRouter and duck-typed hosts are all Routing."""
    assert isinstance(Router(), Routing)
    assert isinstance(ViewableRouter(), Routing)
    assert isinstance(Plain("Host"), Routing)


def test_viewable_is_a_capability_flag() -> None:
    """Viewability comes from the flag, not from the class hierarchy."""
    assert Router().is_viewable is False
    assert ViewableRouter().is_viewable is True

    class CustomRouter(Router):
        is_viewable = True

    assert CustomRouter().is_viewable is True


def test_children_is_a_copy() -> None:
    """Mutating the returned children does not touch the router."""
    child = Router(name="A")
    root = Router([child], name="Root")
    children = list(root.children)
    children.append(Router(name="B"))
    assert root.children == (child,)


def test_attach_and_detach() -> None:
    """attach_child() appends; detach_child() removes by identity."""
    root = Router(name="Root")
    first, second = Router(name="Dup"), Router(name="Dup")
    root.attach_child(first)
    root.attach_child(second)
    assert root.children == (first, second)

    root.detach_child(second)
    assert root.children == (first,)
    assert root.children[0] is first


def test_detach_unknown_child(caplog: pytest.LogCaptureFixture) -> None:
    """Detaching a router that is not attached is a logged no-op."""
    root = Router([Router(name="A")], name="Root")
    with caplog.at_level(logging.DEBUG, logger="ribsviewer.node"):
        root.detach_child(Router(name="B"))
    assert len(root.children) == 1
    assert "is not attached" in caplog.text


def test_viewable_render_returns_view() -> None:
    """The default render() hands back the view unchanged."""
    view = b"\x89PNG"
    assert ViewableRouter(view=view).render() is view
    assert ViewableRouter().render() is None


def test_repr() -> None:
    """repr() shows the class and the type name."""
    assert repr(Router(name="Root")) == "Router('Root')"
