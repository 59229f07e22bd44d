"""Conftest.py (root-level).

We keep this in root so pytest's doctest plugin picks up the fixtures, and to
keep conftest.py out of the wheel. Test fixtures themselves live in
:mod:`ribsviewer.pytest_plugin`.
"""

from __future__ import annotations

import typing as t

import pytest
from _pytest.doctest import DoctestItem

from ribsviewer.node import Router, ViewableRouter
from ribsviewer.snapshot import Snapshot
from ribsviewer.testing import MockChannel

pytest_plugins = ["pytester"]


@pytest.fixture(autouse=True)
def add_doctest_fixtures(
    request: pytest.FixtureRequest,
    doctest_namespace: dict[str, t.Any],
) -> None:
    """Configure doctest fixtures for pytest-doctest."""
    if isinstance(request._pyfuncitem, DoctestItem):
        doctest_namespace["Router"] = Router
        doctest_namespace["ViewableRouter"] = ViewableRouter
        doctest_namespace["Snapshot"] = Snapshot
        doctest_namespace["MockChannel"] = MockChannel
        doctest_namespace["router_tree"] = request.getfixturevalue("router_tree")


@pytest.fixture(autouse=True)
def clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep viewer settings from the developer's shell out of the tests."""
    for name in (
        "RIBS_VIEWER_SOCKET_URL",
        "RIBS_VIEWER_NAMESPACE",
        "RIBS_VIEWER_INTERVAL_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
