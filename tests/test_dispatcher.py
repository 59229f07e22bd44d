"""Tests for ribsviewer.dispatcher."""

from __future__ import annotations

import base64
import binascii
import io
import logging
import typing as t

import pytest
from PIL import Image

from ribsviewer.dispatcher import CommandDispatcher
from ribsviewer.node import Router, ViewableRouter

if t.TYPE_CHECKING:
    from collections.abc import Callable

    from ribsviewer.node import Routing
    from ribsviewer.testing import MockChannel


@pytest.fixture
def dispatcher(router_tree: Router, mock_channel: MockChannel) -> CommandDispatcher:
    """Return a dispatcher bound to the mock channel."""
    dispatcher = CommandDispatcher(router_tree, mock_channel)
    dispatcher.bind()
    return dispatcher


def test_bind_once(dispatcher: CommandDispatcher, mock_channel: MockChannel) -> None:
    """The request handler is registered a single time."""
    dispatcher.bind()
    assert mock_channel.handlers["take capture rib"] == [dispatcher.handle]


@pytest.mark.asyncio
async def test_capture_success(
    router_factory: Callable[..., Router],
    mock_channel: MockChannel,
) -> None:
    """Exactly one capture image reply that decodes to the rendered bytes."""
    png = b"\x89PNG\r\n\x1a\nnot-really-a-png"
    root = router_factory("Root", router_factory("Home", viewable=True, view=png))
    CommandDispatcher(root, mock_channel).bind()

    await mock_channel.deliver("take capture rib", "Home")

    replies = mock_channel.messages("capture image")
    assert len(replies) == 1
    assert isinstance(replies[0], str)
    assert base64.b64decode(replies[0], validate=True) == png
    assert mock_channel.messages("tree_update") == []


@pytest.mark.asyncio
async def test_capture_image_is_png(
    router_factory: Callable[..., Router],
    mock_channel: MockChannel,
) -> None:
    """Pillow images are sent as base64 PNG."""
    image = Image.new("RGB", (8, 5), (0, 128, 255))
    root = router_factory("Root", router_factory("Home", viewable=True, view=image))
    CommandDispatcher(root, mock_channel).bind()

    await mock_channel.deliver("take capture rib", "Home")

    (payload,) = mock_channel.messages("capture image")
    with Image.open(io.BytesIO(base64.b64decode(payload))) as decoded:
        assert decoded.format == "PNG"
        assert decoded.size == (8, 5)
        assert decoded.convert("RGB").getpixel((0, 0)) == (0, 128, 255)


class NoReplyCase(t.NamedTuple):
    """Requests that must not produce a reply."""

    test_id: str
    args: tuple[t.Any, ...]


NO_REPLY_CASES: list[NoReplyCase] = [
    NoReplyCase(test_id="unknown_router", args=("NoSuchType",)),
    NoReplyCase(test_id="not_viewable", args=("Settings",)),
    NoReplyCase(test_id="nothing_rendered", args=("Home",)),
    NoReplyCase(test_id="displayed_name", args=("Home (View) ",)),
    NoReplyCase(test_id="no_payload", args=()),
    NoReplyCase(test_id="non_string_payload", args=(42,)),
    NoReplyCase(test_id="dict_payload", args=({"name": "Home"},)),
]


@pytest.mark.parametrize(
    list(NoReplyCase._fields),
    NO_REPLY_CASES,
    ids=[case.test_id for case in NO_REPLY_CASES],
)
@pytest.mark.asyncio
async def test_no_reply(
    test_id: str,
    args: tuple[t.Any, ...],
    dispatcher: CommandDispatcher,
    mock_channel: MockChannel,
) -> None:
    """Misses and failures stay silent."""
    assert await dispatcher.handle(*args) is False
    assert mock_channel.sent == []
    assert mock_channel.dropped == []


@pytest.mark.asyncio
async def test_render_failure_is_silent(
    router_tree: Router,
    mock_channel: MockChannel,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A raising render hook produces no reply, only a log record."""

    def render(node: Routing) -> bytes:
        msg = "no window"
        raise RuntimeError(msg)

    dispatcher = CommandDispatcher(router_tree, mock_channel, render)
    with caplog.at_level(logging.ERROR, logger="ribsviewer.capture"):
        assert await dispatcher.handle("Home") is False
    assert mock_channel.sent == []
    assert "no window" in caplog.text


@pytest.mark.asyncio
async def test_cyclic_tree_is_silent(
    mock_channel: MockChannel,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A request on a cyclic hierarchy sends nothing and raises nothing."""
    root = Router(name="Root")
    child = ViewableRouter(name="Child", view=b"png")
    root.attach_child(child)
    child.attach_child(root)
    CommandDispatcher(root, mock_channel).bind()

    with caplog.at_level(logging.ERROR, logger="ribsviewer.capture"):
        await mock_channel.deliver("take capture rib", "Missing")
    assert mock_channel.sent == []
    assert mock_channel.dropped == []
    assert "Router hierarchy contains a cycle" in caplog.text


@pytest.mark.asyncio
async def test_custom_render_hook(
    router_tree: Router,
    mock_channel: MockChannel,
) -> None:
    """The render hook given to the dispatcher is used."""
    dispatcher = CommandDispatcher(router_tree, mock_channel, lambda node: b"hook")
    assert await dispatcher.handle("LoggedIn") is True
    assert mock_channel.messages("capture image") == ["aG9vaw=="]


@pytest.mark.asyncio
async def test_duplicate_names_capture_first(mock_channel: MockChannel) -> None:
    """Requests for a shared name always resolve to the pre-order first."""
    first = ViewableRouter(name="Dup", view=b"first")
    root = Router(
        [Router([first], name="A"), ViewableRouter(name="Dup", view=b"second")],
        name="Root",
    )
    dispatcher = CommandDispatcher(root, mock_channel)

    for _ in range(2):
        await dispatcher.handle("Dup")

    assert [base64.b64decode(p) for p in mock_channel.messages("capture image")] == [
        b"first",
        b"first",
    ]


@pytest.mark.asyncio
async def test_resolves_against_current_tree(
    router_factory: Callable[..., Router],
    mock_channel: MockChannel,
) -> None:
    """A router detached after the request was issued is no longer found."""
    home = router_factory("Home", viewable=True, view=b"png")
    root = router_factory("Root", home)
    dispatcher = CommandDispatcher(root, mock_channel)

    root.detach_child(home)
    assert await dispatcher.handle("Home") is False
    assert mock_channel.sent == []


@pytest.mark.asyncio
async def test_disconnected_reply_is_dropped(
    router_factory: Callable[..., Router],
    disconnected_channel: MockChannel,
) -> None:
    """Replies are not queued while disconnected."""
    root = router_factory("Root", router_factory("Home", viewable=True, view=b"png"))
    dispatcher = CommandDispatcher(root, disconnected_channel)

    assert await dispatcher.handle("Home") is False
    assert disconnected_channel.sent == []
    (dropped,) = disconnected_channel.dropped
    assert dropped.event == "capture image"
    assert binascii.a2b_base64(dropped.payload) == b"png"
