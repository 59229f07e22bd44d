"""Answer capture requests from the remote viewer."""

from __future__ import annotations

import base64
import logging
import typing as t

from ribsviewer.capture import capture, render_view
from ribsviewer.constants import CAPTURE_IMAGE_EVENT, TAKE_CAPTURE_EVENT

if t.TYPE_CHECKING:
    from ribsviewer.capture import RenderHook
    from ribsviewer.channel import Channel
    from ribsviewer.node import Routing

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Resolve ``take capture rib`` requests and reply with ``capture image``.

    The capture runs synchronously inside the message handler, on the event
    loop the channel delivers messages on. A request that finds nothing gets
    no reply at all.

    Examples
    --------
    >>> import asyncio, base64
    >>> from ribsviewer.node import Router, ViewableRouter
    >>> from ribsviewer.testing import MockChannel
    >>> root = Router([ViewableRouter(name="Home", view=b"png")], name="Root")
    >>> channel = MockChannel(connected=True)
    >>> dispatcher = CommandDispatcher(root, channel)
    >>> dispatcher.bind()
    >>> asyncio.run(channel.deliver("take capture rib", "Home"))
    >>> base64.b64decode(channel.messages("capture image")[0])
    b'png'
    >>> asyncio.run(channel.deliver("take capture rib", "NoSuchType"))
    >>> len(channel.messages("capture image"))
    1
    """

    def __init__(
        self,
        root: Routing,
        channel: Channel,
        render: RenderHook | None = None,
    ) -> None:
        self.root = root
        self.channel = channel
        self.render = render or render_view
        self._bound = False

    def bind(self) -> None:
        """Register the request handler on the channel, once."""
        if self._bound:
            return
        self.channel.on(TAKE_CAPTURE_EVENT, self.handle)
        self._bound = True

    async def handle(self, *args: t.Any) -> bool:
        """Handle one ``take capture rib`` message.

        Returns
        -------
        bool
            True if a ``capture image`` reply was sent.
        """
        if not args or not isinstance(args[0], str):
            logger.debug("Ignoring %s with payload %r", TAKE_CAPTURE_EVENT, args)
            return False

        target = args[0]
        data = capture(target, self.root, self.render)
        if data is None:
            return False

        payload = base64.b64encode(data).decode("ascii")
        return await self.channel.emit(CAPTURE_IMAGE_EVENT, payload)


__all__ = ["CommandDispatcher"]
