"""Stream a live router hierarchy to a remote tree viewer.

ribsviewer.viewer
~~~~~~~~~~~~~~~~~

:class:`TreeViewer` shares one root router and one channel between a
:class:`~ribsviewer.sampling.SamplingLoop` and a
:class:`~ribsviewer.dispatcher.CommandDispatcher`. Both run on the event loop
that started the viewer, which must be the loop allowed to touch the host's
visual state.
"""

from __future__ import annotations

import logging
import typing as t

from ribsviewer.channel import SocketClient
from ribsviewer.dispatcher import CommandDispatcher
from ribsviewer.sampling import SamplingLoop

if t.TYPE_CHECKING:
    import sys
    import types

    from ribsviewer.capture import RenderHook
    from ribsviewer.channel import Channel
    from ribsviewer.node import Routing

    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self

logger = logging.getLogger(__name__)


class TreeViewer:
    """Bridge between a router hierarchy and the remote viewer.

    Parameters
    ----------
    router : Routing
        Root of the hierarchy to observe.
    socket_url : str, optional
        Viewer endpoint. Defaults to :envvar:`RIBS_VIEWER_SOCKET_URL`, then
        ``http://localhost:8000``.
    namespace : str, optional
        Socket.IO namespace, ``/ribs`` by default.
    interval : float, optional
        Seconds between sampling ticks, 0.2 by default.
    render : RenderHook, optional
        Render hook used for captures.
    channel : Channel, optional
        Channel to use instead of a :class:`~ribsviewer.channel.SocketClient`.

    Examples
    --------
    >>> import asyncio
    >>> from ribsviewer.node import Router
    >>> from ribsviewer.testing import MockChannel
    >>> async def main() -> list[str]:
    ...     channel = MockChannel()
    ...     async with TreeViewer(Router(name="Root"), channel=channel):
    ...         return await channel.wait_for("tree_update")
    >>> asyncio.run(main())
    ['{"name":"Root","children":[]}']
    """

    def __init__(
        self,
        router: Routing,
        socket_url: str | None = None,
        *,
        namespace: str | None = None,
        interval: float | None = None,
        render: RenderHook | None = None,
        channel: Channel | None = None,
    ) -> None:
        self.router = router
        self.channel: Channel = (
            channel if channel is not None else SocketClient(socket_url, namespace)
        )
        self.sampling = SamplingLoop(router, self.channel, interval)
        self.dispatcher = CommandDispatcher(router, self.channel, render)
        self._started = False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.router!r}, channel={self.channel!r})"

    async def __aenter__(self) -> Self:
        """Enter the async context manager, starting the viewer."""
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        """Exit the async context manager, stopping the viewer."""
        await self.stop()

    @property
    def started(self) -> bool:
        """Return True between :meth:`start` and :meth:`stop`."""
        return self._started

    async def start(self) -> None:
        """Connect, start sampling and start answering capture requests.

        Must be awaited on the event loop that owns the host's visual state.
        Starting an already started viewer is a no-op.
        """
        if self._started:
            return
        self.dispatcher.bind()
        await self.channel.connect()
        self.sampling.start()
        self._started = True
        logger.debug("%r started", self)

    async def stop(self) -> None:
        """Stop sampling and release the channel."""
        if not self._started:
            return
        await self.sampling.stop()
        await self.channel.disconnect()
        self._started = False
        logger.debug("%r stopped", self)


__all__ = ["TreeViewer"]
