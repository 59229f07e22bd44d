"""Named-message channel to the remote tree viewer.

ribsviewer.channel
~~~~~~~~~~~~~~~~~~

The viewer talks Socket.IO on the ``/ribs`` namespace. :class:`SocketClient`
wraps :class:`socketio.AsyncClient`; anything implementing :class:`Channel`
(e.g. :class:`ribsviewer.testing.MockChannel`) can stand in for it.

A channel is usable only once the transport acknowledged the namespace
connection. Until then, and after a disconnect, messages are dropped: there
is no queue and no retry.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import typing as t

import socketio

from ribsviewer import exc
from ribsviewer.constants import NAMESPACE, SOCKET_URL, TREE_UPDATE_EVENT

if t.TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ribsviewer.snapshot import Snapshot

logger = logging.getLogger(__name__)

Handler = t.Callable[..., t.Union["Awaitable[None]", None]]


@t.runtime_checkable
class Channel(t.Protocol):
    """Protocol that transport channels must satisfy."""

    @property
    def connected(self) -> bool: ...

    async def connect(self) -> None: ...

    async def disconnect(self) -> None: ...

    async def emit(self, event: str, payload: t.Any) -> bool: ...

    def on(self, event: str, handler: Handler) -> None: ...

    async def send_tree(self, snapshot: Snapshot) -> bool: ...


class TreeSenderMixin:
    """Mixin for channels that publish snapshots as ``tree_update``."""

    connected: bool

    emit: Callable[[str, t.Any], Awaitable[bool]]

    async def send_tree(self, snapshot: Snapshot) -> bool:
        """Send ``snapshot`` as a JSON string.

        Returns
        -------
        bool
            False if the channel was not connected and the update was dropped.

        Raises
        ------
        :exc:`exc.SnapshotEncodeError`
            If the snapshot cannot be encoded.
        """
        if not self.connected:
            logger.debug("Not connected, dropping %s", TREE_UPDATE_EVENT)
            return False
        return await self.emit(TREE_UPDATE_EVENT, snapshot.to_json())


class SocketClient(TreeSenderMixin):
    """Socket.IO client bound to one namespace of the viewer.

    Parameters
    ----------
    url : str, optional
        Viewer endpoint, defaults to :data:`~ribsviewer.constants.SOCKET_URL`.
    namespace : str, optional
        Namespace, defaults to :data:`~ribsviewer.constants.NAMESPACE`.
    client : socketio.AsyncClient, optional
        Preconfigured client, mostly useful for tests.

    Examples
    --------
    >>> client = SocketClient("http://localhost:9000")
    >>> client.url
    'http://localhost:9000'
    >>> client.namespace
    '/ribs'
    >>> client.connected
    False
    """

    def __init__(
        self,
        url: str | None = None,
        namespace: str | None = None,
        *,
        client: socketio.AsyncClient | None = None,
    ) -> None:
        self.url = url or SOCKET_URL
        self.namespace = namespace or NAMESPACE
        if not self.namespace.startswith("/"):
            msg = f"Namespace must start with '/': {self.namespace}"
            raise exc.ChannelError(msg)

        self.sio = client or socketio.AsyncClient(
            reconnection=True,
            logger=False,
            engineio_logger=False,
        )
        self.connected = False
        self._connect_task: asyncio.Task[None] | None = None

        self.sio.on("connect", self._on_connect, namespace=self.namespace)
        self.sio.on("disconnect", self._on_disconnect, namespace=self.namespace)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.url!r}, namespace={self.namespace!r})"

    async def _on_connect(self) -> None:
        logger.info("Connected to %s%s", self.url, self.namespace)
        self.connected = True

    async def _on_disconnect(self, *args: t.Any) -> None:
        logger.info("Disconnected from %s%s", self.url, self.namespace)
        self.connected = False

    async def _connect(self) -> None:
        try:
            await self.sio.connect(
                self.url,
                namespaces=[self.namespace],
                retry=True,
            )
        except socketio.exceptions.ConnectionError:
            logger.exception("Could not connect to %s", self.url)

    async def connect(self) -> None:
        """Start connecting in the background.

        Returns immediately; :attr:`connected` turns True once the namespace
        is acknowledged. Calling it while a connection attempt is pending is a
        no-op.
        """
        if self._connect_task is not None and not self._connect_task.done():
            return
        self._connect_task = asyncio.create_task(self._connect())

    async def disconnect(self) -> None:
        """Abort a pending connection attempt and close the connection."""
        task, self._connect_task = self._connect_task, None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        await self.sio.disconnect()
        self.connected = False

    async def emit(self, event: str, payload: t.Any) -> bool:
        """Emit ``event`` with ``payload`` on the namespace.

        Returns
        -------
        bool
            False if the message was dropped because the channel is not
            connected.
        """
        if not self.connected:
            logger.debug("Not connected, dropping %s", event)
            return False
        try:
            await self.sio.emit(event, payload, namespace=self.namespace)
        except socketio.exceptions.BadNamespaceError:
            logger.debug("Namespace %s went away, dropping %s", self.namespace, event)
            return False
        return True

    def on(self, event: str, handler: Handler) -> None:
        """Register ``handler`` for inbound ``event`` on the namespace."""
        self.sio.on(event, handler, namespace=self.namespace)


__all__ = ["Channel", "Handler", "SocketClient", "TreeSenderMixin"]
