"""Periodic sampling of the router hierarchy.

ribsviewer.sampling
~~~~~~~~~~~~~~~~~~~

Each tick serializes the hierarchy from its root, compares the result with
the last snapshot handed to the channel, and sends it as ``tree_update`` only
when it changed. Nothing is cached across ticks apart from that snapshot.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import typing as t

from ribsviewer import exc
from ribsviewer.constants import INTERVAL_SECONDS
from ribsviewer.snapshot import serialize, unchanged

if t.TYPE_CHECKING:
    from ribsviewer.channel import Channel
    from ribsviewer.node import Routing
    from ribsviewer.snapshot import Snapshot

logger = logging.getLogger(__name__)


class SamplingLoop:
    """Serialize, compare and maybe send, on a fixed period.

    Parameters
    ----------
    root : Routing
        Root of the live hierarchy. Re-read from the top on every tick.
    channel : Channel
        Channel the snapshots are sent on.
    interval : float, optional
        Seconds between ticks, defaults to
        :data:`~ribsviewer.constants.INTERVAL_SECONDS`.

    Notes
    -----
    Ticks run on the event loop that called :meth:`start`. They never
    overlap, and :meth:`start` must not be called concurrently from another
    thread. A tick that raises is logged and counted
    in ``failed``, and the next one runs on schedule.

    Examples
    --------
    >>> import asyncio
    >>> from ribsviewer.node import Router
    >>> from ribsviewer.testing import MockChannel
    >>> root = Router([Router(name="A")], name="Root")
    >>> loop = SamplingLoop(root, MockChannel(connected=True))
    >>> asyncio.run(loop.tick()), asyncio.run(loop.tick())
    (True, False)
    >>> loop.channel.messages("tree_update")
    ['{"name":"Root","children":[{"name":"A","children":[]}]}']
    """

    def __init__(
        self,
        root: Routing,
        channel: Channel,
        interval: float | None = None,
    ) -> None:
        self.root = root
        self.channel = channel
        self.interval = INTERVAL_SECONDS if interval is None else interval
        if self.interval <= 0:
            msg = f"interval must be positive, got {self.interval}"
            raise ValueError(msg)

        self.last_sent: Snapshot | None = None
        self.ticks = 0
        self.sent = 0
        self.dropped = 0
        self.failed = 0
        self._task: asyncio.Task[None] | None = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.root!r}, interval={self.interval})"

    @property
    def running(self) -> bool:
        """Return True while ticks are scheduled."""
        return self._task is not None and not self._task.done()

    async def tick(self) -> bool:
        """Run one sampling tick.

        Returns
        -------
        bool
            True if a ``tree_update`` went out on the channel.
        """
        self.ticks += 1
        try:
            current = serialize(self.root)
        except exc.CyclicHierarchyError:
            self.failed += 1
            logger.exception("Abandoning tick %d", self.ticks)
            return False

        if unchanged(current, self.last_sent):
            return False

        self.last_sent = current
        try:
            sent = await self.channel.send_tree(current)
        except exc.SnapshotEncodeError:
            self.failed += 1
            logger.exception("Abandoning tick %d", self.ticks)
            return False

        if sent:
            self.sent += 1
        else:
            self.dropped += 1
        return sent

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time()
        while True:
            try:
                await self.tick()
            except Exception:
                self.failed += 1
                logger.exception("Tick %d failed", self.ticks)
            deadline += self.interval
            # skip missed periods instead of bursting to catch up
            now = loop.time()
            if deadline < now:
                deadline = now
            await asyncio.sleep(deadline - now)

    def start(self) -> None:
        """Start ticking on the running event loop.

        Calling it again while already running is a no-op.
        """
        if self.running:
            logger.debug("%r already running", self)
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        """Stop ticking. The last sent snapshot is kept."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task


__all__ = ["SamplingLoop"]
