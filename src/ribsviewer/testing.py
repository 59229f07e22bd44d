"""Testing helpers for ribsviewer."""

from __future__ import annotations

import asyncio
import inspect
import typing as t
from dataclasses import dataclass

from ribsviewer.channel import Handler, TreeSenderMixin


@dataclass
class Message:
    """Message emitted on a :class:`MockChannel`."""

    event: str
    payload: t.Any


class MockChannel(TreeSenderMixin):
    """In-memory channel used in doctests and unit tests.

    >>> import asyncio
    >>> channel = MockChannel(connected=True)
    >>> asyncio.run(channel.emit("capture image", "aGk="))
    True
    >>> channel.sent
    [Message(event='capture image', payload='aGk=')]
    """

    def __init__(self, *, connected: bool = False, connect_on_start: bool = True) -> None:
        self.connected = connected
        self.connect_on_start = connect_on_start
        self.sent: list[Message] = []
        self.dropped: list[Message] = []
        self.handlers: dict[str, list[Handler]] = {}
        self.connect_calls = 0
        self.disconnect_calls = 0

    async def connect(self) -> None:
        """Acknowledge the connection right away unless told otherwise."""
        self.connect_calls += 1
        if self.connect_on_start:
            self.connected = True

    async def disconnect(self) -> None:
        """Mark the channel as disconnected."""
        self.disconnect_calls += 1
        self.connected = False

    async def emit(self, event: str, payload: t.Any) -> bool:
        """Record ``payload``, or drop it when not connected."""
        message = Message(event=event, payload=payload)
        if not self.connected:
            self.dropped.append(message)
            return False
        self.sent.append(message)
        return True

    def on(self, event: str, handler: Handler) -> None:
        """Register ``handler`` for ``event``."""
        self.handlers.setdefault(event, []).append(handler)

    async def deliver(self, event: str, *args: t.Any) -> None:
        """Deliver an inbound ``event`` to the registered handlers."""
        for handler in self.handlers.get(event, []):
            result = handler(*args)
            if inspect.isawaitable(result):
                await result

    def messages(self, event: str) -> list[t.Any]:
        """Return the payloads sent under ``event``, oldest first."""
        return [message.payload for message in self.sent if message.event == event]

    async def wait_for(
        self,
        event: str,
        count: int = 1,
        *,
        timeout: float = 2.0,
        interval: float = 0.01,
    ) -> list[t.Any]:
        """Wait until ``count`` messages were sent under ``event``."""

        async def _poll() -> list[t.Any]:
            while len(self.messages(event)) < count:
                await asyncio.sleep(interval)
            return self.messages(event)

        return await asyncio.wait_for(_poll(), timeout)


__all__ = ["Message", "MockChannel"]
