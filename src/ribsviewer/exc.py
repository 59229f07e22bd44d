"""Provide exceptions used by ribsviewer.

ribsviewer.exc
~~~~~~~~~~~~~~

Notes
-----
A lookup miss or a render hook returning nothing is not an error: both end
as an absent capture reply. Exceptions here cover what can abandon a
sampling tick or a connection attempt.
"""

from __future__ import annotations

import typing as t


class RibsViewerError(Exception):
    """Base exception for all ribsviewer errors."""


class SnapshotEncodeError(RibsViewerError, ValueError):
    """Raised when a snapshot cannot be encoded to the wire format."""

    def __init__(self, reason: t.Any | None = None, *args: object) -> None:
        msg = "Snapshot could not be encoded"
        if reason is not None:
            msg += f": {reason!s}"
        super().__init__(msg)


class CyclicHierarchyError(RibsViewerError):
    """Raised when a router is reached again while still on the current path."""

    def __init__(self, type_name: str | None = None, *args: object) -> None:
        if type_name is not None:
            super().__init__(f"Router hierarchy contains a cycle at {type_name}")
        else:
            super().__init__("Router hierarchy contains a cycle")


class ChannelError(RibsViewerError):
    """Raised when the transport channel is misused or cannot be created."""


__all__ = sorted(
    {
        "ChannelError",
        "CyclicHierarchyError",
        "RibsViewerError",
        "SnapshotEncodeError",
    },
)
