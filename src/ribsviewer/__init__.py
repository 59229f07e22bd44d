"""ribsviewer, stream a live router hierarchy to a remote tree viewer."""

from .__about__ import (
    __author__,
    __copyright__,
    __description__,
    __email__,
    __license__,
    __package_name__,
    __title__,
    __version__,
)
from .capture import capture
from .channel import SocketClient
from .dispatcher import CommandDispatcher
from .locator import find_node
from .node import Router, Routing, ViewableRouter
from .sampling import SamplingLoop
from .snapshot import Snapshot, serialize, unchanged
from .viewer import TreeViewer

__all__ = (
    "CommandDispatcher",
    "Router",
    "Routing",
    "SamplingLoop",
    "Snapshot",
    "SocketClient",
    "TreeViewer",
    "ViewableRouter",
    "__author__",
    "__copyright__",
    "__description__",
    "__email__",
    "__license__",
    "__package_name__",
    "__title__",
    "__version__",
    "capture",
    "find_node",
    "serialize",
    "unchanged",
)
