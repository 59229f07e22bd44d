"""Constant variables for ribsviewer.

Transport settings can be configured from the environment:

- :envvar:`RIBS_VIEWER_SOCKET_URL`
- :envvar:`RIBS_VIEWER_NAMESPACE`
- :envvar:`RIBS_VIEWER_INTERVAL_SECONDS`
"""

from __future__ import annotations

import os

#: Socket.IO endpoint used when no URL is passed to the viewer
DEFAULT_SOCKET_URL = "http://localhost:8000"

#: Socket.IO namespace the remote viewer listens on
DEFAULT_NAMESPACE = "/ribs"

#: Seconds between two sampling ticks (200ms)
DEFAULT_INTERVAL_SECONDS = 0.2

#: Endpoint, can be configured via :envvar:`RIBS_VIEWER_SOCKET_URL`
SOCKET_URL = os.getenv("RIBS_VIEWER_SOCKET_URL", DEFAULT_SOCKET_URL)

#: Namespace, can be configured via :envvar:`RIBS_VIEWER_NAMESPACE`
NAMESPACE = os.getenv("RIBS_VIEWER_NAMESPACE", DEFAULT_NAMESPACE)

#: Sampling period, can be configured via :envvar:`RIBS_VIEWER_INTERVAL_SECONDS`
INTERVAL_SECONDS = float(
    os.getenv("RIBS_VIEWER_INTERVAL_SECONDS", DEFAULT_INTERVAL_SECONDS),
)

#: Suffix appended to the name of routers that carry a view
VIEW_MARKER = " (View) "

# Message names, see the protocol table in README.md

#: Outbound, JSON encoded snapshot
TREE_UPDATE_EVENT = "tree_update"

#: Inbound, name of the router to capture
TAKE_CAPTURE_EVENT = "take capture rib"

#: Outbound, base64 encoded PNG
CAPTURE_IMAGE_EVENT = "capture image"
