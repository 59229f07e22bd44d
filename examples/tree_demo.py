#!/usr/bin/env python
"""Demonstration of streaming a changing router hierarchy.

The hierarchy is attached to an in-memory channel, so no viewer needs to be
running. Point a :class:`ribsviewer.TreeViewer` at a real endpoint instead of
``channel=`` to stream to the remote tree viewer.
"""

from __future__ import annotations

import asyncio
import base64
import json

from PIL import Image

from ribsviewer import Router, TreeViewer, ViewableRouter
from ribsviewer.testing import MockChannel


class RootRouter(Router):
    """Root of the demo app."""


class LoggedOutRouter(ViewableRouter):
    """Login screen."""


class LoggedInRouter(Router):
    """Container for the signed-in screens."""


class HomeRouter(ViewableRouter):
    """Home screen."""


def outline(node: dict, depth: int = 0) -> list[str]:
    """Return an indented outline of a decoded tree_update payload."""
    lines = [f"{'  ' * depth}{node['name']}"]
    for child in node["children"]:
        lines.extend(outline(child, depth + 1))
    return lines


async def main() -> None:
    """Log in, look at the tree, capture the home screen, log out."""
    print("=" * 60)
    print("Demo: streaming a router tree")
    print("=" * 60)

    logged_out = LoggedOutRouter(view=Image.new("RGB", (32, 64), "white"))
    root = RootRouter([logged_out])
    channel = MockChannel()

    async with TreeViewer(root, channel=channel, interval=0.05):
        await channel.wait_for("tree_update")

        root.detach_child(logged_out)
        logged_in = LoggedInRouter([HomeRouter(view=Image.new("RGB", (32, 64)))])
        root.attach_child(logged_in)
        await channel.wait_for("tree_update", 2)

        await channel.deliver("take capture rib", "HomeRouter")
        await channel.deliver("take capture rib", "NoSuchRouter")

    for number, payload in enumerate(channel.messages("tree_update"), start=1):
        print(f"\ntree_update #{number}")
        print("\n".join(outline(json.loads(payload))))

    captures = channel.messages("capture image")
    print(f"\ncapture image replies: {len(captures)}")
    for payload in captures:
        print(f"  {len(base64.b64decode(payload))} bytes of PNG")


if __name__ == "__main__":
    asyncio.run(main())
