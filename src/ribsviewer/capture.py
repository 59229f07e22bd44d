"""Capture the view of a router as PNG bytes.

ribsviewer.capture
~~~~~~~~~~~~~~~~~~

Rendering itself belongs to the host. A *render hook* receives a viewable
router and returns its raster: a :class:`PIL.Image.Image`, PNG bytes that are
already encoded, or ``None``. The hook touches host-owned visual state, so
:func:`capture` must be called from the execution context that owns it; the
viewer calls it directly from its event loop when a request arrives.

Every failure (no such router, a cyclic hierarchy, no view, nothing rendered,
the hook raising) ends the same way: :func:`capture` returns ``None``.
"""

from __future__ import annotations

import io
import logging
import typing as t

from PIL import Image

from ribsviewer import exc
from ribsviewer.locator import find_node

if t.TYPE_CHECKING:
    from collections.abc import Callable

    from ribsviewer.node import Routing

logger = logging.getLogger(__name__)

Raster = t.Union[Image.Image, bytes, bytearray]
RenderHook = t.Callable[["Routing"], t.Optional[Raster]]


def render_view(node: Routing) -> Raster | None:
    """Render hook used by default.

    Calls ``node.render()`` when the router provides one, as
    :class:`~ribsviewer.node.ViewableRouter` does.

    >>> from ribsviewer.node import Router, ViewableRouter
    >>> render_view(ViewableRouter(view=b"png")) == b"png"
    True
    >>> render_view(Router()) is None
    True
    """
    render: Callable[[], Raster | None] | None = getattr(node, "render", None)
    if render is None:
        return None
    return render()


def encode_png(raster: Raster | None) -> bytes | None:
    """Return PNG bytes for ``raster``.

    Images are encoded with Pillow. Bytes are taken to be encoded already and
    are returned as they are. Empty output counts as no output.

    >>> encode_png(b"") is None
    True
    >>> encode_png(Image.new("RGB", (2, 2)))[:8]
    b'\\x89PNG\\r\\n\\x1a\\n'
    """
    if raster is None:
        return None

    if isinstance(raster, (bytes, bytearray)):
        data = bytes(raster)
    else:
        with io.BytesIO() as buf:
            raster.save(buf, format="PNG")
            data = buf.getvalue()

    return data or None


def capture(
    target: str,
    root: Routing,
    render: RenderHook = render_view,
) -> bytes | None:
    """Capture the first router named ``target`` as PNG bytes.

    Parameters
    ----------
    target : str
        Type name of the router, as shown in the tree.
    root : Routing
        Root of the live hierarchy; searched in pre-order.
    render : RenderHook, optional
        Render hook, :func:`render_view` by default.

    Returns
    -------
    bytes | None
        PNG bytes, or None if the router is missing, has no view, or
        could not be rendered.

    Examples
    --------
    >>> from ribsviewer.node import Router, ViewableRouter
    >>> root = Router([ViewableRouter(name="Home", view=b"png")], name="Root")
    >>> capture("Home", root)
    b'png'
    >>> capture("Root", root) is None
    True
    >>> capture("NoSuchType", root) is None
    True
    """
    try:
        node = find_node(target, root)
    except exc.CyclicHierarchyError:
        logger.exception("Could not look up %s", target)
        return None

    if node is None:
        return None

    if not node.is_viewable:
        logger.debug("Router %s has no view to capture", target)
        return None

    try:
        data = encode_png(render(node))
    except Exception:
        logger.exception("Could not capture %s", target)
        return None

    if data is None:
        logger.debug("Render hook produced nothing for %s", target)
    return data


__all__ = ["Raster", "RenderHook", "capture", "encode_png", "render_view"]
