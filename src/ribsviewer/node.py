"""Read-only model of the live router hierarchy.

ribsviewer.node
~~~~~~~~~~~~~~~

The bridge only ever reads three things from a router: its type name, whether
a view is attached, and its ordered children. Anything satisfying
:class:`Routing` can be observed. :class:`Router` and :class:`ViewableRouter`
are ready-made bases for hosts that don't have a hierarchy of their own yet.
"""

from __future__ import annotations

import logging
import typing as t

if t.TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from PIL import Image

logger = logging.getLogger(__name__)


@t.runtime_checkable
class Routing(t.Protocol):
    """Protocol that observed routers must satisfy."""

    @property
    def type_name(self) -> str: ...

    @property
    def is_viewable(self) -> bool: ...

    @property
    def children(self) -> Sequence[Routing]: ...


class Router:
    """Node of a router hierarchy.

    The identity of a router is its type: unless ``name`` is given,
    :attr:`type_name` is the class name.

    Examples
    --------
    >>> class RootRouter(Router):
    ...     pass
    >>> class LoggedOutRouter(Router):
    ...     pass
    >>> root = RootRouter()
    >>> root.attach_child(LoggedOutRouter())
    >>> root.type_name
    'RootRouter'
    >>> [child.type_name for child in root.children]
    ['LoggedOutRouter']
    >>> Router(name="Settings").type_name
    'Settings'
    """

    is_viewable: t.ClassVar[bool] = False

    def __init__(
        self,
        children: Iterable[Routing] | None = None,
        *,
        name: str | None = None,
    ) -> None:
        self._name = name
        self._children: list[Routing] = list(children or [])

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.type_name!r})"

    @property
    def type_name(self) -> str:
        """Name the router is displayed and looked up by."""
        if self._name is not None:
            return self._name
        return type(self).__name__

    @property
    def children(self) -> tuple[Routing, ...]:
        """Return attached children in attach order."""
        return tuple(self._children)

    def attach_child(self, child: Routing) -> None:
        """Attach ``child`` as the last child of this router."""
        self._children.append(child)

    def detach_child(self, child: Routing) -> None:
        """Detach ``child``. Detaching a router that is not attached is a no-op."""
        for idx, existing in enumerate(self._children):
            if existing is child:
                del self._children[idx]
                return
        logger.debug("%r is not attached to %r", child, self)


class ViewableRouter(Router):
    """Router with a view that can be rendered to an image.

    ``view`` is whatever the host renders from. The default :meth:`render`
    returns it unchanged, so a :class:`PIL.Image.Image` or already encoded PNG
    bytes can be handed in directly. Hosts with live views override
    :meth:`render`.

    Examples
    --------
    >>> class HomeRouter(ViewableRouter):
    ...     pass
    >>> home = HomeRouter(view=b"png-bytes")
    >>> home.is_viewable
    True
    >>> home.render()
    b'png-bytes'
    """

    is_viewable: t.ClassVar[bool] = True

    def __init__(
        self,
        children: Iterable[Routing] | None = None,
        *,
        name: str | None = None,
        view: t.Any = None,
    ) -> None:
        super().__init__(children, name=name)
        self.view = view

    def render(self) -> Image.Image | bytes | None:
        """Return the current raster of the view, or ``None`` without one."""
        return t.cast("Image.Image | bytes | None", self.view)


__all__ = ["Router", "Routing", "ViewableRouter"]
