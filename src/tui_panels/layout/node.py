"""Base class for everything a panel can be attached to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from tui_panels.core.events import EventEmitter

if TYPE_CHECKING:
    from tui_panels.terminal import Terminal


class LayoutNode(EventEmitter, ABC):
    """
    A rectangle in the layout tree.

    Children find their parent, never the other way round: a child reacts to
    its parent's ``resize`` and ``redraw`` events. The parent keeps its
    children in creation order so it can draw and destroy them; a child
    stays attached until it is destroyed.
    """

    def __init__(self) -> None:
        super().__init__()
        self._children: dict[LayoutNode, None] = {}
        self._destroyed = False

    @property
    @abstractmethod
    def width(self) -> int:
        """Content width in cells."""

    @property
    @abstractmethod
    def height(self) -> int:
        """Content height in cells."""

    @property
    @abstractmethod
    def abs_x(self) -> int:
        """1-based screen column of the content area."""

    @property
    @abstractmethod
    def abs_y(self) -> int:
        """1-based screen row of the content area."""

    @property
    @abstractmethod
    def terminal(self) -> Terminal:
        """The terminal at the root of the tree."""

    @property
    def children(self) -> list[LayoutNode]:
        return list(self._children)

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def _adopt(self, child: LayoutNode) -> None:
        self._children[child] = None

    def _release(self, child: LayoutNode) -> None:
        self._children.pop(child, None)

    def destroy(self) -> None:
        """Detach all children, then drop every listener on this node."""
        if self._destroyed:
            return
        self._destroyed = True
        for child in list(self._children):
            child.destroy()
        self.unsubscribe_all()
