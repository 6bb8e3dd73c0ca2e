"""Depth-first traversal of a tree's nodes, forwards and backwards."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .tree import NodeId, Tree


class TraversalKind(Enum):
    """Whether a traversal event opens or closes a node."""

    OPEN = "open"
    CLOSE = "close"


@dataclass(frozen=True)
class DepthFirstTraversed:
    """A depth-first traversal event: the opening or closing of a node."""

    kind: TraversalKind
    node_id: NodeId

    @classmethod
    def open(cls, node_id: NodeId) -> DepthFirstTraversed:
        """Return the event opening `node_id`."""
        return cls(TraversalKind.OPEN, node_id)

    @classmethod
    def close(cls, node_id: NodeId) -> DepthFirstTraversed:
        """Return the event closing `node_id`."""
        return cls(TraversalKind.CLOSE, node_id)

    @property
    def is_open(self) -> bool:
        return self.kind is TraversalKind.OPEN

    @property
    def is_close(self) -> bool:
        return self.kind is TraversalKind.CLOSE

    @property
    def node_id_open(self) -> NodeId | None:
        """The opened node ID, or None for a close event."""
        return self.node_id if self.is_open else None

    @property
    def node_id_close(self) -> NodeId | None:
        """The closed node ID, or None for an open event."""
        return self.node_id if self.is_close else None

    def next(self, tree: Tree) -> DepthFirstTraversed | None:
        """Return the following event, or None after closing the root."""
        handle = self.node_id.to_handle(tree)
        if self.is_open:
            child = handle.first_child()
            if child is not None:
                return DepthFirstTraversed.open(child.node_id)
            return DepthFirstTraversed.close(self.node_id)
        sibling = handle.next_sibling()
        if sibling is not None:
            return DepthFirstTraversed.open(sibling.node_id)
        parent = handle.parent()
        if parent is None:
            return None
        return DepthFirstTraversed.close(parent.node_id)

    def prev(self, tree: Tree) -> DepthFirstTraversed | None:
        """Return the preceding event, or None before opening the root.

        Walking backwards meets every node's close event before its open event.
        """
        handle = self.node_id.to_handle(tree)
        if self.is_close:
            child = handle.last_child()
            if child is not None:
                return DepthFirstTraversed.close(child.node_id)
            return DepthFirstTraversed.open(self.node_id)
        sibling = handle.previous_sibling()
        if sibling is not None:
            return DepthFirstTraversed.close(sibling.node_id)
        parent = handle.parent()
        if parent is None:
            return None
        return DepthFirstTraversed.open(parent.node_id)


class DepthFirstTraverseSubtree:
    """Two-ended depth-first cursor over a node and its descendants.

    The forward cursor starts at the opening of the subtree root and the
    backward cursor at its closing. Once the cursors cross, every event has
    been emitted and both directions are exhausted.
    """

    def __init__(self, root: NodeId) -> None:
        self._cursors: tuple[DepthFirstTraversed, DepthFirstTraversed] | None = (
            DepthFirstTraversed.open(root),
            DepthFirstTraversed.close(root),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(cursors={self._cursors!r})"

    def next_forward(self, tree: Tree) -> DepthFirstTraversed | None:
        """Return the forward cursor's event and advance it."""
        if self._cursors is None:
            return None
        forward, backward = self._cursors
        if forward == backward:
            self._cursors = None
        else:
            following = forward.next(tree)
            if following is None:
                raise RuntimeError("the forward cursor passed the backward cursor")
            self._cursors = (following, backward)
        return forward

    def next_backward(self, tree: Tree) -> DepthFirstTraversed | None:
        """Return the backward cursor's event and move it back."""
        if self._cursors is None:
            return None
        forward, backward = self._cursors
        if forward == backward:
            self._cursors = None
        else:
            preceding = backward.prev(tree)
            if preceding is None:
                raise RuntimeError("the backward cursor passed the forward cursor")
            self._cursors = (forward, preceding)
        return backward

    def peek_forward(self) -> DepthFirstTraversed | None:
        """Return the forward cursor's event without advancing."""
        return None if self._cursors is None else self._cursors[0]

    def peek_backward(self) -> DepthFirstTraversed | None:
        """Return the backward cursor's event without moving it."""
        return None if self._cursors is None else self._cursors[1]

    def next_open_forward(self, tree: Tree) -> NodeId | None:
        """Return the next opened node going forward (preorder)."""
        while (event := self.next_forward(tree)) is not None:
            if event.is_open:
                return event.node_id
        return None

    def next_close_forward(self, tree: Tree) -> NodeId | None:
        """Return the next closed node going forward (postorder)."""
        while (event := self.next_forward(tree)) is not None:
            if event.is_close:
                return event.node_id
        return None

    def next_open_backward(self, tree: Tree) -> NodeId | None:
        """Return the next opened node going backward (reverse preorder)."""
        while (event := self.next_backward(tree)) is not None:
            if event.is_open:
                return event.node_id
        return None

    def next_close_backward(self, tree: Tree) -> NodeId | None:
        """Return the next closed node going backward (reverse postorder)."""
        while (event := self.next_backward(tree)) is not None:
            if event.is_close:
                return event.node_id
        return None


def traverse_depth_first(root: NodeId) -> DepthFirstTraverseSubtree:
    """Return a traversal cursor over `root` and its descendants."""
    return DepthFirstTraverseSubtree(root)