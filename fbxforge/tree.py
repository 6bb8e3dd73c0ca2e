"""In-memory FBX data tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import zip_longest
from typing import Any, Iterable, Iterator

from .values import AttributeValue, attribute


@dataclass(frozen=True, order=True)
class NodeId:
    """Identifier of a node within a tree."""

    index: int

    def to_handle(self, tree: Tree) -> NodeHandle:
        """Return a handle to this node in the given tree."""
        return NodeHandle(tree, self)


@dataclass(slots=True)
class _NodeData:
    name: str
    attributes: list[AttributeValue] = field(default_factory=list)
    parent: int | None = None
    first_child: int | None = None
    last_child: int | None = None
    previous_sibling: int | None = None
    next_sibling: int | None = None


class Tree:
    """FBX data tree with an implicit, unnamed root node."""

    def __init__(self) -> None:
        self._names: dict[str, str] = {}
        self._nodes: list[_NodeData] = [_NodeData(self._intern(""))]
        self._root_id = NodeId(0)

    def _intern(self, name: str) -> str:
        if not isinstance(name, str):
            raise TypeError(f"node name must be a str, got {type(name).__name__}")
        return self._names.setdefault(name, name)

    def _data(self, node_id: NodeId) -> _NodeData:
        if not isinstance(node_id, NodeId) or not 0 <= node_id.index < len(self._nodes):
            raise ValueError(f"the node ID is not used in the tree: {node_id!r}")
        return self._nodes[node_id.index]

    def _new_node(self, name: str) -> int:
        self._nodes.append(_NodeData(self._intern(name)))
        return len(self._nodes) - 1

    def _check_not_root(self, node_id: NodeId, message: str) -> None:
        if node_id == self._root_id:
            raise ValueError(message)

    def root(self) -> NodeHandle:
        """Return a handle to the implicit root node."""
        return NodeHandle(self, self._root_id)

    def append_new(self, parent: NodeId, name: str) -> NodeId:
        """Create a node and add it as the last child of `parent`."""
        parent_data = self._data(parent)
        index = self._new_node(name)
        child = self._nodes[index]
        child.parent = parent.index
        child.previous_sibling = parent_data.last_child
        if parent_data.last_child is None:
            parent_data.first_child = index
        else:
            self._nodes[parent_data.last_child].next_sibling = index
        parent_data.last_child = index
        return NodeId(index)

    def prepend_new(self, parent: NodeId, name: str) -> NodeId:
        """Create a node and add it as the first child of `parent`."""
        parent_data = self._data(parent)
        index = self._new_node(name)
        child = self._nodes[index]
        child.parent = parent.index
        child.next_sibling = parent_data.first_child
        if parent_data.first_child is None:
            parent_data.last_child = index
        else:
            self._nodes[parent_data.first_child].previous_sibling = index
        parent_data.first_child = index
        return NodeId(index)

    def insert_new_after(self, sibling: NodeId, name: str) -> NodeId:
        """Create a node and insert it right after `sibling`."""
        sibling_data = self._data(sibling)
        self._check_not_root(sibling, "the root node has no siblings")
        index = self._new_node(name)
        child = self._nodes[index]
        parent_data = self._nodes[sibling_data.parent]
        child.parent = sibling_data.parent
        child.previous_sibling = sibling.index
        child.next_sibling = sibling_data.next_sibling
        if sibling_data.next_sibling is None:
            parent_data.last_child = index
        else:
            self._nodes[sibling_data.next_sibling].previous_sibling = index
        sibling_data.next_sibling = index
        return NodeId(index)

    def insert_new_before(self, sibling: NodeId, name: str) -> NodeId:
        """Create a node and insert it right before `sibling`."""
        sibling_data = self._data(sibling)
        self._check_not_root(sibling, "the root node has no siblings")
        index = self._new_node(name)
        child = self._nodes[index]
        parent_data = self._nodes[sibling_data.parent]
        child.parent = sibling_data.parent
        child.next_sibling = sibling.index
        child.previous_sibling = sibling_data.previous_sibling
        if sibling_data.previous_sibling is None:
            parent_data.first_child = index
        else:
            self._nodes[sibling_data.previous_sibling].next_sibling = index
        sibling_data.previous_sibling = index
        return NodeId(index)

    def append_attribute(self, node_id: NodeId, value: Any) -> None:
        """Append an attribute to a (non-root) node."""
        data = self._data(node_id)
        self._check_not_root(node_id, "the root node has no attributes")
        data.attributes.append(attribute(value))

    def get_attribute(self, node_id: NodeId, index: int) -> AttributeValue | None:
        """Return the attribute at `index`, or None if there is none."""
        attributes = self._data(node_id).attributes
        if 0 <= index < len(attributes):
            return attributes[index]
        return None

    def set_attribute(self, node_id: NodeId, index: int, value: Any) -> None:
        """Replace the existing attribute at `index`."""
        attributes = self._data(node_id).attributes
        if not 0 <= index < len(attributes):
            raise IndexError(f"attribute index out of range: {index}")
        attributes[index] = attribute(value)

    def take_attributes(self, node_id: NodeId) -> list[AttributeValue]:
        """Remove and return all attributes of a node."""
        data = self._data(node_id)
        taken, data.attributes = data.attributes, []
        return taken

    def set_attributes(self, node_id: NodeId, values: Iterable[Any]) -> None:
        """Replace all attributes of a node."""
        data = self._data(node_id)
        data.attributes = [attribute(v) for v in values]

    def strict_eq(self, other: Tree) -> bool:
        """Compare tree contents exactly, with floats compared bitwise."""
        return self.root().strict_eq(other.root())

    def debug_tree(self) -> str:
        """Return a readable multi-line dump of the tree."""
        return "\n".join(_debug_lines(self.root(), 0))


def _debug_lines(node: NodeHandle, depth: int) -> list[str]:
    pad = "    " * depth
    inner = pad + "    "
    lines = [
        f"{pad}Node {{",
        f"{inner}name: {node.name()!r},",
        f"{inner}attributes: {list(node.attributes())!r},",
    ]
    children = list(node.children())
    if children:
        lines.append(f"{inner}children: [")
        for child in children:
            lines.extend(_debug_lines(child, depth + 2))
        lines.append(f"{inner}],")
    else:
        lines.append(f"{inner}children: [],")
    lines.append(f"{pad}}}" + ("," if depth else ""))
    return lines


@dataclass(frozen=True)
class NodeHandle:
    """A node in a particular tree."""

    tree: Tree
    node_id: NodeId

    def __post_init__(self) -> None:
        self.tree._data(self.node_id)

    def _data(self) -> _NodeData:
        return self.tree._data(self.node_id)

    def _related(self, index: int | None) -> NodeHandle | None:
        return None if index is None else NodeHandle(self.tree, NodeId(index))

    def name(self) -> str:
        """Return the node name."""
        return self._data().name

    def attributes(self) -> tuple[AttributeValue, ...]:
        """Return the node attributes."""
        return tuple(self._data().attributes)

    def children(self) -> Iterator[NodeHandle]:
        """Iterate over the children in order."""
        index = self._data().first_child
        while index is not None:
            yield NodeHandle(self.tree, NodeId(index))
            index = self.tree._nodes[index].next_sibling

    def children_by_name(self, name: str) -> Iterator[NodeHandle]:
        """Iterate over the children with the given name."""
        return (child for child in self.children() if child.name() == name)

    def first_child_by_name(self, name: str) -> NodeHandle | None:
        """Return the first child with the given name, if any."""
        return next(self.children_by_name(name), None)

    def strict_eq(self, other: NodeHandle) -> bool:
        """Compare subtrees exactly, with floats compared bitwise."""
        if self.name() != other.name():
            return False
        left, right = self.attributes(), other.attributes()
        if len(left) != len(right):
            return False
        if not all(l.strict_eq(r) for l, r in zip(left, right)):
            return False
        return all(
            l is not None and r is not None and l.strict_eq(r)
            for l, r in zip_longest(self.children(), other.children())
        )

    def parent(self) -> NodeHandle | None:
        return self._related(self._data().parent)

    def first_child(self) -> NodeHandle | None:
        return self._related(self._data().first_child)

    def last_child(self) -> NodeHandle | None:
        return self._related(self._data().last_child)

    def previous_sibling(self) -> NodeHandle | None:
        return self._related(self._data().previous_sibling)

    def next_sibling(self) -> NodeHandle | None:
        return self._related(self._data().next_sibling)