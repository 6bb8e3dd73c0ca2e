"""Build trees from nested node specifications."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from .tree import NodeId, Tree


def _iter_entries(spec: Iterable[Any]) -> Iterator[tuple[str, Iterable[Any], Iterable[Any]]]:
    if isinstance(spec, (str, bytes)):
        raise TypeError("a node specification must be a sequence of node entries")
    for entry in spec:
        if not isinstance(entry, tuple):
            raise TypeError(f"a node entry must be a tuple, got {type(entry).__name__}")
        if len(entry) == 2:
            name, children = entry
            attributes: Iterable[Any] = ()
        elif len(entry) == 3:
            name, attributes, children = entry
        else:
            raise ValueError(
                "a node entry must be (name, children) or (name, attributes, children)"
            )
        if isinstance(attributes, (str, bytes)):
            raise TypeError("node attributes must be given as a sequence of values")
        yield name, attributes, children


def _add_nodes(tree: Tree, parent: NodeId, spec: Iterable[Any]) -> None:
    for name, attributes, children in _iter_entries(spec):
        node = tree.append_new(parent, name)
        for value in attributes:
            tree.append_attribute(node, value)
        _add_nodes(tree, node, children)


def build_tree(spec: Iterable[Any]) -> Tree:
    """Build a tree from a sequence of node entries.

    Each entry is ``(name, children)`` or ``(name, attributes, children)``,
    where ``children`` is again a sequence of entries and ``attributes`` is a
    sequence of attribute values or plain Python values.
    """
    tree = Tree()
    _add_nodes(tree, tree.root().node_id, spec)
    return tree