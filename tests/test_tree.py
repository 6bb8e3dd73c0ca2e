import math

import pytest

from fbxforge.tree import NodeId, Tree
from fbxforge.values import AttributeType, AttributeValue, attribute


def names(handles):
    return [h.name() for h in handles]


def make_sample():
    tree = Tree()
    root = tree.root().node_id
    node0 = tree.append_new(root, "Node0")
    tree.append_new(node0, "Node0_0")
    tree.append_new(node0, "Node0_1")
    node1 = tree.append_new(root, "Node1")
    tree.append_attribute(node1, True)
    node1_0 = tree.append_new(node1, "Node1_0")
    tree.append_attribute(node1_0, 42)
    tree.append_attribute(node1_0, 1.234)
    node1_1 = tree.append_new(node1, "Node1_1")
    tree.append_attribute(node1_1, bytes([1, 2, 4, 8, 16]))
    tree.append_attribute(node1_1, "Hello, world")
    return tree


def test_empty_trees_strict_eq():
    assert Tree().strict_eq(Tree())


def test_root_is_unnamed_and_parentless():
    root = Tree().root()
    assert root.name() == ""
    assert root.parent() is None
    assert list(root.children()) == []


def test_sample_trees_equal_and_differ_from_empty():
    assert make_sample().strict_eq(make_sample())
    assert not Tree().strict_eq(make_sample())


def test_append_and_prepend_order():
    tree = Tree()
    root = tree.root().node_id
    tree.append_new(root, "b")
    tree.append_new(root, "c")
    tree.prepend_new(root, "a")
    assert names(tree.root().children()) == ["a", "b", "c"]
    assert tree.root().first_child().name() == "a"
    assert tree.root().last_child().name() == "c"


def test_insert_after_and_before():
    tree = Tree()
    root = tree.root().node_id
    first = tree.append_new(root, "first")
    last = tree.append_new(root, "last")
    tree.insert_new_after(first, "middle")
    tree.insert_new_before(first, "zeroth")
    tree.insert_new_after(last, "end")
    assert names(tree.root().children()) == ["zeroth", "first", "middle", "last", "end"]
    assert tree.root().last_child().name() == "end"
    assert tree.root().first_child().name() == "zeroth"


def test_sibling_links_are_consistent():
    tree = make_sample()
    children = list(tree.root().children())
    assert children[0].next_sibling() == children[1]
    assert children[1].previous_sibling() == children[0]
    assert children[0].previous_sibling() is None
    assert children[1].next_sibling() is None
    for child in children:
        assert child.parent() == tree.root()


def test_insert_next_to_root_is_rejected():
    tree = Tree()
    root = tree.root().node_id
    with pytest.raises(ValueError):
        tree.insert_new_after(root, "x")
    with pytest.raises(ValueError):
        tree.insert_new_before(root, "x")


def test_root_cannot_get_attributes():
    tree = Tree()
    with pytest.raises(ValueError):
        tree.append_attribute(tree.root().node_id, 1)


def test_unknown_node_id_is_rejected():
    tree = Tree()
    with pytest.raises(ValueError):
        NodeId(99).to_handle(tree)
    with pytest.raises(ValueError):
        tree.append_new(NodeId(99), "x")


def test_attributes_are_converted():
    tree = make_sample()
    node1_0 = tree.root().first_child_by_name("Node1").first_child_by_name("Node1_0")
    assert node1_0.attributes() == (attribute(42), attribute(1.234))
    assert node1_0.attributes()[0].type is AttributeType.I32


def test_get_and_set_attribute():
    tree = make_sample()
    node1 = tree.root().first_child_by_name("Node1").node_id
    assert tree.get_attribute(node1, 0) == attribute(True)
    assert tree.get_attribute(node1, 1) is None
    tree.set_attribute(node1, 0, False)
    assert tree.get_attribute(node1, 0) == attribute(False)
    with pytest.raises(IndexError):
        tree.set_attribute(node1, 5, True)


def test_take_and_set_attributes():
    tree = make_sample()
    node = tree.root().first_child_by_name("Node1").first_child_by_name("Node1_1")
    taken = tree.take_attributes(node.node_id)
    assert taken == [attribute(bytes([1, 2, 4, 8, 16])), attribute("Hello, world")]
    assert node.attributes() == ()
    tree.set_attributes(node.node_id, reversed(taken))
    assert node.attributes() == (taken[1], taken[0])


def test_children_by_name():
    tree = Tree()
    root = tree.root().node_id
    tree.append_new(root, "Dup")
    tree.append_new(root, "Other")
    second = tree.append_new(root, "Dup")
    tree.append_attribute(second, 7)
    found = list(tree.root().children_by_name("Dup"))
    assert len(found) == 2
    assert found[1].attributes() == (attribute(7),)
    assert list(tree.root().children_by_name("Missing")) == []
    assert tree.root().first_child_by_name("Missing") is None


def test_strict_eq_detects_attribute_difference():
    left = make_sample()
    right = make_sample()
    node = right.root().first_child_by_name("Node1").node_id
    right.set_attribute(node, 0, False)
    assert not left.strict_eq(right)


def test_strict_eq_detects_extra_child():
    left = make_sample()
    right = make_sample()
    right.append_new(right.root().first_child_by_name("Node0").node_id, "Extra")
    assert not left.strict_eq(right)
    assert not right.strict_eq(left)


def test_strict_eq_compares_nan_bitwise():
    def build():
        tree = Tree()
        node = tree.append_new(tree.root().node_id, "Node2_1")
        tree.append_attribute(node, AttributeValue(AttributeType.ARR_F32, [math.nan, math.inf]))
        tree.append_attribute(node, [math.nan, math.inf])
        return tree

    assert build().strict_eq(build())


def test_debug_tree_lists_nodes():
    text = make_sample().debug_tree()
    for name in ["Node0", "Node0_0", "Node1_1"]:
        assert f"name: {name!r}" in text
    assert text.index("'Node0_1'") < text.index("'Node1'")
    assert text.startswith("Node {")
    assert text.endswith("}")


def test_handle_equality_by_id():
    tree = make_sample()
    first = tree.root().first_child()
    assert first == first.node_id.to_handle(tree)
    assert first.tree is tree