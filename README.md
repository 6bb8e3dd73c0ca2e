# fbxforge

fbxforge builds FBX 7.4-and-later data trees in memory and writes them out as binary FBX. It has no dependencies beyond the standard library.

## Installation

```
pip install fbxforge
```

To run the test suite, install the `test` extra and run `pytest`.

## Attribute values

`fbxforge.values.AttributeValue` is a typed attribute. It holds an `AttributeType` member and a value. Values are normalised when the object is created:

- arrays become tuples
- binary data becomes `bytes`
- `F32` values are rounded to single precision
- integers are range-checked

`fbxforge.values.attribute(value)` converts plain Python values:

| Python value | Attribute type |
| --- | --- |
| `bool` | `BOOL` |
| `int` | `I32` if it fits, otherwise `I64` |
| `float` | `F64` |
| `str` | `STRING` |
| `bytes` | `BINARY` |
| non-empty list or tuple | matching array type |

`AttributeValue.strict_eq` compares floating-point values bitwise.

## Building a tree

A tree can be built one node at a time:

```python
from fbxforge.tree import Tree

tree = Tree()
root = tree.root().node_id
node = tree.append_new(root, "Node0")
tree.append_attribute(node, 42)
tree.append_new(node, "Node0_0")

for child in tree.root().children():
    print(child.name(), child.attributes())
```

`Tree` can add nodes with these methods:

- `append_new`
- `prepend_new`
- `insert_new_after`
- `insert_new_before`

It can edit attributes with these methods:

- `append_attribute`
- `get_attribute`
- `set_attribute`
- `take_attributes`
- `set_attributes`

`NodeHandle` lets you move through the tree:

- to neighbouring nodes: `parent`, `first_child`, `last_child`, `previous_sibling`, `next_sibling`
- to children: `children`, `children_by_name`, `first_child_by_name`

`Tree.debug_tree()` returns a readable text dump of the tree.

`fbxforge.builder.build_tree(spec)` builds a tree from nested entries. Each entry is either `(name, children)` or `(name, attributes, children)`:

```python
from fbxforge.builder import build_tree

tree = build_tree([
    ("Node0", [("Node0_0", []), ("Node0_1", [])]),
    ("Node1", [True], [
        ("Node1_0", [42, 1.234], []),
        ("Node1_1", [b"\x01\x02\x04", "Hello, world"], []),
    ]),
])
```

`Tree.strict_eq` compares the contents of two trees: names, attributes and children, in order. Floating-point attributes are compared bitwise.

## Walking a tree

`fbxforge.traversal.traverse_depth_first(node_id)` returns a `DepthFirstTraverseSubtree` cursor over a node and its descendants. It produces `DepthFirstTraversed` open and close events.

The cursor has two ends:

- the front end moves with `next_forward`, `next_open_forward` and `next_close_forward`
- the back end moves with `next_backward`, `next_open_backward` and `next_close_backward`

`peek_forward` and `peek_backward` return the event at each end without moving. Once the two ends meet, both directions are exhausted.

## Writing binary FBX

```python
import io
from fbxforge.footer import FbxFooter
from fbxforge.values import ArrayAttributeEncoding
from fbxforge.writer import Writer

writer = Writer(io.BytesIO(), 7400)
attrs = writer.new_node("NodeName")
attrs.append_bool(True)
attrs.append_arr_i32([1, 2, 4, 8, 16])
attrs.append_arr_f32([3.14, 1.412], ArrayAttributeEncoding.ZLIB)
attrs.append_string("Hello, world")
writer.close_node()
sink = writer.finalize_and_flush(FbxFooter())
```

The FBX version is given as a raw number, such as `7400` or `7500`. The header width depends on it:

- versions below 7500 use 32-bit node header fields
- version 7500 and later use 64-bit fields

The sink must be seekable.

After finalizing, the writer cannot be used again; further calls raise `RuntimeError`.

To write a whole tree, call `Writer.write_tree(tree)`. To write straight from a specification in the `build_tree` form, call `fbxforge.writer.write_nodes(writer, spec)`.

`FbxFooter` holds the footer fields:

- `unknown1`, `unknown2` and `unknown3` default to the usual values
- `padding_len=None` pads the footer to a 16-byte boundary
- an integer `padding_len` forces that many zero bytes

Errors are subclasses of `fbxforge.errors.WriterError`. They include:

- `NodeNameTooLongError`
- `NoNodesToCloseError`
- `UnclosedNodeError`
- `UnsupportedFbxVersionError`
- `AttributeTooLongError`
- `FileTooLargeError`
- `TooManyAttributesError`
- `TooManyArrayAttributeElementsError`
- `CompressionError`

## What this package does not do

fbxforge only writes FBX. It cannot read or parse FBX files, so a tree cannot be loaded from an existing document. It does not provide a command-line tool.