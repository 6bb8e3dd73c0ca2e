"""Binary writer for FBX 7.4 and later."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, BinaryIO, Iterable

from .attributes_writer import AttributesWriter
from .builder import build_tree
from .errors import (
    AttributeTooLongError,
    FileTooLargeError,
    NodeNameTooLongError,
    NoNodesToCloseError,
    TooManyAttributesError,
    UnclosedNodeError,
    UnsupportedFbxVersionError,
)
from .footer import FbxFooter
from .traversal import traverse_depth_first
from .tree import Tree

MAGIC = b"Kaydara FBX Binary  \x00\x1a\x00"

_U32_MAX = 0xFFFF_FFFF
_FOOTER_ZEROES = 120


@dataclass
class _OpenNode:
    header_pos: int
    body_pos: int
    name_len: int
    attrs: AttributesWriter
    has_child: bool = False
    num_attributes: int = 0
    bytelen_attributes: int = 0
    attrs_finalized: bool = False


class Writer:
    """Writes FBX binary data to a seekable binary sink.

    `fbx_version` is the raw version number, such as 7400 or 7500. Nodes are
    opened with :meth:`new_node` and closed with :meth:`close_node`; the
    writer must be finished with :meth:`finalize` or
    :meth:`finalize_and_flush`.
    """

    def __init__(self, sink: BinaryIO, fbx_version: int) -> None:
        if isinstance(fbx_version, bool) or not isinstance(fbx_version, int):
            raise TypeError(f"FBX version must be an integer, got {fbx_version!r}")
        if fbx_version // 1000 != 7:
            raise UnsupportedFbxVersionError(fbx_version)
        self.fbx_version = fbx_version
        self._sink: BinaryIO | None = sink
        self._open_nodes: list[_OpenNode] = []
        sink.seek(0)
        sink.write(MAGIC)
        sink.write(struct.pack("<I", fbx_version))

    @property
    def depth(self) -> int:
        """Number of nodes currently open."""
        return len(self._open_nodes)

    def _active_sink(self) -> BinaryIO:
        if self._sink is None:
            raise RuntimeError("the writer has already been finalized")
        return self._sink

    def _write_node_header(
        self, end_offset: int, num_attributes: int, bytelen_attributes: int, name_len: int
    ) -> None:
        sink = self._active_sink()
        if self.fbx_version < 7500:
            if end_offset > _U32_MAX:
                raise FileTooLargeError(end_offset)
            if num_attributes > _U32_MAX:
                raise TooManyAttributesError(num_attributes)
            if bytelen_attributes > _U32_MAX:
                raise AttributeTooLongError(bytelen_attributes)
            fmt = "<IIIB"
        else:
            fmt = "<QQQB"
        sink.write(struct.pack(fmt, end_offset, num_attributes, bytelen_attributes, name_len))

    def _write_node_end(self) -> None:
        self._write_node_header(0, 0, 0, 0)

    def _finalize_attributes(self) -> None:
        if not self._open_nodes:
            return
        current = self._open_nodes[-1]
        if current.attrs_finalized:
            return
        current.bytelen_attributes = self._active_sink().tell() - current.body_pos
        current.num_attributes = current.attrs.num_attributes
        current.attrs_finalized = True

    def new_node(self, name: str) -> AttributesWriter:
        """Open a new child of the current node and return its attribute writer."""
        sink = self._active_sink()
        self._finalize_attributes()
        if self._open_nodes:
            self._open_nodes[-1].has_child = True

        encoded = name.encode("utf-8")
        if len(encoded) > 0xFF:
            raise NodeNameTooLongError(len(encoded))

        header_pos = sink.tell()
        self._write_node_header(0, 0, 0, len(encoded))
        sink.write(encoded)
        attrs = AttributesWriter(sink)
        self._open_nodes.append(
            _OpenNode(
                header_pos=header_pos,
                body_pos=sink.tell(),
                name_len=len(encoded),
                attrs=attrs,
            )
        )
        return attrs

    def close_node(self) -> None:
        """Close the current node."""
        sink = self._active_sink()
        self._finalize_attributes()
        if not self._open_nodes:
            raise NoNodesToCloseError()
        node = self._open_nodes.pop()

        if node.has_child or node.num_attributes == 0:
            self._write_node_end()

        end_pos = sink.tell()
        sink.seek(node.header_pos)
        self._write_node_header(
            end_pos, node.num_attributes, node.bytelen_attributes, node.name_len
        )
        sink.seek(end_pos)

    def write_tree(self, tree: Tree) -> None:
        """Write every node of `tree` below its implicit root."""
        root_id = tree.root().node_id
        cursor = traverse_depth_first(root_id)
        while (event := cursor.next_forward(tree)) is not None:
            if event.node_id == root_id:
                continue
            if event.is_open:
                node = event.node_id.to_handle(tree)
                attrs = self.new_node(node.name())
                for value in node.attributes():
                    attrs.append_value(value)
            else:
                self.close_node()

    def _finalize(self, footer: FbxFooter | None) -> BinaryIO:
        sink = self._active_sink()
        footer = FbxFooter() if footer is None else footer
        if self._open_nodes:
            raise UnclosedNodeError(len(self._open_nodes))

        self._write_node_end()
        sink.write(footer.unknown1)
        sink.write(bytes(footer.padding_for(sink.tell())))
        sink.write(footer.unknown2)
        sink.write(struct.pack("<I", self.fbx_version))
        sink.write(bytes(_FOOTER_ZEROES))
        sink.write(footer.unknown3)
        self._sink = None
        return sink

    def finalize(self, footer: FbxFooter | None = None) -> BinaryIO:
        """Write the end of the document and the footer, and return the sink."""
        return self._finalize(footer)

    def finalize_and_flush(self, footer: FbxFooter | None = None) -> BinaryIO:
        """Like :meth:`finalize`, flushing the sink before returning it."""
        sink = self._finalize(footer)
        sink.flush()
        return sink


def write_nodes(writer: Writer, spec: Iterable[Any]) -> None:
    """Write nodes described as in :func:`fbxforge.builder.build_tree`."""
    writer.write_tree(build_tree(spec))