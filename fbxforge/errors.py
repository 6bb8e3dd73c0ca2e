"""Errors raised while writing FBX binary data."""

from __future__ import annotations

from typing import Any


class WriterError(Exception):
    """Base class of all binary writer errors."""


class AttributeTooLongError(WriterError):
    """A node attribute does not fit in the format's length field."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"Node attribute is too long: {length} bytes")


class CompressionError(WriterError):
    """Compressing an array attribute failed."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Compression error: Zlib compression error: {cause}")


class FileTooLargeError(WriterError):
    """An offset does not fit in the format's offset field."""

    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__(f"File is too large: {size} bytes")


class NoNodesToCloseError(WriterError):
    """A node was closed while no node was open."""

    def __init__(self) -> None:
        super().__init__("There are no nodes to close")


class NodeNameTooLongError(WriterError):
    """A node name is longer than 255 bytes."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"Node name is too long: {length} bytes")


class TooManyArrayAttributeElementsError(WriterError):
    """An array attribute has more elements than the format can count."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(
            f"Too many array elements for a single node attribute: count={count}"
        )


class TooManyAttributesError(WriterError):
    """A node has more attributes than the format can count."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Too many attributes: count={count}")


class UnclosedNodeError(WriterError):
    """The writer was finalized while nodes were still open."""

    def __init__(self, depth: int) -> None:
        self.depth = depth
        super().__init__(f"There remains unclosed nodes: depth={depth}")


class UnsupportedFbxVersionError(WriterError):
    """The requested FBX version cannot be written."""

    def __init__(self, version: Any) -> None:
        self.version = version
        super().__init__(f"Unsupported FBX version: {version!r}")