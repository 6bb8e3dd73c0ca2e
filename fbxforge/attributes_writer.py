"""Writing node attributes in FBX binary form."""

from __future__ import annotations

import struct
import zlib
from typing import Any, BinaryIO, Iterable

from .errors import (
    AttributeTooLongError,
    CompressionError,
    TooManyArrayAttributeElementsError,
    TooManyAttributesError,
)
from .values import ArrayAttributeEncoding, AttributeType, AttributeValue, attribute

_U32_MAX = 0xFFFF_FFFF
_U64_MAX = 0xFFFF_FFFF_FFFF_FFFF
_CHUNK_SIZE = 64 * 1024

_SCALAR_FORMATS = {
    AttributeType.I16: "<h",
    AttributeType.I32: "<i",
    AttributeType.I64: "<q",
    AttributeType.F32: "<f",
    AttributeType.F64: "<d",
}

_ARRAY_ELEMENTS = {
    AttributeType.ARR_BOOL: AttributeType.BOOL,
    AttributeType.ARR_I32: AttributeType.I32,
    AttributeType.ARR_I64: AttributeType.I64,
    AttributeType.ARR_F32: AttributeType.F32,
    AttributeType.ARR_F64: AttributeType.F64,
}


def _element_bytes(kind: AttributeType, value: Any) -> bytes:
    if kind is AttributeType.BOOL:
        return b"Y" if value else b"T"
    return struct.pack(_SCALAR_FORMATS[kind], value)


class AttributesWriter:
    """Appends attributes of one node to a seekable binary sink.

    The sink must support `write`, `tell` and `seek`. The number of
    attributes written so far is available as `num_attributes`.
    """

    def __init__(self, sink: BinaryIO) -> None:
        self._sink = sink
        self._num_attributes = 0

    @property
    def num_attributes(self) -> int:
        return self._num_attributes

    def _begin(self, kind: AttributeType) -> None:
        if self._num_attributes >= _U64_MAX:
            raise TooManyAttributesError(self._num_attributes)
        self._num_attributes += 1
        self._sink.write(kind.value)

    def _append_scalar(self, kind: AttributeType, value: Any) -> None:
        normalized = AttributeValue(kind, value).value
        self._begin(kind)
        self._sink.write(_element_bytes(kind, normalized))

    def append_bool(self, value: bool) -> None:
        """Write a boolean attribute."""
        self._append_scalar(AttributeType.BOOL, value)

    def append_i16(self, value: int) -> None:
        """Write a 16-bit integer attribute."""
        self._append_scalar(AttributeType.I16, value)

    def append_i32(self, value: int) -> None:
        """Write a 32-bit integer attribute."""
        self._append_scalar(AttributeType.I32, value)

    def append_i64(self, value: int) -> None:
        """Write a 64-bit integer attribute."""
        self._append_scalar(AttributeType.I64, value)

    def append_f32(self, value: float) -> None:
        """Write a single precision float attribute."""
        self._append_scalar(AttributeType.F32, value)

    def append_f64(self, value: float) -> None:
        """Write a double precision float attribute."""
        self._append_scalar(AttributeType.F64, value)

    def _append_array(
        self,
        kind: AttributeType,
        values: Iterable[Any],
        encoding: ArrayAttributeEncoding | None,
    ) -> None:
        encoding = (
            ArrayAttributeEncoding.DIRECT
            if encoding is None
            else ArrayAttributeEncoding(encoding)
        )
        elements = AttributeValue(kind, values).value
        if len(elements) > _U32_MAX:
            raise TooManyArrayAttributeElementsError(len(elements))
        element_kind = _ARRAY_ELEMENTS[kind]
        payload = b"".join(_element_bytes(element_kind, v) for v in elements)
        if encoding is ArrayAttributeEncoding.ZLIB:
            try:
                payload = zlib.compress(payload)
            except zlib.error as exc:
                raise CompressionError(exc) from exc
        if len(payload) > _U32_MAX:
            raise AttributeTooLongError(len(payload))
        self._begin(kind)
        self._sink.write(struct.pack("<III", len(elements), int(encoding), len(payload)))
        self._sink.write(payload)

    def append_arr_bool(self, values: Iterable[bool], encoding=None) -> None:
        """Write a boolean array attribute; `encoding` None means direct."""
        self._append_array(AttributeType.ARR_BOOL, values, encoding)

    def append_arr_i32(self, values: Iterable[int], encoding=None) -> None:
        """Write a 32-bit integer array attribute."""
        self._append_array(AttributeType.ARR_I32, values, encoding)

    def append_arr_i64(self, values: Iterable[int], encoding=None) -> None:
        """Write a 64-bit integer array attribute."""
        self._append_array(AttributeType.ARR_I64, values, encoding)

    def append_arr_f32(self, values: Iterable[float], encoding=None) -> None:
        """Write a single precision float array attribute."""
        self._append_array(AttributeType.ARR_F32, values, encoding)

    def append_arr_f64(self, values: Iterable[float], encoding=None) -> None:
        """Write a double precision float array attribute."""
        self._append_array(AttributeType.ARR_F64, values, encoding)

    def _append_special(self, kind: AttributeType, chunks: Iterable[bytes]) -> None:
        self._begin(kind)
        header_pos = self._sink.tell()
        self._sink.write(bytes(4))
        length = 0
        for chunk in chunks:
            self._sink.write(chunk)
            length += len(chunk)
        if length > _U32_MAX:
            raise AttributeTooLongError(length)
        end_pos = self._sink.tell()
        self._sink.seek(header_pos)
        self._sink.write(struct.pack("<I", length))
        self._sink.seek(end_pos)

    def append_binary(self, data: bytes) -> None:
        """Write a binary attribute."""
        payload = AttributeValue(AttributeType.BINARY, data).value
        self._append_special(AttributeType.BINARY, [payload])

    def append_string(self, text: str) -> None:
        """Write a string attribute, encoded as UTF-8."""
        payload = AttributeValue(AttributeType.STRING, text).value.encode("utf-8")
        self._append_special(AttributeType.STRING, [payload])

    def append_binary_from_reader(self, reader: BinaryIO) -> None:
        """Write a binary attribute with everything read from `reader`."""
        self._append_special(
            AttributeType.BINARY, iter(lambda: reader.read(_CHUNK_SIZE), b"")
        )

    def append_binary_from_iter(self, iterable: Iterable[int]) -> None:
        """Write a binary attribute from an iterable of byte values."""
        self._append_special(AttributeType.BINARY, (bytes([b]) for b in iterable))

    def append_string_from_iter(self, chars: Iterable[str]) -> None:
        """Write a string attribute from an iterable of characters."""

        def encoded() -> Iterable[bytes]:
            for c in chars:
                if not isinstance(c, str):
                    raise TypeError(f"expected a str, got {type(c).__name__}")
                yield c.encode("utf-8")

        self._append_special(AttributeType.STRING, encoded())

    def append_value(self, value: Any) -> None:
        """Write any attribute value, converting plain values as `attribute` does."""
        av = attribute(value)
        kind = av.type
        if kind in _ARRAY_ELEMENTS:
            self._append_array(kind, av.value, None)
        elif kind is AttributeType.BINARY:
            self._append_special(kind, [av.value])
        elif kind is AttributeType.STRING:
            self._append_special(kind, [av.value.encode("utf-8")])
        else:
            self._append_scalar(kind, av.value)