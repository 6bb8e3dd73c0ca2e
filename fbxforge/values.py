"""Node attribute values and their binary type codes."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any


class AttributeType(Enum):
    """Attribute type; the value is the one-byte type code used on disk."""

    BOOL = b"C"
    I16 = b"Y"
    I32 = b"I"
    I64 = b"L"
    F32 = b"F"
    F64 = b"D"
    ARR_BOOL = b"b"
    ARR_I32 = b"i"
    ARR_I64 = b"l"
    ARR_F32 = b"f"
    ARR_F64 = b"d"
    BINARY = b"R"
    STRING = b"S"


class ArrayAttributeEncoding(IntEnum):
    """Encoding of array attribute elements."""

    DIRECT = 0
    ZLIB = 1


_INT_BITS = {
    AttributeType.I16: 16,
    AttributeType.I32: 32,
    AttributeType.I64: 64,
}

_ARRAY_ELEMENT = {
    AttributeType.ARR_BOOL: AttributeType.BOOL,
    AttributeType.ARR_I32: AttributeType.I32,
    AttributeType.ARR_I64: AttributeType.I64,
    AttributeType.ARR_F32: AttributeType.F32,
    AttributeType.ARR_F64: AttributeType.F64,
}

_FLOAT_FORMATS = {
    AttributeType.F32: "f",
    AttributeType.F64: "d",
    AttributeType.ARR_F32: "f",
    AttributeType.ARR_F64: "d",
}


def _fits(value: int, bits: int) -> bool:
    limit = 1 << (bits - 1)
    return -limit <= value < limit


def _check_int(value: Any, bits: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {type(value).__name__}")
    if not _fits(value, bits):
        raise ValueError(f"{value} does not fit in a {bits}-bit signed integer")
    return value


def _check_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    return float(value)


def _to_f32(value: Any) -> float:
    number = _check_float(value)
    try:
        return struct.unpack("<f", struct.pack("<f", number))[0]
    except OverflowError:
        return math.copysign(math.inf, number)


def _normalize_scalar(kind: AttributeType, value: Any) -> Any:
    if kind is AttributeType.BOOL:
        if not isinstance(value, bool):
            raise TypeError(f"expected a bool, got {type(value).__name__}")
        return value
    if kind in _INT_BITS:
        return _check_int(value, _INT_BITS[kind])
    if kind is AttributeType.F32:
        return _to_f32(value)
    if kind is AttributeType.F64:
        return _check_float(value)
    if kind is AttributeType.STRING:
        if not isinstance(value, str):
            raise TypeError(f"expected a str, got {type(value).__name__}")
        return value
    if kind is AttributeType.BINARY:
        if isinstance(value, (int, str)):
            raise TypeError(f"expected bytes, got {type(value).__name__}")
        return bytes(value)
    raise TypeError(f"{kind} is not a scalar attribute type")


@dataclass(frozen=True)
class AttributeValue:
    """A typed node attribute value.

    Arrays are stored as tuples, binary data as bytes, and `F32` values are
    rounded to single precision.
    """

    type: AttributeType
    value: Any

    def __post_init__(self) -> None:
        if not isinstance(self.type, AttributeType):
            raise TypeError(f"expected an AttributeType, got {self.type!r}")
        element = _ARRAY_ELEMENT.get(self.type)
        if element is None:
            normalized = _normalize_scalar(self.type, self.value)
        else:
            if isinstance(self.value, (str, bytes, bytearray)):
                raise TypeError("array attributes take a sequence of elements")
            normalized = tuple(_normalize_scalar(element, v) for v in self.value)
        object.__setattr__(self, "value", normalized)

    def _packed(self) -> bytes:
        fmt = _FLOAT_FORMATS[self.type]
        values = self.value if self.type in _ARRAY_ELEMENT else (self.value,)
        return struct.pack(f"<{len(values)}{fmt}", *values)

    def strict_eq(self, other: AttributeValue) -> bool:
        """Compare values exactly; floating point values are compared bitwise."""
        if self.type is not other.type:
            return False
        if self.type not in _FLOAT_FORMATS:
            return self.value == other.value
        return self._packed() == other._packed()


def _infer_array(values: list | tuple) -> AttributeValue:
    if not values:
        raise TypeError("cannot infer the element type of an empty sequence")
    if all(isinstance(v, bool) for v in values):
        return AttributeValue(AttributeType.ARR_BOOL, values)
    if any(isinstance(v, bool) for v in values):
        raise TypeError("cannot mix booleans with other elements")
    if all(isinstance(v, int) for v in values):
        if all(_fits(v, 32) for v in values):
            return AttributeValue(AttributeType.ARR_I32, values)
        return AttributeValue(AttributeType.ARR_I64, values)
    if all(isinstance(v, (int, float)) for v in values):
        return AttributeValue(AttributeType.ARR_F64, values)
    raise TypeError("cannot infer an array attribute type from these elements")


def attribute(value: Any) -> AttributeValue:
    """Convert a plain Python value into an :class:`AttributeValue`.

    Integers become `I32` when they fit and `I64` otherwise, floats become
    `F64`, and lists or tuples become arrays of the matching kind.
    """
    if isinstance(value, AttributeValue):
        return value
    if isinstance(value, bool):
        return AttributeValue(AttributeType.BOOL, value)
    if isinstance(value, int):
        kind = AttributeType.I32 if _fits(value, 32) else AttributeType.I64
        return AttributeValue(kind, value)
    if isinstance(value, float):
        return AttributeValue(AttributeType.F64, value)
    if isinstance(value, str):
        return AttributeValue(AttributeType.STRING, value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return AttributeValue(AttributeType.BINARY, value)
    if isinstance(value, (list, tuple)):
        return _infer_array(value)
    raise TypeError(f"cannot convert {type(value).__name__} to an attribute value")