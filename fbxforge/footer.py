"""FBX 7.4 binary footer."""

from __future__ import annotations

from dataclasses import dataclass

_DEFAULT_UNKNOWN1 = bytes(
    [
        0xF0, 0xB1, 0xA2, 0x03, 0xD4, 0xC5, 0xD6, 0x67,
        0xB8, 0x79, 0xFA, 0x8B, 0x1C, 0xFD, 0x2E, 0x7F,
    ]
)
_DEFAULT_UNKNOWN2 = bytes(4)
_DEFAULT_UNKNOWN3 = bytes(
    [
        0xF8, 0x5A, 0x8C, 0x6A, 0xDE, 0xF5, 0xD9, 0x7E,
        0xEC, 0xE9, 0x0C, 0xE3, 0x75, 0x8F, 0x29, 0x0B,
    ]
)


def _check_bytes(name: str, value: object, length: int) -> bytes:
    if isinstance(value, (str, int)):
        raise TypeError(f"{name} must be bytes, got {type(value).__name__}")
    data = bytes(value)  # type: ignore[arg-type]
    if len(data) != length:
        raise ValueError(f"{name} must be exactly {length} bytes, got {len(data)}")
    return data


@dataclass(frozen=True)
class FbxFooter:
    """Footer data written after the node records.

    `unknown1` is semi-random data (exporters of the official SDK fix its
    upper four bits), `unknown2` is normally all zeroes and `unknown3` is a
    fixed magic. `padding_len` of None means the correct padding that aligns
    the footer to 16 bytes; an integer forces that many zero bytes.
    """

    unknown1: bytes = _DEFAULT_UNKNOWN1
    padding_len: int | None = None
    unknown2: bytes = _DEFAULT_UNKNOWN2
    unknown3: bytes = _DEFAULT_UNKNOWN3

    def __post_init__(self) -> None:
        object.__setattr__(self, "unknown1", _check_bytes("unknown1", self.unknown1, 16))
        object.__setattr__(self, "unknown2", _check_bytes("unknown2", self.unknown2, 4))
        object.__setattr__(self, "unknown3", _check_bytes("unknown3", self.unknown3, 16))
        if self.padding_len is not None:
            if isinstance(self.padding_len, bool) or not isinstance(self.padding_len, int):
                raise TypeError("padding_len must be an integer or None")
            if not 0 <= self.padding_len <= 0xFF:
                raise ValueError(f"padding_len must fit in one byte: {self.padding_len}")

    def padding_for(self, position: int) -> int:
        """Return the number of zero bytes to write at stream `position`."""
        if self.padding_len is None:
            return -position & 0x0F
        return self.padding_len