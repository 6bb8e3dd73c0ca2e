import pytest

from fbxforge.footer import FbxFooter

UNKNOWN3 = bytes(
    [
        0xF8, 0x5A, 0x8C, 0x6A, 0xDE, 0xF5, 0xD9, 0x7E,
        0xEC, 0xE9, 0x0C, 0xE3, 0x75, 0x8F, 0x29, 0x0B,
    ]
)
CUSTOM_UNKNOWN1 = bytes(
    [
        0xFF, 0xBE, 0xAD, 0x0C, 0xDB, 0xCA, 0xD9, 0x68,
        0xB7, 0x76, 0xF5, 0x84, 0x13, 0xF2, 0x21, 0x70,
    ]
)


def test_defaults():
    footer = FbxFooter()
    assert footer.unknown3 == UNKNOWN3
    assert footer.unknown2 == bytes(4)
    assert footer.unknown1 == bytes(
        [
            0xF0, 0xB1, 0xA2, 0x03, 0xD4, 0xC5, 0xD6, 0x67,
            0xB8, 0x79, 0xFA, 0x8B, 0x1C, 0xFD, 0x2E, 0x7F,
        ]
    )
    assert footer.padding_len is None


def test_custom_unknown1_kept():
    footer = FbxFooter(unknown1=bytearray(CUSTOM_UNKNOWN1))
    assert footer.unknown1 == CUSTOM_UNKNOWN1
    assert footer.unknown3 == UNKNOWN3


@pytest.mark.parametrize("position", range(0, 48))
def test_default_padding_aligns_to_16(position):
    padding = FbxFooter().padding_for(position)
    assert 0 <= padding < 16
    assert (position + padding) % 16 == 0


@pytest.mark.parametrize("forced", [0, 5, 15, 255])
def test_forced_padding_is_used_as_is(forced):
    footer = FbxFooter(padding_len=forced)
    assert footer.padding_for(3) == forced
    assert footer.padding_for(16) == forced


@pytest.mark.parametrize(
    "kwargs",
    [
        {"unknown1": bytes(15)},
        {"unknown2": bytes(5)},
        {"unknown3": bytes(17)},
        {"padding_len": 256},
        {"padding_len": -1},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValueError):
        FbxFooter(**kwargs)


def test_wrong_types_rejected():
    with pytest.raises(TypeError):
        FbxFooter(unknown1="0123456789abcdef")
    with pytest.raises(TypeError):
        FbxFooter(padding_len=1.5)