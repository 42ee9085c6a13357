from __future__ import annotations

import pytest

from suntimes.renderers.glyphs import BLANK, BRAILLE_BASE, decode, encode


def test_every_pattern_round_trips() -> None:
    for pattern in range(256):
        assert decode(encode(pattern)) == pattern


def test_blank_pattern_is_a_space() -> None:
    assert encode(0) == BLANK == " "
    assert decode(" ") == 0


def test_nonzero_patterns_map_into_braille_block() -> None:
    glyphs = {encode(pattern) for pattern in range(1, 256)}
    assert len(glyphs) == 255
    assert all(BRAILLE_BASE < ord(glyph) <= BRAILLE_BASE + 0xFF for glyph in glyphs)


@pytest.mark.parametrize(
    ("pattern", "glyph"),
    [
        (0b0000_0001, "⠁"),  # left column, top
        (0b0000_1000, "⡀"),  # left column, bottom (dot 7)
        (0b0001_0000, "⠈"),  # right column, top
        (0b1000_0000, "⢀"),  # right column, bottom (dot 8)
        (0b0000_1111, "⡇"),
        (0b1111_0000, "⢸"),
        (0b1000_1000, "⣀"),
        (0b1111_1111, "⣿"),
    ],
)
def test_internal_layout_matches_unicode_dots(pattern: int, glyph: str) -> None:
    assert encode(pattern) == glyph
    assert decode(glyph) == pattern


@pytest.mark.parametrize("pattern", [-1, 256])
def test_encode_rejects_out_of_range_patterns(pattern: int) -> None:
    with pytest.raises(ValueError):
        encode(pattern)


@pytest.mark.parametrize("glyph", ["a", "", "⠁⠁", chr(0x2900)])
def test_decode_rejects_non_braille_glyphs(glyph: str) -> None:
    with pytest.raises(ValueError):
        decode(glyph)
