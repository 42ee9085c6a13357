"""Braille glyph codec — 8-bit sub-pixel patterns to Unicode Braille characters.

Internal pattern layout (one nibble per sub-column, bit 3 = bottom sub-row):

    left column   right column
    bit 0         bit 4          top
    bit 1         bit 5
    bit 2         bit 6
    bit 3         bit 7          bottom

Unicode numbers the dots differently: dots 1-3 (bits 0-2) and 4-6 (bits 3-5)
cover the upper three rows of each column, dots 7 and 8 (bits 6, 7) the
bottom row.
"""

BRAILLE_BASE = 0x2800
BLANK = " "

# Internal pattern bits
_LEFT_UPPER = 0b0000_0111
_RIGHT_UPPER = 0b0111_0000
_LEFT_BOTTOM = 0b0000_1000
_RIGHT_BOTTOM = 0b1000_0000

# Unicode dot bits
_DOTS_1_3 = 0b0000_0111
_DOTS_4_6 = 0b0011_1000
_DOT_7 = 0b0100_0000
_DOT_8 = 0b1000_0000


def encode(pattern: int) -> str:
    """Return the glyph that displays `pattern`; 0 is a plain space."""
    if not 0 <= pattern <= 0xFF:
        raise ValueError(f"pattern out of range: {pattern!r}")
    if pattern == 0:
        return BLANK
    dots = (pattern & _RIGHT_UPPER) >> 1 | (pattern & _LEFT_UPPER)
    if pattern & _LEFT_BOTTOM:
        dots |= _DOT_7
    if pattern & _RIGHT_BOTTOM:
        dots |= _DOT_8
    return chr(BRAILLE_BASE + dots)


def decode(glyph: str) -> int:
    """Return the sub-pixel pattern displayed by `glyph`; a space is 0."""
    if glyph == BLANK:
        return 0
    if len(glyph) != 1 or not 0 <= ord(glyph) - BRAILLE_BASE <= 0xFF:
        raise ValueError(f"not a braille glyph: {glyph!r}")
    dots = ord(glyph) - BRAILLE_BASE
    pattern = (dots & _DOTS_4_6) << 1 | (dots & _DOTS_1_3)
    if dots & _DOT_7:
        pattern |= _LEFT_BOTTOM
    if dots & _DOT_8:
        pattern |= _RIGHT_BOTTOM
    return pattern
