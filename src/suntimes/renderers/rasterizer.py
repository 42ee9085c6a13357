"""Line rasterizer — draws straight segments into a CellBuffer at sub-pixel resolution.

Sub-pixel coordinates: x has two units per character column, y has four
units per character row and grows upwards (y = 0 is the bottom sub-row of
the bottom buffer row).
"""

from typing import NamedTuple

from suntimes.renderers.canvas import CellBuffer

SUBPIXELS_X = 2
SUBPIXELS_Y = 4

_TOP = 0b0001
_BOTTOM = 0b1000

# Two lit sub-pixels with a hole between them, and their filled replacement
_GAP_FILLS: dict[int, int] = {
    0b0101: 0b0111,
    0b1010: 0b1110,
    0b1001: 0b1111,
}


class SubpixelPoint(NamedTuple):
    x: int
    y: int


def _bit(y: int) -> int:
    return 1 << (3 - y % SUBPIXELS_Y)


def column_pattern(y_from: int, y_to: int) -> int:
    """Return the 4-bit column mask lit by a run from `y_from` towards `y_to`.

    Only the cell holding `y_from` is considered. If `y_to` lies in another
    cell, the run is clipped at the cell edge it leaves through. Masks with
    an unlit hole between two lit sub-pixels are filled in.
    """
    pattern = _bit(y_from)
    if y_to // SUBPIXELS_Y == y_from // SUBPIXELS_Y:
        pattern |= _bit(y_to)
    elif y_to < y_from:
        pattern |= _BOTTOM
    else:
        pattern |= _TOP
    return _GAP_FILLS.get(pattern, pattern)


def _div_trunc(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


def y_at(start: SubpixelPoint, end: SubpixelPoint, x: int) -> int:
    """Interpolate y on the segment at `x`, truncating toward zero."""
    dx = end.x - start.x
    dy = end.y - start.y
    return start.y + _div_trunc(dy * (x - start.x), dx)


def _plot(buffer: CellBuffer, x: int, y: int, column: int) -> None:
    if x % SUBPIXELS_X:
        column <<= 4
    row = buffer.rows - 1 - y // SUBPIXELS_Y
    buffer.merge(row, x // SUBPIXELS_X, column)


def draw_segment(buffer: CellBuffer, start: SubpixelPoint, end: SubpixelPoint) -> None:
    """Draw the segment from `start` to `end` into `buffer`.

    Vertical segments advance one character row per step; all others advance
    one sub-column per step. A zero-length segment lights a single sub-pixel.

    Raises:
        ValueError: If `end` lies left of `start`.
        IndexError: If the segment leaves the buffer.
    """
    if end.x < start.x:
        raise ValueError(f"segment must run left to right: {start} -> {end}")

    if start == end:
        _plot(buffer, start.x, start.y, column_pattern(start.y, start.y))
        return

    if start.x == end.x:
        rising = end.y > start.y
        y = start.y
        while (rising and y <= end.y) or (not rising and y >= end.y):
            _plot(buffer, start.x, y, column_pattern(y, end.y))
            y -= y % SUBPIXELS_Y
            y += SUBPIXELS_Y if rising else -1
        return

    x, y = start
    while x < end.x:
        _plot(buffer, x, y, column_pattern(y, y_at(start, end, x + 1)))
        x += 1
        y = y_at(start, end, x)
