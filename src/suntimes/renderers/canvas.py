"""Character-cell buffer with additive (OR) sub-pixel writes."""

from suntimes.renderers.glyphs import BLANK, decode, encode


class CellBuffer:
    """A rows × width grid of Braille glyphs. Row 0 is the top of the screen.

    Writes never clear a lit sub-pixel, so segments drawn independently
    through the same cell compose in any order.
    """

    __slots__ = ("width", "rows", "_cells")

    def __init__(self, width: int, rows: int):
        if width < 1 or rows < 1:
            raise ValueError(f"buffer must be at least 1x1, got {width}x{rows}")
        self.width = width
        self.rows = rows
        self._cells: list[list[str]] = [[BLANK] * width for _ in range(rows)]

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.width):
            raise IndexError(
                f"cell ({row}, {col}) outside {self.rows}x{self.width} buffer"
            )

    def merge(self, row: int, col: int, pattern: int) -> None:
        """OR `pattern` into the cell at (row, col)."""
        self._check(row, col)
        cells = self._cells[row]
        cells[col] = encode(decode(cells[col]) | pattern)

    def pattern_at(self, row: int, col: int) -> int:
        self._check(row, col)
        return decode(self._cells[row][col])

    def render(self) -> list[str]:
        """Return one string of exactly `width` glyphs per row, top to bottom."""
        return ["".join(cells) for cells in self._cells]
