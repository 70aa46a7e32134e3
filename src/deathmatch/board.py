"""
Board topology: 9 cells and the 8 lines that alias them.

        c3  c4  c5
      +-----------+
  r0  | 0 | 1 | 2 |   3 horizontal lines
      |---+---+---|   3 vertical lines
  r1  | 3 | 4 | 5 |   2 diagonal lines
      |---+---+---|
  r2  | 6 | 7 | 8 |
      +-----------+
    d7            d6

Lines hold indices, not values: every read and write goes through the
board's cell list, so marking a line marks the board.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np

from .signatures import Glyph, LineCategory, classify, line_signature

WIN_PATTERNS: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

NUM_CELLS = 9

_BLANK_CHARS = ('.', '_', ' ')


class Line:
    """Three fixed positions on a board."""

    def __init__(self, cells: List[Glyph], indices: Sequence[int], rng: np.random.Generator) -> None:
        if len(indices) != 3:
            raise ValueError(f"A line has exactly 3 cells, got {len(indices)}")
        self._cells = cells
        self.indices: Tuple[int, int, int] = tuple(indices)  # type: ignore[assignment]
        self.rng = rng

    def cells(self) -> Tuple[Glyph, Glyph, Glyph]:
        c = self._cells
        i, j, k = self.indices
        return (c[i], c[j], c[k])

    def signature(self) -> int:
        return line_signature(self.cells())

    def matches(self, sig: int) -> bool:
        return self.signature() == sig

    def category(self, glyph: Glyph) -> LineCategory:
        return classify(self.cells(), glyph)

    def mark_one_of(self, glyph: Glyph) -> Optional[int]:
        """Write ``glyph`` into one blank cell of this line.

        The scan starts at offset 0 or 1 (uniformly) and wraps around, so
        when two cells are blank either may be picked. Returns the board
        index written, or None when the line is already full.
        """
        start = int(self.rng.integers(0, 2))
        for n in range(3):
            idx = self.indices[(start + n) % 3]
            if self._cells[idx] == Glyph.BLANK:
                self._cells[idx] = glyph
                return idx
        return None

    def __repr__(self) -> str:
        return f"Line({self.indices}, {''.join(g.char for g in self.cells())!r})"


class Board:
    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()
        self.cells: List[Glyph] = [Glyph.BLANK] * NUM_CELLS
        self.lines: List[Line] = [Line(self.cells, pattern, self.rng) for pattern in WIN_PATTERNS]
        self.last_move: Optional[int] = None

    @classmethod
    def from_string(cls, text: str, rng: Optional[np.random.Generator] = None) -> "Board":
        board = cls(rng)
        board.load(text)
        return board

    def clear(self) -> None:
        # in place: the lines alias this list
        self.cells[:] = [Glyph.BLANK] * NUM_CELLS
        self.last_move = None

    def load(self, text: str) -> None:
        """Set all cells from a 9-char string of X, O and '.', '_' or ' '.

        Row separators ('/' or '|') and surrounding whitespace are ignored.
        """
        raw = text.replace('/', '').replace('|', '').strip('\n')
        if len(raw) != NUM_CELLS:
            raise ValueError(f"Board string must have {NUM_CELLS} cells, got {len(raw)}: {text!r}")
        parsed: List[Glyph] = []
        for ch in raw:
            if ch in _BLANK_CHARS:
                parsed.append(Glyph.BLANK)
            elif ch.upper() == 'X':
                parsed.append(Glyph.X)
            elif ch.upper() == 'O':
                parsed.append(Glyph.O)
            else:
                raise ValueError(f"Invalid cell {ch!r} in board string {text!r}")
        self.cells[:] = parsed
        self.last_move = None

    def serialize(self) -> str:
        return ''.join('.' if g == Glyph.BLANK else g.char for g in self.cells)

    def has_line_matching(self, sig: int) -> bool:
        return any(line.matches(sig) for line in self.lines)

    def apply_move(self, glyph: Glyph, sig: int) -> bool:
        """Mark a blank cell in the first line whose signature is ``sig``.

        Lines are scanned cyclically from a uniformly random start. Returns
        False when no line currently has that signature.
        """
        count = len(self.lines)
        start = int(self.rng.integers(0, count))
        for n in range(count):
            line = self.lines[(start + n) % count]
            if line.matches(sig):
                idx = line.mark_one_of(glyph)
                if idx is None:
                    return False
                self.last_move = idx
                return True
        return False

    def lines_in(self, category: LineCategory, glyph: Glyph) -> List[Line]:
        return [line for line in self.lines if line.category(glyph) is category]

    def winner(self) -> Optional[Glyph]:
        for line in self.lines:
            category = line.category(Glyph.X)
            if category is LineCategory.THREE_MINE:
                return Glyph.X
            if category is LineCategory.THREE_THEIRS:
                return Glyph.O
        return None

    def is_full(self) -> bool:
        return Glyph.BLANK not in self.cells

    def empty_cells(self) -> List[int]:
        return [i for i, g in enumerate(self.cells) if g == Glyph.BLANK]

    def render(self) -> str:
        c = [g.char for g in self.cells]
        rows = [f"| {c[r]} | {c[r + 1]} | {c[r + 2]} |" for r in (0, 3, 6)]
        border = "+-----------+"
        sep = "|---+---+---|"
        return "\n".join([border, rows[0], sep, rows[1], sep, rows[2], border])

    def __str__(self) -> str:
        return self.render()
