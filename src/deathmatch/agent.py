"""Rule-based agent: a fixed priority over line categories."""
from __future__ import annotations

from typing import Optional, Tuple

from .board import Board
from .signatures import PLAYERS, Glyph, LineCategory, Signatures, signature_for

# win now, block, extend own line, contest their line, open a fresh line
PRIORITY: Tuple[LineCategory, ...] = (
    LineCategory.TWO_MINE,
    LineCategory.TWO_THEIRS,
    LineCategory.ONE_MINE,
    LineCategory.ONE_THEIRS,
    LineCategory.EMPTY,
)


class Agent:
    """
    Plays one glyph on a shared board.

    Each turn the agent walks PRIORITY and plays into the first category
    that some line currently falls in. There is no lookahead and no memory
    of earlier games; the only randomness is which qualifying line and which
    blank cell the board picks.
    """

    def __init__(self, glyph: Glyph, board: Board) -> None:
        glyph = Glyph(glyph)
        if glyph not in PLAYERS:
            raise ValueError(f"Agent glyph must be X or O, got {glyph!r}")
        self.glyph = glyph
        self.board = board
        self.signatures = Signatures.for_glyph(glyph)
        self._ordered = tuple((category, signature_for(category, glyph)) for category in PRIORITY)
        self.last_category: Optional[LineCategory] = None

    def move(self) -> bool:
        """Make one move. Returns False when no category applies (draw)."""
        for category, sig in self._ordered:
            if self.board.apply_move(self.glyph, sig):
                self.last_category = category
                return True
        self.last_category = None
        return False

    def is_winner(self) -> bool:
        return self.board.has_line_matching(self.signatures.win)

    def __repr__(self) -> str:
        return f"Agent({self.glyph.char})"
