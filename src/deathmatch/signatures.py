"""
Glyph codes, line signatures and line categories.
Notes:
- Each cell holds the ASCII code of its glyph: ' ' = 32, 'O' = 79, 'X' = 88.
- A line's signature is the sum of its three codes. Every multiset of three
  codes has its own sum, so a signature names one line pattern exactly:

      32 + 32 + 32 =  96   ___   empty
      79 + 32 + 32 = 143   O__   one O
      88 + 32 + 32 = 152   X__   one X
      79 + 79 + 32 = 190   OO_   two O
      88 + 79 + 32 = 199   XO_   mixed
      88 + 88 + 32 = 208   XX_   two X
      79 + 79 + 79 = 237   OOO   O wins
      79 + 79 + 88 = 246   OOX   full
      88 + 88 + 79 = 255   XXO   full
      88 + 88 + 88 = 264   XXX   X wins
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from itertools import combinations_with_replacement
from typing import Dict, Iterable, Tuple


class Glyph(IntEnum):
    BLANK = ord(' ')
    X = ord('X')
    O = ord('O')

    @property
    def char(self) -> str:
        return chr(self.value)

    @property
    def opponent(self) -> "Glyph":
        if self is Glyph.X:
            return Glyph.O
        if self is Glyph.O:
            return Glyph.X
        raise ValueError("BLANK has no opponent")

    @classmethod
    def parse(cls, text: str) -> "Glyph":
        key = text.strip().upper()
        if key == 'X':
            return cls.X
        if key == 'O':
            return cls.O
        raise ValueError(f"Unknown glyph: {text!r}")


PLAYERS = (Glyph.X, Glyph.O)


class LineCategory(Enum):
    """Contents of a line as seen by one player."""

    EMPTY = "empty"
    ONE_MINE = "one_mine"
    ONE_THEIRS = "one_theirs"
    TWO_MINE = "two_mine"
    TWO_THEIRS = "two_theirs"
    THREE_MINE = "three_mine"
    THREE_THEIRS = "three_theirs"
    DEAD = "dead"  # holds both glyphs; nobody can complete it


# (mine, theirs, blank) counts for every category that a signature can name
_CATEGORY_COUNTS: Dict[LineCategory, Tuple[int, int, int]] = {
    LineCategory.EMPTY: (0, 0, 3),
    LineCategory.ONE_MINE: (1, 0, 2),
    LineCategory.ONE_THEIRS: (0, 1, 2),
    LineCategory.TWO_MINE: (2, 0, 1),
    LineCategory.TWO_THEIRS: (0, 2, 1),
    LineCategory.THREE_MINE: (3, 0, 0),
    LineCategory.THREE_THEIRS: (0, 3, 0),
}


def line_signature(codes: Iterable[int]) -> int:
    return sum(int(c) for c in codes)


def signature_for(category: LineCategory, glyph: Glyph) -> int:
    """Signature of a line in ``category`` from ``glyph``'s point of view."""
    if glyph not in PLAYERS:
        raise ValueError(f"Not a player glyph: {glyph!r}")
    if category not in _CATEGORY_COUNTS:
        raise ValueError(f"Category has no single signature: {category}")
    mine, theirs, blank = _CATEGORY_COUNTS[category]
    return mine * glyph + theirs * glyph.opponent + blank * Glyph.BLANK


def classify(codes: Iterable[int], glyph: Glyph) -> LineCategory:
    cells = list(codes)
    if len(cells) != 3:
        raise ValueError(f"Not a line of three cells: {cells!r}")
    mine = cells.count(glyph)
    theirs = cells.count(glyph.opponent)
    if mine and theirs:
        return LineCategory.DEAD
    for category, (m, t, _) in _CATEGORY_COUNTS.items():
        if m == mine and t == theirs:
            return category
    raise ValueError(f"Unrecognised cell codes: {cells!r}")


def all_triple_sums() -> Dict[int, Tuple[Glyph, Glyph, Glyph]]:
    """Map every reachable triple sum to the multiset that produces it.

    Raises ValueError if two different multisets collide, which would make
    sum-based matching ambiguous.
    """
    sums: Dict[int, Tuple[Glyph, Glyph, Glyph]] = {}
    for triple in combinations_with_replacement(list(Glyph), 3):
        total = line_signature(triple)
        if total in sums:
            raise ValueError(f"Signature collision at {total}: {sums[total]} vs {triple}")
        sums[total] = triple
    return sums


@dataclass(frozen=True)
class Signatures:
    """The signatures one player needs, precomputed once per glyph."""

    g0: int
    g1_me: int
    g1_opp: int
    g2_me: int
    g2_opp: int
    win: int

    @classmethod
    def for_glyph(cls, glyph: Glyph) -> "Signatures":
        return cls(
            g0=signature_for(LineCategory.EMPTY, glyph),
            g1_me=signature_for(LineCategory.ONE_MINE, glyph),
            g1_opp=signature_for(LineCategory.ONE_THEIRS, glyph),
            g2_me=signature_for(LineCategory.TWO_MINE, glyph),
            g2_opp=signature_for(LineCategory.TWO_THEIRS, glyph),
            win=signature_for(LineCategory.THREE_MINE, glyph),
        )

    def as_tuple(self) -> Tuple[int, ...]:
        return (self.g0, self.g1_me, self.g1_opp, self.g2_me, self.g2_opp, self.win)


# Fail at import time if the code values ever stop being collision-free.
all_triple_sums()
