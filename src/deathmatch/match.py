"""
Match: one board, two agents, and the turn loop.

States: AWAITING_MOVE -> (WON | DRAW). Every step fills exactly one cell, so
a game ends within 9 steps.
"""
from __future__ import annotations

from enum import Enum, IntEnum
from typing import Dict, Optional

import numpy as np

from .agent import Agent
from .board import NUM_CELLS, Board
from .signatures import PLAYERS, Glyph


class Outcome(IntEnum):
    X = 0
    O = 1
    DRAW = 2

    @classmethod
    def for_glyph(cls, glyph: Glyph) -> "Outcome":
        return cls.X if glyph == Glyph.X else cls.O

    @property
    def glyph(self) -> Optional[Glyph]:
        if self is Outcome.X:
            return Glyph.X
        if self is Outcome.O:
            return Glyph.O
        return None


class MatchState(Enum):
    IDLE = "idle"
    AWAITING_MOVE = "awaiting_move"
    WON = "won"
    DRAW = "draw"

    @property
    def terminal(self) -> bool:
        return self in (MatchState.WON, MatchState.DRAW)


class TurnOrder(str, Enum):
    FIXED = "fixed"
    WINNER_FIRST = "winner-first"

    @classmethod
    def parse(cls, value: "str | TurnOrder") -> "TurnOrder":
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(t.value for t in cls)
            raise ValueError(f"turn order must be one of: {valid}") from None


def choose_first_mover(
    turn_order: TurnOrder,
    previous: Optional[Outcome],
    default: Glyph = Glyph.X,
) -> Glyph:
    """Who opens the next game.

    FIXED always returns ``default``. WINNER_FIRST returns the glyph that won
    ``previous`` and falls back to ``default`` after a draw or before the
    first game.
    """
    if turn_order is TurnOrder.WINNER_FIRST and previous is not None and previous.glyph is not None:
        return previous.glyph
    return default


class Match:
    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        turn_order: TurnOrder = TurnOrder.FIXED,
        first_mover: Glyph = Glyph.X,
    ) -> None:
        first_mover = Glyph(first_mover)
        if first_mover not in PLAYERS:
            raise ValueError(f"first_mover must be X or O, got {first_mover!r}")
        self.rng = rng if rng is not None else np.random.default_rng()
        self.turn_order = TurnOrder.parse(turn_order)
        self.default_first = first_mover
        self.board = Board(self.rng)
        self.agents: Dict[Glyph, Agent] = {g: Agent(g, self.board) for g in PLAYERS}
        self.state = MatchState.IDLE
        self.to_move: Optional[Glyph] = None
        self.winner: Optional[Glyph] = None
        self.plies = 0
        self.last_outcome: Optional[Outcome] = None

    def start(self, first_mover: Optional[Glyph] = None) -> Glyph:
        """Clear the board and hand the first move to ``first_mover``.

        Without an explicit mover the turn-order policy decides, using the
        outcome of the previous game played on this match.
        """
        if first_mover is None:
            first_mover = choose_first_mover(self.turn_order, self.last_outcome, self.default_first)
        first_mover = Glyph(first_mover)
        if first_mover not in PLAYERS:
            raise ValueError(f"first_mover must be X or O, got {first_mover!r}")
        self.board.clear()
        self.to_move = first_mover
        self.winner = None
        self.plies = 0
        self.state = MatchState.AWAITING_MOVE
        return self.to_move

    def step(self) -> MatchState:
        if self.state is not MatchState.AWAITING_MOVE or self.to_move is None:
            raise RuntimeError(f"step() needs a started match, state is {self.state.value}")
        agent = self.agents[self.to_move]
        if not agent.move():
            self.state = MatchState.DRAW
            return self.state
        self.plies += 1
        if agent.is_winner():
            self.winner = agent.glyph
            self.state = MatchState.WON
            return self.state
        self.to_move = self.to_move.opponent
        return self.state

    @property
    def outcome(self) -> Optional[Outcome]:
        if self.state is MatchState.WON and self.winner is not None:
            return Outcome.for_glyph(self.winner)
        if self.state is MatchState.DRAW:
            return Outcome.DRAW
        return None

    def play(self, first_mover: Optional[Glyph] = None) -> Outcome:
        self.start(first_mover)
        # one extra step for the failed move that detects a full board
        for _ in range(NUM_CELLS + 1):
            if self.step().terminal:
                break
        outcome = self.outcome
        if outcome is None:
            raise RuntimeError("match did not reach a terminal state")
        self.last_outcome = outcome
        return outcome
