"""
Batch driver: play many matches and tally the outcomes.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np

from .match import Match, Outcome, TurnOrder, choose_first_mover
from .signatures import Glyph


@dataclass
class SimulationConfig:
    num_games: int
    seed: Optional[int] = None
    turn_order: TurnOrder = TurnOrder.FIXED
    first_mover: Glyph = Glyph.X
    reuse_match: bool = True  # False builds a fresh board and agents per game
    show_boards: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.num_games, int) or isinstance(self.num_games, bool):
            raise ValueError(f"num_games must be a positive integer, got {self.num_games!r}")
        if self.num_games < 1:
            raise ValueError(f"num_games must be a positive integer, got {self.num_games}")
        self.turn_order = TurnOrder.parse(self.turn_order)
        self.first_mover = Glyph(self.first_mover)


@dataclass
class SimulationResult:
    num_games: int
    x_wins: int = 0
    o_wins: int = 0
    draws: int = 0
    total_plies: int = 0

    def record(self, outcome: Outcome, plies: int) -> None:
        if outcome is Outcome.X:
            self.x_wins += 1
        elif outcome is Outcome.O:
            self.o_wins += 1
        else:
            self.draws += 1
        self.total_plies += plies

    def count(self, outcome: Outcome) -> int:
        return (self.x_wins, self.o_wins, self.draws)[outcome]

    def percent(self, outcome: Outcome) -> int:
        """Whole-number percentage, rounded down."""
        return 100 * self.count(outcome) // self.num_games

    @property
    def avg_plies(self) -> float:
        return self.total_plies / self.num_games

    def as_dict(self) -> Dict[str, Any]:
        return {
            "num_games": self.num_games,
            "x_wins": self.x_wins,
            "o_wins": self.o_wins,
            "draws": self.draws,
            "x_pct": self.percent(Outcome.X),
            "o_pct": self.percent(Outcome.O),
            "draw_pct": self.percent(Outcome.DRAW),
            "avg_plies": self.avg_plies,
        }


def run_simulation(config: SimulationConfig, rng: Optional[np.random.Generator] = None) -> SimulationResult:
    if rng is None:
        rng = np.random.default_rng(config.seed)
    logging.info(
        "Playing %d games (turn_order=%s first=%s reuse_match=%s seed=%s)",
        config.num_games,
        config.turn_order.value,
        config.first_mover.char,
        config.reuse_match,
        config.seed,
    )
    result = SimulationResult(num_games=config.num_games)
    match = Match(rng, config.turn_order, config.first_mover)
    previous: Optional[Outcome] = None
    for game in range(config.num_games):
        if not config.reuse_match and game > 0:
            match = Match(rng, config.turn_order, config.first_mover)
        first = choose_first_mover(config.turn_order, previous, config.first_mover)
        outcome = match.play(first)
        previous = outcome
        result.record(outcome, match.plies)
        if logging.getLogger().isEnabledFor(logging.DEBUG):
            logging.debug("game=%d first=%s outcome=%s plies=%d board=%s",
                          game, first.char, outcome.name, match.plies, match.board.serialize())
        if config.show_boards:
            print(match.board.render())
    return result


def format_report(result: SimulationResult) -> str:
    return (
        f" Games: {result.num_games}\n"
        f"X wins: {result.x_wins} ({result.percent(Outcome.X)}%)\n"
        f"O wins: {result.o_wins} ({result.percent(Outcome.O)}%)\n"
        f" Draws: {result.draws} ({result.percent(Outcome.DRAW)}%)\n"
    )
