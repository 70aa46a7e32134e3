"""deathmatch package.

Two rule-based tic-tac-toe agents play each other over and over; the
simulation driver tallies wins and draws.

Convenience imports are exposed for common workflows.
"""

from .agent import Agent
from .board import Board, Line
from .match import Match, MatchState, Outcome, TurnOrder
from .signatures import Glyph, LineCategory, Signatures
from .simulation import SimulationConfig, SimulationResult, format_report, run_simulation

__all__ = [
    "Agent",
    "Board",
    "Line",
    "Match",
    "MatchState",
    "Outcome",
    "TurnOrder",
    "Glyph",
    "LineCategory",
    "Signatures",
    "SimulationConfig",
    "SimulationResult",
    "format_report",
    "run_simulation",
]
