#!/usr/bin/env python3
"""Compare outcome rates across turn-order and match-reuse settings."""
from __future__ import annotations

import argparse
import logging
import math
import statistics as stats
from dataclasses import dataclass
from itertools import product
from typing import Dict, List, Tuple

from deathmatch.match import Outcome, TurnOrder
from deathmatch.signatures import Glyph
from deathmatch.simulation import SimulationConfig, run_simulation


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Scenario:
    turn_order: TurnOrder
    first_mover: Glyph
    reuse_match: bool

    @property
    def label(self) -> str:
        reuse = "reuse" if self.reuse_match else "fresh"
        return f"{self.turn_order.value}/{self.first_mover.char}/{reuse}"


def run_scenario(sc: Scenario, games: int, seeds: int) -> Dict[str, Tuple[float, float]]:
    rates: Dict[Outcome, List[float]] = {o: [] for o in Outcome}
    plies: List[float] = []
    for seed in range(seeds):
        result = run_simulation(SimulationConfig(
            num_games=games,
            seed=seed,
            turn_order=sc.turn_order,
            first_mover=sc.first_mover,
            reuse_match=sc.reuse_match,
        ))
        for o in Outcome:
            rates[o].append(result.count(o) / games)
        plies.append(result.avg_plies)
    out = {o.name.lower(): ci95(v) for o, v in rates.items()}
    out["plies"] = ci95(plies)
    return out


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("--games", type=int, default=1000, help="Games per seed (default: 1000)")
    ap.add_argument("--seeds", type=int, default=5, help="Seeds per scenario (default: 5)")
    ns = ap.parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="[%(levelname)s] %(message)s")

    scenarios = [
        Scenario(order, first, reuse)
        for order, first, reuse in product(TurnOrder, (Glyph.X, Glyph.O), (True, False))
    ]
    lines = [
        "| scenario | X wins | O wins | draws | avg plies |",
        "|---|---|---|---|---|",
    ]
    for sc in scenarios:
        r = run_scenario(sc, ns.games, ns.seeds)
        cells = [f"{r[k][0]:.1%} ± {r[k][1]:.1%}" for k in ("x", "o", "draw")]
        lines.append(f"| {sc.label} | " + " | ".join(cells) + f" | {r['plies'][0]:.2f} |")
    print("\n".join(lines))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
