from __future__ import annotations

import argparse
import logging
import os
from typing import Optional

from .match import TurnOrder
from .signatures import Glyph
from .simulation import SimulationConfig, format_report, run_simulation

BANNER = "TIC-TAC-TOE deathmatch: computer vs. computer"
DESCRIPTION = """\
The computer will play against itself for the number of games specified in
the command line argument 'num_games'. After the program has played the
specified number of games, it will display the results."""

SEED_ENV = "DEATHMATCH_SEED"


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="deathmatch", description=DESCRIPTION,
                                formatter_class=argparse.RawDescriptionHelpFormatter)
    p.add_argument("num_games", nargs="?", type=_positive_int, help="Number of games to play")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help=f"Seed for the random generator (default: ${SEED_ENV}, else OS entropy)",
    )
    p.add_argument(
        "--turn-order",
        choices=[t.value for t in TurnOrder],
        default=TurnOrder.FIXED.value,
        help="fixed: --first always opens; winner-first: last winner opens (default: fixed)",
    )
    p.add_argument("--first", choices=["X", "O"], default="X", help="Glyph that opens (default: X)")
    p.add_argument(
        "--fresh-match",
        action="store_true",
        help="Build a new board and agents for every game instead of reusing one match",
    )
    p.add_argument("--show-boards", action="store_true", help="Print the final board of every game")
    return p


def _seed_from_env() -> Optional[int]:
    raw = os.getenv(SEED_ENV)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        logging.warning("Ignoring non-integer %s=%r", SEED_ENV, raw)
        return None


def _print_info() -> None:
    import importlib.util
    import platform
    import sys

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _print_usage(parser: argparse.ArgumentParser) -> None:
    print(f"{BANNER}\n")
    print(f"{parser.format_usage().strip()}\n")
    print(DESCRIPTION)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if ns.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if ns.version:
        try:
            from importlib.metadata import PackageNotFoundError, version as _ver

            print(_ver("tictactoe-deathmatch"))
        except PackageNotFoundError:
            print("unknown")
        return 0
    if ns.info:
        _print_info()
        return 0

    if ns.num_games is None:
        _print_usage(parser)
        return 1

    seed = ns.seed if ns.seed is not None else _seed_from_env()
    config = SimulationConfig(
        num_games=ns.num_games,
        seed=seed,
        turn_order=TurnOrder(ns.turn_order),
        first_mover=Glyph.parse(ns.first),
        reuse_match=not ns.fresh_match,
        show_boards=ns.show_boards,
    )
    result = run_simulation(config)
    print(format_report(result), end="")
    logging.debug("avg_plies=%.2f", result.avg_plies)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
