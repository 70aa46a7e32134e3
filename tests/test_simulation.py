import logging

import numpy as np
import pytest

from deathmatch.match import Outcome, TurnOrder
from deathmatch.signatures import Glyph
from deathmatch.simulation import SimulationConfig, SimulationResult, format_report, run_simulation


def _check_totals(result: SimulationResult, n: int) -> None:
    counts = [result.count(o) for o in Outcome]
    assert all(c >= 0 for c in counts)
    assert sum(counts) == n
    pcts = [result.percent(o) for o in Outcome]
    assert all(0 <= p <= 100 for p in pcts)
    assert 0 <= 100 - sum(pcts) <= 2


@pytest.mark.parametrize("reuse", [True, False])
@pytest.mark.parametrize("order", list(TurnOrder))
def test_counts_sum_to_games(reuse, order):
    cfg = SimulationConfig(num_games=200, seed=7, turn_order=order, reuse_match=reuse)
    result = run_simulation(cfg)
    _check_totals(result, 200)
    assert 5 <= result.avg_plies <= 9


def test_same_seed_same_tally():
    a = run_simulation(SimulationConfig(num_games=150, seed=123))
    b = run_simulation(SimulationConfig(num_games=150, seed=123))
    assert a.as_dict() == b.as_dict()


def test_explicit_rng_overrides_seed():
    cfg = SimulationConfig(num_games=50, seed=1)
    a = run_simulation(cfg, rng=np.random.default_rng(99))
    b = run_simulation(SimulationConfig(num_games=50, seed=99))
    assert a.as_dict() == b.as_dict()


def test_single_game():
    result = run_simulation(SimulationConfig(num_games=1, seed=0))
    _check_totals(result, 1)
    assert sorted(result.percent(o) for o in Outcome) == [0, 0, 100]


@pytest.mark.parametrize("bad", [0, -3])
def test_config_rejects_non_positive_games(bad):
    with pytest.raises(ValueError, match="positive"):
        SimulationConfig(num_games=bad)


@pytest.mark.parametrize("bad", ["5", 2.0, None, True])
def test_config_rejects_non_integer_games(bad):
    with pytest.raises(ValueError, match="positive integer"):
        SimulationConfig(num_games=bad)


@pytest.mark.parametrize("reuse", [True, False])
def test_winner_opens_next_game(reuse, caplog):
    caplog.set_level(logging.DEBUG)
    cfg = SimulationConfig(
        num_games=80, seed=21, turn_order=TurnOrder.WINNER_FIRST, first_mover=Glyph.O, reuse_match=reuse,
    )
    run_simulation(cfg)
    games = [r.args for r in caplog.records if str(r.msg).startswith("game=")]
    assert len(games) == 80
    assert games[0][1] == "O"
    for prev, cur in zip(games, games[1:]):
        prev_outcome = prev[2]
        expected = "O" if prev_outcome == "DRAW" else prev_outcome
        assert cur[1] == expected


def test_config_normalises_enums():
    cfg = SimulationConfig(num_games=3, turn_order="winner-first", first_mover=79)
    assert cfg.turn_order is TurnOrder.WINNER_FIRST
    assert cfg.first_mover is Glyph.O


def test_percent_rounds_down():
    result = SimulationResult(num_games=3, x_wins=1, o_wins=1, draws=1)
    assert [result.percent(o) for o in Outcome] == [33, 33, 33]
    _check_totals(result, 3)


def test_record_tallies():
    result = SimulationResult(num_games=3)
    result.record(Outcome.X, 7)
    result.record(Outcome.DRAW, 9)
    result.record(Outcome.X, 5)
    assert (result.x_wins, result.o_wins, result.draws) == (2, 0, 1)
    assert result.total_plies == 21
    assert result.avg_plies == 7.0


def test_format_report():
    result = SimulationResult(num_games=10, x_wins=5, o_wins=3, draws=2)
    assert format_report(result) == (
        " Games: 10\n"
        "X wins: 5 (50%)\n"
        "O wins: 3 (30%)\n"
        " Draws: 2 (20%)\n"
    )


def test_show_boards_prints_each_final_board(capsys):
    run_simulation(SimulationConfig(num_games=3, seed=5, show_boards=True))
    out = capsys.readouterr().out
    assert out.count("+-----------+") == 6
