import os
import subprocess
import sys
from pathlib import Path

import pytest

from deathmatch.cli import SEED_ENV, build_parser, main

SRC = Path(__file__).resolve().parents[1] / "src"


def _run_cli(args: list[str], cwd: Path) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in [str(SRC), env.get("PYTHONPATH", "")] if p)
    exe = [sys.executable, "-m", "deathmatch.cli"]
    return subprocess.run(exe + args, cwd=cwd, capture_output=True, text=True, env=env)


def test_missing_argument_prints_usage_and_fails(capsys):
    assert main([]) == 1
    out = capsys.readouterr().out
    assert "TIC-TAC-TOE" in out
    assert "num_games" in out
    assert "play against itself" in out


@pytest.mark.parametrize("bad", ["abc", "0", "-4", "2.5"])
def test_invalid_num_games_is_usage_error(bad, capsys):
    with pytest.raises(SystemExit) as exc:
        main([bad])
    assert exc.value.code == 2
    assert "usage:" in capsys.readouterr().err


def test_too_many_arguments_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        main(["10", "20"])
    assert exc.value.code != 0


def test_report_output(capsys):
    assert main(["40", "--seed", "3"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == " Games: 40"
    assert lines[1].startswith("X wins: ")
    assert lines[2].startswith("O wins: ")
    assert lines[3].startswith(" Draws: ")
    counts = [int(line.split(":")[1].split("(")[0]) for line in lines[1:4]]
    assert sum(counts) == 40


def test_seed_is_reproducible(capsys):
    main(["60", "--seed", "17", "--turn-order", "winner-first"])
    first = capsys.readouterr().out
    main(["60", "--seed", "17", "--turn-order", "winner-first"])
    assert capsys.readouterr().out == first


def test_seed_from_environment(capsys, monkeypatch):
    main(["30", "--seed", "5"])
    expected = capsys.readouterr().out
    monkeypatch.setenv(SEED_ENV, "5")
    main(["30"])
    assert capsys.readouterr().out == expected


def test_non_integer_seed_env_is_ignored(capsys, monkeypatch):
    monkeypatch.setenv(SEED_ENV, "not-a-seed")
    assert main(["5"]) == 0
    assert " Games: 5" in capsys.readouterr().out


def test_parser_defaults():
    ns = build_parser().parse_args(["12"])
    assert ns.num_games == 12
    assert ns.turn_order == "fixed"
    assert ns.first == "X"
    assert not ns.fresh_match
    assert ns.seed is None


def test_info_flag(capsys):
    assert main(["--info"]) == 0
    out = capsys.readouterr().out
    assert "python=" in out
    assert "numpy=" in out


def test_cli_subprocess(tmp_path: Path):
    r = _run_cli(["25", "--seed", "1", "--first", "O", "--fresh-match"], cwd=tmp_path)
    assert r.returncode == 0
    assert " Games: 25" in r.stdout
    r = _run_cli([], cwd=tmp_path)
    assert r.returncode == 1
    r = _run_cli(["lots"], cwd=tmp_path)
    assert r.returncode == 2
