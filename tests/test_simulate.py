"""
Tests for simulate.py - the headless games CLI.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from simulate import build_parser, main, save_plot, simulate
from utils import RunConfig


class TestSimulate:
    def test_plays_requested_games(self):
        results = simulate(RunConfig(rows=8, columns=8, games=5, max_steps=50, seed=3))
        assert len(results) == 5
        assert all(r.steps <= 50 for r in results)

    def test_seeded_runs_repeat(self):
        cfg = RunConfig(rows=8, columns=8, games=3, max_steps=100, policy="random", seed=9)
        first = [r.score for r in simulate(cfg)]
        second = [r.score for r in simulate(cfg)]
        assert first == second

    def test_rejects_zero_games(self):
        with pytest.raises(ValueError):
            simulate(RunConfig(games=0))

    def test_show_final_prints_board(self, capsys):
        simulate(RunConfig(rows=3, columns=4, games=1, max_steps=3, seed=1), show_final=True)
        out = capsys.readouterr().out
        assert "H" in out


class TestCli:
    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        assert (args.rows, args.columns) == (11, 11)
        assert args.policy == "greedy"
        assert args.placement == "safe"
        assert args.reversal == "allow_single"

    @pytest.mark.parametrize("argv", [["--rows", "0"], ["--games", "0"], ["--policy", "psychic"]])
    def test_parser_rejects_bad_values(self, argv):
        with pytest.raises(SystemExit):
            build_parser().parse_args(argv)

    def test_main_prints_report(self, capsys):
        main(["--rows", "6", "--columns", "6", "--games", "4", "--max-steps", "40", "--seed", "1"])
        out = capsys.readouterr().out
        assert "Mean score" in out
        assert "Ended by collision" in out

    def test_save_plot(self, tmp_path):
        pytest.importorskip("matplotlib")
        results = simulate(RunConfig(rows=6, columns=6, games=12, max_steps=30, seed=2))
        path = tmp_path / "scores.png"
        save_plot(results, str(path), chunk_size=5)
        assert path.exists()
