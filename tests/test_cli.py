"""Tests for the command-line entry point."""

import json
from unittest.mock import patch

from enhanced_snake.cli import _build_parser, main


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_serve_defaults(self):
        args = _build_parser().parse_args(["serve"])
        assert args.command == "serve"
        assert args.host == "127.0.0.1"
        assert args.port == 8000

    def test_simulate_defaults(self):
        args = _build_parser().parse_args(["simulate"])
        assert args.games == 100
        assert args.seed == 0
        assert args.head_mode == "normal"
        assert args.max_ticks == 2_000

    def test_simulate_flags(self):
        args = _build_parser().parse_args([
            "simulate", "--games", "3", "--head-mode", "double_head",
        ])
        assert args.games == 3
        assert args.head_mode == "double_head"


class TestCLICommands:
    def test_simulate(self, capsys):
        assert main(["simulate", "--games", "2", "--max-ticks", "100"]) == 0
        assert "Simulated 2 game(s)" in capsys.readouterr().out

    def test_config_stdout(self, capsys):
        assert main(["config"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["tick_rate_ms"] == 150
        assert data["settings"]["color"] == "black"

    def test_config_output_file(self, tmp_path):
        path = tmp_path / "game.json"
        assert main(["config", "--output", str(path)]) == 0
        assert json.loads(path.read_text())["grid_width"] == 20

    def test_serve_runs_uvicorn(self):
        with patch("uvicorn.run") as run:
            assert main(["serve", "--port", "9001"]) == 0
        run.assert_called_once()
        assert run.call_args.kwargs["port"] == 9001
        assert run.call_args.kwargs["factory"] is True
