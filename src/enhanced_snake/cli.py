"""Command-line entry point for Enhanced Snake."""

from __future__ import annotations

import argparse
import json
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="enhanced-snake",
        description="Enhanced Snake game server and simulation tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the game server.")
    serve_p.add_argument("--host", type=str, default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play headless games with a random policy.",
    )
    sim_p.add_argument("--games", type=int, default=100)
    sim_p.add_argument("--seed", type=int, default=0)
    sim_p.add_argument(
        "--head-mode", type=str, default="normal",
        choices=["normal", "double_head"],
    )
    sim_p.add_argument("--max-ticks", type=int, default=2_000)

    # --- config ---
    config_p = sub.add_parser(
        "config", help="Print or write the default game config.",
    )
    config_p.add_argument(
        "--output", type=str, default=None,
        help="Write the config JSON to this path instead of stdout.",
    )

    return parser


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(
        "enhanced_snake.server.app:create_app",
        host=args.host,
        port=args.port,
        factory=True,
    )
    return 0


def _run_simulate(args: argparse.Namespace) -> int:
    from enhanced_snake.cosmetics import HeadMode
    from enhanced_snake.simulate import simulate_games

    result = simulate_games(
        games=args.games,
        seed=args.seed,
        head_mode=HeadMode(args.head_mode),
        max_ticks=args.max_ticks,
    )
    print(result.summary())  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    from enhanced_snake.config import GameConfig

    config = GameConfig()
    if args.output:
        config.save(args.output)
    else:
        print(json.dumps(config.to_dict(), indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``enhanced-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "serve": _run_serve,
        "simulate": _run_simulate,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
