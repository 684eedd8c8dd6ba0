"""Command-line tools for Pocket Arcade."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pocket-arcade",
        description="Pocket Arcade configuration and headless demo tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- config ---
    config_p = sub.add_parser("config", help="Print or write the default config.")
    config_p.add_argument(
        "--output", type=str, default=None,
        help="Write the JSON config to this path instead of stdout.",
    )

    # --- demo ---
    demo_p = sub.add_parser(
        "demo", help="Run a headless autopilot game on a virtual clock.",
    )
    demo_p.add_argument("game", choices=["snake", "sequence"])
    demo_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    demo_p.add_argument("--seed", type=int, default=None)
    demo_p.add_argument("--grid-size", type=int, default=None)
    demo_p.add_argument("--max-ticks", type=int, default=1_000)
    demo_p.add_argument("--rounds", type=int, default=10)

    return parser


def _run_config(args: argparse.Namespace) -> int:
    from pocket_arcade.config import ArcadeConfig

    config = ArcadeConfig()
    if args.output:
        config.save(args.output)
    else:
        print(json.dumps(config.to_dict(), indent=2))  # noqa: T201
    return 0


def _run_demo(args: argparse.Namespace) -> int:
    from pocket_arcade.config import ArcadeConfig
    from pocket_arcade.demo import run_sequence_demo, run_snake_demo

    config = ArcadeConfig.load(args.config) if args.config else ArcadeConfig()

    if args.game == "snake":
        snake_cfg = config.snake
        if args.seed is not None:
            snake_cfg = dataclasses.replace(snake_cfg, seed=args.seed)
        if args.grid_size is not None:
            snake_cfg = dataclasses.replace(snake_cfg, grid_size=args.grid_size)
        result = run_snake_demo(snake_cfg, max_ticks=args.max_ticks)
    else:
        sequence_cfg = config.sequence
        if args.seed is not None:
            sequence_cfg = dataclasses.replace(sequence_cfg, seed=args.seed)
        result = run_sequence_demo(sequence_cfg, rounds=args.rounds)

    print(result.summary())  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``pocket-arcade`` CLI."""
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
        "config": _run_config,
        "demo": _run_demo,
    }
    try:
        return handlers[args.command](args)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
