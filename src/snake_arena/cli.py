"""Headless command-line driver for Snake Arena sessions."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time

from snake_arena.config import FoodTiming, SessionConfig
from snake_arena.errors import ConfigurationError

logger = logging.getLogger(__name__)

_DEFAULTS = {
    "width": 20,
    "height": 20,
    "agent_count": 5,
    "food_count": 3,
    "food_score": 100,
    "move_cost": 1,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-arena",
        description="Run turn-based multi-snake games without a display.",
    )
    parser.add_argument(
        "--log-level", type=str, default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- run ---
    run_p = sub.add_parser("run", help="Play a session to completion.")
    run_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override its values).",
    )
    run_p.add_argument("--width", type=int, default=None)
    run_p.add_argument("--height", type=int, default=None)
    run_p.add_argument("--agents", type=int, default=None)
    run_p.add_argument("--food", type=int, default=None)
    run_p.add_argument("--food-score", type=int, default=None)
    run_p.add_argument("--move-cost", type=int, default=None)
    run_p.add_argument("--health", type=int, default=None)
    run_p.add_argument(
        "--food-timing", type=str, default=None,
        choices=[t.value for t in FoodTiming],
    )
    run_p.add_argument("--seed", type=int, default=None)
    run_p.add_argument(
        "--intents", type=str, default="",
        help="Comma-separated player directions, e.g. 'right,right,up'.",
    )
    run_p.add_argument("--max-rounds", type=int, default=1_000)
    run_p.add_argument(
        "--delay-ms", type=int, default=0,
        help="Pause between rounds in milliseconds.",
    )

    # --- init-config ---
    init_p = sub.add_parser(
        "init-config", help="Write a config file with default settings.",
    )
    init_p.add_argument("path", help="Destination JSON file.")

    return parser


def _config_from_args(args: argparse.Namespace) -> SessionConfig:
    values = (
        SessionConfig.load(args.config).to_dict()
        if args.config else dict(_DEFAULTS)
    )
    flag_map = {
        "width": "width",
        "height": "height",
        "agents": "agent_count",
        "food": "food_count",
        "food_score": "food_score",
        "move_cost": "move_cost",
        "health": "starting_health",
        "food_timing": "food_timing",
        "seed": "seed",
    }
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            values[cfg_name] = val
    return SessionConfig(**values)


def _run_session(args: argparse.Namespace) -> int:
    from snake_arena.session import GameSession

    try:
        config = _config_from_args(args)
        session = GameSession(config)
        for intent in filter(None, args.intents.split(",")):
            session.push_intent(intent)
    except (ConfigurationError, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    for _ in range(args.max_rounds):
        if session.ended:
            break
        session.advance_round()
        if args.delay_ms > 0:
            time.sleep(args.delay_ms / 1000.0)

    logger.info(
        "Finished after %d rounds (%s, %d eliminations).",
        session.turn, session.status.value, len(session.eliminations),
    )
    print(json.dumps(session.to_dict(), indent=2))  # noqa: T201
    return 0


def _run_init_config(args: argparse.Namespace) -> int:
    SessionConfig(**_DEFAULTS).save(args.path)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-arena`` CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "run": _run_session,
        "init-config": _run_init_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
