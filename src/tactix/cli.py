"""Command-line runner: load a scenario and tick it until the battle ends.

Usage:
    python -m tactix scenarios/skirmish.json [--max-ticks N] [--no-sleep]
                                              [--json] [--save PATH]

Reports go to stdout (one block per tick, or one JSON line per tick with
``--json``); log messages go to stderr.  Exit status is 1 when the scenario
cannot be loaded, 0 otherwise.
"""

from __future__ import annotations

import argparse
import sys
import time

from loguru import logger

from tactix.config import Settings
from tactix.report import format_tick_json, format_tick_report
from tactix.simulation.scenario import ScenarioLoadError, load_scenario, save_scenario


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tactix", description="Turn-based tactical combat simulator")
    parser.add_argument("scenario", nargs="?", default=settings.scenario_path or None,
                        help="Scenario JSON file")
    parser.add_argument("--max-ticks", type=int, default=settings.max_ticks,
                        help="Stop after this many ticks even if the battle continues")
    parser.add_argument("--sleep", type=float, default=settings.tick_sleep,
                        help="Seconds between ticks (default: 1 / tick_rate)")
    parser.add_argument("--no-sleep", action="store_true", help="Run ticks back to back")
    parser.add_argument("--json", action="store_true", help="Emit one JSON snapshot per line")
    parser.add_argument("--save", type=str, default=None,
                        help="Write the final world state to this scenario file")
    parser.add_argument("--log-level", type=str, default=settings.log_level,
                        help="Log level for stderr (DEBUG, INFO, WARNING, ...)")
    return parser


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format="{time:HH:mm:ss} [{level}] {message}")


def main(argv: list[str] | None = None) -> int:
    settings = Settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)
    if args.scenario is None:
        parser.error("a scenario file is required (argument or TACTIX_SCENARIO_PATH)")

    configure_logging(args.log_level)

    try:
        world = load_scenario(args.scenario)
    except ScenarioLoadError as e:
        logger.error(f"Failed to load scenario: {e}")
        return 1

    if args.no_sleep:
        delay = 0.0
    elif args.sleep is not None:
        delay = max(0.0, args.sleep)
    else:
        delay = 1.0 / world.config.tick_rate

    if not args.json:
        print("--- SIMULATION STARTING ---")
        print(f"Agents loaded: {len(world.agents)}")
        print(f"Cover nodes: {len(world.cover_nodes)}")

    ticks_run = 0
    while not world.is_battle_over() and ticks_run < args.max_ticks:
        snapshot = world.tick()
        ticks_run += 1
        print(format_tick_json(snapshot) if args.json else format_tick_report(snapshot))
        if delay > 0 and not world.is_battle_over():
            time.sleep(delay)

    if world.is_battle_over():
        world.announce_battle_over()
        if not args.json:
            print(f"Battle ended at tick {world.tick_count}")
    else:
        logger.warning(f"Stopped after {ticks_run} ticks with the battle still running")

    if args.save:
        save_scenario(world, args.save)
    return 0
