"""Entry point: ``python -m huntcore``.

Supports two modes:
  - ``python -m huntcore``          → Launch the FastAPI server over a live sandbox
  - ``python -m huntcore cli``      → Headless sandbox run with a JSON decision record
"""

from __future__ import annotations

import argparse
import logging

from huntcore.config import SCORE_PROFILES

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Threat-aware decision core for a game agent")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--monsters", type=int, default=12)
    srv.add_argument("--profile", type=str, default="default", choices=sorted(SCORE_PROFILES))
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless sandbox")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--ticks", type=int, default=200)
    cli.add_argument("--monsters", type=int, default=12)
    cli.add_argument("--profile", type=str, default="default", choices=sorted(SCORE_PROFILES))
    cli.add_argument("--record", type=str, default="decisions.json")
    cli.add_argument("--heatmap", type=str, default=None, help="Load/save the heatmap at this path")
    cli.add_argument("--resources", action="store_true", help="Also target resources")
    cli.add_argument("--realtime", action="store_true", help="Sleep out each tick interval")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from huntcore.api.app import create_app
    from huntcore.config import EngineConfig

    config = EngineConfig(log_level=args.log_level).with_profile(args.profile)
    app = create_app(config, seed=args.seed, monsters=args.monsters)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from huntcore.ai.engine import DecisionEngine
    from huntcore.config import EngineConfig
    from huntcore.engine.tick_loop import TickLoop
    from huntcore.systems.scenario import ScenarioGenerator
    from huntcore.utils.heatmap_store import load_heatmap, save_heatmap
    from huntcore.utils.logging import setup_logging
    from huntcore.utils.replay import DecisionRecorder

    config = EngineConfig(
        log_level=args.log_level,
        record_file=args.record,
        get_resources=args.resources,
    ).with_profile(args.profile)

    setup_logging(config.log_level)

    world = ScenarioGenerator(config, args.seed).generate(monsters=args.monsters)
    heatmap = load_heatmap(config, args.heatmap) if args.heatmap else None
    engine = DecisionEngine(config, heatmap=heatmap)
    recorder = DecisionRecorder(config.record_file, args.seed)
    loop = TickLoop(config, engine, world, recorder=recorder)

    loop.run(args.ticks, realtime=args.realtime)

    if args.heatmap:
        save_heatmap(engine.heatmap, args.heatmap)
    logger.info("Done. %d kills, %d entities left. Decisions written to %s",
                world.kills, world.entity_count, config.record_file)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
