"""Entry point: ``python -m geocoin``.

Supports two modes:
  - ``python -m geocoin``          → Launch FastAPI server
  - ``python -m geocoin walk``     → Headless walk through the world
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)

_DIRECTIONS = ["north", "east", "south", "west"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Deterministic location-based coin world")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=0)
    srv.add_argument("--state-dir", type=str, default=".geocoin")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless walk ---
    walk = sub.add_parser("walk", help="Nudge the player through the world without a UI")
    walk.add_argument("--seed", type=int, default=0)
    walk.add_argument("--steps", type=int, default=10)
    walk.add_argument("--direction", type=str, default="north", choices=_DIRECTIONS)
    walk.add_argument("--collect", action="store_true", help="Empty every cache passed on the way")
    walk.add_argument("--state-dir", type=str, default=None)
    walk.add_argument("--reset", action="store_true", help="Clear saved state before walking")
    walk.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


class _LogRenderer:
    """Text stand-in for the map: logs markers as they appear and disappear."""

    def show(self, cell, coins) -> str:
        logger.info("cache %s appears with %d coins", cell, len(coins))
        return f"marker{cell}"

    def hide(self, cell, handle) -> None:
        logger.info("cache %s leaves the map", cell)


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from geocoin.api.app import create_app
    from geocoin.config import WorldConfig

    config = WorldConfig(
        world_seed=args.seed,
        state_dir=args.state_dir,
        log_level=args.log_level,
    )
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_walk(args: argparse.Namespace) -> None:
    from geocoin.config import WorldConfig
    from geocoin.core.enums import Direction, ViewEventKind
    from geocoin.core.models import Cell
    from geocoin.engine.session import GameSession
    from geocoin.utils.logging import setup_logging

    config = WorldConfig(
        world_seed=args.seed,
        state_dir=args.state_dir,
        log_level=args.log_level,
    )
    setup_logging(config.log_level)

    session = GameSession(config, renderer=_LogRenderer())
    direction = Direction[args.direction.upper()]

    def collect(cells: list[Cell]) -> None:
        for cell in cells:
            while session.cache_contents(cell):
                session.take_any(cell)

    try:
        if args.reset:
            session.reset_all(confirm=True)
        session.start()
        if args.collect:
            collect([cell for cell, _ in session.shown_caches()])
        for _ in range(args.steps):
            events = session.nudge(direction)
            if args.collect:
                collect([e.cell for e in events if e.kind == ViewEventKind.SHOW])
        world = session.world
        logger.info(
            "Stopped at cell %s with %d caches in view. %s",
            world.player_cell, len(world.viewport.shown_cells()), session.status_text(),
        )
    finally:
        session.close()


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "walk":
        _run_walk(args)


if __name__ == "__main__":
    main()
