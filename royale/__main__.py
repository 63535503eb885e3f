"""Command line entry point: ``python -m royale {canvas,web}``."""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from . import config
from .config import MatchConfig
from .engine import SimulationLoop


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="royale", description=f"{config.GAME_NAME} match engine")
    parser.add_argument("renderer", choices=["canvas", "web"], help="presentation adapter to attach")
    parser.add_argument("--seed", type=int, default=None, help="seed for deterministic spawns")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    match_config = MatchConfig(seed=args.seed)

    if args.renderer == "canvas":
        from .canvas import CanvasClient

        CanvasClient(SimulationLoop(match_config)).run()
    else:
        import uvicorn

        from .server import create_app

        uvicorn.run(create_app(match_config), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
