from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from cubewalk.config import WalkSettings, configure_logging
from cubewalk.game.board import parse_input
from cubewalk.game.errors import CubeWalkError
from cubewalk.game.sim import build_adjacency
from cubewalk.game.walker import CubeWalker

logger = logging.getLogger("cubewalk")

PARTS = {"wrap": "Part 1", "fold": "Part 2"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cubewalk", description="Walk a movement program over a cube net.")
    parser.add_argument("input", type=Path, help="board followed by a blank line and the movement program")
    parser.add_argument("--mode", choices=("wrap", "fold", "both"), default="both")
    parser.add_argument("--render", action="store_true", help="print the board with the final position")
    parser.add_argument("--log-level", default=None, help="overrides CUBEWALK_LOG_LEVEL")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = WalkSettings.from_env()
    if args.log_level:
        if not isinstance(logging.getLevelName(args.log_level.upper()), int):
            parser.error(f"unknown log level {args.log_level!r}")
        settings.log_level = args.log_level.upper()
    configure_logging(settings)

    try:
        net, program = parse_input(args.input.read_text())
        modes = ("wrap", "fold") if args.mode == "both" else (args.mode,)
        for mode in modes:
            walker = CubeWalker(net, build_adjacency(net, mode))
            walker.run(program)
            print(f"{PARTS[mode]}: {walker.score()}")
            if args.render:
                print(walker.render())
    except OSError as e:
        logger.error("cannot read %s: %s", args.input, e)
        return 1
    except CubeWalkError as e:
        logger.error("%s: %s", args.input, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
