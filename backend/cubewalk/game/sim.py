from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from cubewalk.config import WalkSettings
from cubewalk.game.adjacency import FaceAdjacency
from cubewalk.game.board import MovementProgram, Net, parse_board, parse_program
from cubewalk.game.errors import InputTooLargeError
from cubewalk.game.geometry import DIR_NAMES, Dir
from cubewalk.game.walker import CubeWalker, TraceEntry

logger = logging.getLogger(__name__)

WalkMode = Literal["fold", "wrap"]


@dataclass(slots=True)
class WalkResult:
    mode: WalkMode
    password: int
    face: int
    row: int
    col: int
    heading: Dir
    trace: list[TraceEntry]

    def as_payload(self) -> dict:
        return {
            "mode": self.mode,
            "password": self.password,
            "face": self.face,
            "row": self.row,
            "col": self.col,
            "heading": DIR_NAMES[self.heading],
        }


def build_adjacency(net: Net, mode: WalkMode) -> FaceAdjacency:
    if mode == "fold":
        return FaceAdjacency.fold(net)
    if mode == "wrap":
        return FaceAdjacency.wrap(net)
    raise ValueError(f"unknown walk mode {mode!r}")


def walk(net: Net, program: MovementProgram, mode: WalkMode, *, record_trace: bool = False) -> WalkResult:
    walker = CubeWalker(net, build_adjacency(net, mode), record_trace=record_trace)
    walker.run(program)
    pos = walker.position
    return WalkResult(
        mode=mode,
        password=walker.score(),
        face=pos.face,
        row=pos.row,
        col=pos.col,
        heading=walker.heading,
        trace=walker.trace,
    )


def check_limits(board: str, program: str, settings: WalkSettings) -> None:
    if len(board) > settings.max_board_cells:
        raise InputTooLargeError(f"board has {len(board)} characters, limit is {settings.max_board_cells}")
    if len(program) > settings.max_program_length:
        raise InputTooLargeError(
            f"program has {len(program)} characters, limit is {settings.max_program_length}"
        )


def walk_text(
    board: str,
    program: str,
    mode: WalkMode,
    *,
    settings: Optional[WalkSettings] = None,
    record_trace: bool = False,
) -> WalkResult:
    check_limits(board, program, settings or WalkSettings())
    net = parse_board(board)
    logger.debug("parsed board with face size %d", net.size)
    return walk(net, parse_program(program), mode, record_trace=record_trace)
