from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from cubewalk.game.adjacency import FaceAdjacency
from cubewalk.game.board import Face, Instruction, Net
from cubewalk.game.errors import ConfigurationError
from cubewalk.game.geometry import (
    DIR_GLYPHS,
    DIR_NAMES,
    DIR_VECTORS,
    RIGHT,
    Dir,
    remap_coordinate,
    rotate_heading,
    turn,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Position:
    face: int
    row: int
    col: int


@dataclass(frozen=True, slots=True)
class TraceEntry:
    index: int
    instruction: Instruction
    moved: int
    position: Position
    heading: Dir


class CubeWalker:
    """Walks a movement program over the faces of a net.

    Moves inside a face are plain grid steps. A move off a face asks the
    adjacency which face and edge it lands on, then turns the heading and the
    boundary coordinate by the same number of quarter turns.
    """

    def __init__(self, net: Net, adjacency: FaceAdjacency, *, record_trace: bool = False) -> None:
        self.net = net
        self.adjacency = adjacency
        self.record_trace = record_trace
        self.trace: list[TraceEntry] = []

        start = net.faces[0].first_open_cell()
        if start is None:
            raise ConfigurationError("face 0 has no open cell to start from")
        self.position = Position(face=0, row=start[0], col=start[1])
        self.heading: Dir = RIGHT

    @property
    def face(self) -> Face:
        return self.net.faces[self.position.face]

    def step(self) -> bool:
        size = self.net.size
        pos = self.position
        dr, dc = DIR_VECTORS[self.heading]
        row, col = pos.row + dr, pos.col + dc

        if 0 <= row < size and 0 <= col < size:
            if self.face.is_wall(row, col):
                return False
            self.position = Position(face=pos.face, row=row, col=col)
            return True

        exit_edge = self.heading
        neighbor, entry_edge = self.adjacency.lookup(pos.face, exit_edge)
        offset = self.adjacency.rotation_offset(exit_edge, entry_edge)
        row, col = remap_coordinate(pos.row, pos.col, exit_edge, offset, size)
        if self.net.faces[neighbor].is_wall(row, col):
            return False

        heading = rotate_heading(self.heading, offset)
        logger.debug(
            "crossed face %d %s edge -> face %d (%d, %d) heading %s",
            pos.face,
            DIR_NAMES[exit_edge],
            neighbor,
            row,
            col,
            DIR_NAMES[heading],
        )
        self.position = Position(face=neighbor, row=row, col=col)
        self.heading = heading
        return True

    def apply_instruction(self, instruction: Instruction) -> int:
        start = (self.position, self.heading)
        remaining = instruction.distance
        moved = 0
        while remaining and self.step():
            moved += 1
            remaining -= 1
            if (self.position, self.heading) == start:
                # An unblocked straight line is a closed loop of ``moved`` cells.
                laps, remaining = divmod(remaining, moved)
                moved += laps * moved
        self.heading = turn(self.heading, instruction.turn)
        return moved

    def run(self, program: Iterable[Instruction]) -> None:
        for index, instruction in enumerate(program):
            moved = self.apply_instruction(instruction)
            if self.record_trace:
                self.trace.append(
                    TraceEntry(
                        index=index,
                        instruction=instruction,
                        moved=moved,
                        position=self.position,
                        heading=self.heading,
                    )
                )
        logger.info("walk finished at %s heading %s", self.position, DIR_NAMES[self.heading])

    def global_position(self, position: Optional[Position] = None) -> Tuple[int, int]:
        pos = position or self.position
        face_row, face_col = self.net.faces[pos.face].origin
        return face_row * self.net.size + pos.row, face_col * self.net.size + pos.col

    def score(self) -> int:
        row, col = self.global_position()
        return 1000 * (row + 1) + 4 * (col + 1) + self.heading

    def render(self) -> str:
        grid = [list(line) for line in self.net.lines]
        row, col = self.global_position()
        grid[row][col] = DIR_GLYPHS[self.heading]
        return "\n".join("".join(line).rstrip() for line in grid)
