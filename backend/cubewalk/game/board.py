from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple, Union

from cubewalk.game.errors import ParseError
from cubewalk.game.geometry import Turn

OPEN = "."
WALL = "#"
VOID = " "

_PROGRAM_RE = re.compile(r"\d+(?:[LR]\d+)*[LR]?")
_TOKEN_RE = re.compile(r"(\d+)([LR]?)")
_SECTION_RE = re.compile(r"\n[ \t]*\n")


@dataclass(frozen=True, slots=True)
class Face:
    id: int
    size: int
    origin: Tuple[int, int]  # (faceRow, faceCol), in face units
    cells: Tuple[str, ...]

    def is_wall(self, row: int, col: int) -> bool:
        return self.cells[row][col] == WALL

    def first_open_cell(self) -> Optional[Tuple[int, int]]:
        for row, line in enumerate(self.cells):
            col = line.find(OPEN)
            if col >= 0:
                return row, col
        return None


@dataclass(frozen=True, slots=True)
class Net:
    size: int
    faces: Tuple[Face, ...]
    lines: Tuple[str, ...]
    _by_origin: dict[Tuple[int, int], Face] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_origin", {f.origin: f for f in self.faces})

    @property
    def rows(self) -> int:
        return len(self.lines) // self.size

    @property
    def cols(self) -> int:
        return len(self.lines[0]) // self.size if self.lines else 0

    def face_at(self, face_row: int, face_col: int) -> Optional[Face]:
        return self._by_origin.get((face_row, face_col))


@dataclass(frozen=True, slots=True)
class Instruction:
    distance: int
    turn: Optional[Turn] = None


MovementProgram = Tuple[Instruction, ...]


def parse_board(lines: Union[str, Iterable[str]]) -> Net:
    if isinstance(lines, str):
        lines = lines.split("\n")
    rows = [line.rstrip("\r\n") for line in lines]
    while rows and not rows[-1].strip():
        rows.pop()
    if not rows:
        raise ParseError("board is empty")

    for r, line in enumerate(rows):
        bad = set(line) - {OPEN, WALL, VOID}
        if bad:
            raise ParseError(f"unexpected character {sorted(bad)[0]!r} on board line {r + 1}")

    tiles = sum(line.count(OPEN) + line.count(WALL) for line in rows)
    if tiles == 0 or tiles % 6:
        raise ParseError(f"board has {tiles} tiles, expected 6 equal square faces")
    size = math.isqrt(tiles // 6)
    if size * size * 6 != tiles:
        raise ParseError(f"board has {tiles} tiles, which is not 6 square faces")
    if len(rows) % size:
        raise ParseError(f"board height {len(rows)} is not a multiple of face size {size}")

    width = -(-max(len(line) for line in rows) // size) * size
    padded = tuple(line.ljust(width, VOID) for line in rows)

    faces: list[Face] = []
    for face_row in range(len(padded) // size):
        for face_col in range(width // size):
            block = tuple(
                padded[face_row * size + r][face_col * size:(face_col + 1) * size]
                for r in range(size)
            )
            voids = sum(line.count(VOID) for line in block)
            if voids == size * size:
                continue
            if voids:
                raise ParseError(
                    f"block at face ({face_row}, {face_col}) is only partly on the board"
                )
            faces.append(Face(id=len(faces), size=size, origin=(face_row, face_col), cells=block))

    if len(faces) != 6:
        raise ParseError(f"board has {len(faces)} faces, expected 6")
    return Net(size=size, faces=tuple(faces), lines=padded)


def parse_program(text: str) -> MovementProgram:
    text = text.strip()
    if not text:
        return ()
    if not _PROGRAM_RE.fullmatch(text):
        raise ParseError(f"malformed movement program near {text[:20]!r}")

    program: list[Instruction] = []
    for distance, turn_value in _TOKEN_RE.findall(text):
        steps = int(distance)
        if steps <= 0:
            raise ParseError("move distances must be positive")
        program.append(Instruction(distance=steps, turn=turn_value or None))  # type: ignore[arg-type]
    return tuple(program)


def parse_input(text: str) -> tuple[Net, MovementProgram]:
    parts = _SECTION_RE.split(text.replace("\r\n", "\n").rstrip(), maxsplit=1)
    if len(parts) != 2:
        raise ParseError("expected a blank line between the board and the movement program")
    board, program = parts
    return parse_board(board), parse_program(program)
