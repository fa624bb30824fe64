from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

Dir = Literal[0, 1, 2, 3]  # Right, Down, Left, Up (clockwise, also the password code)
Turn = Literal["L", "R"]

RIGHT: Dir = 0
DOWN: Dir = 1
LEFT: Dir = 2
UP: Dir = 3

DIR_VECTORS: dict[Dir, Tuple[int, int]] = {
    RIGHT: (0, 1),
    DOWN: (1, 0),
    LEFT: (0, -1),
    UP: (-1, 0),
}
DIR_NAMES: dict[Dir, str] = {RIGHT: "right", DOWN: "down", LEFT: "left", UP: "up"}
DIR_GLYPHS: dict[Dir, str] = {RIGHT: ">", DOWN: "v", LEFT: "<", UP: "^"}


@dataclass(frozen=True, slots=True)
class Vec3:
    x: int
    y: int
    z: int


X = Vec3(1, 0, 0)
Y = Vec3(0, 1, 0)
Z = Vec3(0, 0, 1)


def neg(v: Vec3) -> Vec3:
    return Vec3(-v.x, -v.y, -v.z)


@dataclass(frozen=True, slots=True)
class FaceBasis:
    """Orientation of a face on the folded cube.

    ``n`` is the outward normal, ``r`` points along increasing column and
    ``d`` along increasing row, both as seen from outside the cube.
    """

    n: Vec3
    r: Vec3
    d: Vec3

    def roll(self, direction: Dir) -> "FaceBasis":
        """Basis of the face glued to this one across ``direction``."""
        if direction == RIGHT:
            return FaceBasis(n=self.r, r=neg(self.n), d=self.d)
        if direction == LEFT:
            return FaceBasis(n=neg(self.r), r=self.n, d=self.d)
        if direction == DOWN:
            return FaceBasis(n=self.d, r=self.r, d=neg(self.n))
        return FaceBasis(n=neg(self.d), r=self.r, d=self.n)


def dir_vec(basis: FaceBasis, direction: Dir) -> Vec3:
    if direction == RIGHT:
        return basis.r
    if direction == DOWN:
        return basis.d
    if direction == LEFT:
        return neg(basis.r)
    return neg(basis.d)


def dir_from_vec(basis: FaceBasis, v: Vec3) -> Dir:
    for direction in (RIGHT, DOWN, LEFT, UP):
        if dir_vec(basis, direction) == v:
            return direction
    raise ValueError("vector is not a valid face direction")


def opposite(direction: Dir) -> Dir:
    return ((direction + 2) % 4)  # type: ignore[return-value]


def rotate_heading(direction: Dir, offset: int) -> Dir:
    return ((direction + offset) % 4)  # type: ignore[return-value]


def turn(direction: Dir, turn_value: Optional[Turn]) -> Dir:
    if turn_value is None:
        return direction
    if turn_value == "R":
        return rotate_heading(direction, 1)
    if turn_value == "L":
        return rotate_heading(direction, 3)
    raise ValueError("turn must be 'L', 'R' or None")


def edge_position(row: int, col: int, exit_edge: Dir, size: int) -> int:
    """Offset along ``exit_edge``, counted from the walker's left towards its right hand."""
    if exit_edge == RIGHT:
        return row
    if exit_edge == DOWN:
        return size - 1 - col
    if exit_edge == LEFT:
        return size - 1 - row
    return col


def entry_cell(edge_pos: int, heading: Dir, size: int) -> Tuple[int, int]:
    """Boundary cell entered while travelling ``heading`` at ``edge_pos``."""
    if heading == RIGHT:
        return edge_pos, 0
    if heading == DOWN:
        return 0, size - 1 - edge_pos
    if heading == LEFT:
        return size - 1 - edge_pos, size - 1
    return size - 1, edge_pos


def remap_coordinate(row: int, col: int, exit_edge: Dir, offset: int, size: int) -> Tuple[int, int]:
    # The surface of a cube is orientable: the side of the seam on the
    # walker's right stays on its right after the fold.
    edge_pos = edge_position(row, col, exit_edge, size)
    return entry_cell(edge_pos, rotate_heading(exit_edge, offset), size)
