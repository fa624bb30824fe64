from __future__ import annotations

import logging
from collections import deque
from typing import Mapping, Tuple

from cubewalk.game.board import Net
from cubewalk.game.errors import ConfigurationError
from cubewalk.game.geometry import (
    DIR_NAMES,
    DIR_VECTORS,
    Dir,
    FaceBasis,
    X,
    Y,
    Z,
    dir_from_vec,
    dir_vec,
    neg,
    opposite,
)

logger = logging.getLogger(__name__)

Edge = Tuple[int, Dir]  # (face id, edge)
EDGES: tuple[Dir, ...] = (0, 1, 2, 3)


def rotation_offset(exit_edge: Dir, entry_edge: Dir) -> int:
    """Clockwise quarter turns between the heading leaving ``exit_edge`` and the one entering through ``entry_edge``."""
    return (entry_edge + 2 - exit_edge) % 4


class FaceAdjacency:
    def __init__(self, face_count: int, table: Mapping[Edge, Edge], *, closed: bool = True) -> None:
        self.face_count = face_count
        self.closed = closed
        self._table: dict[Edge, Edge] = dict(table)
        self._validate()

    @classmethod
    def fold(cls, net: Net) -> "FaceAdjacency":
        """Fold the net into a cube and glue every edge to the face it lands on."""
        bases: dict[int, FaceBasis] = {0: FaceBasis(n=Z, r=X, d=neg(Y))}
        queue = deque([net.faces[0]])
        while queue:
            face = queue.popleft()
            row, col = face.origin
            for direction in EDGES:
                dr, dc = DIR_VECTORS[direction]
                neighbor = net.face_at(row + dr, col + dc)
                if neighbor is None or neighbor.id in bases:
                    continue
                bases[neighbor.id] = bases[face.id].roll(direction)
                queue.append(neighbor)

        if len(bases) != len(net.faces):
            raise ConfigurationError("net faces are not all connected")
        by_normal = {basis.n: face_id for face_id, basis in bases.items()}
        if len(by_normal) != 6:
            raise ConfigurationError("net does not fold into a cube: two faces overlap")

        table: dict[Edge, Edge] = {}
        for face_id, basis in bases.items():
            for direction in EDGES:
                neighbor_id = by_normal[dir_vec(basis, direction)]
                entry = dir_from_vec(bases[neighbor_id], basis.n)
                table[(face_id, direction)] = (neighbor_id, entry)
        logger.debug("folded %d faces of size %d into a cube", len(bases), net.size)
        return cls(len(net.faces), table, closed=True)

    @classmethod
    def wrap(cls, net: Net) -> "FaceAdjacency":
        """Flat board where leaving an edge re-enters on the far side of the same row or column."""
        table: dict[Edge, Edge] = {}
        for face in net.faces:
            for direction in EDGES:
                dr, dc = DIR_VECTORS[direction]
                row, col = face.origin
                while True:
                    row = (row + dr) % net.rows
                    col = (col + dc) % net.cols
                    neighbor = net.face_at(row, col)
                    if neighbor is not None:
                        break
                table[(face.id, direction)] = (neighbor.id, opposite(direction))
        return cls(len(net.faces), table, closed=False)

    def lookup(self, face: int, edge: Dir) -> Edge:
        try:
            return self._table[(face, edge)]
        except KeyError:
            raise ConfigurationError(f"face {face} has no neighbor on its {DIR_NAMES[edge]} edge") from None

    def neighbors(self, face: int) -> list[int]:
        return [self.lookup(face, edge)[0] for edge in EDGES]

    def rotation_offset(self, exit_edge: Dir, entry_edge: Dir) -> int:
        return rotation_offset(exit_edge, entry_edge)

    def _validate(self) -> None:
        for face in range(self.face_count):
            for edge in EDGES:
                if (face, edge) not in self._table:
                    raise ConfigurationError(f"face {face} has no neighbor on its {DIR_NAMES[edge]} edge")

        for (face, edge), (neighbor, entry) in self._table.items():
            if not 0 <= face < self.face_count or edge not in EDGES:
                raise ConfigurationError(f"unknown edge {(face, edge)!r} in adjacency table")
            if not 0 <= neighbor < self.face_count or entry not in EDGES:
                raise ConfigurationError(f"face {face} {DIR_NAMES[edge]} edge points at unknown edge {(neighbor, entry)!r}")
            back = self._table.get((neighbor, entry))
            if back != (face, edge):
                raise ConfigurationError(
                    f"face {face} {DIR_NAMES[edge]} edge leads to face {neighbor} "
                    f"{DIR_NAMES[entry]} edge, which does not lead back"
                )

        if self.closed:
            for face in range(self.face_count):
                neighbors = self.neighbors(face)
                if face in neighbors or len(set(neighbors)) != 4:
                    raise ConfigurationError(f"face {face} does not have 4 distinct neighbors: {neighbors}")
