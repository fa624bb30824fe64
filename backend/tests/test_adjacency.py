import pytest

from conftest import CUBE_NETS, make_board
from cubewalk.game.adjacency import EDGES, FaceAdjacency, rotation_offset
from cubewalk.game.board import parse_board
from cubewalk.game.errors import ConfigurationError
from cubewalk.game.geometry import DOWN, LEFT, RIGHT, UP


def _table(adjacency):
    return {(f, e): adjacency.lookup(f, e) for f in range(adjacency.face_count) for e in EDGES}


def test_rotation_offset():
    assert rotation_offset(RIGHT, LEFT) == 0
    assert rotation_offset(RIGHT, UP) == 1
    assert rotation_offset(RIGHT, RIGHT) == 2
    assert rotation_offset(UP, RIGHT) == 3
    assert rotation_offset(DOWN, UP) == 0


def test_example_fold(example_net):
    adjacency = FaceAdjacency.fold(example_net)
    # Right edge of the middle face folds onto the top of the far right face.
    assert adjacency.lookup(3, RIGHT) == (5, UP)
    assert adjacency.lookup(5, UP) == (3, RIGHT)
    # Bottom of the bottom face meets the bottom of the leftmost face.
    assert adjacency.lookup(4, DOWN) == (1, DOWN)
    # Faces touching in the net stay glued flat.
    assert adjacency.lookup(0, DOWN) == (3, UP)
    assert adjacency.lookup(1, RIGHT) == (2, LEFT)


@pytest.mark.parametrize("origins", CUBE_NETS)
def test_every_cube_net_folds_closed(origins):
    adjacency = FaceAdjacency.fold(parse_board(make_board(origins, 2)))
    for face in range(6):
        neighbors = adjacency.neighbors(face)
        assert face not in neighbors
        assert len(set(neighbors)) == 4
        for edge in EDGES:
            neighbor, entry = adjacency.lookup(face, edge)
            assert adjacency.lookup(neighbor, entry) == (face, edge)


@pytest.mark.parametrize("origins", CUBE_NETS)
def test_opposite_faces_never_touch(origins):
    adjacency = FaceAdjacency.fold(parse_board(make_board(origins, 1)))
    for face in range(6):
        others = set(range(6)) - {face} - set(adjacency.neighbors(face))
        # Exactly one face, the opposite one, is not adjacent.
        assert len(others) == 1


@pytest.mark.parametrize(
    "origins",
    [
        [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)],
        [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4), (0, 5)],
        [(0, 0), (1, 0), (1, 1), (1, 2), (1, 3), (1, 4)],
    ],
)
def test_non_cube_net_is_rejected(origins):
    with pytest.raises(ConfigurationError, match="does not fold"):
        FaceAdjacency.fold(parse_board(make_board(origins, 2)))


def test_disconnected_net_is_rejected():
    board = make_board([(0, 0), (0, 1), (0, 2), (0, 3), (0, 4), (2, 0)], 2)
    with pytest.raises(ConfigurationError, match="connected"):
        FaceAdjacency.fold(parse_board(board))


def test_wrap_follows_rows_and_columns(example_net):
    adjacency = FaceAdjacency.wrap(example_net)
    assert adjacency.lookup(0, RIGHT) == (0, LEFT)
    assert adjacency.lookup(0, UP) == (4, DOWN)
    assert adjacency.lookup(3, RIGHT) == (1, LEFT)
    assert adjacency.lookup(1, UP) == (1, DOWN)
    assert adjacency.lookup(5, DOWN) == (5, UP)


class TestHandSuppliedTable:
    def test_accepts_folded_table(self, example_net):
        table = _table(FaceAdjacency.fold(example_net))
        adjacency = FaceAdjacency(6, table)
        assert adjacency.lookup(3, RIGHT) == (5, UP)

    def test_missing_edge(self, example_net):
        table = _table(FaceAdjacency.fold(example_net))
        del table[(2, DOWN)]
        with pytest.raises(ConfigurationError, match="no neighbor on its down edge"):
            FaceAdjacency(6, table)

    def test_asymmetric_edge(self, example_net):
        table = _table(FaceAdjacency.fold(example_net))
        table[(3, RIGHT)] = (5, LEFT)
        with pytest.raises(ConfigurationError, match="does not lead back"):
            FaceAdjacency(6, table)

    def test_unknown_face(self, example_net):
        table = _table(FaceAdjacency.fold(example_net))
        table[(0, UP)] = (9, UP)
        with pytest.raises(ConfigurationError, match="unknown edge"):
            FaceAdjacency(6, table)

    def test_closed_table_forbids_self_adjacency(self, example_net):
        table = _table(FaceAdjacency.wrap(example_net))
        with pytest.raises(ConfigurationError, match="distinct neighbors"):
            FaceAdjacency(6, table, closed=True)
        assert FaceAdjacency(6, table, closed=False).lookup(0, RIGHT) == (0, LEFT)
