import pytest

from cubewalk.game.board import parse_board

EXAMPLE_BOARD = "\n".join(
    [
        "        ...#",
        "        .#..",
        "        #...",
        "        ....",
        "...#.......#",
        "........#...",
        "..#....#....",
        "..........#.",
        "        ...#....",
        "        .....#..",
        "        .#......",
        "        ......#.",
    ]
)
EXAMPLE_PROGRAM = "10R5L5R10L4R5L5"
EXAMPLE_INPUT = EXAMPLE_BOARD + "\n\n" + EXAMPLE_PROGRAM + "\n"

# The 11 cube nets, as face origins in face units.
CUBE_NETS = [
    [(0, 0), (1, 0), (1, 1), (1, 2), (1, 3), (2, 0)],
    [(0, 0), (1, 0), (1, 1), (1, 2), (1, 3), (2, 1)],
    [(0, 0), (1, 0), (1, 1), (1, 2), (1, 3), (2, 2)],
    [(0, 0), (1, 0), (1, 1), (1, 2), (1, 3), (2, 3)],
    [(0, 1), (1, 0), (1, 1), (1, 2), (1, 3), (2, 1)],
    [(0, 1), (1, 0), (1, 1), (1, 2), (1, 3), (2, 2)],
    [(0, 0), (0, 1), (1, 1), (1, 2), (1, 3), (2, 1)],
    [(0, 0), (0, 1), (1, 1), (1, 2), (1, 3), (2, 2)],
    [(0, 0), (0, 1), (1, 1), (1, 2), (1, 3), (2, 3)],
    [(0, 0), (0, 1), (1, 1), (1, 2), (2, 2), (2, 3)],
    [(0, 0), (0, 1), (0, 2), (1, 2), (1, 3), (1, 4)],
]


def make_board(origins, size, walls=()):
    """Board text with open faces at ``origins`` and ``#`` at the global ``walls``."""
    rows = max(r for r, _ in origins) + 1
    cols = max(c for _, c in origins) + 1
    grid = [[" "] * (cols * size) for _ in range(rows * size)]
    for fr, fc in origins:
        for r in range(size):
            for c in range(size):
                grid[fr * size + r][fc * size + c] = "."
    for r, c in walls:
        grid[r][c] = "#"
    return "\n".join("".join(line).rstrip() for line in grid)


@pytest.fixture
def example_net():
    return parse_board(EXAMPLE_BOARD)


@pytest.fixture
def open_example_net():
    return parse_board(EXAMPLE_BOARD.replace("#", "."))
