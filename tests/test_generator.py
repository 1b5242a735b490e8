import random

import pytest

from generator import (
    Cell,
    InvalidGridSize,
    Maze,
    MazeGenerator,
    MazeSettings,
    Walls,
    generate_maze,
    generate_mazes,
)
from tester import check_maze, passage_edges, reachable_cells

SIZES = [(1, 1), (2, 2), (3, 7), (10, 10), (25, 13)]


@pytest.mark.parametrize("rows,cols", SIZES)
def test_passages_form_spanning_tree(rows, cols):
    maze = generate_maze(rows, cols, random.Random(rows * 100 + cols))

    assert len(passage_edges(maze)) == rows * cols - 1
    assert len(reachable_cells(maze)) == rows * cols
    assert check_maze(maze) == []


@pytest.mark.parametrize("seed", range(5))
def test_every_cell_reachable_from_start(seed):
    maze = generate_maze(12, 9, random.Random(seed))
    reached = reachable_cells(maze, maze.start)

    assert reached == {(r, c) for r in range(12) for c in range(9)}
    assert maze.end in reached


def test_walls_are_symmetric():
    maze = generate_maze(15, 15, random.Random(3))
    for r in range(maze.rows):
        for c in range(maze.cols):
            cell = maze.cell(r, c)
            if c + 1 < maze.cols:
                assert cell.walls.right == maze.cell(r, c + 1).walls.left
            if r + 1 < maze.rows:
                assert cell.walls.bottom == maze.cell(r + 1, c).walls.top


def test_outer_border_kept():
    maze = generate_maze(9, 6, random.Random(11))
    assert all(maze.cell(r, 0).walls.left for r in range(9))
    assert all(maze.cell(r, 5).walls.right for r in range(9))
    assert all(maze.cell(0, c).walls.top for c in range(6))
    assert all(maze.cell(8, c).walls.bottom for c in range(6))


@pytest.mark.parametrize("length", [1, 2, 5, 40])
def test_single_row_is_a_corridor(length):
    maze = generate_maze(1, length)
    row = maze.cells[0]

    for left, right in zip(row, row[1:]):
        assert not left.walls.right
        assert not right.walls.left
    assert all(cell.walls.top and cell.walls.bottom for cell in row)
    assert row[0].walls.left and row[-1].walls.right


@pytest.mark.parametrize("length", [1, 2, 5, 40])
def test_single_column_is_a_corridor(length):
    maze = generate_maze(length, 1)
    column = [row[0] for row in maze.cells]

    for upper, lower in zip(column, column[1:]):
        assert not upper.walls.bottom
        assert not lower.walls.top
    assert all(cell.walls.left and cell.walls.right for cell in column)
    assert column[0].walls.top and column[-1].walls.bottom


@pytest.mark.parametrize("rows,cols", [(0, 5), (5, 0), (-1, 3), (3, -4), (0, 0)])
def test_non_positive_size_rejected(rows, cols):
    with pytest.raises(InvalidGridSize) as excinfo:
        generate_maze(rows, cols)
    assert excinfo.value.rows == rows
    assert excinfo.value.cols == cols


@pytest.mark.parametrize("rows,cols", [(2.5, 3), (3, "4"), (True, 3), (None, 2)])
def test_non_integer_size_rejected(rows, cols):
    with pytest.raises(InvalidGridSize):
        generate_maze(rows, cols)


def test_invalid_size_is_a_value_error():
    with pytest.raises(ValueError):
        MazeGenerator(0, 1)


def test_two_by_two():
    maze = generate_maze(2, 2, random.Random(0))

    assert sum(len(row) for row in maze.cells) == 4
    assert len(passage_edges(maze)) == 3
    assert maze.start == (0, 0)
    assert maze.end == (1, 1)

    # shortest route from start to end is two hops in a 2x2 tree
    distance = {maze.start: 0}
    frontier = [maze.start]
    while frontier:
        nxt = []
        for pos in frontier:
            for a, b in passage_edges(maze):
                other = b if a == pos else a if b == pos else None
                if other is not None and other not in distance:
                    distance[other] = distance[pos] + 1
                    nxt.append(other)
        frontier = nxt
    assert distance[maze.end] <= 2


def test_same_seed_gives_same_walls():
    first = generate_maze(20, 20, random.Random(42))
    second = generate_maze(20, 20, random.Random(42))
    assert first.to_dict() == second.to_dict()


def test_different_seeds_give_variety():
    layouts = {str(generate_maze(10, 10, random.Random(seed)).to_dict()) for seed in range(10)}
    assert len(layouts) > 1


def test_neighbor_choice_uses_injected_rng():
    class FirstChoice:
        def __init__(self):
            self.calls = 0

        def choice(self, seq):
            self.calls += 1
            return seq[0]

    rng = FirstChoice()
    maze = generate_maze(3, 3, rng)

    # one choice per carved passage
    assert rng.calls == 8
    # always taking the first candidate (up, down, left, right) walks down column 0 first
    assert not maze.cell(0, 0).walls.bottom
    assert not maze.cell(1, 0).walls.bottom
    assert check_maze(maze) == []


def test_large_grid_does_not_hit_recursion_limit():
    maze = generate_maze(200, 200, random.Random(1))
    assert len(passage_edges(maze)) == 200 * 200 - 1


def test_remove_wall_between_adjacent_cells():
    a, b = Cell(2, 2), Cell(2, 3)
    MazeGenerator.remove_wall_between(a, b)
    assert not a.walls.right and not b.walls.left
    assert a.walls.top and a.walls.bottom and a.walls.left

    c, d = Cell(4, 1), Cell(3, 1)
    MazeGenerator.remove_wall_between(c, d)
    assert not c.walls.top and not d.walls.bottom


@pytest.mark.parametrize("other", [Cell(0, 0), Cell(1, 1), Cell(0, 2)])
def test_remove_wall_between_rejects_non_adjacent(other):
    with pytest.raises(ValueError):
        MazeGenerator.remove_wall_between(Cell(0, 0), other)


def test_maze_is_frozen():
    maze = generate_maze(2, 3)
    with pytest.raises(AttributeError):
        maze.rows = 5


def test_walls_flags():
    assert Walls().as_flags() == "1111"
    assert Walls(top=False, left=False).as_flags() == "0110"
    assert Walls.from_flags("0110") == Walls(top=False, right=True, bottom=True, left=False)


@pytest.mark.parametrize("flags", ["111", "11111", "12a0", 1111])
def test_walls_bad_flags(flags):
    with pytest.raises(ValueError):
        Walls.from_flags(flags)


def test_from_dict_rejects_wrong_shape():
    data = generate_maze(2, 2).to_dict()
    data["walls"] = data["walls"][:1]
    with pytest.raises(ValueError):
        Maze.from_dict(data)

    with pytest.raises(ValueError):
        Maze.from_dict({"rows": 2, "cols": 2})

    with pytest.raises(InvalidGridSize):
        Maze.from_dict({"rows": 0, "cols": 2, "walls": []})


def test_generate_mazes_count_and_independence():
    mazes = generate_mazes(MazeSettings(rows=8, cols=6, mazes_per_page=4, seed=5))

    assert len(mazes) == 4
    assert all((m.rows, m.cols) == (8, 6) for m in mazes)
    assert all(check_maze(m) == [] for m in mazes)
    assert len({str(m.to_dict()) for m in mazes}) > 1
    assert [m.to_dict() for m in mazes] == [
        m.to_dict() for m in generate_mazes(MazeSettings(rows=8, cols=6, mazes_per_page=4, seed=5))
    ]


def test_settings_validation():
    MazeSettings().validate()
    with pytest.raises(InvalidGridSize):
        MazeSettings(rows=0).validate()
    with pytest.raises(ValueError):
        MazeSettings(mazes_per_page=0).validate()
