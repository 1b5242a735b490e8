#!/usr/bin/env python3
"""Simple validator for the maze generator.

The script runs ``generator.py``'s :func:`generate_mazes` with the provided
parameters and performs a series of sanity checks on every produced maze:

* Dimensions match and start/end sit in opposite corners.
* Shared walls agree on both sides and the outer border is intact.
* Exactly ``rows * cols - 1`` passages were carved.
* Every cell is reachable from the start, so the passages form a spanning tree.
"""

from __future__ import annotations

import argparse
from collections import deque
from typing import List, Sequence, Set, Tuple

import generator

Position = Tuple[int, int]


def passage_edges(maze: generator.Maze) -> Set[Tuple[Position, Position]]:
    """Return every open passage as a pair of adjacent cell positions."""
    edges = set()
    for r, row in enumerate(maze.cells):
        for c, cell in enumerate(row):
            if c + 1 < maze.cols and not cell.walls.right:
                edges.add(((r, c), (r, c + 1)))
            if r + 1 < maze.rows and not cell.walls.bottom:
                edges.add(((r, c), (r + 1, c)))
    return edges


def reachable_cells(maze: generator.Maze, origin: Position | None = None) -> Set[Position]:
    """Breadth-first walk through open walls starting at ``origin`` (default: start)."""
    origin = origin or maze.start
    seen = {origin}
    queue = deque([origin])
    while queue:
        r, c = queue.popleft()
        walls = maze.cells[r][c].walls
        steps = [
            (walls.top, (r - 1, c)),
            (walls.bottom, (r + 1, c)),
            (walls.left, (r, c - 1)),
            (walls.right, (r, c + 1)),
        ]
        for blocked, (nr, nc) in steps:
            if blocked or not (0 <= nr < maze.rows and 0 <= nc < maze.cols):
                continue
            if (nr, nc) not in seen:
                seen.add((nr, nc))
                queue.append((nr, nc))
    return seen


def check_maze(maze: generator.Maze) -> List[str]:
    """Return a list of problems; an empty list means the maze is perfect."""
    problems = []

    if len(maze.cells) != maze.rows or any(len(row) != maze.cols for row in maze.cells):
        problems.append(f"grid shape does not match {maze.rows}x{maze.cols}")
        return problems

    if maze.start != (0, 0):
        problems.append(f"start at {maze.start}, expected (0, 0)")
    if maze.end != (maze.rows - 1, maze.cols - 1):
        problems.append(f"end at {maze.end}, expected {(maze.rows - 1, maze.cols - 1)}")

    for r, row in enumerate(maze.cells):
        for c, cell in enumerate(row):
            if (cell.row, cell.col) != (r, c):
                problems.append(f"cell at ({r},{c}) reports ({cell.row},{cell.col})")
            if c + 1 < maze.cols and cell.walls.right != row[c + 1].walls.left:
                problems.append(f"right/left walls disagree between ({r},{c}) and ({r},{c + 1})")
            if r + 1 < maze.rows and cell.walls.bottom != maze.cells[r + 1][c].walls.top:
                problems.append(f"bottom/top walls disagree between ({r},{c}) and ({r + 1},{c})")
            if r == 0 and not cell.walls.top:
                problems.append(f"outer top wall missing at ({r},{c})")
            if r == maze.rows - 1 and not cell.walls.bottom:
                problems.append(f"outer bottom wall missing at ({r},{c})")
            if c == 0 and not cell.walls.left:
                problems.append(f"outer left wall missing at ({r},{c})")
            if c == maze.cols - 1 and not cell.walls.right:
                problems.append(f"outer right wall missing at ({r},{c})")

    expected_edges = maze.rows * maze.cols - 1
    edge_count = len(passage_edges(maze))
    if edge_count != expected_edges:
        problems.append(f"expected {expected_edges} passages, got {edge_count}")

    reached = len(reachable_cells(maze))
    if reached != maze.rows * maze.cols:
        problems.append(f"only {reached} of {maze.rows * maze.cols} cells reachable from start")

    return problems


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate generated mazes")
    parser.add_argument("rows", type=int, help="Number of rows")
    parser.add_argument("cols", type=int, help="Number of columns")
    parser.add_argument("--count", type=int, default=1, help="Number of mazes to check")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = generator.MazeSettings(
        rows=args.rows,
        cols=args.cols,
        mazes_per_page=args.count,
        seed=args.seed,
    )
    mazes = generator.generate_mazes(settings)

    for i, maze in enumerate(mazes, 1):
        assert maze.rows == args.rows and maze.cols == args.cols, (
            f"maze {i}: expected {args.rows}x{args.cols}, got {maze.rows}x{maze.cols}"
        )
        problems = check_maze(maze)
        assert not problems, f"maze {i}: " + "; ".join(problems)

    print("All checks passed. Validated", len(mazes), "maze(s).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
