#!/usr/bin/env python3
"""Print export: lay out one or more mazes on US Letter pages and save a PDF.

Mazes are read from the layout file written by ``generator.py`` (or generated
on the fly when any of ``--rows``/``--cols``/``--count``/``--seed`` is given)
and drawn with the same renderer used
for the on-screen preview.
"""

from __future__ import annotations

import argparse
import math
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure
import numpy as np

from generator import LAYOUT_PATH, Maze, MazeSettings, generate_mazes, load_maze_layout
from render_maze import RenderOptions, get_maze_dimensions, render_maze

# US Letter in points (1 inch = 72 points)
PAGE_WIDTH_PT = 8.5 * 72
PAGE_HEIGHT_PT = 11 * 72
MARGIN_PT = 36  # 0.5 inch

USABLE_WIDTH = PAGE_WIDTH_PT - 2 * MARGIN_PT
USABLE_HEIGHT = PAGE_HEIGHT_PT - 2 * MARGIN_PT

# Larger cells keep the wall proportions sensible once scaled down
BASE_CELL_SIZE = 20
BASE_WALL_THICKNESS = 4
FILL_RATIO = 0.9  # leave some padding inside each slot


@dataclass
class MazeLayout:
    """Placement of one maze on the page, in points from the top-left corner."""
    x: float
    y: float
    width: float
    height: float
    scale: float


def calculate_layout(mazes: Sequence[Maze], cell_size: float = BASE_CELL_SIZE,
                     wall_thickness: float = BASE_WALL_THICKNESS) -> List[MazeLayout]:
    """Pick the grid arrangement that lets every maze be drawn the largest.

    Every column count from 1 to ``len(mazes)`` is tried; the scale of an
    arrangement is limited by the maze that fits its slot worst. All mazes
    share the winning scale and are centred in their slots, row-major.
    """
    count = len(mazes)
    if count == 0:
        return []

    options = RenderOptions(cell_size=cell_size, wall_thickness=wall_thickness)
    dims = np.array([get_maze_dimensions(maze, options) for maze in mazes], dtype=float)

    best_cols, best_rows, best_scale = 1, count, 0.0
    for cols in range(1, count + 1):
        rows = math.ceil(count / cols)
        slot_width = USABLE_WIDTH / cols
        slot_height = USABLE_HEIGHT / rows

        scale = float(np.min(np.minimum(slot_width / dims[:, 0],
                                        slot_height / dims[:, 1]))) * FILL_RATIO
        if scale > best_scale:
            best_cols, best_rows, best_scale = cols, rows, scale

    slot_width = USABLE_WIDTH / best_cols
    slot_height = USABLE_HEIGHT / best_rows

    layouts = []
    for i, (width, height) in enumerate(dims):
        col = i % best_cols
        row = i // best_cols
        scaled_width = width * best_scale
        scaled_height = height * best_scale
        layouts.append(MazeLayout(
            x=MARGIN_PT + col * slot_width + (slot_width - scaled_width) / 2,
            y=MARGIN_PT + row * slot_height + (slot_height - scaled_height) / 2,
            width=scaled_width,
            height=scaled_height,
            scale=best_scale,
        ))
    return layouts


def compose_page(mazes: Sequence[Maze], cell_size: float = BASE_CELL_SIZE,
                 wall_thickness: float = BASE_WALL_THICKNESS) -> Figure:
    """Build a single portrait Letter page with every maze placed on it."""
    options = RenderOptions(cell_size=cell_size, wall_thickness=wall_thickness)
    fig = Figure(figsize=(PAGE_WIDTH_PT / 72, PAGE_HEIGHT_PT / 72))
    fig.patch.set_facecolor("white")

    for maze, layout in zip(mazes, calculate_layout(mazes, cell_size, wall_thickness)):
        # Figure coordinates are fractions measured from the bottom-left
        ax = fig.add_axes([
            layout.x / PAGE_WIDTH_PT,
            1 - (layout.y + layout.height) / PAGE_HEIGHT_PT,
            layout.width / PAGE_WIDTH_PT,
            layout.height / PAGE_HEIGHT_PT,
        ])
        render_maze(ax, maze, options=options)
    return fig


def export_to_pdf(mazes: Sequence[Maze], filename: Path | str = "mazes.pdf",
                  per_page: Optional[int] = None) -> Optional[Path]:
    """Write the mazes to a PDF file and return its path.

    ``per_page`` splits the mazes over several pages; ``None`` puts all of
    them on one page. Nothing is written for an empty list.
    """
    if not mazes:
        return None
    if per_page is None:
        per_page = len(mazes)
    if per_page < 1:
        raise ValueError(f"per_page must be positive, got {per_page}")

    path = Path(filename)
    with PdfPages(path) as pdf:
        for start in range(0, len(mazes), per_page):
            pdf.savefig(compose_page(mazes[start:start + per_page]))
    return path


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export mazes to a printable PDF")
    parser.add_argument("--layout", type=Path, default=LAYOUT_PATH,
                        help="Maze layout JSON written by generator.py")
    parser.add_argument("--output", type=Path, default=Path("mazes.pdf"), help="PDF file to write")
    parser.add_argument("--per-page", type=int, default=None,
                        help="Mazes per page (default: all on one page)")
    parser.add_argument("--rows", type=int, default=None,
                        help="Generate fresh mazes with this many rows instead of reading --layout")
    parser.add_argument("--cols", type=int, default=None, help="Columns for generated mazes")
    parser.add_argument("--count", type=int, default=None, help="Number of generated mazes")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        # Any generation option means fresh mazes; --layout is only read otherwise
        generation_args = (args.rows, args.cols, args.count, args.seed)
        if any(value is not None for value in generation_args):
            defaults = MazeSettings()
            mazes = generate_mazes(MazeSettings(
                rows=args.rows if args.rows is not None else defaults.rows,
                cols=args.cols if args.cols is not None else defaults.cols,
                mazes_per_page=args.count if args.count is not None else defaults.mazes_per_page,
                seed=args.seed,
            ))
        else:
            mazes = load_maze_layout(args.layout)

        path = export_to_pdf(mazes, args.output, args.per_page)
    except (OSError, ValueError) as e:
        print(f"Export failed: {e}")
        return 1

    if path is None:
        print("No mazes to export.")
        return 0

    print(f"Wrote {len(mazes)} maze(s) to {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
