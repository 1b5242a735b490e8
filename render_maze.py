#!/usr/bin/env python3
"""迷宫渲染工具。

读取 `generator.py` 生成的 JSON 布局文件，使用matplotlib在窗口中绘制迷宫，
或以 ASCII 形式输出到终端。墙壁采用圆角粗线，起点和终点用五角星标记。
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.patches import Polygon, Rectangle
import numpy as np

from generator import LAYOUT_PATH, Maze, load_maze_layout

Segment = Tuple[Tuple[float, float], Tuple[float, float]]


@dataclass
class RenderOptions:
    """渲染参数，尺寸单位与绘图坐标一致（屏幕为像素，PDF 为点）"""
    cell_size: float = 20
    wall_thickness: float = 4
    wall_color: str = "#2c3e50"
    background_color: str = "#ffffff"
    start_star_color: str = "#e74c3c"   # 起点：红色
    end_star_color: str = "#27ae60"     # 终点：绿色


DEFAULT_OPTIONS = RenderOptions()
# 屏幕预览使用的较小尺寸
PREVIEW_OPTIONS = RenderOptions(cell_size=16, wall_thickness=3)


def get_maze_dimensions(maze: Maze, options: Optional[RenderOptions] = None) -> Tuple[float, float]:
    """计算渲染迷宫所需的总宽度和高度

    Returns:
        (width, height)
    """
    opts = options or DEFAULT_OPTIONS
    width = maze.cols * opts.cell_size + opts.wall_thickness
    height = maze.rows * opts.cell_size + opts.wall_thickness
    return width, height


def wall_segments(maze: Maze, offset_x: float = 0, offset_y: float = 0,
                  options: Optional[RenderOptions] = None) -> List[Segment]:
    """返回需要绘制的墙壁线段。

    每个单元格只画上墙和左墙，右墙和下墙只在最右列、最下行绘制，
    内部的右墙/下墙已经作为相邻单元格的左墙/上墙画过了。
    """
    opts = options or DEFAULT_OPTIONS
    size = opts.cell_size
    half_wall = opts.wall_thickness / 2

    segments: List[Segment] = []
    for r, row in enumerate(maze.cells):
        for c, cell in enumerate(row):
            x = offset_x + c * size + half_wall
            y = offset_y + r * size + half_wall

            if cell.walls.top:
                segments.append(((x, y), (x + size, y)))
            if cell.walls.left:
                segments.append(((x, y), (x, y + size)))
            if c == maze.cols - 1 and cell.walls.right:
                segments.append(((x + size, y), (x + size, y + size)))
            if r == maze.rows - 1 and cell.walls.bottom:
                segments.append(((x, y + size), (x + size, y + size)))
    return segments


def star_points(cx: float, cy: float, outer_radius: float, inner_radius: float,
                spikes: int = 5) -> np.ndarray:
    """计算五角星的顶点，外顶点与内顶点交替，第一个顶点朝正上方（y 轴向下）"""
    index = np.arange(spikes * 2)
    angles = -np.pi / 2 + index * np.pi / spikes
    radii = np.where(index % 2 == 0, outer_radius, inner_radius)
    return np.column_stack((cx + np.cos(angles) * radii, cy + np.sin(angles) * radii))


def _points_per_unit(ax, width: float, height: float) -> float:
    # 等比例坐标轴会按较紧的一边缩放
    bbox = ax.get_window_extent()
    pixels = min(bbox.width / width, bbox.height / height)
    return pixels * 72.0 / ax.figure.dpi


def render_maze(ax, maze: Maze, offset_x: float = 0, offset_y: float = 0,
                options: Optional[RenderOptions] = None) -> None:
    """将迷宫绘制到matplotlib坐标轴上，第 0 行位于顶部"""
    opts = options or DEFAULT_OPTIONS
    size = opts.cell_size
    half_wall = opts.wall_thickness / 2
    width, height = get_maze_dimensions(maze, opts)

    ax.set_xlim(offset_x, offset_x + width)
    ax.set_ylim(offset_y + height, offset_y)
    ax.set_aspect("equal")
    ax.axis("off")

    # 背景
    ax.add_patch(Rectangle((offset_x, offset_y), width, height,
                           facecolor=opts.background_color, edgecolor="none", zorder=0))

    # 墙壁线宽以点为单位，需要从绘图坐标换算
    linewidth = opts.wall_thickness * _points_per_unit(ax, width, height)
    walls = LineCollection(wall_segments(maze, offset_x, offset_y, opts),
                           colors=opts.wall_color, linewidths=linewidth,
                           capstyle="round", joinstyle="round", zorder=1)
    ax.add_collection(walls)

    # 起点和终点的五角星
    star_radius = size * 0.35
    for (row, col), color in ((maze.start, opts.start_star_color),
                              (maze.end, opts.end_star_color)):
        cx = offset_x + col * size + half_wall + size / 2
        cy = offset_y + row * size + half_wall + size / 2
        ax.add_patch(Polygon(star_points(cx, cy, star_radius, star_radius * 0.4),
                             closed=True, facecolor=color, edgecolor="none", zorder=2))


def render_ascii(maze: Maze, start_char: str = "S", end_char: str = "E") -> str:
    """以 ASCII 字符画形式绘制迷宫"""
    top = "+" + "".join(("---" if cell.walls.top else "   ") + "+" for cell in maze.cells[0])
    lines = [top]

    for r, row in enumerate(maze.cells):
        body = "|" if row[0].walls.left else " "
        bottom = "+"
        for c, cell in enumerate(row):
            if (r, c) == maze.start:
                mark = start_char
            elif (r, c) == maze.end:
                mark = end_char
            else:
                mark = " "
            body += f" {mark} " + ("|" if cell.walls.right else " ")
            bottom += ("---" if cell.walls.bottom else "   ") + "+"
        lines.append(body)
        lines.append(bottom)

    return "\n".join(lines)


def show_mazes(mazes: Sequence[Maze], options: Optional[RenderOptions] = None):
    """在窗口中并排显示多个迷宫，返回创建的 Figure"""
    if not mazes:
        raise ValueError("没有迷宫需要显示")

    opts = options or PREVIEW_OPTIONS
    fig, axes = plt.subplots(1, len(mazes), squeeze=False,
                             figsize=(5 * len(mazes), 6))
    # 线宽按坐标轴当前大小换算，必须在调整布局之后再绘制
    for ax in axes[0]:
        ax.axis("off")
    fig.tight_layout()
    for ax, maze in zip(axes[0], mazes):
        render_maze(ax, maze, options=opts)
    plt.show()
    return fig


def render_window(path: Optional[Path] = None) -> int:
    """读取布局文件并在窗口中显示

    Returns:
        0 表示成功，其他值表示错误
    """
    path = path or LAYOUT_PATH
    if not Path(path).exists():
        print(f"错误：找不到文件 {path}")
        return 1

    mazes = load_maze_layout(path)
    if not mazes:
        print("没有迷宫需要渲染。")
        return 0

    print("\n=== 迷宫渲染统计 ===")
    print(f"迷宫数量: {len(mazes)}")
    for i, maze in enumerate(mazes, 1):
        width, height = get_maze_dimensions(maze, PREVIEW_OPTIONS)
        print(f"  迷宫 {i}: {maze.rows} x {maze.cols}，画布 {width:g} x {height:g}")

    show_mazes(mazes)
    return 0


def render_ascii_layout(path: Optional[Path] = None) -> int:
    """读取布局文件并以 ASCII 形式输出"""
    path = path or LAYOUT_PATH
    if not Path(path).exists():
        print(f"错误：找不到文件 {path}")
        return 1

    mazes = load_maze_layout(path)
    if not mazes:
        print("没有迷宫需要渲染。")
        return 0

    for i, maze in enumerate(mazes, 1):
        print(f"\n=== 迷宫 {i} ({maze.rows} x {maze.cols}) ===")
        print(render_ascii(maze))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """主函数：提供窗口和ASCII两种渲染选项。

    Returns:
        0 表示成功，其他值表示错误
    """
    import sys

    if argv is None:
        argv = sys.argv[1:]

    if argv:
        choice = argv[0]
    elif sys.stdin.isatty():
        print("=== 迷宫渲染工具 ===")
        print("1. 窗口显示 (推荐)")
        print("2. ASCII")
        print("3. 两种都显示")
        try:
            choice = input("请选择渲染方式 (1/2/3，默认为1): ").strip() or "1"
        except (KeyboardInterrupt, EOFError):
            print("\n使用默认窗口渲染")
            choice = "1"
    else:
        choice = "1"
        print("非交互模式，使用默认窗口渲染")

    try:
        if choice == "2":
            return render_ascii_layout()
        if choice == "3":
            return max(render_ascii_layout(), render_window())
        if choice != "1":
            print("无效选择，使用默认窗口渲染")
        return render_window()
    except KeyboardInterrupt:
        print("\n用户取消操作")
        return 0
    except (OSError, ValueError) as e:
        print(f"渲染过程中发生错误: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
