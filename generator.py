#!/usr/bin/env python3

import argparse
import json
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Tuple, Optional, Sequence

# 命令行工具之间共享的迷宫布局文件
LAYOUT_PATH = Path("maze_layout.json")

# 墙壁标志在布局文件中的顺序
WALL_ORDER = ("top", "right", "bottom", "left")


class InvalidGridSize(ValueError):
    """行数或列数不是正整数，无法定位左上角的起点单元格"""

    def __init__(self, rows, cols):
        super().__init__(f"迷宫尺寸无效: rows={rows!r}, cols={cols!r}（必须为正整数）")
        self.rows = rows
        self.cols = cols


def _is_positive_int(value) -> bool:
    # bool 是 int 的子类，这里需要排除
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def check_grid_size(rows, cols) -> None:
    """检查迷宫尺寸，不合法时抛出 InvalidGridSize"""
    if not (_is_positive_int(rows) and _is_positive_int(cols)):
        raise InvalidGridSize(rows, cols)


@dataclass
class MazeSettings:
    """迷宫生成参数"""
    rows: int = 30                # 行数
    cols: int = 20                # 列数
    mazes_per_page: int = 2       # 每页迷宫数量
    seed: Optional[int] = None    # 随机种子，None 表示每次结果不同

    def validate(self) -> None:
        check_grid_size(self.rows, self.cols)
        if not _is_positive_int(self.mazes_per_page):
            raise ValueError(f"每页迷宫数量必须为正整数: {self.mazes_per_page!r}")


@dataclass
class Walls:
    """单元格四个方向的墙壁，True 表示墙存在（不可通行）"""
    top: bool = True
    right: bool = True
    bottom: bool = True
    left: bool = True

    def as_flags(self) -> str:
        """按 上/右/下/左 顺序转换为 "1011" 形式的字符串"""
        return "".join("1" if getattr(self, name) else "0" for name in WALL_ORDER)

    @classmethod
    def from_flags(cls, flags: str) -> "Walls":
        if not isinstance(flags, str) or len(flags) != 4 or set(flags) - {"0", "1"}:
            raise ValueError(f"无效的墙壁标志: {flags!r}")
        return cls(*(ch == "1" for ch in flags))


@dataclass
class Cell:
    row: int
    col: int
    walls: Walls = field(default_factory=Walls)
    visited: bool = False  # 仅在生成过程中有意义


@dataclass(frozen=True)
class Maze:
    """生成结果。起点固定在左上角，终点固定在右下角。"""
    rows: int
    cols: int
    cells: Tuple[Tuple[Cell, ...], ...]

    @property
    def start(self) -> Tuple[int, int]:
        return (0, 0)

    @property
    def end(self) -> Tuple[int, int]:
        return (self.rows - 1, self.cols - 1)

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def to_dict(self) -> Dict:
        return {
            "rows": self.rows,
            "cols": self.cols,
            "start": list(self.start),
            "end": list(self.end),
            "walls": [[cell.walls.as_flags() for cell in row] for row in self.cells],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Maze":
        """从布局文件中的一项恢复迷宫，墙壁数据不完整时抛出 ValueError"""
        if not isinstance(data, dict):
            raise ValueError(f"迷宫数据必须是对象: {data!r}")
        try:
            rows = data["rows"]
            cols = data["cols"]
            walls = data["walls"]
        except KeyError as e:
            raise ValueError(f"迷宫数据缺少字段: {e}") from e

        check_grid_size(rows, cols)
        if not isinstance(walls, list) or len(walls) != rows:
            raise ValueError(f"墙壁数据应有 {rows} 行")

        cells = []
        for r, row_flags in enumerate(walls):
            if not isinstance(row_flags, list) or len(row_flags) != cols:
                raise ValueError(f"第 {r} 行墙壁数据应有 {cols} 列")
            cells.append(tuple(
                Cell(r, c, Walls.from_flags(flags)) for c, flags in enumerate(row_flags)
            ))
        return cls(rows, cols, tuple(cells))


class MazeGenerator:
    """使用迭代式深度优先回溯算法生成完美迷宫（只有唯一解）。

    用显式栈代替递归，大尺寸迷宫也不会受到递归深度限制。
    随机数来源可以注入，传入固定种子的 ``random.Random`` 即可复现结果。
    """

    # (行偏移, 列偏移)：上、下、左、右，不考虑对角线
    DIRECTIONS = [(-1, 0), (1, 0), (0, -1), (0, 1)]

    def __init__(self, rows: int, cols: int, rng: Optional[random.Random] = None):
        check_grid_size(rows, cols)
        self.rows = rows
        self.cols = cols
        self.rng = rng if rng is not None else random.Random()
        self.grid: List[List[Cell]] = []

    def create_grid(self) -> List[List[Cell]]:
        """创建所有墙壁都存在、均未访问的网格"""
        return [[Cell(r, c) for c in range(self.cols)] for r in range(self.rows)]

    def is_in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get_unvisited_neighbors(self, cell: Cell) -> List[Cell]:
        neighbors = []
        for dr, dc in self.DIRECTIONS:
            r, c = cell.row + dr, cell.col + dc
            if self.is_in_bounds(r, c) and not self.grid[r][c].visited:
                neighbors.append(self.grid[r][c])
        return neighbors

    @staticmethod
    def remove_wall_between(current: Cell, nxt: Cell) -> None:
        """打通两个相邻单元格之间的墙，两侧同时清除"""
        dr = nxt.row - current.row
        dc = nxt.col - current.col

        if (dr, dc) == (0, 1):
            current.walls.right = False
            nxt.walls.left = False
        elif (dr, dc) == (0, -1):
            current.walls.left = False
            nxt.walls.right = False
        elif (dr, dc) == (1, 0):
            current.walls.bottom = False
            nxt.walls.top = False
        elif (dr, dc) == (-1, 0):
            current.walls.top = False
            nxt.walls.bottom = False
        else:
            raise ValueError(
                f"单元格不相邻: ({current.row},{current.col}) -> ({nxt.row},{nxt.col})"
            )

    def generate(self) -> Maze:
        self.grid = self.create_grid()

        # 从左上角开始
        start_cell = self.grid[0][0]
        start_cell.visited = True
        stack = [start_cell]

        while stack:
            current = stack[-1]
            neighbors = self.get_unvisited_neighbors(current)

            if not neighbors:
                # 没有可挖的邻居，回溯
                stack.pop()
                continue

            nxt = self.rng.choice(neighbors)
            self.remove_wall_between(current, nxt)
            nxt.visited = True
            stack.append(nxt)

        return Maze(self.rows, self.cols, tuple(tuple(row) for row in self.grid))


def generate_maze(rows: int, cols: int, rng: Optional[random.Random] = None) -> Maze:
    """生成一个 rows x cols 的完美迷宫

    Args:
        rows: 行数（正整数）
        cols: 列数（正整数）
        rng: 随机数来源，None 则每次调用使用独立的新实例

    Raises:
        InvalidGridSize: 尺寸不是正整数
    """
    return MazeGenerator(rows, cols, rng).generate()


def generate_mazes(settings: MazeSettings) -> List[Maze]:
    """按照设置生成一页的迷宫，每个迷宫使用各自独立的随机数序列"""
    settings.validate()
    seeds = random.Random(settings.seed)
    return [
        generate_maze(settings.rows, settings.cols, random.Random(seeds.getrandbits(64)))
        for _ in range(settings.mazes_per_page)
    ]


def export_maze_layout(mazes: Sequence[Maze], path: Path = LAYOUT_PATH) -> Path:
    """将迷宫导出为 JSON 布局文件（不换行）"""
    path = Path(path)
    layout_data = [maze.to_dict() for maze in mazes]
    with path.open("w", encoding="utf8") as f:
        json.dump(layout_data, f, separators=(',', ':'))

    print(f"迷宫布局已导出到 {path}，共 {len(layout_data)} 个迷宫")
    return path


def load_maze_layout(path: Path = LAYOUT_PATH) -> List[Maze]:
    """读取布局文件。文件不存在或 JSON 损坏时异常直接向上抛出。"""
    data = json.loads(Path(path).read_text(encoding="utf8"))
    if not isinstance(data, list):
        raise ValueError("布局文件的顶层必须是列表")
    return [Maze.from_dict(item) for item in data]


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    defaults = MazeSettings()
    parser = argparse.ArgumentParser(description="生成只有唯一解的矩形迷宫")
    parser.add_argument("--rows", type=int, default=defaults.rows, help="行数")
    parser.add_argument("--cols", type=int, default=defaults.cols, help="列数")
    parser.add_argument("--count", type=int, default=defaults.mazes_per_page,
                        help="每页迷宫数量")
    parser.add_argument("--seed", type=int, default=None, help="随机种子")
    parser.add_argument("--output", type=Path, default=LAYOUT_PATH, help="布局文件路径")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    settings = MazeSettings(
        rows=args.rows,
        cols=args.cols,
        mazes_per_page=args.count,
        seed=args.seed,
    )

    print("=== 迷宫生成器 ===")
    try:
        mazes = generate_mazes(settings)
    except ValueError as e:
        print(f"错误: {e}")
        return 1

    print(f"迷宫尺寸: {settings.rows} x {settings.cols}")
    print(f"生成数量: {len(mazes)}")
    if settings.seed is not None:
        print(f"随机种子: {settings.seed}")

    export_maze_layout(mazes, args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
