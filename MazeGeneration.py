"""
兼容性导入模块。

早期版本的工程通过 ``MazeGeneration`` 模块暴露迷宫生成器。
为保持旧代码能够继续工作，此文件从新的 ``generator`` 模块中
导入生成器相关的公开接口，并在 ``__all__`` 中导出它们。
"""

from generator import (  # 导入核心的迷宫生成接口
    Cell,
    InvalidGridSize,
    Maze,
    MazeGenerator,
    Walls,
    generate_maze,
)

# 控制 ``from MazeGeneration import *`` 的导出内容
__all__ = ["Cell", "InvalidGridSize", "Maze", "MazeGenerator", "Walls", "generate_maze"]
