"""
catmull_rom_path - 顶点路径上的 Catmull-Rom 样条求值

给定有序路点，在任意归一化参数处查询平滑的 3D 位置与切向速度，
既可跨整条路径（全局形式），也可限定在单个段内（clamped 形式）。
"""

from .config import EvaluationOptions
from .core import (
    CatmullRomError,
    InsufficientPointsError,
    ParameterRangeError,
    SegmentIndexError,
    Vertex,
    VertexGroup,
)
from .path import VertexPath

__version__ = "0.1.0"
__all__ = [
    "VertexPath",
    "Vertex",
    "VertexGroup",
    "EvaluationOptions",
    "CatmullRomError",
    "InsufficientPointsError",
    "SegmentIndexError",
    "ParameterRangeError",
]
