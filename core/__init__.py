"""
core - 核心算法模块

包含:
- catmull_rom: 段定位与 Catmull-Rom 位置 / 速度求值
- vertices: 顶点类型与有序点源
- exceptions: 错误类型
"""

from .catmull_rom import (
    blend_position,
    blend_velocity,
    locate_segment,
    interpolate,
    interpolate_clamped,
    velocity,
    velocity_clamped,
)
from .vertices import Vertex, VertexGroup, PointSource, HasPosition
from .exceptions import CatmullRomError, InsufficientPointsError, SegmentIndexError, ParameterRangeError

__all__ = [
    "blend_position",
    "blend_velocity",
    "locate_segment",
    "interpolate",
    "interpolate_clamped",
    "velocity",
    "velocity_clamped",
    "Vertex",
    "VertexGroup",
    "PointSource",
    "HasPosition",
    "CatmullRomError",
    "InsufficientPointsError",
    "SegmentIndexError",
    "ParameterRangeError",
]
