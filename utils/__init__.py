"""
utils - 工具函数模块

包含:
- geometry: 几何计算工具
- integrals: 数值积分工具
"""

from .geometry import normalize
from .integrals import adaptive_simpson, arc_length

__all__ = [
    "normalize",
    "adaptive_simpson",
    "arc_length",
]
