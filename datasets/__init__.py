"""
datasets - 测试路点集

包含:
- waypoints: 直线、螺旋线和矩形巡航路线
"""

from .waypoints import straight_line, helix, patrol_route

__all__ = [
    "straight_line",
    "helix",
    "patrol_route",
]
