"""
waypoints - 典型路点集

供测试与示例使用的控制点序列，均为 (N, 3) float64 数组。
"""

import numpy as np


def straight_line(num_points: int = 6, spacing: float = 1.0, direction=(1.0, 0.0, 0.0)) -> np.ndarray:
    """
    等间距共线路点。

    Args:
        num_points: 点数
        spacing: 相邻点间距
        direction: 直线方向（会被归一化）

    Returns:
        (N, 3) 路点
    """
    direction = np.asarray(direction, dtype=np.float64)
    direction = direction / np.linalg.norm(direction)
    return np.arange(num_points, dtype=np.float64)[:, np.newaxis] * spacing * direction


def helix(num_points: int = 12, radius: float = 5.0, pitch: float = 2.0, turns: float = 1.5) -> np.ndarray:
    """螺旋线路点，绕 z 轴上升"""
    theta = np.linspace(0.0, 2.0 * np.pi * turns, num_points)
    return np.column_stack([radius * np.cos(theta), radius * np.sin(theta), pitch * theta / (2.0 * np.pi)])


# 矩形巡航路线（首尾各多一个切线锚点）
_PATROL = np.array(
    [
        [-2.0, 0.0, 0.0],
        [0.0, 0.0, 0.0],
        [10.0, 0.0, 0.0],
        [10.0, 5.0, 1.0],
        [0.0, 5.0, 1.0],
        [0.0, 0.0, 0.0],
        [2.0, 0.0, 0.0],
    ],
    dtype=np.float64,
)


def patrol_route() -> np.ndarray:
    """矩形巡航路线，7 个点，4 段"""
    return _PATROL.copy()
