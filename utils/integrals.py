"""
integrals - 数值积分工具函数

用自适应 Simpson 法积分速度模长，得到 Catmull-Rom 段的弧长。
"""

from typing import Callable

import numpy as np

MAX_DEPTH = 30


def simpson(f: Callable[[float], float], a: float, b: float) -> float:
    """
    Simpson 法则:
        ∫_a^b f ≈ (b-a)/6 * [f(a) + 4f((a+b)/2) + f(b)]
    """
    return (b - a) / 6 * (f(a) + 4 * f((a + b) / 2) + f(b))


def adaptive_simpson(
    f: Callable[[float], float],
    a: float,
    b: float,
    tol: float = 1e-9,
    depth: int = MAX_DEPTH,
) -> float:
    """
    自适应 Simpson 积分。

    当 |S(a,c) + S(c,b) - S(a,b)| 超过容差时二分区间递归，
    递归深度耗尽时接受当前估计。

    Args:
        f: 被积函数
        a: 积分下限
        b: 积分上限
        tol: 误差容差
        depth: 剩余递归深度

    Returns:
        积分值
    """
    c = (a + b) / 2
    whole = simpson(f, a, b)
    left = simpson(f, a, c)
    right = simpson(f, c, b)

    if depth <= 0 or abs(left + right - whole) < 15 * tol:
        # Richardson 外推修正
        return left + right + (left + right - whole) / 15
    return adaptive_simpson(f, a, c, tol / 2, depth - 1) + adaptive_simpson(f, c, b, tol / 2, depth - 1)


def arc_length(
    velocity_func: Callable[[float], np.ndarray],
    a: float,
    b: float,
    tol: float = 1e-9,
) -> float:
    """
    参数曲线的弧长:
        l = ∫_a^b ||P'(u)|| du

    Args:
        velocity_func: 曲线导数函数，返回 (n,) 向量
        a: 参数下限
        b: 参数上限
        tol: 积分误差容差

    Returns:
        弧长值
    """
    if b == a:
        return 0.0
    return adaptive_simpson(lambda u: float(np.linalg.norm(velocity_func(u))), a, b, tol)
