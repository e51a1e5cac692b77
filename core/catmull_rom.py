"""
catmull_rom - Catmull-Rom 样条求值核心

每段由四个连续控制点 a, b, c, d 决定，曲线从 b 走到 c:

    P(u)  = 0.5 * ((-a + 3b - 3c + d)u³ + (2a - 5b + 4c - d)u² + (-a + c)u + 2b)
    P'(u) = 1.5 * (-a + 3b - 3c + d)u² + (2a - 5b + 4c - d)u + 0.5c - 0.5a

实现:
1. 段定位: 全局参数 t -> (段索引 i, 局部参数 u)
2. 共享的逐轴混合函数 (位置 / 速度)
3. 全局形式与 clamped 形式的求值，以及向量化批量形式

速度是对局部参数 u 的精确导数，不按段长或 dt/du 缩放。
"""

import math

import numpy as np

from .exceptions import InsufficientPointsError, ParameterRangeError, SegmentIndexError
from .vertices import PointSource, as_position

MIN_POINTS = 4


def blend_position(a, b, c, d, u):
    """
    Catmull-Rom 位置多项式，逐元素计算。

    Args:
        a, b, c, d: 四个控制值（标量或同形状数组）
        u: 局部参数，可广播到控制值形状

    Returns:
        曲线上的值
    """
    uu = u * u
    uuu = uu * u
    return 0.5 * (
        (-a + 3.0 * b - 3.0 * c + d) * uuu
        + (2.0 * a - 5.0 * b + 4.0 * c - d) * uu
        + (-a + c) * u
        + 2.0 * b
    )


def blend_velocity(a, b, c, d, u):
    """Catmull-Rom 位置多项式对 u 的一阶导数，逐元素计算。"""
    return 1.5 * (-a + 3.0 * b - 3.0 * c + d) * (u * u) + (2.0 * a - 5.0 * b + 4.0 * c - d) * u + 0.5 * c - 0.5 * a


def segment_count(count: int) -> int:
    """可插值段数 n - 3，点数不足时为 0"""
    return max(count - 3, 0)


def check_point_count(count: int) -> int:
    """检查点数 >= 4，返回段数"""
    if count < MIN_POINTS:
        raise InsufficientPointsError(count)
    return count - 3


def check_parameter(value, name: str = "t") -> None:
    """严格模式的参数范围检查，接受标量或数组"""
    values = np.asarray(value, dtype=np.float64)
    if np.any(~np.isfinite(values)) or np.any(values < 0.0) or np.any(values > 1.0):
        raise ParameterRangeError(f"{name} must lie in [0, 1], got {value}")


def locate_segment(t: float, count: int) -> tuple[int, float]:
    """
    将全局参数映射到段索引和局部参数。

    只钳制上界: t = 1 落在最后一段且 u = 1；t < 0 得到负索引，由读取时报错。
    u 由未钳制的 t * num_sections 减去索引得到，不重新归一化。

    Args:
        t: 全局参数，名义范围 [0, 1]
        count: 点源中的点数

    Returns:
        index: 四点中第一个点的索引 (a = P[index])
        u: 段内局部参数
    """
    num_sections = check_point_count(count)
    if not math.isfinite(t):
        raise ParameterRangeError(f"t must be finite, got {t}")
    scaled = t * num_sections
    index = min(math.floor(scaled), num_sections - 1)
    return index, scaled - index


def locate_segments(t_values: np.ndarray, count: int) -> tuple[np.ndarray, np.ndarray]:
    """locate_segment 的向量化版本"""
    num_sections = check_point_count(count)
    t_values = np.asarray(t_values, dtype=np.float64)
    if not np.all(np.isfinite(t_values)):
        raise ParameterRangeError(f"t must be finite, got {t_values[~np.isfinite(t_values)]}")
    scaled = t_values * num_sections
    indices = np.minimum(np.floor(scaled), num_sections - 1).astype(np.int64)
    return indices, scaled - indices


def read_quad(source: PointSource, first: int) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """读取 P[first] .. P[first+3]，越界时抛出 SegmentIndexError（不使用负索引回绕）"""
    count = source.count()
    if first < 0 or first + 3 >= count:
        raise SegmentIndexError(f"segment starting at point {first} needs points {first}..{first + 3}, path has {count}")
    return tuple(as_position(source.position_at(first + k)) for k in range(4))


def read_positions(source: PointSource) -> np.ndarray:
    """通过 position_at 读取全部控制点，(N, 3) 数组"""
    return np.array([as_position(source.position_at(i)) for i in range(source.count())]).reshape(-1, 3)


def check_anchor(source: PointSource, from_index: int) -> None:
    count = source.count()
    check_point_count(count)
    if not 1 <= from_index <= count - 3:
        raise SegmentIndexError(f"segment anchor {from_index} out of range [1, {count - 3}]")


def interpolate(source: PointSource, t: float, strict: bool = False) -> np.ndarray:
    """
    全局形式的位置求值。

    Args:
        source: 点源，至少 4 个点
        t: 全局参数，0 对应第二个控制点，1 对应倒数第二个控制点
        strict: 为 True 时拒绝 [0, 1] 之外的 t

    Returns:
        (3,) 位置向量
    """
    if strict:
        check_parameter(t)
    index, u = locate_segment(t, source.count())
    return blend_position(*read_quad(source, index), u)


def interpolate_clamped(source: PointSource, from_index: int, u: float, strict: bool = False) -> np.ndarray:
    """
    clamped 形式的位置求值: 从 P[from_index] 走到 P[from_index + 1]。

    Args:
        source: 点源，至少 4 个点
        from_index: 段锚点，范围 [1, n-3]
        u: 段内局部参数，不做归一化
        strict: 为 True 时拒绝 [0, 1] 之外的 u

    Returns:
        (3,) 位置向量
    """
    check_anchor(source, from_index)
    if strict:
        check_parameter(u, "u")
    return blend_position(*read_quad(source, from_index - 1), u)


def velocity(source: PointSource, t: float, strict: bool = False) -> np.ndarray:
    """全局形式的速度求值，返回 dP/du (3,)"""
    if strict:
        check_parameter(t)
    index, u = locate_segment(t, source.count())
    return blend_velocity(*read_quad(source, index), u)


def velocity_clamped(source: PointSource, from_index: int, u: float, strict: bool = False) -> np.ndarray:
    """clamped 形式的速度求值，返回 dP/du (3,)"""
    check_anchor(source, from_index)
    if strict:
        check_parameter(u, "u")
    return blend_velocity(*read_quad(source, from_index - 1), u)


def _batch_quads(positions: np.ndarray, t_values: np.ndarray):
    if positions.ndim != 2 or positions.shape[1] != 3:
        raise ValueError(f"positions must have shape (N, 3), got {positions.shape}")
    indices, u = locate_segments(t_values, len(positions))
    if np.any(indices < 0):
        raise SegmentIndexError(f"parameters below 0 locate segments before the first point: {t_values[indices < 0]}")
    a = positions[indices]
    b = positions[indices + 1]
    c = positions[indices + 2]
    d = positions[indices + 3]
    return a, b, c, d, u[:, np.newaxis]


def interpolate_batch(positions: np.ndarray, t_values: np.ndarray) -> np.ndarray:
    """
    批量全局位置求值（向量化版本）。

    Args:
        positions: (N, 3) 控制点
        t_values: (M,) 全局参数

    Returns:
        (M, 3) 位置数组
    """
    return blend_position(*_batch_quads(np.asarray(positions, dtype=np.float64), np.atleast_1d(t_values)))


def velocity_batch(positions: np.ndarray, t_values: np.ndarray) -> np.ndarray:
    """批量全局速度求值，返回 (M, 3)"""
    return blend_velocity(*_batch_quads(np.asarray(positions, dtype=np.float64), np.atleast_1d(t_values)))
