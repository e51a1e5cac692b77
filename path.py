"""
path - 顶点路径上的 Catmull-Rom 求值

VertexPath 持有一个外部点源，提供全局形式与 clamped 形式的位置和速度查询，
以及批量求值、均匀采样和弧长相关的辅助方法。

第一个和最后一个控制点只用于确定切线，全局参数 t = 0 对应第二个控制点，
t = 1 对应倒数第二个控制点。
"""

import logging

import numpy as np
from scipy.optimize import brentq

from .config import DEFAULT_OPTIONS, EvaluationOptions
from .core import catmull_rom
from .core.vertices import PointSource, VertexGroup
from .utils.geometry import normalize
from .utils.integrals import arc_length

logger = logging.getLogger(__name__)


class VertexPath:
    """
    Catmull-Rom 路径。

    Attributes:
        source: 点源（实现 count() 与 position_at(index)）
        loop: 闭合标志，保存但不参与求值，段不会从最后一点绕回第一点
        options: 求值选项
    """

    def __init__(
        self,
        source: PointSource,
        loop: bool = True,
        options: EvaluationOptions | None = None,
    ):
        """
        Args:
            source: 有序点源，求值期间不得被修改
            loop: 闭合标志
            options: 求值选项，默认 DEFAULT_OPTIONS（宽松模式）
        """
        if not isinstance(source, PointSource):
            raise TypeError(f"source must provide count() and position_at(), got {type(source).__name__}")
        self.source = source
        self.loop = loop
        self.options = options if options is not None else DEFAULT_OPTIONS
        logger.debug(f"Created path over {source.count()} points (loop={loop}, strict={self.options.strict})")

    @classmethod
    def from_points(
        cls,
        points: np.ndarray,
        loop: bool = True,
        options: EvaluationOptions | None = None,
    ) -> "VertexPath":
        """由 (N, 3) 坐标数组构造路径，点存放在新的 VertexGroup 中。"""
        return cls(VertexGroup.from_points(points), loop=loop, options=options)

    @property
    def count(self) -> int:
        return self.source.count()

    @property
    def segment_count(self) -> int:
        """可插值段数 n - 3"""
        return catmull_rom.segment_count(self.count)

    # 位置

    def interpolate(self, t: float) -> np.ndarray:
        """
        全局参数 t 处的位置。

        Args:
            t: 全局参数 [0, 1]；宽松模式下 t > 1 沿最后一段外推

        Returns:
            (3,) 位置向量
        """
        return catmull_rom.interpolate(self.source, t, self.options.strict)

    def interpolate_clamped(self, from_index: int, u: float) -> np.ndarray:
        """
        指定段内的位置，从 P[from_index] 走到 P[from_index + 1]。

        Args:
            from_index: 段锚点 [1, n-3]
            u: 段内局部参数 [0, 1]

        Returns:
            (3,) 位置向量
        """
        return catmull_rom.interpolate_clamped(self.source, from_index, u, self.options.strict)

    # 速度

    def velocity(self, t: float) -> np.ndarray:
        """全局参数 t 处的速度，即位置对段内局部参数的导数。"""
        return catmull_rom.velocity(self.source, t, self.options.strict)

    def velocity_clamped(self, from_index: int, u: float) -> np.ndarray:
        return catmull_rom.velocity_clamped(self.source, from_index, u, self.options.strict)

    def direction(self, t: float) -> np.ndarray:
        """t 处的单位切向量；速度为零时返回零向量。"""
        return normalize(self.velocity(t))

    # 批量

    def interpolate_batch(self, t_values: np.ndarray) -> np.ndarray:
        """
        批量全局位置求值（向量化版本）。

        Args:
            t_values: (M,) 全局参数

        Returns:
            (M, 3) 位置数组
        """
        if self.options.strict:
            catmull_rom.check_parameter(t_values)
        return catmull_rom.interpolate_batch(catmull_rom.read_positions(self.source), t_values)

    def velocity_batch(self, t_values: np.ndarray) -> np.ndarray:
        """批量全局速度求值，返回 (M, 3)。"""
        if self.options.strict:
            catmull_rom.check_parameter(t_values)
        return catmull_rom.velocity_batch(catmull_rom.read_positions(self.source), t_values)

    def sample_uniform(self, num_points: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        沿全局参数均匀采样（参数均匀，不是弧长均匀）。

        Args:
            num_points: 采样点数

        Returns:
            t_values: (M,) 参数值
            positions: (M, 3) 位置
            velocities: (M, 3) 速度
        """
        if num_points < 2:
            raise ValueError(f"num_points must be >= 2, got {num_points}")
        t_values = np.linspace(0.0, 1.0, num_points)
        positions = catmull_rom.read_positions(self.source)
        return (
            t_values,
            catmull_rom.interpolate_batch(positions, t_values),
            catmull_rom.velocity_batch(positions, t_values),
        )

    # 弧长

    def segment_length(self, from_index: int) -> float:
        """段 [P[from_index], P[from_index + 1]] 的弧长。"""
        catmull_rom.check_anchor(self.source, from_index)
        return arc_length(
            lambda u: catmull_rom.velocity_clamped(self.source, from_index, u),
            0.0,
            1.0,
            self.options.length_tolerance,
        )

    def segment_lengths(self) -> np.ndarray:
        """各段弧长，(n-3,) 数组"""
        catmull_rom.check_point_count(self.count)
        return np.array([self.segment_length(i) for i in range(1, self.count - 2)])

    def length(self) -> float:
        """t ∈ [0, 1] 对应曲线的总弧长"""
        return float(np.sum(self.segment_lengths()))

    def parameter_at_length(self, l: float) -> float:
        """
        反求弧长 l 处的全局参数 t。

        先按累积段长找到所在段，再在段内用 brentq 求解
        ∫_0^u ||P'|| du = l - l_段起点。

        Args:
            l: 从 t = 0 起算的弧长，裁剪到 [0, length]

        Returns:
            全局参数 t
        """
        lengths = self.segment_lengths()
        num_sections = len(lengths)
        cumulative = np.concatenate([[0.0], np.cumsum(lengths)])
        total = cumulative[-1]
        if total <= 0.0:
            return 0.0

        l = float(np.clip(l, 0.0, total))
        k = int(np.clip(np.searchsorted(cumulative, l, side="right") - 1, 0, num_sections - 1))
        remaining = l - cumulative[k]

        if remaining <= 0.0:
            u = 0.0
        elif remaining >= lengths[k]:
            u = 1.0
        else:
            from_index = k + 1

            def residual(x: float) -> float:
                partial = arc_length(
                    lambda s: catmull_rom.velocity_clamped(self.source, from_index, s),
                    0.0,
                    x,
                    self.options.length_tolerance,
                )
                return partial - remaining

            u = brentq(residual, 0.0, 1.0, xtol=self.options.root_tolerance)

        return (k + u) / num_sections

    def __repr__(self) -> str:
        return f"VertexPath(N={self.count}, segments={self.segment_count}, loop={self.loop})"
