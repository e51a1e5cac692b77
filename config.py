"""
config - 求值配置参数
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EvaluationOptions:
    """样条求值选项"""

    strict: bool = False  # 拒绝 [0, 1] 之外的参数，而不是外推
    length_tolerance: float = 1e-9  # 自适应 Simpson 弧长积分容差
    root_tolerance: float = 1e-12  # 弧长反求参数的 brentq xtol


DEFAULT_OPTIONS = EvaluationOptions()
