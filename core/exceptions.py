"""
exceptions - Catmull-Rom 求值错误类型

所有错误都是局部的前置条件失败，求值本身无状态，无需回滚。
"""


class CatmullRomError(Exception):
    """本库所有错误的基类"""


class InsufficientPointsError(CatmullRomError, ValueError):
    """控制点少于 4 个，无法构成任何样条段"""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"invalid path: requires >= 4 points, got {count}")


class SegmentIndexError(CatmullRomError, IndexError):
    """段索引越界（clamped 锚点超出 [1, n-3]，或全局参数 t < 0）"""


class ParameterRangeError(CatmullRomError, ValueError):
    """严格模式下参数超出 [0, 1]"""
