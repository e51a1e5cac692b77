"""
vertices - 顶点与有序点源

提供:
- Vertex: 只携带位置的默认顶点类型
- HasPosition / PointSource: 求值器所需的最小能力（协议，而非继承）
- VertexGroup: 内存中的有序顶点容器，实现 PointSource
"""

import logging
from dataclasses import dataclass, field
from typing import Generic, Iterator, Protocol, Sequence, TypeVar, runtime_checkable

import numpy as np

logger = logging.getLogger(__name__)


@runtime_checkable
class HasPosition(Protocol):
    """任何暴露 3D 位置 pos 的对象"""

    pos: np.ndarray


@runtime_checkable
class PointSource(Protocol):
    """有序、可索引的点源，索引从 0 开始，插入顺序有意义"""

    def count(self) -> int: ...

    def position_at(self, index: int) -> np.ndarray: ...


def as_position(value) -> np.ndarray:
    """将 3 元序列转换为 (3,) float64 数组"""
    pos = np.asarray(value, dtype=np.float64)
    if pos.shape != (3,):
        raise ValueError(f"position must have shape (3,), got {pos.shape}")
    return pos


@dataclass(eq=False)
class Vertex:
    """路径顶点"""

    pos: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self):
        self.pos = as_position(self.pos)


V = TypeVar("V", bound=HasPosition)


class VertexGroup(Generic[V]):
    """
    有序顶点容器。

    只要求顶点具有 pos 属性；传入原始坐标时自动包装为 Vertex。
    容器本身不加锁，求值期间不得并发修改。
    """

    def __init__(self, vertices: Sequence[V] | None = None):
        self._vertices: list[V] = []
        for v in vertices or []:
            self.add(v)

    @classmethod
    def from_points(cls, points: np.ndarray) -> "VertexGroup[Vertex]":
        """
        由 (N, 3) 坐标数组构造容器。

        Args:
            points: (N, 3) 控制点坐标

        Returns:
            VertexGroup 对象
        """
        points = np.asarray(points, dtype=np.float64)
        if points.ndim != 2 or points.shape[1] != 3:
            raise ValueError(f"points must have shape (N, 3), got {points.shape}")
        return cls([Vertex(p) for p in points])

    def _wrap(self, vertex) -> V:
        if isinstance(vertex, HasPosition):
            as_position(vertex.pos)  # 校验形状
            return vertex
        return Vertex(vertex)

    def add(self, vertex) -> V:
        """在末尾追加顶点，返回实际存储的顶点"""
        v = self._wrap(vertex)
        self._vertices.append(v)
        logger.debug(f"Added vertex #{len(self._vertices) - 1} at {v.pos}")
        return v

    def insert(self, index: int, vertex) -> V:
        """在 index 处插入顶点"""
        v = self._wrap(vertex)
        self._vertices.insert(index, v)
        logger.debug(f"Inserted vertex at index {index}, count={len(self._vertices)}")
        return v

    def remove(self, vertex: V) -> None:
        """移除顶点（按对象身份）"""
        for i, v in enumerate(self._vertices):
            if v is vertex:
                del self._vertices[i]
                logger.debug(f"Removed vertex #{i}, count={len(self._vertices)}")
                return
        raise ValueError("vertex is not in this group")

    def pop(self, index: int = -1) -> V:
        v = self._vertices.pop(index)
        logger.debug(f"Popped vertex, count={len(self._vertices)}")
        return v

    def clear(self) -> None:
        self._vertices.clear()
        logger.debug("Cleared vertex group")

    def count(self) -> int:
        return len(self._vertices)

    def position_at(self, index: int) -> np.ndarray:
        if not 0 <= index < len(self._vertices):
            raise IndexError(f"vertex index {index} out of range [0, {len(self._vertices)})")
        return as_position(self._vertices[index].pos)

    def positions(self) -> np.ndarray:
        """所有顶点位置，(N, 3) 数组"""
        if not self._vertices:
            return np.zeros((0, 3))
        return np.array([as_position(v.pos) for v in self._vertices])

    def __len__(self) -> int:
        return len(self._vertices)

    def __getitem__(self, index: int) -> V:
        return self._vertices[index]

    def __iter__(self) -> Iterator[V]:
        return iter(self._vertices)

    def __repr__(self) -> str:
        return f"VertexGroup(N={len(self._vertices)})"
