"""
geometry - 几何计算工具函数

提供向量归一化等基础几何操作。
"""

import numpy as np

EPSILON = 1e-16


def normalize(vectors: np.ndarray) -> np.ndarray:
    """
    将向量归一化为单位向量，零向量保持为零。

    Args:
        vectors: 单个向量 (n,) 或向量数组 (m, n)

    Returns:
        归一化后的向量，与输入形状相同
    """
    vectors = np.asarray(vectors, dtype=np.float64)
    norm = np.linalg.norm(vectors, axis=-1, keepdims=vectors.ndim > 1)
    return vectors / (norm + EPSILON)
