"""
holders - 控制点参数存储

VectorHolder 按索引分配并持有定长参数块；BlockHolder 包装调用方已有的参数块
(例如优化器传入的携带导数的数组)，只读地提供同样的 parameter(i) 接口。
"""

import numpy as np


class VectorHolder:
    """
    参数块存储。每个参数块是独立的 float64 数组，索引即分配顺序。

    parameter(i) 每次返回同一个数组对象，可原地修改，也可直接作为优化器的
    参数块注册。
    """

    def __init__(self):
        self._blocks: list[np.ndarray] = []

    def __len__(self) -> int:
        return len(self._blocks)

    def add_parameter(self, size: int) -> int:
        """
        分配一个长度为 size 的参数块 (初始化为零)。

        Args:
            size: 参数块标量个数

        Returns:
            新参数块的索引
        """
        self._blocks.append(np.zeros(size))
        return len(self._blocks) - 1

    def parameter(self, i: int) -> np.ndarray:
        """返回第 i 个参数块。负索引不做回绕，直接报错。"""
        if i < 0:
            raise IndexError(f"parameter index {i} out of range for holder of size {len(self._blocks)}")
        return self._blocks[i]


class BlockHolder:
    """
    只读参数存储，包装已有参数块序列。

    Args:
        blocks: 参数块序列，例如 (N, 3) 数组或数组列表
    """

    def __init__(self, blocks):
        self._blocks = blocks

    def __len__(self) -> int:
        return len(self._blocks)

    def parameter(self, i: int):
        if i < 0:
            raise IndexError(f"parameter index {i} out of range for holder of size {len(self._blocks)}")
        return self._blocks[i]
