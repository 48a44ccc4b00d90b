"""
problem - 非线性最小二乘问题的参数块登记

Problem 记录需要优化的自由参数块，重复登记同一参数块不会产生重复项。
登记的参数块可以打包成一维向量交给 scipy.optimize.least_squares，
求解后再写回各参数块。残差定义与求解由调用方负责。
"""

import numpy as np


class Problem:
    """
    自由参数块登记表。

    参数块按对象身份区分 (同一个 numpy 数组只登记一次)，保持首次登记顺序。
    """

    def __init__(self):
        self._blocks: list[np.ndarray] = []
        self._sizes: dict[int, int] = {}

    def add_parameter_block(self, block: np.ndarray, size: int) -> None:
        """
        登记参数块。

        Args:
            block: 参数块 (原地可写的 numpy 数组)
            size: 参数块标量个数

        Raises:
            ValueError: size 与数组长度不符，或同一参数块以不同 size 重复登记
        """
        if block.size != size:
            raise ValueError(f"parameter block has {block.size} values, expected {size}")

        key = id(block)
        if key in self._sizes:
            if self._sizes[key] != size:
                raise ValueError(
                    f"parameter block registered with size {self._sizes[key]}, got {size}"
                )
            return

        self._sizes[key] = size
        self._blocks.append(block)

    def has_parameter_block(self, block: np.ndarray) -> bool:
        return id(block) in self._sizes

    @property
    def parameter_blocks(self) -> list[np.ndarray]:
        return list(self._blocks)

    @property
    def num_parameter_blocks(self) -> int:
        return len(self._blocks)

    @property
    def num_parameters(self) -> int:
        return sum(self._sizes.values())

    def parameter_vector(self) -> np.ndarray:
        """按登记顺序拼接所有参数块，返回副本"""
        if not self._blocks:
            return np.zeros(0)
        return np.concatenate([np.ravel(b) for b in self._blocks])

    def set_parameter_vector(self, x: np.ndarray) -> None:
        """
        按登记顺序把一维向量写回各参数块。

        Raises:
            ValueError: 向量长度与参数总数不符
        """
        x = np.asarray(x, dtype=float)
        if x.shape != (self.num_parameters,):
            raise ValueError(f"expected vector of length {self.num_parameters}, got shape {x.shape}")

        offset = 0
        for block in self._blocks:
            n = block.size
            block[...] = x[offset:offset + n].reshape(block.shape)
            offset += n
