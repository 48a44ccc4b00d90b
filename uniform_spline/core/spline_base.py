"""
spline_base - 均匀样条的时间与索引基类

SplineMeta 记录样条时间原点 t0、时间间隔 dt 和控制点数 n；
SplineViewBase 把连续时间 t 映射为段索引 i0 和段内比例 u。
"""

from dataclasses import dataclass

import numpy as np

from .basis import SPLINE_DEGREE


@dataclass
class SplineMeta:
    """均匀样条时间参数。控制点 i 位于 t0 + i*dt。"""

    t0: float = 0.0  # 时间原点 (s)
    dt: float = 1.0  # 节点时间间隔 (s)
    n: int = 0  # 控制点数

    def __post_init__(self):
        if not self.dt > 0:
            raise ValueError(f"dt must be positive, got {self.dt}")


class SplineViewBase:
    """
    均匀样条只读视图基类。

    视图不拥有控制点数据，只持有参数存储 (holder) 和时间参数 (meta) 的引用，
    因此对 holder 的修改会立即反映在视图上。

    Attributes:
        holder: 提供 parameter(i) 的参数存储
        meta: 样条时间参数
    """

    def __init__(self, holder, meta: SplineMeta):
        self.holder = holder
        self.meta = meta

    @property
    def t0(self) -> float:
        return self.meta.t0

    @property
    def dt(self) -> float:
        return self.meta.dt

    @property
    def num_knots(self) -> int:
        return self.meta.n

    @property
    def min_time(self) -> float:
        """有效时间区间下界 (包含)"""
        return self.meta.t0

    @property
    def max_time(self) -> float:
        """有效时间区间上界 (不包含)"""
        return self.meta.t0 + (self.meta.n - SPLINE_DEGREE) * self.meta.dt

    def calculate_index_and_interpolation_amount(self, t):
        """
        计算 t 所在段索引和段内比例。

        i0 = floor((t - t0) / dt), u = (t - t0) / dt - i0

        Args:
            t: 查询时刻

        Returns:
            i0: 段索引 (可能为负或越界，由调用方检查)
            u: 段内比例 [0, 1)
        """
        s = (t - self.meta.t0) / self.meta.dt
        i0 = int(np.floor(s))
        return i0, s - i0
