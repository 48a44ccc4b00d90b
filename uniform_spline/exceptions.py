"""
exceptions - 样条轨迹异常类型
"""


class OutOfRangeError(ValueError):
    """
    查询时刻没有 4 个有效控制点时抛出。

    Attributes:
        t: 查询时刻
        index: 解析得到的段索引 i0
        num_knots: 样条控制点数 N
    """

    def __init__(self, t, index: int, num_knots: int):
        self.t = t
        self.index = index
        self.num_knots = num_knots
        super().__init__(f"t={t} i0={index} is out of range for spline with ncp={num_knots}")
