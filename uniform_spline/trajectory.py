"""
trajectory - 均匀三次B样条 R³ 位置轨迹

UniformR3SplineTrajectory 拥有控制点序列，支持追加控制点、在任意有效时刻
评估位置/速度/加速度，并把某时间窗口内起作用的控制点登记到最小二乘问题中。
"""

import numpy as np
from scipy.interpolate import BSpline
from scipy.spatial.transform import Rotation

from .core.basis import SPLINE_DEGREE, SPLINE_ORDER, uniform_knot_vector
from .core.evaluation import EvalFlag, TrajectoryEvaluation
from .core.r3_spline_view import UniformR3SplineView
from .core.spline_base import SplineMeta
from .problem import Problem
from .utils.holders import VectorHolder

# 每个控制点的标量个数
BLOCK_SIZE = 3


class UniformR3SplineTrajectory:
    """
    均匀三次B样条位置轨迹。

    控制点 i 位于 t0 + i*dt，段 [t0 + i*dt, t0 + (i+1)*dt) 由控制点 i..i+3
    决定，有效时间区间为 [t0, t0 + (N-3)*dt)。

    Attributes:
        holder: 控制点参数存储
        meta: 时间原点、间隔和控制点数
    """

    def __init__(self, dt: float = 1.0, t0: float = 0.0):
        """
        Args:
            dt: 控制点时间间隔 (s)，必须为正
            t0: 时间原点 (s)
        """
        self.holder = VectorHolder()
        self.meta = SplineMeta(t0=float(t0), dt=float(dt), n=0)

    @classmethod
    def from_control_points(cls, points: np.ndarray, dt: float = 1.0, t0: float = 0.0):
        """由 (N, 3) 控制点数组依次追加构造轨迹"""
        trajectory = cls(dt=dt, t0=t0)
        for p in np.asarray(points, dtype=float):
            trajectory.append_knot(p)
        return trajectory

    def as_view(self) -> UniformR3SplineView:
        return UniformR3SplineView(self.holder, self.meta)

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
        return self.as_view().min_time

    @property
    def max_time(self) -> float:
        return self.as_view().max_time

    def valid_time(self, t: float) -> bool:
        """t 是否落在有效区间 [min_time, max_time) 内"""
        if self.num_knots < SPLINE_ORDER:
            return False
        i0, _ = self.as_view().calculate_index_and_interpolation_amount(t)
        return 0 <= i0 <= self.num_knots - SPLINE_ORDER

    def control_point(self, i: int) -> np.ndarray:
        """返回第 i 个控制点，可原地修改"""
        return self.as_view().control_point(i)

    def control_points(self) -> np.ndarray:
        """(N, 3) 控制点副本"""
        if self.num_knots == 0:
            return np.zeros((0, BLOCK_SIZE))
        return np.array([self.holder.parameter(i) for i in range(self.num_knots)])

    def append_knot(self, point: np.ndarray) -> None:
        """在序列末尾追加控制点"""
        point = np.asarray(point, dtype=float)
        if point.shape != (BLOCK_SIZE,):
            raise ValueError(f"control point must have shape ({BLOCK_SIZE},), got {point.shape}")

        i = self.holder.add_parameter(BLOCK_SIZE)
        self.holder.parameter(i)[:] = point
        self.meta.n += 1

    def evaluate(self, t: float, flags: int = EvalFlag.POSITION) -> TrajectoryEvaluation:
        return self.as_view().evaluate(t, flags)

    def position(self, t: float) -> np.ndarray:
        return self.evaluate(t, EvalFlag.POSITION).position

    def velocity(self, t: float) -> np.ndarray:
        return self.evaluate(t, EvalFlag.VELOCITY).velocity

    def acceleration(self, t: float) -> np.ndarray:
        return self.evaluate(t, EvalFlag.ACCELERATION).acceleration

    def orientation(self, t: float) -> Rotation:
        return self.evaluate(t, EvalFlag.ORIENTATION).orientation

    def angular_velocity(self, t: float) -> np.ndarray:
        return self.evaluate(t, EvalFlag.ANGULAR_VELOCITY).angular_velocity

    def add_to_problem(
        self, problem: Problem, times
    ) -> tuple[SplineMeta, list[np.ndarray], list[int]]:
        """
        把时间窗口 [t1, t2] 内起作用的控制点登记为最小二乘问题的自由参数块。

        段 i 依赖控制点 i..i+3，因此窗口覆盖段 i1..i2 时需要控制点 i1..i2+3，
        共 i2 - i1 + 4 个。

        Args:
            problem: 参数块登记表
            times: 只含一个 (t1, t2) 时间窗口的序列

        Returns:
            meta: 局部子样条的时间参数 (t0 + i1*dt, dt, i2 - i1 + 4)
            parameter_blocks: 按时间顺序排列的控制点参数块
            parameter_sizes: 各参数块大小

        Raises:
            NotImplementedError: 时间窗口个数不为 1
            ValueError: t2 < t1
            IndexError: 窗口超出已有控制点
        """
        if len(times) != 1:
            raise NotImplementedError(f"only a single time window is supported, got {len(times)}")

        (t1, t2), = times
        if t2 < t1:
            raise ValueError(f"time window end {t2} is before start {t1}")

        view = self.as_view()
        i1, _ = view.calculate_index_and_interpolation_amount(t1)
        i2, _ = view.calculate_index_and_interpolation_amount(t2)

        # 先取齐全部参数块，越界时不做任何登记
        parameter_blocks = [self.holder.parameter(i) for i in range(i1, i2 + SPLINE_ORDER)]
        parameter_sizes = [BLOCK_SIZE] * len(parameter_blocks)

        for block, size in zip(parameter_blocks, parameter_sizes):
            problem.add_parameter_block(block, size)

        meta = SplineMeta(
            t0=self.t0 + i1 * self.dt,
            dt=self.dt,
            n=i2 - i1 + SPLINE_ORDER,
        )
        return meta, parameter_blocks, parameter_sizes

    def to_bspline(self) -> BSpline:
        """
        导出等价的 scipy BSpline。

        在 [min_time, max_time) 上与 evaluate 给出相同的位置。
        """
        knots = uniform_knot_vector(self.t0, self.dt, self.num_knots)
        return BSpline(knots, self.control_points(), SPLINE_DEGREE, extrapolate=False)

    def __repr__(self) -> str:
        return f"UniformR3SplineTrajectory(N={self.num_knots}, t0={self.t0}, dt={self.dt})"


if __name__ == "__main__":
    from uniform_spline.datasets import helix_control_points

    points, params = helix_control_points()
    trajectory = UniformR3SplineTrajectory.from_control_points(points, dt=params.dt)

    print("=== 均匀 R³ 样条轨迹测试 ===")
    print(trajectory)
    print(f"有效时间区间: [{trajectory.min_time}, {trajectory.max_time})")

    t_test = (trajectory.min_time + trajectory.max_time) / 2
    ev = trajectory.evaluate(t_test, EvalFlag.ALL)
    print(f"\n在 t={t_test:.2f}s 处:")
    print(f"  位置: {ev.position}")
    print(f"  速度: {ev.velocity}")
    print(f"  加速度: {ev.acceleration}")
    print(f"  姿态: {ev.orientation.as_quat()}")

    problem = Problem()
    meta, blocks, _ = trajectory.add_to_problem(problem, [(t_test, t_test + params.dt)])
    print(f"\n登记参数块: {problem.num_parameter_blocks}, 局部子样条: {meta}")
