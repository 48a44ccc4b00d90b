"""
r3_spline_view - 均匀三次B样条 R³ 位置轨迹评估

实现:
1. 时间 t -> (段索引 i0, 段内比例 u)，越界时报错而不外推
2. 幂基行向量 × 混合矩阵得到每阶导数的 4 个混合权重
3. 对控制点 i0..i0+3 加权求和得到位置、速度、加速度

该轨迹不描述姿态: 姿态恒为单位旋转，角速度恒为零。
"""

import numpy as np
from scipy.spatial.transform import Rotation

from ..exceptions import OutOfRangeError
from .basis import (
    SPLINE_ORDER,
    acceleration_row,
    blend_weights,
    position_row,
    velocity_row,
)
from .evaluation import EvalFlag, TrajectoryEvaluation
from .spline_base import SplineViewBase


def _weighted_sum(weights, points):
    """计算 Σ w_j · p_j，只使用加法和乘法"""
    total = weights[0] * points[0]
    for w, p in zip(weights[1:], points[1:]):
        total = total + w * p
    return total


class UniformR3SplineView(SplineViewBase):
    """
    均匀三次B样条位置轨迹的只读视图。

    控制点来自 holder.parameter(i)，可以是 numpy 数组，也可以是携带导数的
    数组 (例如 jax.jacfwd 中的追踪值)。evaluate 对两者执行完全相同的运算。
    """

    def control_point(self, i: int):
        """返回第 i 个控制点 (3,)"""
        return self.holder.parameter(i)

    def evaluate(self, t, flags: int = EvalFlag.POSITION) -> TrajectoryEvaluation:
        """
        在时刻 t 评估轨迹。

        Args:
            t: 查询时刻，需满足 t0 <= t < t0 + (N-3)*dt
            flags: EvalFlag 组合，选择需要计算的量

        Returns:
            TrajectoryEvaluation，未请求的量为 None

        Raises:
            OutOfRangeError: N < 4 或 t 所在段缺少控制点
        """
        result = TrajectoryEvaluation()

        i0, u = self.calculate_index_and_interpolation_amount(t)

        N = self.num_knots
        if N < SPLINE_ORDER or i0 < 0 or i0 > N - SPLINE_ORDER:
            raise OutOfRangeError(t, i0, N)

        want_p = bool(flags & EvalFlag.POSITION)
        want_v = bool(flags & EvalFlag.VELOCITY)
        want_a = bool(flags & EvalFlag.ACCELERATION)

        if want_p or want_v or want_a:
            dt_inv = 1.0 / self.dt
            cps = [self.control_point(i) for i in range(i0, i0 + SPLINE_ORDER)]

            if want_p:
                result.position = _weighted_sum(blend_weights(position_row(u)), cps)
            if want_v:
                result.velocity = _weighted_sum(blend_weights(velocity_row(u, dt_inv)), cps)
            if want_a:
                result.acceleration = _weighted_sum(blend_weights(acceleration_row(u, dt_inv)), cps)

        if flags & EvalFlag.ORIENTATION:
            result.orientation = Rotation.identity()
        if flags & EvalFlag.ANGULAR_VELOCITY:
            result.angular_velocity = np.zeros(3)

        return result


if __name__ == "__main__":
    from uniform_spline.utils.holders import VectorHolder
    from uniform_spline.core.spline_base import SplineMeta

    print("=== 均匀 R³ 样条视图测试 ===")

    holder = VectorHolder()
    for k in range(6):
        holder.parameter(holder.add_parameter(3))[:] = [k, 0.0, 0.0]
    view = UniformR3SplineView(holder, SplineMeta(t0=0.0, dt=1.0, n=6))

    print(f"有效时间区间: [{view.min_time}, {view.max_time})")
    for t in (0.0, 1.5, 2.5, 2.999):
        ev = view.evaluate(t, EvalFlag.POSITION | EvalFlag.VELOCITY | EvalFlag.ACCELERATION)
        print(f"t={t:.3f}: p={ev.position}, v={ev.velocity}, a={ev.acceleration}")

    try:
        view.evaluate(-1.0)
    except OutOfRangeError as e:
        print(f"越界: {e}")
