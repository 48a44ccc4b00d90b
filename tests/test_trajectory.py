"""
trajectory (UniformR3SplineTrajectory) 模块单元测试
"""

import numpy as np
import pytest
from scipy.optimize import least_squares

from uniform_spline import (
    EvalFlag,
    OutOfRangeError,
    Problem,
    UniformR3SplineTrajectory,
)
from uniform_spline.core.r3_spline_view import UniformR3SplineView
from uniform_spline.datasets import helix_control_points, straight_line_control_points
from uniform_spline.utils.holders import BlockHolder


@pytest.fixture
def helix_trajectory():
    """螺旋线轨迹，t0=1.0, dt=0.5, N=20"""
    points, params = helix_control_points()
    return UniformR3SplineTrajectory.from_control_points(points, dt=params.dt, t0=1.0)


class TestAppendKnot:
    """追加控制点测试"""

    def test_initialization(self):
        """测试初始状态"""
        trajectory = UniformR3SplineTrajectory(dt=0.1, t0=5.0)
        assert trajectory.num_knots == 0
        assert trajectory.dt == 0.1
        assert trajectory.t0 == 5.0
        assert trajectory.control_points().shape == (0, 3)

    def test_append_increments_count(self):
        """测试每次追加控制点数加一"""
        trajectory = UniformR3SplineTrajectory()
        for k in range(5):
            trajectory.append_knot(np.array([k, 2.0 * k, -k]))
            assert trajectory.num_knots == k + 1
        np.testing.assert_allclose(trajectory.control_point(3), [3.0, 6.0, -3.0])

    def test_append_copies_value(self):
        """测试追加时复制数据，外部数组修改不影响控制点"""
        trajectory = UniformR3SplineTrajectory()
        p = np.array([1.0, 2.0, 3.0])
        trajectory.append_knot(p)
        p[0] = 100.0
        np.testing.assert_allclose(trajectory.control_point(0), [1.0, 2.0, 3.0])

    def test_append_wrong_size(self):
        """测试追加非三维点报错"""
        trajectory = UniformR3SplineTrajectory()
        with pytest.raises(ValueError):
            trajectory.append_knot(np.array([1.0, 2.0]))

    def test_control_point_is_mutable(self, helix_trajectory):
        """测试修改控制点会改变评估结果"""
        t = 3.1
        before = helix_trajectory.position(t).copy()
        i0, _ = helix_trajectory.as_view().calculate_index_and_interpolation_amount(t)
        helix_trajectory.control_point(i0 + 1)[2] += 1.0
        after = helix_trajectory.position(t)
        assert after[2] > before[2]

    def test_evaluate_after_append(self):
        """测试追加控制点后有效区间随之扩展"""
        trajectory = UniformR3SplineTrajectory()
        for p in straight_line_control_points(4):
            trajectory.append_knot(p)
        assert trajectory.max_time == 1.0
        with pytest.raises(OutOfRangeError):
            trajectory.position(1.5)

        trajectory.append_knot(np.array([4.0, 0.0, 0.0]))
        assert trajectory.max_time == 2.0
        np.testing.assert_allclose(trajectory.position(1.5), [2.5, 0.0, 0.0])


class TestEvaluation:
    """评估接口测试"""

    def test_convenience_methods(self, helix_trajectory):
        """测试 position/velocity/acceleration 与 evaluate 一致"""
        t = 4.3
        ev = helix_trajectory.evaluate(t, EvalFlag.ALL)
        np.testing.assert_array_equal(helix_trajectory.position(t), ev.position)
        np.testing.assert_array_equal(helix_trajectory.velocity(t), ev.velocity)
        np.testing.assert_array_equal(helix_trajectory.acceleration(t), ev.acceleration)
        np.testing.assert_allclose(helix_trajectory.orientation(t).as_quat(), [0, 0, 0, 1])
        np.testing.assert_allclose(helix_trajectory.angular_velocity(t), np.zeros(3))

    def test_valid_time(self, helix_trajectory):
        """测试有效时间判断"""
        assert helix_trajectory.min_time == 1.0
        assert helix_trajectory.max_time == 1.0 + 17 * 0.5
        assert helix_trajectory.valid_time(1.0)
        assert helix_trajectory.valid_time(9.4)
        assert not helix_trajectory.valid_time(0.99)
        assert not helix_trajectory.valid_time(9.5)
        assert not UniformR3SplineTrajectory().valid_time(0.0)

    def test_out_of_range(self, helix_trajectory):
        """测试越界评估报错"""
        with pytest.raises(OutOfRangeError):
            helix_trajectory.position(helix_trajectory.max_time)
        with pytest.raises(OutOfRangeError):
            helix_trajectory.velocity(0.0)

    def test_to_bspline(self, helix_trajectory):
        """测试导出的 scipy BSpline 与 evaluate 一致"""
        spline = helix_trajectory.to_bspline()
        for t in np.linspace(helix_trajectory.min_time, helix_trajectory.max_time, 30, endpoint=False):
            np.testing.assert_allclose(spline(t), helix_trajectory.position(t), atol=1e-11)
        assert np.all(np.isnan(spline(helix_trajectory.max_time + 5.0)))


class TestAddToProblem:
    """控制点窗口登记测试"""

    def test_range_enumeration(self, helix_trajectory):
        """测试窗口 [t1, t2] 登记控制点 i1..i2+3"""
        problem = Problem()
        meta, blocks, sizes = helix_trajectory.add_to_problem(problem, [(2.3, 4.1)])

        # i1 = floor((2.3 - 1.0) / 0.5) = 2, i2 = floor((4.1 - 1.0) / 0.5) = 6
        assert len(blocks) == 6 - 2 + 4
        assert sizes == [3] * len(blocks)
        for j, block in enumerate(blocks):
            assert block is helix_trajectory.control_point(2 + j)
        assert problem.num_parameter_blocks == len(blocks)
        assert problem.num_parameters == 3 * len(blocks)

        assert meta.n == 8
        assert meta.dt == 0.5
        assert meta.t0 == 1.0 + 2 * 0.5

    def test_single_segment_window(self, helix_trajectory):
        """测试窗口位于单个段内时登记 4 个控制点"""
        problem = Problem()
        meta, blocks, _ = helix_trajectory.add_to_problem(problem, [(3.1, 3.2)])
        assert len(blocks) == 4
        assert meta.n == 4
        assert meta.t0 == 3.0

    def test_full_window(self, helix_trajectory):
        """测试覆盖全部有效区间时登记所有控制点"""
        problem = Problem()
        t_end = helix_trajectory.max_time - 1e-9
        meta, blocks, _ = helix_trajectory.add_to_problem(problem, [(helix_trajectory.min_time, t_end)])
        assert len(blocks) == helix_trajectory.num_knots
        assert meta.n == helix_trajectory.num_knots
        assert meta.t0 == helix_trajectory.t0

    def test_local_view_matches_trajectory(self, helix_trajectory):
        """测试用返回的参数块和 meta 构造的局部样条与原轨迹一致"""
        problem = Problem()
        t1, t2 = 2.3, 4.1
        meta, blocks, _ = helix_trajectory.add_to_problem(problem, [(t1, t2)])
        local = UniformR3SplineView(BlockHolder(blocks), meta)

        flags = EvalFlag.POSITION | EvalFlag.VELOCITY | EvalFlag.ACCELERATION
        for t in np.linspace(t1, t2, 25):
            expected = helix_trajectory.evaluate(t, flags)
            actual = local.evaluate(t, flags)
            np.testing.assert_allclose(actual.position, expected.position, atol=1e-12)
            np.testing.assert_allclose(actual.velocity, expected.velocity, atol=1e-10)
            np.testing.assert_allclose(actual.acceleration, expected.acceleration, atol=1e-9)

    def test_overlapping_windows_not_duplicated(self, helix_trajectory):
        """测试重叠窗口不会重复登记参数块"""
        problem = Problem()
        helix_trajectory.add_to_problem(problem, [(2.0, 3.0)])  # 控制点 2..7
        helix_trajectory.add_to_problem(problem, [(2.6, 4.0)])  # 控制点 3..9
        assert problem.num_parameter_blocks == 8
        for i in range(2, 10):
            assert problem.has_parameter_block(helix_trajectory.control_point(i))

    @pytest.mark.parametrize("times", [[], [(1.0, 2.0), (3.0, 4.0)]])
    def test_window_count_not_one(self, helix_trajectory, times):
        """测试窗口个数不为 1 时报错且不登记"""
        problem = Problem()
        with pytest.raises(NotImplementedError):
            helix_trajectory.add_to_problem(problem, times)
        assert problem.num_parameter_blocks == 0

    def test_reversed_window(self, helix_trajectory):
        """测试 t2 < t1 报错且不登记"""
        problem = Problem()
        with pytest.raises(ValueError):
            helix_trajectory.add_to_problem(problem, [(4.0, 2.0)])
        assert problem.num_parameter_blocks == 0

    @pytest.mark.parametrize("window", [(0.0, 2.0), (8.0, 9.6)])
    def test_window_outside_knots(self, helix_trajectory, window):
        """测试窗口超出控制点范围时报错且不登记"""
        problem = Problem()
        with pytest.raises(IndexError):
            helix_trajectory.add_to_problem(problem, [window])
        assert problem.num_parameter_blocks == 0


class TestLeastSquaresFit:
    """通过登记的参数块进行最小二乘拟合"""

    def test_recover_control_points(self):
        """测试由位置采样恢复全部控制点"""
        points, params = helix_control_points()
        truth = UniformR3SplineTrajectory.from_control_points(points, dt=params.dt)

        estimate = UniformR3SplineTrajectory(dt=params.dt)
        for _ in range(len(points)):
            estimate.append_knot(np.zeros(3))

        times = np.linspace(truth.min_time, truth.max_time, 120, endpoint=False)
        measurements = np.array([truth.position(t) for t in times])

        problem = Problem()
        meta, _, _ = estimate.add_to_problem(problem, [(times[0], times[-1])])
        assert meta.n == len(points)

        def residuals(x):
            problem.set_parameter_vector(x)
            return np.concatenate([estimate.position(t) for t in times]) - measurements.ravel()

        result = least_squares(residuals, problem.parameter_vector(), jac="3-point")
        problem.set_parameter_vector(result.x)

        np.testing.assert_allclose(estimate.control_points(), points, atol=1e-5)

    def test_window_fit_leaves_other_points(self):
        """测试只优化窗口内控制点，窗口外控制点保持不变"""
        points, params = helix_control_points()
        truth = UniformR3SplineTrajectory.from_control_points(points, dt=params.dt)
        estimate = UniformR3SplineTrajectory.from_control_points(points, dt=params.dt)

        problem = Problem()
        t1, t2 = 3.0, 4.9
        meta, blocks, _ = estimate.add_to_problem(problem, [(t1, t2)])
        for block in blocks:
            block += 0.3

        times = np.linspace(t1, t2, 60)
        measurements = np.array([truth.position(t) for t in times])
        local = UniformR3SplineView(BlockHolder(blocks), meta)

        def residuals(x):
            problem.set_parameter_vector(x)
            return np.concatenate([local.evaluate(t).position for t in times]) - measurements.ravel()

        result = least_squares(residuals, problem.parameter_vector(), jac="3-point")
        problem.set_parameter_vector(result.x)

        for t in times:
            np.testing.assert_allclose(estimate.position(t), truth.position(t), atol=1e-6)
        i1 = int(round((meta.t0 - estimate.t0) / estimate.dt))
        untouched = [i for i in range(estimate.num_knots) if not i1 <= i < i1 + meta.n]
        np.testing.assert_array_equal(estimate.control_points()[untouched], points[untouched])


class TestRepr:
    def test_repr(self):
        trajectory = UniformR3SplineTrajectory.from_control_points(straight_line_control_points(6))
        assert repr(trajectory) == "UniformR3SplineTrajectory(N=6, t0=0.0, dt=1.0)"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
