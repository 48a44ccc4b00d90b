"""
basis - 均匀三次B样条基函数工具

提供均匀三次B样条在局部段内的混合矩阵与幂基行向量，供 r3_spline_view 使用。

实现:
1. 混合矩阵 M (幂基 -> 控制点权重)
2. 位置/速度/加速度幂基行向量
3. 行向量 × M 得到 4 个混合权重
4. 与 scipy BSpline 等价的均匀节点向量
"""

import numpy as np

# 样条阶数 (order = degree + 1)，每段受 SPLINE_ORDER 个控制点影响
SPLINE_DEGREE = 3
SPLINE_ORDER = SPLINE_DEGREE + 1

# 行对应 u 的幂次 [1, u, u², u³]，列对应控制点 i0..i0+3
BLENDING_MATRIX = np.array(
    [
        [1.0, 4.0, 1.0, 0.0],
        [-3.0, 0.0, 3.0, 0.0],
        [3.0, -6.0, 3.0, 0.0],
        [-1.0, 3.0, -3.0, 1.0],
    ]
) / 6.0
BLENDING_MATRIX.setflags(write=False)


def position_row(u):
    """位置幂基行向量 [1, u, u², u³]"""
    return [1.0, u, pow(u, 2), pow(u, 3)]


def velocity_row(u, dt_inv):
    """速度幂基行向量 (1/dt)·[0, 1, 2u, 3u²]"""
    return [0.0, dt_inv, dt_inv * (2.0 * u), dt_inv * (3.0 * pow(u, 2))]


def acceleration_row(u, dt_inv):
    """加速度幂基行向量 (1/dt)²·[0, 0, 2, 6u]"""
    scale = pow(dt_inv, 2)
    return [0.0, 0.0, 2.0 * scale, scale * (6.0 * u)]


def blend_weights(row) -> list:
    """
    计算混合权重 B = row · M。

    只使用加法和乘法，row 中的元素可以是 float，也可以是携带导数的数组类型
    (例如 jax 追踪值)，两种情况下权重公式完全相同。

    Args:
        row: 长度为 SPLINE_ORDER 的幂基行向量

    Returns:
        weights: 长度为 SPLINE_ORDER 的权重列表，第 j 个对应控制点 i0 + j
    """
    weights = []
    for j in range(SPLINE_ORDER):
        w = row[0] * BLENDING_MATRIX[0, j]
        for k in range(1, SPLINE_ORDER):
            w = w + row[k] * BLENDING_MATRIX[k, j]
        weights.append(w)
    return weights


def uniform_knot_vector(t0: float, dt: float, num_knots: int) -> np.ndarray:
    """
    构造与均匀样条等价的 scipy 节点向量。

    控制点 i 所在段 [t0 + i*dt, t0 + (i+1)*dt) 由控制点 i..i+3 决定，
    对应 scipy 的节点 t_k = t0 + (k - 3)*dt, k = 0..N+3。

    Args:
        t0: 时间原点
        dt: 节点时间间隔
        num_knots: 控制点数 N

    Returns:
        knots: (N + 4,) 节点向量
    """
    return t0 + dt * (np.arange(num_knots + SPLINE_ORDER) - SPLINE_DEGREE)


if __name__ == "__main__":
    print("=== 均匀三次B样条基函数测试 ===")

    for u in (0.0, 0.25, 0.5, 0.75):
        weights = blend_weights(position_row(u))
        print(f"u={u:.2f}: 权重={np.round(weights, 4)}, 和={sum(weights):.6f}")

    print(f"u=0.5 速度权重: {np.round(blend_weights(velocity_row(0.5, 1.0)), 4)}")
    print(f"u=0.5 加速度权重: {np.round(blend_weights(acceleration_row(0.5, 1.0)), 4)}")
    print(f"节点向量 (N=6): {uniform_knot_vector(0.0, 1.0, 6)}")
