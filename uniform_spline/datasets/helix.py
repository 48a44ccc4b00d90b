"""
helix - 样条控制点样例数据

提供两组可复现的控制点序列:
- 直线: 控制点 (k, 0, 0)，沿 x 轴等距排列
- 螺旋线: 绕 z 轴匀速旋转并匀速上升
"""

from dataclasses import dataclass

import numpy as np


@dataclass
class HelixParameters:
    """螺旋线控制点参数"""

    num_knots: int = 20  # 控制点数
    dt: float = 0.5  # 控制点时间间隔 (s)
    radius: float = 2.0  # 半径 (m)
    pitch: float = 0.5  # 每圈上升高度 (m)
    turns: float = 2.0  # 圈数


def straight_line_control_points(num_knots: int = 6, spacing: float = 1.0) -> np.ndarray:
    """
    沿 x 轴的直线控制点。

    Args:
        num_knots: 控制点数
        spacing: 相邻控制点间距

    Returns:
        points: (N, 3) 控制点 [k*spacing, 0, 0]
    """
    points = np.zeros((num_knots, 3))
    points[:, 0] = spacing * np.arange(num_knots)
    return points


def helix_control_points(params: HelixParameters | None = None) -> tuple[np.ndarray, HelixParameters]:
    """
    螺旋线控制点。

    Args:
        params: 螺旋线参数，默认 HelixParameters()

    Returns:
        points: (N, 3) 控制点数组
        params: 使用的参数
    """
    if params is None:
        params = HelixParameters()

    angles = np.linspace(0.0, 2 * np.pi * params.turns, params.num_knots)
    points = np.column_stack([
        params.radius * np.cos(angles),
        params.radius * np.sin(angles),
        params.pitch * angles / (2 * np.pi),
    ])
    return points, params


if __name__ == "__main__":
    points, params = helix_control_points()
    print("=== 螺旋线控制点 ===")
    print(f"点数: {len(points)}, dt={params.dt}s")
    print(f"位置范围: X[{points[:, 0].min():.2f}, {points[:, 0].max():.2f}] m")
    print(f"          Y[{points[:, 1].min():.2f}, {points[:, 1].max():.2f}] m")
    print(f"          Z[{points[:, 2].min():.2f}, {points[:, 2].max():.2f}] m")
