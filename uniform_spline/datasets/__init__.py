"""
datasets - 样例控制点数据

包含:
- helix: 直线与螺旋线控制点
"""

from .helix import HelixParameters, helix_control_points, straight_line_control_points

__all__ = [
    "HelixParameters",
    "helix_control_points",
    "straight_line_control_points",
]
