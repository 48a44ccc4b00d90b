"""
uniform_spline - 均匀三次B样条 R³ 位置轨迹

以等时间间隔的控制点描述三维位置轨迹，提供:
1. 任意有效时刻的位置、速度、加速度评估
2. 提取影响某时间窗口的最少控制点，登记为非线性最小二乘问题的自由参数块
"""

from .core.evaluation import EvalFlag, TrajectoryEvaluation
from .core.spline_base import SplineMeta
from .exceptions import OutOfRangeError
from .problem import Problem
from .trajectory import UniformR3SplineTrajectory

__version__ = "0.1.0"
__all__ = [
    "EvalFlag",
    "TrajectoryEvaluation",
    "SplineMeta",
    "OutOfRangeError",
    "Problem",
    "UniformR3SplineTrajectory",
]
