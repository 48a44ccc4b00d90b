"""
core - 核心算法模块

包含:
- basis: 均匀三次B样条混合矩阵与幂基
- spline_base: 时间原点/间隔与索引解析
- evaluation: 评估标志与结果
- r3_spline_view: 位置/速度/加速度评估
"""

from .basis import BLENDING_MATRIX, SPLINE_DEGREE, SPLINE_ORDER, blend_weights
from .evaluation import EvalFlag, TrajectoryEvaluation
from .spline_base import SplineMeta, SplineViewBase
from .r3_spline_view import UniformR3SplineView

__all__ = [
    "BLENDING_MATRIX",
    "SPLINE_DEGREE",
    "SPLINE_ORDER",
    "blend_weights",
    "EvalFlag",
    "TrajectoryEvaluation",
    "SplineMeta",
    "SplineViewBase",
    "UniformR3SplineView",
]
