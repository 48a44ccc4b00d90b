"""
evaluation - 轨迹评估标志与结果
"""

from dataclasses import dataclass
from enum import IntFlag

import numpy as np
from scipy.spatial.transform import Rotation


class EvalFlag(IntFlag):
    """选择 evaluate 需要计算的量，可按位组合"""

    POSITION = 1
    VELOCITY = 2
    ACCELERATION = 4
    ORIENTATION = 8
    ANGULAR_VELOCITY = 16

    ALL = POSITION | VELOCITY | ACCELERATION | ORIENTATION | ANGULAR_VELOCITY


@dataclass
class TrajectoryEvaluation:
    """
    单个时刻的轨迹评估结果。未请求的量保持为 None。

    Attributes:
        position: (3,) 位置
        velocity: (3,) 速度
        acceleration: (3,) 加速度
        orientation: 姿态 (scipy Rotation)
        angular_velocity: (3,) 角速度
    """

    position: np.ndarray | None = None
    velocity: np.ndarray | None = None
    acceleration: np.ndarray | None = None
    orientation: Rotation | None = None
    angular_velocity: np.ndarray | None = None
