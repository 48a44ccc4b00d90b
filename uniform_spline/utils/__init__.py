"""
utils - 工具模块

包含:
- holders: 控制点参数存储
"""

from .holders import VectorHolder, BlockHolder

__all__ = [
    "VectorHolder",
    "BlockHolder",
]
