"""
Utility functions for working with decoded mocopi packets.

This module provides:
    - transform_utils: Quaternion / matrix conversion of bone transforms
    - fk_utils: Forward kinematics over a skeleton and frame
"""

from .fk_utils import compute_forward_kinematics, global_positions
from .transform_utils import (
    rotation_to_wxyz,
    transform_to_matrix,
    transform_to_rotation,
    unity_to_opengl_quat,
    unity_to_opengl_vec,
)

__all__ = [
    "compute_forward_kinematics",
    "global_positions",
    "rotation_to_wxyz",
    "transform_to_matrix",
    "transform_to_rotation",
    "unity_to_opengl_quat",
    "unity_to_opengl_vec",
]
