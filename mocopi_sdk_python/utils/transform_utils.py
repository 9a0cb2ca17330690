"""
Conversion helpers for decoded bone transforms.

Quaternions returned here are in (w, x, y, z) order unless otherwise
specified. The wire order (x, y, z, w) matches scipy's scalar-last
convention, so scipy Rotation objects are built directly from it.
"""

import numpy as np
from scipy.spatial.transform import Rotation as R


def rotation_to_wxyz(rotation):
    """
    Convert a decoded Rotation to a numpy quaternion.

    Args:
        rotation: Rotation with x, y, z, w components

    Returns:
        np.array (w, x, y, z)
    """
    return np.array(rotation.as_wxyz(), dtype=np.float64)


def position_to_array(position):
    return np.array(position.as_tuple(), dtype=np.float64)


def transform_to_rotation(transform):
    """
    Build a scipy Rotation from a decoded Transform.

    scipy normalizes the quaternion; a zero quaternion raises ValueError.
    """
    return R.from_quat(transform.rotation.as_xyzw())


def transform_to_matrix(transform):
    """
    4x4 homogeneous matrix for a decoded Transform.

    Args:
        transform: Transform (rotation + position)

    Returns:
        np.array of shape (4, 4)
    """
    m = np.eye(4)
    m[:3, :3] = transform_to_rotation(transform).as_matrix()
    m[:3, 3] = position_to_array(transform.position)
    return m


def unity_to_opengl_vec(v):
    """
    Convert a position from the sender's left-handed, Y-up frame to a
    right-handed one by mirroring the X axis: (-x, y, z).
    """
    return np.array([-v[0], v[1], v[2]])


def unity_to_opengl_quat(q):
    """
    Convert a (w, x, y, z) quaternion to the mirrored frame used by
    unity_to_opengl_vec: (w, x, -y, -z).
    """
    return np.array([q[0], q[1], -q[2], -q[3]])


def wxyz_to_xyzw(q):
    return np.array([q[1], q[2], q[3], q[0]])


def xyzw_to_wxyz(q):
    return np.array([q[3], q[0], q[1], q[2]])
