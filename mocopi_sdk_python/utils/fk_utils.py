"""
Forward kinematics utilities for decoded mocopi packets.

A Skeleton packet gives each bone's parent and rest transform (local to
its parent). Frame packets later carry new local transforms for the same
bone ids. This module composes them into global transforms.
"""

import numpy as np
from scipy.spatial.transform import Rotation as R

from .transform_utils import (
    position_to_array,
    unity_to_opengl_quat,
    unity_to_opengl_vec,
    wxyz_to_xyzw,
    xyzw_to_wxyz,
)


def _local_transforms(skeleton, frame, convert_coords):
    overrides = frame.by_id() if frame is not None else {}
    local = {}
    for bone in skeleton.bones:
        transform = overrides.get(bone.id, bone.transform)
        pos = position_to_array(transform.position)
        q = np.array(transform.rotation.as_wxyz(), dtype=np.float64)
        if convert_coords:
            pos = unity_to_opengl_vec(pos)
            q = unity_to_opengl_quat(q)
        local[bone.id] = (pos, R.from_quat(wxyz_to_xyzw(q)))
    return local


def _resolution_order(parents):
    """Bone ids ordered so every parent comes before its children."""
    order = []
    done = set()
    for bone_id in parents:
        chain = []
        seen = set()
        cur = bone_id
        while cur not in done:
            if cur in seen:
                raise ValueError(f"bone hierarchy has a cycle through bone {cur}")
            seen.add(cur)
            chain.append(cur)
            parent = parents[cur]
            if parent == cur or parent not in parents:
                break
            cur = parent
        for b in reversed(chain):
            if b not in done:
                done.add(b)
                order.append(b)
    return order


def compute_forward_kinematics(skeleton, frame=None, convert_coords=False):
    """
    Compute global transforms for every bone of a skeleton.

    A bone whose parent id is its own id, or an id not present in the
    skeleton, is treated as a root and its local transform is global.

    Args:
        skeleton: Decoded Skeleton (hierarchy and rest transforms)
        frame: Optional decoded Frame; its transforms replace the rest
            transforms of the bones they name. Unknown ids are ignored.
        convert_coords: Mirror the sender's left-handed frame into a
            right-handed one before composing

    Returns:
        Dict mapping bone id to [global_position (np.array),
        global_rotation (np.array, w, x, y, z)]

    Raises:
        ValueError: If the parent links form a cycle or a rotation is zero
    """
    parents = skeleton.parents()
    local = _local_transforms(skeleton, frame, convert_coords)

    global_transforms = {}  # bone id -> (pos, scipy Rotation)
    for bone_id in _resolution_order(parents):
        local_pos, local_rot = local[bone_id]
        parent_id = parents[bone_id]
        if parent_id == bone_id or parent_id not in global_transforms:
            global_transforms[bone_id] = (local_pos, local_rot)
            continue
        parent_pos, parent_rot = global_transforms[parent_id]
        global_transforms[bone_id] = (
            parent_pos + parent_rot.apply(local_pos),
            parent_rot * local_rot,
        )

    return {
        bone_id: [pos, xyzw_to_wxyz(rot.as_quat())]
        for bone_id, (pos, rot) in global_transforms.items()
    }


def global_positions(skeleton, frame=None, convert_coords=False):
    """
    Global bone positions as an (N, 3) array in skeleton order.
    """
    result = compute_forward_kinematics(skeleton, frame, convert_coords)
    if not skeleton.bones:
        return np.zeros((0, 3))
    return np.stack([result[bone.id][0] for bone in skeleton.bones])
