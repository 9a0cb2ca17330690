"""
mocopi SDK Python - Decoder for mocopi motion capture datagrams.

This package decodes the binary UDP datagrams streamed by a mocopi
wearable motion tracker into Python values, and offers helpers for
turning decoded bone transforms into global poses.

Main entry points:
    - decode: Decode one datagram into a SkeletonPacket or FramePacket
    - compute_forward_kinematics: Global bone transforms from a skeleton
      and an optional frame

Example usage:
    from mocopi_sdk_python import decode, DecodeError, SkeletonPacket
    from mocopi_sdk_python import compute_forward_kinematics

    skeleton = None
    while running:
        data, _addr = sock.recvfrom(65535)
        try:
            packet = decode(data)
        except DecodeError:
            continue
        if isinstance(packet, SkeletonPacket):
            skeleton = packet.skeleton
        elif skeleton is not None:
            pose = compute_forward_kinematics(skeleton, packet.frame)
            # pose[bone_id] = [position (x, y, z), rotation (w, x, y, z)]
"""

from .packet_decoder import (
    Bone,
    BoneTrans,
    DecodeError,
    EndpointInfo,
    FieldSizeMismatch,
    Frame,
    FramePacket,
    Head,
    InvalidTag,
    InvalidUtf8,
    MalformedList,
    Packet,
    Position,
    Rotation,
    Skeleton,
    SkeletonPacket,
    Transform,
    TruncatedChunk,
    decode,
    decode_packet,
)
from .utils import compute_forward_kinematics, global_positions, transform_to_matrix

__version__ = "0.1.0"
__all__ = [
    "decode",
    "decode_packet",
    "DecodeError",
    "TruncatedChunk",
    "InvalidTag",
    "InvalidUtf8",
    "FieldSizeMismatch",
    "MalformedList",
    "Head",
    "EndpointInfo",
    "Rotation",
    "Position",
    "Transform",
    "Bone",
    "BoneTrans",
    "Skeleton",
    "Frame",
    "SkeletonPacket",
    "FramePacket",
    "Packet",
    "compute_forward_kinematics",
    "global_positions",
    "transform_to_matrix",
]
