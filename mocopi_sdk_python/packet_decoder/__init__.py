"""
PacketDecoder - Decoder for mocopi motion capture datagrams.

This package turns one UDP datagram sent by a mocopi device into a
SkeletonPacket (rig definition) or a FramePacket (per-frame bone poses).
It performs no I/O; receiving datagrams is up to the caller.

Example usage:
    from mocopi_sdk_python.packet_decoder import decode, DecodeError, SkeletonPacket

    data, _addr = sock.recvfrom(65535)
    try:
        packet = decode(data)
    except DecodeError as e:
        print(f"dropping datagram: {e}")
    else:
        if isinstance(packet, SkeletonPacket):
            print(f"{len(packet.skeleton.bones)} bones")
        else:
            print(f"frame {packet.frame.num} @ {packet.frame.time}")

Datagram layout:
    head | info | body, every part a chunk of
    length (u32 LE) | tag (4 bytes) | payload (length bytes)
"""

from .chunk_reader import Chunk, peek_tag, read_chunk
from .errors import (
    DecodeError,
    FieldSizeMismatch,
    InvalidTag,
    InvalidUtf8,
    MalformedList,
    TruncatedChunk,
)
from .packet_decoder import (
    decode,
    decode_bone_transforms,
    decode_bones,
    decode_chunk_list,
    decode_frame,
    decode_head,
    decode_info,
    decode_packet,
    decode_skeleton,
    decode_transform,
)
from .types import (
    Bone,
    BoneTrans,
    EndpointInfo,
    Frame,
    FramePacket,
    Head,
    Packet,
    Position,
    Rotation,
    Skeleton,
    SkeletonPacket,
    Transform,
)

__all__ = [
    "Chunk",
    "read_chunk",
    "peek_tag",
    "DecodeError",
    "TruncatedChunk",
    "InvalidTag",
    "InvalidUtf8",
    "FieldSizeMismatch",
    "MalformedList",
    "decode",
    "decode_packet",
    "decode_head",
    "decode_info",
    "decode_transform",
    "decode_chunk_list",
    "decode_bones",
    "decode_bone_transforms",
    "decode_skeleton",
    "decode_frame",
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
]
