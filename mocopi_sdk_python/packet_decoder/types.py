"""
Data model for decoded mocopi datagrams.

All values are immutable and own their data; nothing here keeps a
reference to the datagram buffer they were decoded from.
"""

from dataclasses import dataclass
from typing import Dict, Tuple, Union

# Chunk framing
CHUNK_HEADER_SIZE = 8  # u32 length + 4 byte tag
TAG_SIZE = 4
TRANSFORM_SIZE = 28  # 7 x f32

# Tags
TAG_HEAD = "head"
TAG_FORMAT = "ftyp"
TAG_VERSION = "vrsn"
TAG_INFO = "info"  # not checked, senders in the field emit "sndf"
TAG_ADDRESS = "ipad"
TAG_PORT = "rcvp"
TAG_SKELETON = "skdf"
TAG_BONES = "bons"
TAG_BONE = "bndt"
TAG_BONE_ID = "bnid"
TAG_PARENT_ID = "pbid"
TAG_TRANSFORM = "tran"
TAG_FRAME = "fram"
TAG_FRAME_NUM = "fnum"
TAG_TIME = "time"
TAG_BONE_TRANSFORMS = "btrs"
TAG_BONE_TRANSFORM = "btdt"


@dataclass(frozen=True)
class Head:
    format: str
    ver: int


@dataclass(frozen=True)
class EndpointInfo:
    """Sender address and receive port as carried in the datagram."""

    addr: int
    port: int


@dataclass(frozen=True)
class Rotation:
    x: float
    y: float
    z: float
    w: float

    def as_xyzw(self) -> Tuple[float, float, float, float]:
        """Scalar-last order, as on the wire and in scipy."""
        return (self.x, self.y, self.z, self.w)

    def as_wxyz(self) -> Tuple[float, float, float, float]:
        """Scalar-first order, as used by the quaternion helpers in utils."""
        return (self.w, self.x, self.y, self.z)


@dataclass(frozen=True)
class Position:
    x: float
    y: float
    z: float

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Transform:
    rotation: Rotation
    position: Position


@dataclass(frozen=True)
class Bone:
    """
    One joint of the rig.

    A root bone usually names itself (or a sentinel id) as its parent; the
    decoder reports whatever the sender wrote.
    """

    id: int
    parent: int
    transform: Transform


@dataclass(frozen=True)
class BoneTrans:
    id: int
    transform: Transform


@dataclass(frozen=True)
class Skeleton:
    bones: Tuple[Bone, ...]

    def parents(self) -> Dict[int, int]:
        """Map bone id to parent bone id."""
        return {bone.id: bone.parent for bone in self.bones}


@dataclass(frozen=True)
class Frame:
    num: int
    time: int
    bones: Tuple[BoneTrans, ...]

    def by_id(self) -> Dict[int, Transform]:
        """Map bone id to its transform in this frame."""
        return {bone.id: bone.transform for bone in self.bones}


@dataclass(frozen=True)
class SkeletonPacket:
    head: Head
    info: EndpointInfo
    skeleton: Skeleton


@dataclass(frozen=True)
class FramePacket:
    head: Head
    info: EndpointInfo
    frame: Frame


Packet = Union[SkeletonPacket, FramePacket]
