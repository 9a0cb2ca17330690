"""
PacketDecoder - Decodes one mocopi datagram into a packet value.

A datagram is three top-level chunks back to back:

    head | info | body

where body is either a skeleton definition ("skdf") or a frame ("fram").
Each decoder below takes a byte span positioned at its chunk plus the
span's absolute offset within the datagram, and returns the declared chunk
length together with the decoded value so the caller can advance by
`length + 8`.
"""

from typing import Callable, List, Tuple, TypeVar

from .chunk_reader import (
    Chunk,
    as_byte_view,
    peek_tag,
    read_chunk,
    read_f32_array,
    read_str,
    read_u8,
    read_u16,
    read_u32,
    read_u64,
)
from .errors import FieldSizeMismatch, MalformedList, TruncatedChunk
from .types import (
    CHUNK_HEADER_SIZE,
    TAG_SKELETON,
    TRANSFORM_SIZE,
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

T = TypeVar("T")


def _first_child(chunk: Chunk) -> Chunk:
    return read_chunk(chunk.payload, chunk.payload_offset)


def _next_sibling(chunk: Chunk) -> Chunk:
    return read_chunk(chunk.remainder, chunk.remainder_offset)


def decode_head(data, offset: int = 0) -> Tuple[int, Head]:
    """
    Decode the header chunk.

    The payload holds a format-type chunk (UTF-8 text) followed by a
    version chunk whose first byte is the version number.

    Returns:
        Tuple of (declared length, Head)
    """
    head = read_chunk(data, offset)
    ftyp = _first_child(head)
    vrsn = _next_sibling(ftyp)
    return head.length, Head(format=read_str(ftyp), ver=read_u8(vrsn))


def decode_info(data, offset: int = 0) -> Tuple[int, EndpointInfo]:
    """
    Decode the sender info chunk: an 8 byte address then a 2 byte port.

    Returns:
        Tuple of (declared length, EndpointInfo)
    """
    info = read_chunk(data, offset)
    ipad = _first_child(info)
    rcvp = _next_sibling(ipad)
    return info.length, EndpointInfo(addr=read_u64(ipad), port=read_u16(rcvp))


def decode_transform(data, offset: int = 0) -> Tuple[int, Transform]:
    """
    Decode a "tran" chunk.

    The 28 byte payload is seven little-endian float32 values in the order
    rot.x, rot.y, rot.z, rot.w, pos.x, pos.y, pos.z. Values are passed
    through as-is (no normalization, NaN and inf included).
    """
    tran = read_chunk(data, offset)
    if tran.length != TRANSFORM_SIZE:
        raise FieldSizeMismatch(TRANSFORM_SIZE, tran.length, tag=tran.tag, offset=tran.offset)
    rx, ry, rz, rw, px, py, pz = read_f32_array(tran, 7)
    return tran.length, Transform(
        rotation=Rotation(x=rx, y=ry, z=rz, w=rw),
        position=Position(x=px, y=py, z=pz),
    )


def decode_chunk_list(
    data, offset: int, decode_entry: Callable[[Chunk], T]
) -> Tuple[int, List[T]]:
    """
    Decode a chunk whose payload is a run of same-shaped child chunks.

    Children are read back to back from the list payload. After each one
    the consumed byte count grows by `child.length + 8`; the list is done
    when it equals the declared payload length exactly. A child that would
    cross the declared boundary (including trailing bytes too short to hold
    a chunk header) makes the whole list malformed.

    Args:
        data: Span starting at the list chunk
        offset: Absolute offset of `data` within the datagram
        decode_entry: Called with each child chunk, returns the decoded item

    Returns:
        Tuple of (declared length, list of decoded items in wire order)

    Raises:
        MalformedList: If the children do not add up to the declared length
    """
    outer = read_chunk(data, offset)
    items = []
    consumed = 0
    while consumed < outer.length:
        entry_offset = outer.payload_offset + consumed
        try:
            entry = read_chunk(outer.payload[consumed:], entry_offset)
        except TruncatedChunk as e:
            raise MalformedList(
                f"child at byte {consumed} of {outer.length} overruns the list: {e.reason}",
                tag=outer.tag,
                offset=outer.offset,
            ) from e
        items.append(decode_entry(entry))
        consumed += entry.size
    return outer.length, items


def _decode_bone(entry: Chunk) -> Bone:
    bnid = _first_child(entry)
    pbid = _next_sibling(bnid)
    _, transform = decode_transform(pbid.remainder, pbid.remainder_offset)
    return Bone(id=read_u16(bnid), parent=read_u16(pbid), transform=transform)


def _decode_bone_trans(entry: Chunk) -> BoneTrans:
    bnid = _first_child(entry)
    _, transform = decode_transform(bnid.remainder, bnid.remainder_offset)
    return BoneTrans(id=read_u16(bnid), transform=transform)


def decode_bones(data, offset: int = 0) -> Tuple[int, List[Bone]]:
    """Decode a "bons" list of "bndt" entries (bnid, pbid, tran)."""
    return decode_chunk_list(data, offset, _decode_bone)


def decode_bone_transforms(data, offset: int = 0) -> Tuple[int, List[BoneTrans]]:
    """Decode a "btrs" list of "btdt" entries (bnid, tran)."""
    return decode_chunk_list(data, offset, _decode_bone_trans)


def decode_skeleton(data, offset: int = 0) -> Tuple[int, Skeleton]:
    """Decode a "skdf" chunk whose payload is a single bone list."""
    skdf = read_chunk(data, offset)
    _, bones = decode_bones(skdf.payload, skdf.payload_offset)
    return skdf.length, Skeleton(bones=tuple(bones))


def decode_frame(data, offset: int = 0) -> Tuple[int, Frame]:
    """Decode a "fram" chunk: frame number, timestamp, bone transform list."""
    fram = read_chunk(data, offset)
    fnum = _first_child(fram)
    time = _next_sibling(fnum)
    _, bones = decode_bone_transforms(time.remainder, time.remainder_offset)
    return fram.length, Frame(num=read_u32(fnum), time=read_u32(time), bones=tuple(bones))


def decode_packet(buffer) -> Packet:
    """
    Decode one datagram.

    The packet kind is taken from the tag of the body chunk that follows
    head and info: "skdf" is a skeleton definition, anything else is
    decoded as a frame. Bytes after the body chunk are ignored.

    Args:
        buffer: bytes-like object holding exactly one datagram

    Returns:
        SkeletonPacket or FramePacket

    Raises:
        DecodeError: On the first structural problem found
    """
    # Chunks view a private copy; raised errors must not pin the caller's buffer.
    view = as_byte_view(bytes(buffer))

    head_len, head = decode_head(view, 0)
    info_offset = head_len + CHUNK_HEADER_SIZE
    info_len, info = decode_info(view[info_offset:], info_offset)

    body_offset = info_offset + info_len + CHUNK_HEADER_SIZE
    body = view[body_offset:]
    if peek_tag(body, body_offset) == TAG_SKELETON:
        _, skeleton = decode_skeleton(body, body_offset)
        return SkeletonPacket(head=head, info=info, skeleton=skeleton)

    _, frame = decode_frame(body, body_offset)
    return FramePacket(head=head, info=info, frame=frame)


decode = decode_packet
