"""
ChunkReader - Primitive reader for length-prefixed, tagged chunks.

Every mocopi datagram is a tree of chunks laid out as:

    length: u32 little-endian | tag: 4 ASCII bytes | payload: `length` bytes

This module reads one chunk from the front of a byte span and provides the
fixed-width scalar decoders used on chunk payloads. Spans are memoryviews
over the caller's buffer, so reading a chunk never copies its payload.
"""

import struct
from dataclasses import dataclass

from .errors import FieldSizeMismatch, InvalidTag, InvalidUtf8, TruncatedChunk
from .types import CHUNK_HEADER_SIZE, TAG_SIZE

_LENGTH = struct.Struct("<I")


@dataclass(frozen=True)
class Chunk:
    """
    A borrowed view of one chunk.

    Attributes:
        length: Declared payload size in bytes
        tag: 4 character type code
        payload: Exactly `length` bytes following the header
        remainder: Every byte after the payload
        offset: Absolute offset of the chunk header within the datagram
    """

    length: int
    tag: str
    payload: memoryview
    remainder: memoryview
    offset: int = 0

    @property
    def size(self):
        """Bytes occupied by the chunk including its header."""
        return CHUNK_HEADER_SIZE + self.length

    @property
    def payload_offset(self):
        return self.offset + CHUNK_HEADER_SIZE

    @property
    def remainder_offset(self):
        return self.offset + self.size


def as_byte_view(data):
    """
    Flat unsigned-byte memoryview over any bytes-like object.

    Non-contiguous views are copied first, since only contiguous memory
    can be recast to bytes in place.
    """
    view = data if isinstance(data, memoryview) else memoryview(data)
    if not view.c_contiguous:
        view = memoryview(view.tobytes())
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


def read_chunk(data, offset=0):
    """
    Read one chunk from the front of `data`.

    Args:
        data: bytes-like span starting at the chunk header
        offset: Absolute offset of `data` within the datagram, used only to
            report where a failure happened

    Returns:
        Chunk viewing into `data`

    Raises:
        TruncatedChunk: If fewer than 8 + length bytes are available
        InvalidTag: If the tag bytes are not valid UTF-8
    """
    view = as_byte_view(data)
    n = len(view)
    if n < CHUNK_HEADER_SIZE:
        raise TruncatedChunk(
            f"chunk header needs {CHUNK_HEADER_SIZE} bytes, {n} available",
            offset=offset,
        )

    (length,) = _LENGTH.unpack_from(view, 0)
    raw_tag = bytes(view[4:4 + TAG_SIZE])
    try:
        tag = raw_tag.decode("utf-8")
    except UnicodeDecodeError:
        raise InvalidTag(f"chunk tag {raw_tag!r} is not text", offset=offset) from None

    end = CHUNK_HEADER_SIZE + length
    if end > n:
        raise TruncatedChunk(
            f"declared length {length} exceeds {n - CHUNK_HEADER_SIZE} available bytes",
            tag=tag,
            offset=offset,
        )

    return Chunk(
        length=length,
        tag=tag,
        payload=view[CHUNK_HEADER_SIZE:end],
        remainder=view[end:],
        offset=offset,
    )


def peek_tag(data, offset=0):
    """Return the tag of the chunk at the front of `data` without checking its length."""
    view = as_byte_view(data)
    if len(view) < CHUNK_HEADER_SIZE:
        raise TruncatedChunk(
            f"chunk header needs {CHUNK_HEADER_SIZE} bytes, {len(view)} available",
            offset=offset,
        )
    raw_tag = bytes(view[4:4 + TAG_SIZE])
    try:
        return raw_tag.decode("utf-8")
    except UnicodeDecodeError:
        raise InvalidTag(f"chunk tag {raw_tag!r} is not text", offset=offset) from None


def _unpack_exact(chunk, fmt):
    size = struct.calcsize(fmt)
    if chunk.length != size:
        raise FieldSizeMismatch(size, chunk.length, tag=chunk.tag, offset=chunk.offset)
    return struct.unpack(fmt, chunk.payload)


def read_u8(chunk):
    """First byte of a non-empty payload."""
    if chunk.length < 1:
        raise FieldSizeMismatch(1, 0, tag=chunk.tag, offset=chunk.offset)
    return chunk.payload[0]


def read_u16(chunk):
    return _unpack_exact(chunk, "<H")[0]


def read_u32(chunk):
    return _unpack_exact(chunk, "<I")[0]


def read_u64(chunk):
    return _unpack_exact(chunk, "<Q")[0]


def read_f32(chunk):
    return _unpack_exact(chunk, "<f")[0]


def read_f32_array(chunk, count):
    """Exactly `count` consecutive little-endian float32 values."""
    return _unpack_exact(chunk, f"<{count}f")


def read_str(chunk):
    """Whole payload as UTF-8 text."""
    try:
        return bytes(chunk.payload).decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidUtf8(
            f"payload is not UTF-8: {e.reason}", tag=chunk.tag, offset=chunk.offset
        ) from None
