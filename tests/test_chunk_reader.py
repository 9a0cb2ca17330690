import struct

import pytest

from chunk_builder import make_chunk
from mocopi_sdk_python.packet_decoder import (
    DecodeError,
    FieldSizeMismatch,
    InvalidTag,
    InvalidUtf8,
    TruncatedChunk,
    peek_tag,
    read_chunk,
)
from mocopi_sdk_python.packet_decoder.chunk_reader import (
    read_f32,
    read_str,
    read_u8,
    read_u16,
    read_u32,
    read_u64,
)


def test_read_chunk_splits_header_payload_and_remainder():
    data = make_chunk("abcd", b"\x01\x02\x03") + b"rest"
    chunk = read_chunk(data)

    assert chunk.length == 3
    assert chunk.tag == "abcd"
    assert bytes(chunk.payload) == b"\x01\x02\x03"
    assert bytes(chunk.remainder) == b"rest"
    assert chunk.size == 11
    assert chunk.payload_offset == 8
    assert chunk.remainder_offset == 11


def test_read_chunk_carries_absolute_offset():
    chunk = read_chunk(make_chunk("abcd", b"xy"), offset=40)
    assert chunk.offset == 40
    assert chunk.payload_offset == 48
    assert chunk.remainder_offset == 50


def test_empty_payload_chunk():
    chunk = read_chunk(make_chunk("none", b""))
    assert chunk.length == 0
    assert bytes(chunk.payload) == b""
    assert bytes(chunk.remainder) == b""


@pytest.mark.parametrize("cut", [1, 2, 5])
def test_payload_shorter_than_declared_length_is_truncated(cut):
    data = make_chunk("abcd", b"12345678")[:-cut]
    with pytest.raises(TruncatedChunk) as exc:
        read_chunk(data, offset=12)
    assert exc.value.tag == "abcd"
    assert exc.value.offset == 12


@pytest.mark.parametrize("data", [b"", b"\x04\x00", b"\x00\x00\x00\x00abc"])
def test_short_header_is_truncated(data):
    with pytest.raises(TruncatedChunk):
        read_chunk(data)


def test_huge_declared_length_is_truncated():
    data = struct.pack("<I", 0xFFFFFFFF) + b"abcd" + b"\x00" * 16
    with pytest.raises(TruncatedChunk):
        read_chunk(data)


def test_non_text_tag_is_invalid():
    data = struct.pack("<I", 0) + b"\xff\xfe\xfd\xfc"
    with pytest.raises(InvalidTag):
        read_chunk(data)


def test_errors_share_decode_error_base():
    with pytest.raises(DecodeError):
        read_chunk(b"\x01")
    with pytest.raises(ValueError):
        read_chunk(b"\x01")


def test_peek_tag_does_not_need_the_payload():
    data = struct.pack("<I", 100) + b"skdf"
    assert peek_tag(data) == "skdf"


def test_read_chunk_accepts_bytearray_and_memoryview():
    raw = make_chunk("abcd", b"\x05")
    assert read_chunk(bytearray(raw)).tag == "abcd"
    assert read_chunk(memoryview(raw)).tag == "abcd"


def test_scalar_decoders_little_endian():
    assert read_u16(read_chunk(make_chunk("u16_", b"\x34\x12"))) == 0x1234
    assert read_u32(read_chunk(make_chunk("u32_", b"\xe8\x03\x00\x00"))) == 1000
    assert read_u64(read_chunk(make_chunk("u64_", b"\x7f\x00\x00\x01\x00\x00\x00\x00"))) == 0x0100007F
    assert read_f32(read_chunk(make_chunk("f32_", b"\x00\x00\x80\x3f"))) == 1.0


def test_read_u8_takes_first_byte():
    assert read_u8(read_chunk(make_chunk("vrsn", b"\x02\x09"))) == 2


def test_read_u8_needs_a_byte():
    with pytest.raises(FieldSizeMismatch) as exc:
        read_u8(read_chunk(make_chunk("vrsn", b"")))
    assert exc.value.expected == 1
    assert exc.value.actual == 0


@pytest.mark.parametrize("reader,expected,payload", [
    (read_u16, 2, b"\x01"),
    (read_u16, 2, b"\x01\x02\x03"),
    (read_u32, 4, b"\x01\x02"),
    (read_u64, 8, b"\x01\x02\x03\x04"),
])
def test_fixed_width_size_mismatch(reader, expected, payload):
    with pytest.raises(FieldSizeMismatch) as exc:
        reader(read_chunk(make_chunk("fld_", payload)))
    assert exc.value.expected == expected
    assert exc.value.actual == len(payload)
    assert exc.value.tag == "fld_"
    assert f"expected {expected} byte field" in str(exc.value)


def test_read_str_utf8():
    assert read_str(read_chunk(make_chunk("ftyp", "mocopi".encode("utf-8")))) == "mocopi"


def test_read_str_rejects_invalid_utf8():
    with pytest.raises(InvalidUtf8) as exc:
        read_str(read_chunk(make_chunk("ftyp", b"\xc3\x28"), offset=8))
    assert exc.value.tag == "ftyp"
    assert exc.value.offset == 8


def test_read_chunk_accepts_a_non_contiguous_view():
    raw = make_chunk("abcd", b"\x05\x06") + b"zz"
    spread = bytearray(2 * len(raw))
    spread[::2] = raw
    chunk = read_chunk(memoryview(spread)[::2])

    assert chunk.tag == "abcd"
    assert bytes(chunk.payload) == b"\x05\x06"
    assert bytes(chunk.remainder) == b"zz"
