from collections import OrderedDict
from typing import NewType

import pytest

import bincodec
from bincodec import Err, Ok, decode, encode, from_bytes, make_codec, parse, to_bytes, unparse
from bincodec.codecs import DEFAULT_TYPE_MAP, Bytes32Codec, Codec, FixedSizeBytesCodec
from bincodec.serialization import OutOfDataError, TrailingDataError, UnsupportedTypeError
from bincodec.types import Array, u8, u32

Hash = NewType('Hash', bytes)
Nonce = NewType('Nonce', bytes)


class Bytes12Codec(FixedSizeBytesCodec[Nonce]):
    _size = 12


def test_to_bytes_uses_value_class() -> None:
    assert to_bytes(True) == b'\x01'
    assert to_bytes(5) == b'\x05' + b'\x00' * 7
    assert to_bytes('ab') == b'\x02' + b'\x00' * 7 + b'ab'
    assert to_bytes(None) == b''


def test_to_bytes_with_explicit_type() -> None:
    assert to_bytes(5, u8) == b'\x05'
    assert to_bytes([1, 2], list[u8]) == b'\x02' + b'\x00' * 7 + b'\x01\x02'
    with pytest.raises(ValueError):
        to_bytes(256, u8)


def test_aliases() -> None:
    assert encode is to_bytes
    assert decode is from_bytes
    assert bincodec.encode(7, u32) == b'\x07\x00\x00\x00'
    assert bincodec.decode(u32, b'\x07\x00\x00\x00') == Ok(7)


def test_from_bytes_requires_exact_input() -> None:
    assert from_bytes(u8, b'\x01') == Ok(1)
    assert isinstance(from_bytes(u8, b'').unwrap_err(), OutOfDataError)
    assert isinstance(from_bytes(u8, b'\x01\x02').unwrap_err(), TrailingDataError)


def test_from_bytes_accepts_buffers() -> None:
    data = to_bytes({'a': 1}, dict[str, u8])
    assert from_bytes(dict[str, u8], bytearray(data)).unwrap() == {'a': 1}
    assert from_bytes(dict[str, u8], memoryview(data)).unwrap() == {'a': 1}


def test_unparse_appends() -> None:
    out = bytearray(b'hdr')
    unparse(1, out, u8)
    unparse(2, out, u8)
    unparse('x', out)
    assert bytes(out) == b'hdr\x01\x02\x01' + b'\x00' * 7 + b'x'


def test_parse_returns_remainder() -> None:
    result = parse(u8, b'\x01\x02\x03')
    value, rest = result.unwrap()
    assert value == 1
    assert bytes(rest) == b'\x02\x03'
    value, rest = parse(u8, rest).unwrap()
    assert value == 2
    assert isinstance(parse(u32, b'\x01\x02').unwrap_err(), OutOfDataError)


def test_decode_failure_is_a_value() -> None:
    result = from_bytes(list[str], b'\x01' + b'\x00' * 7 + b'\x01' + b'\x00' * 7 + b'\xff')
    assert isinstance(result, Err)
    assert result.is_err()
    assert result.ok() is None
    with pytest.raises(ValueError):
        result.unwrap_or_raise()


def test_make_codec_is_cached() -> None:
    assert make_codec(list[u8]) is make_codec(list[u8])
    assert isinstance(make_codec(OrderedDict[str, u8]), Codec)


def test_unsupported_type() -> None:
    with pytest.raises(UnsupportedTypeError):
        make_codec(complex)
    with pytest.raises(UnsupportedTypeError):
        make_codec(list[object])
    with pytest.raises(TypeError):
        make_codec(list)


def test_fixed_size_bytes_extension() -> None:
    codec = make_codec(Hash, extra_codecs_map={Hash: Bytes32Codec})
    value = Hash(bytes(range(32)))
    data = codec.to_bytes(value)
    assert data == value
    assert codec.from_bytes(data).unwrap() == value
    assert codec.min_size() == 32
    with pytest.raises(ValueError):
        codec.to_bytes(Hash(b'short'))


def test_extension_inside_containers() -> None:
    extra = {Hash: Bytes32Codec, Nonce: Bytes12Codec}
    codec = make_codec(tuple[Nonce, list[Hash]], extra_codecs_map=extra)
    value = (Nonce(b'n' * 12), [Hash(b'a' * 32), Hash(b'b' * 32)])
    data = codec.to_bytes(value)
    assert len(data) == 12 + 8 + 64
    assert codec.from_bytes(data).unwrap() == value


def test_unregistered_newtype_is_unsupported() -> None:
    with pytest.raises(UnsupportedTypeError):
        make_codec(Hash)


def test_array_through_api() -> None:
    data = to_bytes((1, 2, 3), Array[u8, 3])
    assert data == b'\x01\x02\x03'
    assert from_bytes(Array[u8, 3], data).unwrap() == (1, 2, 3)


def test_check_type() -> None:
    Codec.check_type(dict[str, list[u8]], type_map=DEFAULT_TYPE_MAP)
    with pytest.raises(TypeError):
        Codec.check_type(set[list[u8]], type_map=DEFAULT_TYPE_MAP)


def test_unparse_leaves_buffer_untouched_on_invalid_value() -> None:
    out = bytearray(b'\xaa')
    with pytest.raises(ValueError):
        unparse([1, 300], out, list[u8])
    assert out == bytearray(b'\xaa')
    with pytest.raises(TypeError):
        make_codec(tuple[u8, str]).unparse((1, 2), out)
    assert out == bytearray(b'\xaa')
    # the buffer is still usable afterwards
    unparse([1, 2], out, list[u8])
    assert bytes(out) == b'\xaa\x02' + b'\x00' * 7 + b'\x01\x02'
