import math
import struct

import pytest

from bincodec.serialization import (
    Deserializer,
    InvalidBoolError,
    InvalidScalarError,
    InvalidUtf8Error,
    OutOfDataError,
    Serializer,
)
from bincodec.serialization.encoding.bool import decode_bool, encode_bool
from bincodec.serialization.encoding.bytes import decode_bytes, encode_bytes
from bincodec.serialization.encoding.char import decode_char, encode_char
from bincodec.serialization.encoding.float import decode_float, encode_float
from bincodec.serialization.encoding.int import decode_int, encode_int
from bincodec.serialization.encoding.length import decode_length, encode_length
from bincodec.serialization.encoding.utf8 import decode_utf8, encode_utf8


def _de(data: bytes) -> Deserializer:
    return Deserializer.build_bytes_deserializer(data)


def test_int_little_endian() -> None:
    se = Serializer.build_bytes_serializer()
    encode_int(se, 0x01020304, length=4, signed=False)
    assert bytes(se.finalize()) == b'\x04\x03\x02\x01'
    assert decode_int(_de(b'\x04\x03\x02\x01'), length=4, signed=False).unwrap() == 0x01020304


def test_int_too_big() -> None:
    se = Serializer.build_bytes_serializer()
    with pytest.raises(ValueError):
        encode_int(se, 256, length=1, signed=False)


@pytest.mark.parametrize('data, expected', [(b'\x00', False), (b'\x01', True)])
def test_bool_valid(data: bytes, expected: bool) -> None:
    assert decode_bool(_de(data)).unwrap() is expected


@pytest.mark.parametrize('byte', [2, 0x7f, 0xff])
def test_bool_invalid(byte: int) -> None:
    err = decode_bool(_de(bytes([byte]))).unwrap_err()
    assert isinstance(err, InvalidBoolError)


def test_bool_encode() -> None:
    se = Serializer.build_bytes_serializer()
    encode_bool(se, True)
    encode_bool(se, False)
    assert bytes(se.finalize()) == b'\x01\x00'


@pytest.mark.parametrize('code_point', [0, 0x41, 0xD7FF, 0xE000, 0xFFFF, 0x10000, 0x10FFFF])
def test_char_scalar_values(code_point: int) -> None:
    data = struct.pack('<I', code_point)
    assert decode_char(_de(data)).unwrap() == chr(code_point)
    se = Serializer.build_bytes_serializer()
    encode_char(se, chr(code_point))
    assert bytes(se.finalize()) == data


@pytest.mark.parametrize('code_point', [0xD800, 0xDBFF, 0xDC00, 0xDFFF, 0x110000, 0xFFFFFFFF])
def test_char_invalid_scalar(code_point: int) -> None:
    err = decode_char(_de(struct.pack('<I', code_point))).unwrap_err()
    assert isinstance(err, InvalidScalarError)


def test_char_encode_surrogate_is_rejected() -> None:
    se = Serializer.build_bytes_serializer()
    with pytest.raises(ValueError):
        encode_char(se, '\ud800')


def test_char_truncated() -> None:
    assert isinstance(decode_char(_de(b'a\x00\x00')).unwrap_err(), OutOfDataError)


def test_utf8_round_trip() -> None:
    for text in ['', 'ab', 'áéíóúçãõ', '\N{SMILING FACE WITH SUNGLASSES}']:
        se = Serializer.build_bytes_serializer()
        encode_utf8(se, text)
        data = bytes(se.finalize())
        assert decode_length(_de(data)).unwrap() == len(text.encode('utf-8'))
        assert decode_utf8(_de(data)).unwrap() == text


@pytest.mark.parametrize('payload', [b'\xff', b'\xc3', b'\xed\xa0\x80', b'a\x80b'])
def test_utf8_invalid(payload: bytes) -> None:
    data = struct.pack('<Q', len(payload)) + payload
    err = decode_utf8(_de(data)).unwrap_err()
    assert isinstance(err, InvalidUtf8Error)


def test_utf8_length_exceeds_input() -> None:
    data = struct.pack('<Q', 3) + b'ab'
    assert isinstance(decode_utf8(_de(data)).unwrap_err(), OutOfDataError)


def test_huge_length_does_not_allocate() -> None:
    data = struct.pack('<Q', 2**64 - 1) + b'ab'
    assert isinstance(decode_bytes(_de(data)).unwrap_err(), OutOfDataError)


def test_bytes_round_trip() -> None:
    se = Serializer.build_bytes_serializer()
    encode_bytes(se, bytearray(b'\x01\x02'))
    data = bytes(se.finalize())
    assert data == b'\x02' + b'\x00' * 7 + b'\x01\x02'
    assert decode_bytes(_de(data)).unwrap() == b'\x01\x02'


def test_length_is_u64() -> None:
    se = Serializer.build_bytes_serializer()
    encode_length(se, 2**64 - 1)
    assert bytes(se.finalize()) == b'\xff' * 8
    with pytest.raises(ValueError):
        encode_length(Serializer.build_bytes_serializer(), 2**64)


def test_f64_nan_payload_is_preserved() -> None:
    bits = 0x7FF8_0000_DEAD_BEEF
    data = struct.pack('<Q', bits)
    value = decode_float(_de(data), length=8).unwrap()
    assert math.isnan(value)
    se = Serializer.build_bytes_serializer()
    encode_float(se, value, length=8)
    assert bytes(se.finalize()) == data


def test_f32_round_trip() -> None:
    se = Serializer.build_bytes_serializer()
    encode_float(se, 1.5, length=4)
    encode_float(se, -math.inf, length=4)
    data = bytes(se.finalize())
    assert data == struct.pack('<ff', 1.5, -math.inf)
    de = _de(data)
    assert decode_float(de, length=4).unwrap() == 1.5
    assert decode_float(de, length=4).unwrap() == -math.inf


def test_f32_overflow() -> None:
    with pytest.raises(ValueError):
        encode_float(Serializer.build_bytes_serializer(), 1e300, length=4)
