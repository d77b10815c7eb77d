from collections import OrderedDict, deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple

import pytest

from bincodec.codecs import make_codec
from bincodec.serialization import (
    InvalidTagError,
    InvalidUtf8Error,
    InvalidValueError,
    OutOfDataError,
    TrailingDataError,
)
from bincodec.types import Array, Heap, char, f32, f64, i8, i16, i32, i128, u8, u16, u32, u64, u128


class Point(NamedTuple):
    x: i32
    y: i32


@dataclass
class Item:
    name: str
    tags: list[str]
    point: Point | None


class Suit(Enum):
    CLUBS = 1
    DIAMONDS = 2
    HEARTS = 3
    SPADES = 4


@dataclass
class Empty:
    pass


SAMPLES: list[tuple[Any, Any]] = [
    (u8, 200),
    (u16, 0xBEEF),
    (u32, 0xDEADBEEF),
    (u64, 2**64 - 1),
    (u128, 2**100),
    (i8, -1),
    (i16, -300),
    (i32, -(2**31)),
    (int, 123456789),
    (i128, -(2**120)),
    (f32, 2.5),
    (f64, -1.75),
    (bool, True),
    (char, 'z'),
    (str, 'hello'),
    (bytes, b'\x00\xff'),
    (list[u16], [1, 2, 3]),
    (tuple[u8, str], (1, 'a')),
    (tuple[str, ...], ('a', 'b')),
    (Array[i16, 3], (1, -1, 2)),
    (deque[u8], deque([1, 2])),
    (set[u8], {4, 5}),
    (frozenset[str], frozenset({'a'})),
    (dict[str, u8], {'a': 1}),
    (OrderedDict[u8, str], OrderedDict([(1, 'a')])),
    (Heap[u32], Heap([3, 1, 2])),
    (str | None, 'x'),
    (Point, Point(1, -2)),
    (Item, Item('box', ['a', 'b'], Point(0, 0))),
    (Item, Item('box', [], None)),
    (Suit, Suit.HEARTS),
]


@pytest.mark.parametrize('type_, value', SAMPLES)
def test_dropping_last_byte_fails(type_: Any, value: Any) -> None:
    codec = make_codec(type_)
    data = codec.to_bytes(value)
    assert data
    result = codec.from_bytes(data[:-1])
    assert result.is_err()
    assert isinstance(codec.parse(data[:-1]).unwrap_err(), OutOfDataError)


@pytest.mark.parametrize('type_, value', SAMPLES)
def test_every_prefix_shorter_than_min_size_fails(type_: Any, value: Any) -> None:
    codec = make_codec(type_)
    data = codec.to_bytes(value)
    assert len(data) >= codec.min_size()
    for size in range(codec.min_size()):
        assert codec.parse(data[:size]).is_err()


@pytest.mark.parametrize('type_, value', SAMPLES)
def test_trailing_byte_is_rejected(type_: Any, value: Any) -> None:
    codec = make_codec(type_)
    data = codec.to_bytes(value)
    assert isinstance(codec.from_bytes(data + b'\x00').unwrap_err(), TrailingDataError)
    decoded, rest = codec.parse(data + b'\x00').unwrap()
    assert decoded == value
    assert bytes(rest) == b'\x00'


@pytest.mark.parametrize('type_, value', SAMPLES)
def test_unparse_appends(type_: Any, value: Any) -> None:
    codec = make_codec(type_)
    out = bytearray(b'\xaa')
    codec.unparse(value, out)
    assert out == b'\xaa' + codec.to_bytes(value)


def test_parse_returns_exact_remainder() -> None:
    codec = make_codec(u16)
    data = b'\x01\x00\x02\x00\x03'
    value, rest = codec.parse(data).unwrap()
    assert value == 1
    assert isinstance(rest, memoryview)
    value, rest = codec.parse(rest).unwrap()
    assert value == 2
    assert bytes(rest) == b'\x03'
    assert data == b'\x01\x00\x02\x00\x03'


def test_empty_product_takes_no_bytes() -> None:
    codec = make_codec(Empty)
    assert codec.to_bytes(Empty()) == b''
    assert codec.from_bytes(b'').unwrap() == Empty()
    assert codec.min_size() == 0
    assert isinstance(codec.from_bytes(b'\x00').unwrap_err(), TrailingDataError)


@pytest.mark.parametrize('tag', range(256))
def test_enum_tag_boundary(tag: int) -> None:
    codec = make_codec(Suit)
    result = codec.from_bytes(bytes([tag]))
    if tag < len(Suit):
        assert result.unwrap() is list(Suit)[tag]
    else:
        assert isinstance(result.unwrap_err(), InvalidTagError)


def test_optional_tag_boundary() -> None:
    codec = make_codec(u8 | None)
    assert codec.from_bytes(b'\x00').unwrap() is None
    assert codec.from_bytes(b'\x01\x05').unwrap() == 5
    for tag in range(2, 256):
        assert isinstance(codec.from_bytes(bytes([tag, 5])).unwrap_err(), InvalidTagError)


def test_invalid_utf8_inside_container() -> None:
    codec = make_codec(list[str])
    data = bytearray(codec.to_bytes(['ok', 'ab']))
    data[-1] = 0xff
    assert isinstance(codec.from_bytes(bytes(data)).unwrap_err(), InvalidUtf8Error)


def test_count_guard_fails_before_decoding() -> None:
    codec = make_codec(list[u64])
    data = (10**12).to_bytes(8, 'little') + b'\x00' * 16
    err = codec.from_bytes(data).unwrap_err()
    assert isinstance(err, OutOfDataError)
    assert '1000000000000 items' in str(err)


def test_count_of_zero_sized_items() -> None:
    codec = make_codec(list[tuple[()]])
    assert codec.min_size() == 8
    data = codec.to_bytes([(), (), ()])
    assert data == b'\x03' + b'\x00' * 7
    assert codec.from_bytes(data).unwrap() == [(), (), ()]


def test_array_fails_without_partial_value() -> None:
    codec = make_codec(Array[u8, 4])
    assert isinstance(codec.from_bytes(b'\x01\x02\x03').unwrap_err(), OutOfDataError)
    assert codec.from_bytes(b'\x01\x02\x03\x04').unwrap() == (1, 2, 3, 4)


@dataclass
class Unordered:
    x: u8


def test_heap_of_unorderable_items_is_a_failure_value() -> None:
    codec = make_codec(Heap[u8 | None])
    data = (2).to_bytes(8, 'little') + b'\x01\x05\x00'
    result = codec.from_bytes(data)
    err = result.unwrap_err()
    assert isinstance(err, InvalidValueError)
    assert isinstance(err.__cause__, TypeError)

    codec = make_codec(Heap[Unordered])
    assert isinstance(codec.from_bytes(b'\x02' + b'\x00' * 7 + b'\x01\x02').unwrap_err(), InvalidValueError)
    # a single item needs no comparison
    assert codec.from_bytes(b'\x01' + b'\x00' * 7 + b'\x01').unwrap() == Heap([Unordered(1)])
