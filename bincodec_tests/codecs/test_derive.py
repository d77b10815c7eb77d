from dataclasses import dataclass, field
from enum import Enum, Flag, IntEnum, auto
from functools import reduce
from operator import or_
from typing import NamedTuple, Optional, Union

import pytest
from structlog.testing import capture_logs

from bincodec import binary, from_bytes, make_codec, to_bytes
from bincodec.codecs import DataclassCodec, EnumCodec, NamedTupleCodec, OptionalCodec, UnionCodec
from bincodec.serialization import InvalidTagError, InvalidValueError, TooManyVariantsError, UnsupportedTypeError
from bincodec.types import i32, u8, u16


@dataclass
class Point:
    x: i32
    y: i32


class Pair(NamedTuple):
    left: str
    right: u8


@dataclass(frozen=True)
class Frozen:
    name: str
    size: u16


@dataclass
class Positive:
    value: i32

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise ValueError('value must be positive')


@dataclass
class Node:
    label: str
    children: list['Leaf']
    parent: Optional['Leaf'] = None


@dataclass
class Leaf:
    weight: u8


class Color(Enum):
    RED = 'red'
    GREEN = 'green'
    BLUE = 'blue'
    CRIMSON = 'red'  # alias of RED


class Level(IntEnum):
    HIGH = 10
    LOW = 1


@binary
@dataclass
class Header:
    version: u8
    flags: u16


@binary
class Kind(Enum):
    A = 1
    B = 2


@binary
class Span(NamedTuple):
    start: u16
    end: u16


def test_dataclass_fields_in_declaration_order() -> None:
    codec = make_codec(Point)
    assert isinstance(codec, DataclassCodec)
    assert codec.to_bytes(Point(1, -1)) == b'\x01\x00\x00\x00\xff\xff\xff\xff'
    assert codec.from_bytes(b'\x02\x00\x00\x00\x03\x00\x00\x00').unwrap() == Point(2, 3)
    assert codec.min_size() == 8
    assert not codec.is_hashable()


def test_frozen_dataclass_is_hashable() -> None:
    codec = make_codec(Frozen)
    assert codec.is_hashable()
    value = Frozen('a', 2)
    assert make_codec(set[Frozen]).from_bytes(make_codec(set[Frozen]).to_bytes({value})).unwrap() == {value}


def test_namedtuple_is_positional() -> None:
    codec = make_codec(Pair)
    assert isinstance(codec, NamedTupleCodec)
    data = codec.to_bytes(Pair('a', 7))
    assert data == b'\x01' + b'\x00' * 7 + b'a\x07'
    value = codec.from_bytes(data).unwrap()
    assert isinstance(value, Pair)
    assert value == Pair('a', 7)
    # same layout as the equivalent plain tuple
    assert make_codec(tuple[str, u8]).to_bytes(('a', 7)) == data
    assert codec.is_hashable()


def test_namedtuple_rejects_plain_tuple() -> None:
    with pytest.raises(TypeError):
        make_codec(Pair).to_bytes(('a', 7))


def test_constructor_rejection_is_a_failure_value() -> None:
    codec = make_codec(Positive)
    assert codec.from_bytes(codec.to_bytes(Positive(5))).unwrap() == Positive(5)
    result = codec.from_bytes(b'\x00\x00\x00\x00')
    err = result.unwrap_err()
    assert isinstance(err, InvalidValueError)
    assert 'value must be positive' in str(err)
    assert isinstance(err.__cause__, ValueError)
    assert result.traceback is not None


def test_init_false_field_is_rejected() -> None:
    @dataclass
    class WithCache:
        x: int
        cache: int = field(init=False, default=0)

    with pytest.raises(UnsupportedTypeError):
        make_codec(WithCache)


def test_string_annotations_are_resolved() -> None:
    value = Node('root', [Leaf(1), Leaf(2)], Leaf(3))
    codec = make_codec(Node)
    assert codec.from_bytes(codec.to_bytes(value)).unwrap() == value


def test_unresolvable_annotation() -> None:
    @dataclass
    class Broken:
        x: 'DoesNotExist'  # type: ignore[name-defined]  # noqa: F821

    with pytest.raises(UnsupportedTypeError):
        make_codec(Broken)


def test_unsupported_field_type() -> None:
    @dataclass
    class HasComplex:
        x: complex

    with pytest.raises(UnsupportedTypeError):
        make_codec(HasComplex)


def test_enum_tags_follow_declaration_order() -> None:
    codec = make_codec(Color)
    assert isinstance(codec, EnumCodec)
    assert [codec.to_bytes(c) for c in Color] == [b'\x00', b'\x01', b'\x02']
    # an alias is the same member
    assert codec.to_bytes(Color.CRIMSON) == b'\x00'
    assert codec.from_bytes(b'\x02').unwrap() is Color.BLUE
    assert isinstance(codec.from_bytes(b'\x03').unwrap_err(), InvalidTagError)


def test_int_enum_tag_is_not_the_value() -> None:
    codec = make_codec(Level)
    assert codec.to_bytes(Level.HIGH) == b'\x00'
    assert codec.to_bytes(Level.LOW) == b'\x01'
    with pytest.raises(TypeError):
        codec.to_bytes(10)


def test_too_many_enum_members() -> None:
    Big = Enum('Big', [f'M{i}' for i in range(257)])  # type: ignore[misc]
    with pytest.raises(TooManyVariantsError):
        make_codec(Big)
    Max = Enum('Max', [f'M{i}' for i in range(256)])  # type: ignore[misc]
    codec = make_codec(Max)
    assert codec.to_bytes(Max.M255) == b'\xff'  # type: ignore[attr-defined]


def test_union_of_classes() -> None:
    codec = make_codec(Point | Pair | None)
    assert isinstance(codec, UnionCodec)
    assert codec.to_bytes(Point(0, 0)) == b'\x00' + b'\x00' * 8
    assert codec.to_bytes(None) == b'\x02'
    assert codec.from_bytes(b'\x02').unwrap() is None
    assert codec.from_bytes(codec.to_bytes(Pair('x', 1))).unwrap() == Pair('x', 1)
    assert codec.min_size() == 1
    with pytest.raises(TypeError):
        codec.to_bytes('not a variant')


def test_typing_union_matches_operator_union() -> None:
    assert make_codec(Union[Point, Pair]).to_bytes(Pair('', 0)) == make_codec(Point | Pair).to_bytes(Pair('', 0))


def test_union_of_builtins() -> None:
    codec = make_codec(int | str | bool)
    assert codec.to_bytes(True) == b'\x02\x01'
    assert codec.to_bytes(1) == b'\x00' + b'\x01' + b'\x00' * 7
    assert codec.from_bytes(b'\x01' + b'\x00' * 8).unwrap() == ''


def test_optional_of_one_class_is_optional_codec() -> None:
    assert isinstance(make_codec(Point | None), OptionalCodec)
    assert isinstance(make_codec(Optional[Point]), OptionalCodec)


def test_indistinguishable_variants_are_rejected() -> None:
    with pytest.raises(UnsupportedTypeError):
        make_codec(u8 | u16)
    with pytest.raises(UnsupportedTypeError):
        make_codec(list[int] | list[str])


def test_too_many_variants() -> None:
    classes = [type(f'V{i}', (), {}) for i in range(257)]
    with pytest.raises(TooManyVariantsError):
        make_codec(reduce(or_, classes))


def test_binary_decorator_dataclass() -> None:
    header = Header(1, 0x0203)
    assert header.to_bytes() == b'\x01\x03\x02'
    assert Header.from_bytes(b'\x01\x03\x02').unwrap() == header
    assert Header.codec() is make_codec(Header)
    out = bytearray()
    header.unparse(out)
    header.unparse(out)
    value, rest = Header.parse(out).unwrap()
    assert value == header
    assert bytes(rest) == b'\x01\x03\x02'
    assert isinstance(Header.from_bytes(b'\x01\x03').unwrap_err(), ValueError)


def test_binary_decorator_enum_and_namedtuple() -> None:
    assert Kind.B.to_bytes() == b'\x01'
    assert Kind.from_bytes(b'\x00').unwrap() is Kind.A
    assert Span(1, 2).to_bytes() == b'\x01\x00\x02\x00'
    assert Span.from_bytes(b'\x01\x00\x02\x00').unwrap() == Span(1, 2)


def test_binary_rejects_non_classes() -> None:
    with pytest.raises(TypeError):
        binary(lambda: None)  # type: ignore[type-var]


def test_api_uses_value_class() -> None:
    assert to_bytes(Header(1, 2)) == Header(1, 2).to_bytes()
    assert from_bytes(Header, Header(1, 2).to_bytes()).unwrap() == Header(1, 2)


def test_derivation_is_logged() -> None:
    @dataclass
    class Logged:
        count: int

    with capture_logs() as logs:
        make_codec(Logged)
    events = [log['event'] for log in logs]
    assert 'dataclass codec' in events
    assert 'type replaced' in events
    log = next(log for log in logs if log['event'] == 'dataclass codec')
    assert log['log_level'] == 'debug'
    assert log['fields'] == {'count': 'int'}


def test_decoding_does_not_log() -> None:
    codec = make_codec(list[Point])
    data = codec.to_bytes([Point(1, 2)])
    with capture_logs() as logs:
        codec.from_bytes(data).unwrap()
        codec.from_bytes(data[:-1]).unwrap_err()
    assert logs == []


class Perm(Flag):
    R = auto()
    W = auto()
    X = auto()


def test_flag_members_only() -> None:
    codec = make_codec(Perm)
    assert codec.to_bytes(Perm.W) == b'\x01'
    assert codec.from_bytes(b'\x02').unwrap() is Perm.X
    out = bytearray()
    with pytest.raises(ValueError):
        codec.unparse(Perm.R | Perm.W, out)
    assert out == bytearray()


def test_none_tag_follows_its_position() -> None:
    assert make_codec(Point | None).to_bytes(None) == b'\x00'
    assert make_codec(Point | Pair | None).to_bytes(None) == b'\x02'
    assert make_codec(None | Point | Pair).to_bytes(None) == b'\x00'
