# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from collections import OrderedDict, deque
from dataclasses import dataclass
from enum import Enum
from functools import cache
from types import NoneType, UnionType
from typing import NamedTuple, Optional, TypeVar

from bincodec.codecs.array_codec import ArrayCodec
from bincodec.codecs.bool_codec import BoolCodec
from bincodec.codecs.bytes_codec import BytearrayCodec, BytesCodec, BytesLikeCodec
from bincodec.codecs.char_codec import CharCodec
from bincodec.codecs.codec import Codec
from bincodec.codecs.collection_codec import (
    DequeCodec,
    FrozenSetCodec,
    HeapCodec,
    ListCodec,
    SetCodec,
)
from bincodec.codecs.dataclass_codec import DataclassCodec
from bincodec.codecs.enum_codec import EnumCodec
from bincodec.codecs.fixed_size_bytes_codec import Bytes32Codec, FixedSizeBytesCodec
from bincodec.codecs.float_codec import F32Codec, F64Codec
from bincodec.codecs.map_codec import DictCodec, OrderedDictCodec
from bincodec.codecs.namedtuple_codec import NamedTupleCodec
from bincodec.codecs.null_codec import NullCodec
from bincodec.codecs.optional_codec import OptionalCodec
from bincodec.codecs.sized_int_codec import (
    I8Codec,
    I16Codec,
    I32Codec,
    I64Codec,
    I128Codec,
    U8Codec,
    U16Codec,
    U32Codec,
    U64Codec,
    U128Codec,
)
from bincodec.codecs.str_codec import StrCodec
from bincodec.codecs.tuple_codec import TupleCodec
from bincodec.codecs.union_codec import UnionCodec
from bincodec.codecs.utils import TypeAliasMap, TypeToCodecMap
from bincodec.types import Array, Heap, char, f32, f64, i8, i16, i32, i64, i128, u8, u16, u32, u64, u128

__all__ = [
    'DEFAULT_TYPE_ALIAS_MAP',
    'DEFAULT_TYPE_MAP',
    'DEFAULT_TYPE_TO_CODEC_MAP',
    'ArrayCodec',
    'BoolCodec',
    'Bytes32Codec',
    'BytearrayCodec',
    'BytesCodec',
    'BytesLikeCodec',
    'CharCodec',
    'Codec',
    'DataclassCodec',
    'DequeCodec',
    'DictCodec',
    'EnumCodec',
    'F32Codec',
    'F64Codec',
    'FixedSizeBytesCodec',
    'FrozenSetCodec',
    'HeapCodec',
    'I8Codec',
    'I16Codec',
    'I32Codec',
    'I64Codec',
    'I128Codec',
    'ListCodec',
    'NamedTupleCodec',
    'NullCodec',
    'OptionalCodec',
    'OrderedDictCodec',
    'SetCodec',
    'StrCodec',
    'TupleCodec',
    'TypeAliasMap',
    'TypeToCodecMap',
    'U8Codec',
    'U16Codec',
    'U32Codec',
    'U64Codec',
    'U128Codec',
    'UnionCodec',
    'make_codec',
]

T = TypeVar('T')

# builtin numbers have no width of their own, these are the widths they get
DEFAULT_TYPE_ALIAS_MAP: TypeAliasMap = {
    int: i64,
    float: f64,
}

# Mapping between types and Codec classes.
DEFAULT_TYPE_TO_CODEC_MAP: TypeToCodecMap = {
    # sized types:
    u8: U8Codec,
    u16: U16Codec,
    u32: U32Codec,
    u64: U64Codec,
    u128: U128Codec,
    i8: I8Codec,
    i16: I16Codec,
    i32: I32Codec,
    i64: I64Codec,
    i128: I128Codec,
    f32: F32Codec,
    f64: F64Codec,
    char: CharCodec,
    Array: ArrayCodec,
    Heap: HeapCodec,
    # builtin types:
    bool: BoolCodec,
    bytes: BytesCodec,
    bytearray: BytearrayCodec,
    str: StrCodec,
    tuple: TupleCodec,
    list: ListCodec,
    set: SetCodec,
    frozenset: FrozenSetCodec,
    dict: DictCodec,
    NoneType: NullCodec,
    # other Python types:
    deque: DequeCodec,
    OrderedDict: OrderedDictCodec,
    # derived types, these keys stand for every type of their kind:
    Optional: OptionalCodec,
    UnionType: UnionCodec,
    NamedTuple: NamedTupleCodec,
    dataclass: DataclassCodec,
    Enum: EnumCodec,
}

DEFAULT_TYPE_MAP = Codec.TypeMap(DEFAULT_TYPE_ALIAS_MAP, DEFAULT_TYPE_TO_CODEC_MAP)


def make_codec(type_: type[T], /, *, extra_codecs_map: TypeToCodecMap | None = None) -> Codec[T]:
    """ Like Codec.from_type, but with the default maps.

    Extra entries take precedence over the defaults, that's how leaf codecs for other types are plugged in. If you need
    to customize the aliases too use `Codec.from_type` instead.

    Codecs made with the default maps only are cached, since they are immutable it's safe to share them.
    """
    if extra_codecs_map:
        type_map = Codec.TypeMap(DEFAULT_TYPE_ALIAS_MAP, {**DEFAULT_TYPE_TO_CODEC_MAP, **extra_codecs_map})
        return Codec.from_type(type_, type_map=type_map)
    return _make_default_codec(type_)


@cache
def _make_default_codec(type_: type[T], /) -> Codec[T]:
    return Codec.from_type(type_, type_map=DEFAULT_TYPE_MAP)
