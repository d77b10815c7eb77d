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

from __future__ import annotations

from types import NoneType, UnionType
from typing import TypeVar, Union

from typing_extensions import Self, override

from bincodec.codecs.codec import Codec
from bincodec.serialization import Deserializer, SerializationError, Serializer
from bincodec.serialization.compound_encoding.optional import decode_optional, encode_optional
from bincodec.serialization.consts import TAG_SIZE
from bincodec.utils.result import Result
from bincodec.utils.typing import get_args, get_origin

V = TypeVar('V')


class OptionalCodec(Codec[V | None]):
    """ Represents a codec that is either `V` or `None`.

    It is a sum with two variants, `None` is tag 0 and a value is tag 1 followed by the value.
    """

    __slots__ = ('_is_hashable', '_value')

    _value: Codec[V]

    def __init__(self, codec: Codec[V]) -> None:
        self._value = codec
        self._is_hashable = codec.is_hashable()

    @override
    @classmethod
    def _from_type(cls, type_: type[V | None], /, *, type_map: Codec.TypeMap) -> Self:
        if not isinstance(type_, UnionType) and get_origin(type_) is not Union:
            raise TypeError('expected type union')
        args = get_args(type_)
        assert args, 'union always has args'
        if len(args) != 2 or NoneType not in args:
            raise TypeError('type must be either `None | T` or `T | None`')
        not_none_type, = tuple(arg for arg in args if arg is not NoneType)  # get the type that is not None
        return cls(Codec.from_type(not_none_type, type_map=type_map))

    @override
    def _check_value(self, value: V | None, /, *, deep: bool) -> None:
        if value is None:
            return
        self._value._check_value(value, deep=deep)

    @override
    def _serialize(self, serializer: Serializer, value: V | None, /) -> None:
        encode_optional(serializer, value, self._value.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Result[V | None, SerializationError]:
        return decode_optional(deserializer, self._value.deserialize)

    @override
    def _min_size(self) -> int:
        return TAG_SIZE
