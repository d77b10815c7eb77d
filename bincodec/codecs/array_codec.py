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

from collections.abc import Sequence
from typing import TypeVar

from typing_extensions import Self, override

from bincodec.codecs.codec import Codec
from bincodec.serialization import Deserializer, SerializationError, Serializer
from bincodec.serialization.compound_encoding.array import decode_array, encode_array
from bincodec.types import Array
from bincodec.utils.result import Result
from bincodec.utils.typing import get_args, get_origin

T = TypeVar('T')


class ArrayCodec(Codec[tuple[T, ...]]):
    """ Represents `Array[T, N]`: exactly N items and no length prefix, the length is part of the type.
    """

    __slots__ = ('_is_hashable', '_item', '_length')

    _item: Codec[T]
    _length: int

    def __init__(self, item: Codec[T], length: int) -> None:
        self._item = item
        self._length = length
        self._is_hashable = item.is_hashable()

    @override
    @classmethod
    def _from_type(cls, type_: type[tuple[T, ...]], /, *, type_map: Codec.TypeMap) -> Self:
        if get_origin(type_) is not Array:
            raise TypeError('expected Array[<type>, <length>]')
        item_type, length = get_args(type_)
        return cls(Codec.from_type(item_type, type_map=type_map), length)

    @override
    def _check_value(self, value: tuple[T, ...], /, *, deep: bool) -> None:
        if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
            raise TypeError('expected a sequence')
        if len(value) != self._length:
            raise ValueError(f'expected exactly {self._length} items, got {len(value)}')
        if deep:
            for i in value:
                self._item._check_value(i, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: tuple[T, ...], /) -> None:
        encode_array(serializer, value, self._item.serialize, length=self._length)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Result[tuple[T, ...], SerializationError]:
        return decode_array(
            deserializer,
            self._item.deserialize,
            length=self._length,
            min_item_size=self._item.min_size(),
        )

    @override
    def _min_size(self) -> int:
        return self._length * self._item.min_size()
