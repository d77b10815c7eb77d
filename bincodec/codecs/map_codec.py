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

from abc import ABC, abstractmethod
from collections import OrderedDict
from collections.abc import Hashable, Mapping
from typing import ClassVar, Iterable, TypeVar

from typing_extensions import Self, override

from bincodec.codecs.codec import Codec
from bincodec.codecs.utils import is_origin_hashable, pretty_type
from bincodec.serialization import Deserializer, SerializationError, Serializer
from bincodec.serialization.compound_encoding.mapping import decode_mapping, encode_mapping
from bincodec.serialization.consts import LENGTH_PREFIX_SIZE
from bincodec.utils.result import Result
from bincodec.utils.typing import get_args, get_origin

T = TypeVar('T')
H = TypeVar('H', bound=Hashable)


class _MapCodec(Codec[Mapping[H, T]], ABC):
    """ Base class to help implement Codec for mappings.

    Layout: a `u64` entry count followed by each key and then its value, in iteration order.
    """

    __slots__ = ('_key', '_value')

    _key: Codec[H]
    _value: Codec[T]
    _is_hashable = False
    # XXX: subclasses must set the class that `_from_type` accepts as origin
    _origin: ClassVar[type]

    def __init__(self, key: Codec[H], value: Codec[T]) -> None:
        self._key = key
        self._value = value

    @abstractmethod
    def _build(self, items: Iterable[tuple[H, T]]) -> Mapping[H, T]:
        """ How to build the concrete map from an iterable of (key, value).
        """
        raise NotImplementedError

    @override
    @classmethod
    def _from_type(cls, type_: type[Mapping[H, T]], /, *, type_map: Codec.TypeMap) -> Self:
        origin_type: type = get_origin(type_) or type_
        if origin_type is not cls._origin:
            raise TypeError(f'expected {cls._origin.__name__} type')
        args = get_args(type_)
        if not args or len(args) != 2:
            raise TypeError(f'expected {cls._origin.__name__}[<key type>, <value type>]')
        key_type, value_type = args
        if not is_origin_hashable(key_type):
            raise TypeError(f'{pretty_type(key_type)} is not hashable')
        key_codec = Codec.from_type(key_type, type_map=type_map)
        if not key_codec.is_hashable():
            raise TypeError(f'{pretty_type(key_type)} is not hashable')
        return cls(key_codec, Codec.from_type(value_type, type_map=type_map))

    @override
    def _check_value(self, value: Mapping[H, T], /, *, deep: bool) -> None:
        if not isinstance(value, Mapping):
            raise TypeError('expected Mapping type')
        if deep:
            for k, v in value.items():
                self._key._check_value(k, deep=True)
                self._value._check_value(v, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: Mapping[H, T], /) -> None:
        encode_mapping(serializer, value, self._key.serialize, self._value.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Result[Mapping[H, T], SerializationError]:
        return decode_mapping(
            deserializer,
            self._key.deserialize,
            self._value.deserialize,
            self._build,
            min_item_size=self._key.min_size() + self._value.min_size(),
        )

    @override
    def _min_size(self) -> int:
        return LENGTH_PREFIX_SIZE


class DictCodec(_MapCodec):
    """ Represents builtin `dict` values.
    """
    _origin = dict

    @override
    def _build(self, items: Iterable[tuple[H, T]]) -> dict[H, T]:
        return dict(items)


class OrderedDictCodec(_MapCodec):
    """ Represents `collections.OrderedDict` values.
    """
    _origin = OrderedDict

    @override
    def _build(self, items: Iterable[tuple[H, T]]) -> OrderedDict[H, T]:
        return OrderedDict(items)
