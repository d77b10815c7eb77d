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

from collections.abc import Iterable

from typing_extensions import Self, override

from bincodec.codecs.codec import Codec
from bincodec.serialization import Deserializer, SerializationError, Serializer
from bincodec.serialization.compound_encoding.collection import decode_collection, encode_collection
from bincodec.serialization.compound_encoding.tuple import decode_tuple, encode_tuple
from bincodec.serialization.consts import LENGTH_PREFIX_SIZE
from bincodec.utils.result import Result
from bincodec.utils.typing import get_args, get_origin


# XXX: we can't usefully describe the tuple type
class TupleCodec(Codec[tuple]):
    """ Represents tuple values, which can either be homogeneous-type variable size or heterogeneous-type fixed size.

    `tuple[A, B, C]` is the concatenation of each component with no prefix, `tuple[()]` takes no bytes, while
    `tuple[T, ...]` is encoded like a `list[T]`.
    """

    __slots__ = ('_is_hashable', '_varsize', '_args')

    _varsize: bool
    # lists are allowed in tuples and it's still hashable it just fails in runtime
    _args: tuple[Codec, ...]

    def __init__(self, args: Codec | Iterable[Codec]) -> None:
        if isinstance(args, Codec):
            self._varsize = True
            self._args = (args,)
            self._is_hashable = args.is_hashable()
        else:
            self._varsize = False
            self._args = tuple(args)
            for arg in self._args:
                assert isinstance(arg, Codec)
            self._is_hashable = all(arg_codec.is_hashable() for arg_codec in self._args)

    @override
    @classmethod
    def _from_type(cls, type_: type[tuple], /, *, type_map: Codec.TypeMap) -> Self:
        origin_type: type = get_origin(type_) or type_
        if origin_type is not tuple:
            raise TypeError('expected tuple type')
        if type_ is tuple:
            raise TypeError('expected tuple[<args...>]')
        args = list(get_args(type_))
        if args and args[-1] == Ellipsis:
            if len(args) != 2:
                raise TypeError('ellipsis only allowed with one type: tuple[T, ...]')
            arg, _ellipsis = args
            return cls(Codec.from_type(arg, type_map=type_map))
        else:
            return cls([Codec.from_type(arg, type_map=type_map) for arg in args])

    @override
    def _check_value(self, value: tuple, /, *, deep: bool) -> None:
        if not isinstance(value, (tuple, list)):
            raise TypeError('expected tuple-like')
        if not self._varsize and len(value) != len(self._args):
            raise TypeError(f'wrong tuple size, expected {len(self._args)} got {len(value)}')
        if deep:
            if self._varsize:
                arg_codec, = self._args
                for i in value:
                    arg_codec._check_value(i, deep=True)
            else:
                for i, arg_codec in zip(value, self._args):
                    arg_codec._check_value(i, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: tuple, /) -> None:
        if self._varsize:
            assert len(self._args) == 1
            encode_collection(serializer, value, self._args[0].serialize)
        else:
            encode_tuple(serializer, tuple(value), tuple(i.serialize for i in self._args))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Result[tuple, SerializationError]:
        if self._varsize:
            assert len(self._args) == 1
            item, = self._args
            return decode_collection(deserializer, item.deserialize, tuple, min_item_size=item.min_size())
        else:
            return decode_tuple(deserializer, tuple(i.deserialize for i in self._args))

    @override
    def _min_size(self) -> int:
        if self._varsize:
            return LENGTH_PREFIX_SIZE
        return sum(arg.min_size() for arg in self._args)
