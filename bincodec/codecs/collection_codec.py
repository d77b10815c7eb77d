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
from collections import deque
from collections.abc import Collection, Hashable, Iterable, Set
from typing import ClassVar, TypeVar

from typing_extensions import Self, override

from bincodec.codecs.codec import Codec
from bincodec.codecs.utils import is_origin_hashable, pretty_type
from bincodec.serialization import Deserializer, InvalidValueError, SerializationError, Serializer
from bincodec.serialization.compound_encoding.collection import decode_collection, encode_collection
from bincodec.serialization.consts import LENGTH_PREFIX_SIZE
from bincodec.types import Heap
from bincodec.utils.result import Err, Result
from bincodec.utils.typing import get_args, get_origin

T = TypeVar('T')
H = TypeVar('H', bound=Hashable)


class _CollectionCodec(Codec[Collection[T]], ABC):
    """ Used as base for Codec classes that represent collections.

    Layout: a `u64` item count followed by each item in iteration order.
    """
    __slots__ = ('_item',)

    _is_hashable = False
    _item: Codec[T]
    # XXX: subclasses must set the class that `_from_type` accepts as origin
    _origin: ClassVar[type]

    def __init__(self, item_codec: Codec[T], /) -> None:
        self._item = item_codec

    @abstractmethod
    def _build(self, items: Iterable[T]) -> Collection[T]:
        """ How to build the concrete collection from an iterable of items.
        """
        raise NotImplementedError

    @override
    @classmethod
    def _from_type(cls, type_: type[Collection[T]], /, *, type_map: Codec.TypeMap) -> Self:
        member_type = cls._get_member_type(type_)
        member_codec = Codec.from_type(member_type, type_map=type_map)
        return cls(member_codec)

    @classmethod
    def _get_member_type(cls, type_: type[Collection[T]]) -> type[T]:
        origin_type: type = get_origin(type_) or type_
        if origin_type is not cls._origin:
            raise TypeError(f'expected {cls._origin.__name__} type')
        args = get_args(type_)
        if not args or len(args) != 1:
            raise TypeError(f'expected {cls._origin.__name__}[<type>]')
        return args[0]

    def _check_item(self, item: T) -> None:
        self._item._check_value(item, deep=True)

    @override
    def _check_value(self, value: Collection[T], /, *, deep: bool) -> None:
        if not isinstance(value, Collection) or isinstance(value, (str, bytes, bytearray)):
            raise TypeError('expected Collection type')
        if deep:
            for i in value:
                self._check_item(i)

    @override
    def _serialize(self, serializer: Serializer, value: Collection[T], /) -> None:
        encode_collection(serializer, value, self._item.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Result[Collection[T], SerializationError]:
        return decode_collection(
            deserializer,
            self._item.deserialize,
            self._build,
            min_item_size=self._item.min_size(),
        )

    @override
    def _min_size(self) -> int:
        return LENGTH_PREFIX_SIZE


class ListCodec(_CollectionCodec[T]):
    """ Represents builtin `list` values.
    """
    _origin = list

    @override
    def _build(self, items: Iterable[T]) -> list[T]:
        return list(items)


class DequeCodec(_CollectionCodec[T]):
    """ Represents builtin `collections.deque` values.
    """
    _origin = deque

    @override
    def _build(self, items: Iterable[T]) -> deque[T]:
        return deque(items)


class HeapCodec(_CollectionCodec[T]):
    """ Represents `bincodec.types.Heap` values, items are encoded in the heap's internal order.

    Items must be ordered among themselves, decoded items that can't be compared are an `InvalidValueError`.
    """
    _origin = Heap

    @override
    def _check_value(self, value: Collection[T], /, *, deep: bool) -> None:
        if not isinstance(value, Heap):
            raise TypeError('expected Heap')
        super()._check_value(value, deep=deep)

    @override
    def _build(self, items: Iterable[T]) -> Heap[T]:
        return Heap(items)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Result[Collection[T], SerializationError]:
        try:
            return super()._deserialize(deserializer)
        except TypeError as e:
            return Err(InvalidValueError(f'Heap items can\'t be ordered: {e}'), cause=e)


class SetCodec(_CollectionCodec[H]):
    """ Represents builtin `set` values.

    Items are encoded in iteration order, so only equality (not order) survives a round-trip.
    """
    _origin = set

    @override
    def _build(self, items: Iterable[H]) -> Set[H]:
        return set(items)

    @override
    @classmethod
    def _from_type(cls, type_: type[Collection[H]], /, *, type_map: Codec.TypeMap) -> Self:
        member_type = cls._get_member_type(type_)
        if not is_origin_hashable(member_type):
            raise TypeError(f'{pretty_type(member_type)} is not hashable')
        member_codec = Codec.from_type(member_type, type_map=type_map)
        if not member_codec.is_hashable():
            raise TypeError(f'{pretty_type(member_type)} is not hashable')
        return cls(member_codec)

    @override
    def _check_item(self, item: H) -> None:
        if not isinstance(item, Hashable):
            raise TypeError('expected Hashable type')
        super()._check_item(item)


class FrozenSetCodec(SetCodec[H]):
    """ Represents builtin `frozenset` values.
    """

    # XXX: SetCodec already enforces H to be hashable, but is not itself hashable, a frozenset, however, is hashable
    _is_hashable = True
    _origin = frozenset

    @override
    def _build(self, items: Iterable[H]) -> frozenset[H]:
        return frozenset(items)
