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

"""
Type markers used in annotations to pick a binary layout that plain Python types can't express.

Integers and floats are `NewType`s so values are still plain `int`/`float` at runtime, the marker only tells the codec
derivation which width to use:

>>> from bincodec import to_bytes
>>> to_bytes(u16(1), u16).hex()
'0100'
>>> to_bytes(1).hex()  # a bare int is an i64
'0100000000000000'
"""

from __future__ import annotations

import heapq
from collections.abc import Iterable, Iterator
from types import GenericAlias
from typing import Any, Generic, NewType, TypeVar

T = TypeVar('T')

u8 = NewType('u8', int)
u16 = NewType('u16', int)
u32 = NewType('u32', int)
u64 = NewType('u64', int)
u128 = NewType('u128', int)
i8 = NewType('i8', int)
i16 = NewType('i16', int)
i32 = NewType('i32', int)
i64 = NewType('i64', int)
i128 = NewType('i128', int)

f32 = NewType('f32', float)
f64 = NewType('f64', float)

# a single Unicode scalar value, held in a str of length 1
char = NewType('char', str)


class Array(tuple):
    """ Fixed-size array marker, `Array[T, N]` is N values of type T with no length prefix.

    Values can be any sequence of the right length, decoded values are tuples.

    >>> Array[u8, 4]
    bincodec.types.Array[bincodec.types.u8, 4]
    >>> Array[u8, -1]
    Traceback (most recent call last):
        ...
    TypeError: Array length must be a non-negative int, got -1
    """

    __slots__ = ()

    def __class_getitem__(cls, params: Any) -> GenericAlias:
        if not isinstance(params, tuple) or len(params) != 2:
            raise TypeError('expected Array[<type>, <length>]')
        item_type, length = params
        if not isinstance(length, int) or isinstance(length, bool) or length < 0:
            raise TypeError(f'Array length must be a non-negative int, got {length!r}')
        return GenericAlias(cls, (item_type, length))


class Heap(Generic[T]):
    """ Priority collection backed by `heapq`, the smallest item is always at the front.

    Iteration follows the internal heap layout, which is what gets encoded. Two heaps are equal when they hold the
    same items, regardless of layout.

    >>> h = Heap([5, 1, 3])
    >>> h.peek()
    1
    >>> h.push(0)
    >>> h.pop()
    0
    >>> len(h)
    3
    >>> h == Heap([3, 5, 1])
    True
    """

    __slots__ = ('_items',)

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: list[T] = []
        for item in items:
            self.push(item)

    def push(self, item: T) -> None:
        heapq.heappush(self._items, item)  # type: ignore[misc]

    def pop(self) -> T:
        return heapq.heappop(self._items)  # type: ignore[misc]

    def peek(self) -> T:
        return self._items[0]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Heap):
            return NotImplemented
        return sorted(self._items) == sorted(other._items)  # type: ignore[type-var]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'Heap({self._items!r})'
