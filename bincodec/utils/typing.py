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

from types import GenericAlias, UnionType
from typing import get_args as _typing_get_args, get_origin as _typing_get_origin


def get_origin(t: type | UnionType, /) -> type | None:
    """Extension of typing.get_origin that also unwraps `types.GenericAlias` built around non-type arguments.

    >>> get_origin(list[int])
    <class 'list'>
    >>> get_origin(int) is None
    True
    """
    if isinstance(t, GenericAlias):
        return t.__origin__
    return _typing_get_origin(t)


def get_args(t: type | UnionType, /) -> tuple[type, ...]:
    """Like typing.get_args, kept next to get_origin so both are always imported from the same place.

    >>> get_args(dict[str, int])
    (<class 'str'>, <class 'int'>)
    >>> get_args(int)
    ()
    """
    if isinstance(t, GenericAlias):
        return t.__args__
    return _typing_get_args(t)


def resolve_newtype(cls: type, /) -> type:
    """ Follow a (possibly nested) NewType until a concrete class is reached.

    >>> from typing import NewType
    >>> N = NewType('N', int)
    >>> M = NewType('M', N)
    >>> resolve_newtype(M)
    <class 'int'>
    >>> resolve_newtype(str)
    <class 'str'>
    """
    while (super_type := getattr(cls, '__supertype__', None)) is not None:
        cls = super_type
    return cls


def is_subclass(cls: type, class_or_tuple: type | tuple[type, ...] | UnionType, /) -> bool:
    """ Reimplements issubclass() with support for recursive NewType classes.

    Normal behavior from `issubclass`:

    >>> is_subclass(int, int)
    True
    >>> is_subclass(bool, int)
    True
    >>> is_subclass(bool, (int, str))
    True
    >>> is_subclass(str, int)
    False

    But `is_subclass` also works when a NewType is given as arg 1:

    >>> from typing import NewType
    >>> N = NewType('N', int)
    >>> is_subclass(N, int)
    True
    >>> is_subclass(N, str)
    False

    Anything that doesn't resolve to a class is simply not a subclass:

    >>> is_subclass(list[int], list)
    False
    """
    resolved = resolve_newtype(cls)
    if not isinstance(resolved, type) or isinstance(resolved, GenericAlias):
        return False
    return issubclass(resolved, class_or_tuple)
