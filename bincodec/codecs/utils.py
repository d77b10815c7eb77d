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

from collections.abc import Hashable, Mapping
from dataclasses import dataclass, is_dataclass
from enum import Enum
from functools import reduce
from operator import or_
from types import GenericAlias, NoneType, UnionType
from typing import TYPE_CHECKING, Any, Iterator, NamedTuple, Optional, TypeAlias, TypeVar, Union, cast

from structlog import get_logger

from bincodec.serialization import UnsupportedTypeError
from bincodec.utils.typing import get_args, get_origin, is_subclass

if TYPE_CHECKING:
    from bincodec.codecs.codec import Codec


logger = get_logger()

T = TypeVar('T')
TypeAliasMap: TypeAlias = Mapping[type | UnionType, type]
# besides plain types, the keys `NamedTuple`, `dataclass`, `Enum` and `Optional` stand for whole families of types
TypeToCodecMap: TypeAlias = Mapping[Any, type['Codec']]


def get_origin_classes(type_: type) -> Iterator[type]:
    """ This util function is useful to generalize over a type T and unions A | B.

    A simple type T would be yielded directly, and an union will yield each type in it. Only origin types are yielded,
    arguments are discarded.

    >>> list(get_origin_classes(int))
    [<class 'int'>]
    >>> list(get_origin_classes(int | str))
    [<class 'int'>, <class 'str'>]
    >>> list(get_origin_classes(set[int] | dict[int, str]))
    [<class 'set'>, <class 'dict'>]
    """
    origin_type: type = get_origin(type_) or type_
    if origin_type is UnionType or origin_type is Union:
        for arg_type in get_args(type_):
            yield get_origin(arg_type) or arg_type
    else:
        yield origin_type


def is_origin_hashable(type_: type) -> bool:
    """ Checks whether the given type signature satisfies `collections.abc.Hashable`.

    This check ignores type arguments, but takes into account all types of an union.

    >>> is_origin_hashable(int)
    True
    >>> is_origin_hashable(int | str | bytes)
    True
    >>> is_origin_hashable(int | set)
    False
    >>> is_origin_hashable(frozenset[int])
    True
    >>> is_origin_hashable(dict)
    False
    >>> is_origin_hashable(list)
    False
    >>> is_origin_hashable(bytearray)
    False

    Even though list is not hashable, a frozenset[list] is, simply because arguments are ignored:
    >>> is_origin_hashable(frozenset[list])
    True

    Callers should recurse on their own if they need to deal with type arguments. In practice when building a Codec
    from a type the recursion of the build process will deal with that.
    """
    return all(_is_origin_hashable(origin_class) for origin_class in get_origin_classes(type_))


def _is_origin_hashable(origin_class: type) -> bool:
    """ Inner implementation of is_origin_hashable, only checks a single origin class. """
    if origin_class is NoneType or origin_class is None:
        return True
    return is_subclass(origin_class, Hashable)


def pretty_type(type_: type | UnionType) -> str:
    """ Shows a cleaner string representation for a type.

    >>> pretty_type(None)
    'None'
    >>> pretty_type(int)
    'int'
    >>> pretty_type(dict[str, int])
    'dict[str, int]'
    """
    if type_ is NoneType or type_ is None:
        return 'None'
    elif hasattr(type_, '__args__'):
        return str(type_)
    else:
        return getattr(type_, '__name__', repr(type_))


# XXX: _verbose argument is used to help with doctest
def get_aliased_type(type_: type | UnionType, alias_map: TypeAliasMap, *, _verbose: bool = True) -> type:
    """ Map a type to its usable alias including the type's arguments.

    For example, the builtin `int` is mapped to the `i64` marker in the default alias map:

    >>> orig_type = tuple[str, list[dict[int, float]], bool]
    >>> from bincodec.codecs import DEFAULT_TYPE_ALIAS_MAP as alias_map
    >>> get_aliased_type(orig_type, alias_map, _verbose=False)
    tuple[str, list[dict[bincodec.types.i64, bincodec.types.f64]], bool]
    """
    new_type, replaced = _get_aliased_type(type_, alias_map)
    if replaced and _verbose:
        logger.debug('type replaced', old=pretty_type(type_), new=pretty_type(new_type))
    return new_type


def _get_aliased_type(type_: Any, alias_map: TypeAliasMap) -> tuple[Any, bool]:
    """ Implementation of get_aliased_type with indication of whether there was a replacement.
    """
    # XXX: non-type arguments, like the length in Array[T, N], are kept as they are
    if isinstance(type_, int):
        return type_, False

    origin_type = get_origin(type_) or type_
    aliased_origin: Any
    replaced = False

    # XXX: special case, replace typing.Union with types.UnionType
    if origin_type is Union:
        aliased_origin = UnionType
    elif origin_type in alias_map:
        aliased_origin = alias_map[origin_type]
        replaced = True
    else:
        aliased_origin = origin_type

    if isinstance(type_, GenericAlias) or get_origin(type_) is not None:
        type_args = get_args(type_)

        # use _get_aliased_type for recursion so we don't warn multiple times when a replacement happens
        aliased_args_replaced = [_get_aliased_type(arg, alias_map) for arg in type_args]
        aliased_args = tuple(arg for arg, _ in aliased_args_replaced)
        replaced |= any(arg_replaced for _, arg_replaced in aliased_args_replaced)

        if not replaced:
            return type_, False

        # XXX: special case, UnionType can't be instantiated directly, this is the simplest way to do it
        if aliased_origin is UnionType:
            return reduce(or_, aliased_args), replaced  # = type_args[0] | type_args[1] | ... | type_args[N]

        # normal case when there are type arguments (even if the arguments are empty, like tuple[()])
        assert hasattr(aliased_origin, '__class_getitem__'), 'we must have an indexable class at this point'
        return aliased_origin[aliased_args if len(aliased_args) != 1 else aliased_args[0]], replaced
    else:
        # normal case when there aren't type arguments
        return aliased_origin, replaced


def is_namedtuple_class(type_: Any) -> bool:
    """ Whether the type is a class created with `typing.NamedTuple`, the only named tuples with field annotations.

    >>> class Point(NamedTuple):
    ...     x: int
    ...     y: int
    >>> is_namedtuple_class(Point)
    True
    >>> is_namedtuple_class(tuple)
    False
    """
    return isinstance(type_, type) and NamedTuple in getattr(type_, '__orig_bases__', tuple())


def get_usable_origin_type(
    type_: type[T] | UnionType,
    /,
    *,
    type_map: 'Codec.TypeMap',
    _verbose: bool = True,
) -> Any:
    """ The purpose of this function is to map a given type into a key that is usable in a Codec.TypeMap

    It takes into account type-aliasing according to Codec.TypeMap.alias_map. If the given type cannot be used in the
    given type_map, an UnsupportedTypeError (which is a TypeError) will be raised.

    The returned key is guaranteed to exist in `type_map.codecs_map`:

    >>> from bincodec.codecs import DEFAULT_TYPE_MAP as type_map
    >>> get_usable_origin_type(list[int], type_map=type_map, _verbose=False)
    <class 'list'>
    >>> get_usable_origin_type(int | None, type_map=type_map, _verbose=False)
    typing.Optional
    >>> get_usable_origin_type(complex, type_map=type_map, _verbose=False)
    Traceback (most recent call last):
        ...
    bincodec.serialization.exceptions.UnsupportedTypeError: type complex is not supported by any Codec class
    """
    if isinstance(type_, str):
        raise UnsupportedTypeError(f'unresolved string annotation {type_!r}')

    codecs_map = type_map.codecs_map
    aliased_type: Any = get_aliased_type(type_, type_map.alias_map, _verbose=_verbose)
    origin_aliased_type: Any = get_origin(aliased_type) or aliased_type

    if origin_aliased_type is UnionType or origin_aliased_type is Union:
        args = get_args(aliased_type)
        # `T | None` is the only union that is not a tagged union of classes
        if Optional in codecs_map and len(args) == 2 and NoneType in args:
            return Optional
        if UnionType in codecs_map:
            return UnionType

    if origin_aliased_type is None:
        origin_aliased_type = NoneType

    try:
        if origin_aliased_type in codecs_map:
            return origin_aliased_type
    except TypeError:
        raise UnsupportedTypeError(f'type {type_!r} is not supported by any Codec class')

    if NamedTuple in codecs_map and is_namedtuple_class(aliased_type):
        return NamedTuple

    if dataclass in codecs_map and isinstance(aliased_type, type) and is_dataclass(aliased_type):
        return dataclass

    if Enum in codecs_map and is_subclass(aliased_type, Enum):
        return Enum

    raise UnsupportedTypeError(f'type {pretty_type(cast(type, type_))} is not supported by any Codec class')
