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
Product types from dataclasses: the fields are encoded one after another in declaration order, with no names, tags
or prefixes.

>>> from dataclasses import dataclass, field
>>> from bincodec.codecs import make_codec
>>> @dataclass
... class Point:
...     x: int
...     y: bool
>>> codec = make_codec(Point)
>>> codec.to_bytes(Point(1, True)).hex()
'010000000000000001'
>>> codec.from_bytes(bytes.fromhex('010000000000000001'))
Ok(Point(x=1, y=True))

Fields that can't be passed to the constructor can't be decoded, so they are rejected right away:

>>> @dataclass
... class Cached:
...     x: int
...     y: int = field(init=False, default=0)
>>> make_codec(Cached)
Traceback (most recent call last):
    ...
bincodec.serialization.exceptions.UnsupportedTypeError: field Cached.y is not an __init__ argument
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import TYPE_CHECKING, Any, TypeVar, get_type_hints

from structlog import get_logger
from typing_extensions import Self, override

from bincodec.codecs.codec import Codec
from bincodec.codecs.utils import is_origin_hashable, pretty_type
from bincodec.serialization import (
    Deserializer,
    InvalidValueError,
    SerializationError,
    Serializer,
    UnsupportedTypeError,
)
from bincodec.utils.result import Err, Ok, Result, propagate_result

if TYPE_CHECKING:
    from _typeshed import DataclassInstance

logger = get_logger()

D = TypeVar('D', bound='DataclassInstance')


def get_field_types(class_: type, /) -> dict[str, Any]:
    """ Resolve the annotations of a class, string annotations included.
    """
    try:
        return get_type_hints(class_)
    except NameError as e:
        raise UnsupportedTypeError(f'could not resolve annotations of {class_.__qualname__}: {e}') from e


class DataclassCodec(Codec[D]):
    """ Represents instances of a dataclass as the concatenation of its fields.
    """

    __slots__ = ('_is_hashable', '_fields', '_class')
    _fields: dict[str, Codec]
    _class: type[D]

    def __init__(self, fields_: dict[str, Codec], class_: type[D]):
        self._fields = fields_
        self._class = class_
        self._is_hashable = is_origin_hashable(class_) and all(codec.is_hashable() for codec in fields_.values())

    @override
    @classmethod
    def _from_type(cls, type_: type[D], /, *, type_map: Codec.TypeMap) -> Self:
        if not isinstance(type_, type) or not is_dataclass(type_):
            raise TypeError('expected a dataclass')
        field_types = get_field_types(type_)
        # XXX: the order is important, `fields` follows the declaration order and `dict` keeps it
        values: dict[str, Codec] = {}
        for field in fields(type_):
            if not field.init:
                raise UnsupportedTypeError(f'field {type_.__qualname__}.{field.name} is not an __init__ argument')
            values[field.name] = Codec.from_type(field_types[field.name], type_map=type_map)
        logger.debug(
            'dataclass codec',
            dataclass=type_.__qualname__,
            fields={name: pretty_type(field_types[name]) for name in values},
        )
        return cls(values, type_)

    @override
    def _check_value(self, value: D, /, *, deep: bool) -> None:
        if not isinstance(value, self._class):
            raise TypeError(f'expected {self._class.__qualname__} instance')
        if deep:
            for field_name, field_codec in self._fields.items():
                field_codec._check_value(getattr(value, field_name), deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: D, /) -> None:
        for field_name, field_codec in self._fields.items():
            field_codec.serialize(serializer, getattr(value, field_name))

    @override
    @propagate_result
    def _deserialize(self, deserializer: Deserializer, /) -> Result[D, SerializationError]:
        kwargs: dict[str, Any] = {}
        for field_name, field_codec in self._fields.items():
            kwargs[field_name] = field_codec.deserialize(deserializer).unwrap_or_propagate()
        try:
            return Ok(self._class(**kwargs))
        except (TypeError, ValueError) as e:
            return Err(InvalidValueError(f'{self._class.__qualname__} rejected the decoded fields: {e}'), cause=e)

    @override
    def _min_size(self) -> int:
        return sum(field_codec.min_size() for field_codec in self._fields.values())
