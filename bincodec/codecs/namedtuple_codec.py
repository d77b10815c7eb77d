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

from typing import Any, TypeVar

from structlog import get_logger
from typing_extensions import Self, override

from bincodec.codecs.codec import Codec
from bincodec.codecs.dataclass_codec import get_field_types
from bincodec.codecs.utils import is_namedtuple_class, pretty_type
from bincodec.serialization import Deserializer, InvalidValueError, SerializationError, Serializer
from bincodec.serialization.compound_encoding.tuple import decode_tuple, encode_tuple
from bincodec.utils.result import Err, Ok, Result, propagate_result

logger = get_logger()

N = TypeVar('N', bound=tuple)


# XXX: we can't usefully describe the tuple type
class NamedTupleCodec(Codec[N]):
    """ Represents `typing.NamedTuple` classes, encoded exactly like a plain tuple of the field types.
    """

    __slots__ = ('_is_hashable', '_args', '_actual_type')

    # lists are allowed in tuples and it's still hashable it just fails in runtime
    _args: tuple[Codec, ...]
    _actual_type: type[N]

    def __init__(self, namedtuple: type[N], args: tuple[Codec, ...]) -> None:
        self._actual_type = namedtuple
        self._args = args
        self._is_hashable = all(arg_codec.is_hashable() for arg_codec in self._args)

    @override
    @classmethod
    def _from_type(cls, type_: type[N], /, *, type_map: Codec.TypeMap) -> Self:
        if not is_namedtuple_class(type_):
            raise TypeError('expected NamedTuple type')
        field_types = get_field_types(type_)
        field_names: tuple[str, ...] = type_._fields  # type: ignore[attr-defined]
        args = tuple(Codec.from_type(field_types[field_name], type_map=type_map) for field_name in field_names)
        logger.debug(
            'namedtuple codec',
            namedtuple=type_.__qualname__,
            fields={name: pretty_type(field_types[name]) for name in field_names},
        )
        return cls(type_, args)

    @override
    def _check_value(self, value: N, /, *, deep: bool) -> None:
        if not isinstance(value, self._actual_type):
            raise TypeError(f'expected {self._actual_type.__qualname__} instance')
        if deep:
            for i, arg_codec in zip(value, self._args):
                arg_codec._check_value(i, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: N, /) -> None:
        encode_tuple(serializer, value, tuple(i.serialize for i in self._args))

    @override
    @propagate_result
    def _deserialize(self, deserializer: Deserializer, /) -> Result[N, SerializationError]:
        decoders = tuple(i.deserialize for i in self._args)
        values: tuple[Any, ...] = decode_tuple(deserializer, decoders).unwrap_or_propagate()
        try:
            return Ok(self._actual_type(*values))
        except (TypeError, ValueError) as e:
            return Err(InvalidValueError(f'{self._actual_type.__qualname__} rejected the decoded fields: {e}'), cause=e)

    @override
    def _min_size(self) -> int:
        return sum(arg.min_size() for arg in self._args)
