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

from enum import Enum
from typing import TypeVar

from structlog import get_logger
from typing_extensions import Self, override

from bincodec.codecs.codec import Codec
from bincodec.serialization import Deserializer, SerializationError, Serializer, TooManyVariantsError
from bincodec.serialization.compound_encoding.tagged import decode_tag, encode_tag
from bincodec.serialization.consts import MAX_VARIANTS, TAG_SIZE
from bincodec.utils.result import Result
from bincodec.utils.typing import is_subclass

logger = get_logger()

T = TypeVar('T', bound=Enum)


class EnumCodec(Codec[T]):
    """ Represents `Enum` subclasses as a sum type of unit variants.

    The tag is the declaration position of the member, its value plays no part in the encoding. Aliases are not
    members, so they don't take a tag.

    >>> class Color(Enum):
    ...     RED = 'r'
    ...     GREEN = 'g'
    ...     BLUE = 'b'
    >>> codec = EnumCodec(Color)
    >>> codec.to_bytes(Color.BLUE)
    b'\\x02'
    >>> codec.from_bytes(b'\\x01')
    Ok(<Color.GREEN: 'g'>)
    >>> codec.from_bytes(b'\\x03').is_err()
    True
    """

    __slots__ = ('_enum_class', '_members', '_tags')
    _is_hashable = True

    def __init__(self, enum_class: type[T]) -> None:
        self._enum_class = enum_class
        self._members: tuple[T, ...] = tuple(enum_class)
        if len(self._members) > MAX_VARIANTS:
            raise TooManyVariantsError(
                f'{enum_class.__name__} has {len(self._members)} members, at most {MAX_VARIANTS} are supported'
            )
        self._tags: dict[T, int] = {member: tag for tag, member in enumerate(self._members)}

    @override
    @classmethod
    def _from_type(cls, type_: type[T], /, *, type_map: Codec.TypeMap) -> Self:
        if not is_subclass(type_, Enum):
            raise TypeError('expected Enum subclass')
        codec = cls(type_)
        logger.debug('enum codec', enum=type_.__name__, members=len(codec._members))
        return codec

    @override
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        if not isinstance(value, self._enum_class):
            raise TypeError(f'expected {self._enum_class.__name__}')
        if value not in self._tags:
            raise ValueError(f'{value!r} is not a single member of {self._enum_class.__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: T, /) -> None:
        encode_tag(serializer, self._tags[value])

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Result[T, SerializationError]:
        return decode_tag(deserializer, len(self._members)).map(self._members.__getitem__)

    @override
    def _min_size(self) -> int:
        return TAG_SIZE
