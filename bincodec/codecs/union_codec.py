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
Tagged unions of classes, `A | B | C` is a sum type where the tag is the position of the class in the union.

>>> from dataclasses import dataclass
>>> from bincodec.codecs import make_codec
>>> @dataclass
... class Circle:
...     radius: int
>>> @dataclass
... class Square:
...     side: int
>>> codec = make_codec(Circle | Square | None)
>>> codec.to_bytes(Square(3)).hex()
'010300000000000000'
>>> codec.to_bytes(None).hex()
'02'
>>> codec.from_bytes(bytes.fromhex('000500000000000000'))
Ok(Circle(radius=5))
>>> print(codec.from_bytes(bytes.fromhex('0305')).unwrap_err())
invalid tag 3, expected less than 3
"""

from __future__ import annotations

from types import NoneType, UnionType
from typing import Any, Union

from structlog import get_logger
from typing_extensions import Self, override

from bincodec.codecs.codec import Codec
from bincodec.codecs.utils import pretty_type
from bincodec.serialization import (
    Deserializer,
    SerializationError,
    Serializer,
    TooManyVariantsError,
    UnsupportedTypeError,
)
from bincodec.serialization.compound_encoding.tagged import decode_tagged, encode_tagged
from bincodec.serialization.consts import MAX_VARIANTS, TAG_SIZE
from bincodec.utils.result import Result
from bincodec.utils.typing import get_args, get_origin, resolve_newtype

logger = get_logger()


def _get_variant_class(variant_type: Any) -> type:
    """ The runtime class that values of the given variant have, used to pick the tag when encoding.
    """
    if variant_type is None:
        return NoneType
    variant_class = resolve_newtype(get_origin(variant_type) or variant_type)
    if not isinstance(variant_class, type):
        raise UnsupportedTypeError(f'union variant {pretty_type(variant_type)} is not a class')
    return variant_class


class UnionCodec(Codec[Any]):
    """ Represents a union of classes as a tagged sum type.

    Values are matched to their variant by exact class, so each variant must have a distinct runtime class.

    `None` is a unit variant with its position as tag like any other, so in `A | B | None` it is tag 2. A union of
    exactly one class and `None` is an optional instead (see `OptionalCodec`), where `None` is always tag 0.
    """

    __slots__ = ('_is_hashable', '_variants', '_tags')

    _variants: tuple[Codec, ...]
    _tags: dict[type, int]

    def __init__(self, variants: dict[type, Codec]) -> None:
        self._variants = tuple(variants.values())
        self._tags = {variant_class: tag for tag, variant_class in enumerate(variants)}
        self._is_hashable = all(variant.is_hashable() for variant in self._variants)

    @override
    @classmethod
    def _from_type(cls, type_: type, /, *, type_map: Codec.TypeMap) -> Self:
        if not isinstance(type_, UnionType) and get_origin(type_) is not Union:
            raise TypeError('expected type union')
        args = get_args(type_)
        if len(args) > MAX_VARIANTS:
            raise TooManyVariantsError(f'a union can have at most {MAX_VARIANTS} variants, got {len(args)}')
        variants: dict[type, Codec] = {}
        for arg in args:
            variant_class = _get_variant_class(arg)
            if variant_class in variants:
                raise UnsupportedTypeError(
                    f'union variant {pretty_type(arg)} can\'t be told apart from another {variant_class.__name__}'
                )
            variants[variant_class] = Codec.from_type(arg, type_map=type_map)
        logger.debug('union codec', union=pretty_type(type_), variants=[c.__name__ for c in variants])
        return cls(variants)

    def _get_tag(self, value: Any) -> int:
        tag = self._tags.get(type(value))
        if tag is None:
            expected = ', '.join(pretty_type(variant_class) for variant_class in self._tags)
            raise TypeError(f'expected one of {expected}, not {type(value).__name__}')
        return tag

    @override
    def _check_value(self, value: Any, /, *, deep: bool) -> None:
        tag = self._get_tag(value)
        self._variants[tag]._check_value(value, deep=deep)

    @override
    def _serialize(self, serializer: Serializer, value: Any, /) -> None:
        tag = self._get_tag(value)
        encode_tagged(serializer, tag, value, self._variants[tag].serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Result[Any, SerializationError]:
        return decode_tagged(deserializer, tuple(variant.deserialize for variant in self._variants))

    @override
    def _min_size(self) -> int:
        return TAG_SIZE + min((variant.min_size() for variant in self._variants), default=0)
