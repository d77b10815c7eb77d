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

from typing import TypeVar

from typing_extensions import Self, override

from bincodec.codecs.codec import Codec
from bincodec.serialization import Deserializer, SerializationError, Serializer
from bincodec.serialization.consts import LENGTH_PREFIX_SIZE
from bincodec.serialization.encoding.bytes import decode_bytes, encode_bytes
from bincodec.utils.result import Result
from bincodec.utils.typing import is_subclass, resolve_newtype

B = TypeVar('B', bytes, bytearray)


class BytesLikeCodec(Codec[B]):
    """ Represents values from class that inherit/new-type `bytes` or `bytearray`.

    The layout is the same as a sequence of `u8`: a `u64` length followed by the raw bytes.
    """

    __slots__ = ('_is_hashable', '_actual_type')
    _actual_type: type[B]

    def __init__(self, actual_type: type[B]) -> None:
        self._actual_type = actual_type
        self._is_hashable = not issubclass(actual_type, bytearray)

    @override
    @classmethod
    def _from_type(cls, type_: type[B], /, *, type_map: Codec.TypeMap) -> Self:
        if not is_subclass(type_, (bytes, bytearray)):
            raise TypeError('expected bytes-like type')
        return cls(resolve_newtype(type_))

    @override
    def _check_value(self, value: B, /, *, deep: bool) -> None:
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError(f'expected {self._actual_type.__name__} instance')

    @override
    def _serialize(self, serializer: Serializer, value: B, /) -> None:
        encode_bytes(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Result[B, SerializationError]:
        return decode_bytes(deserializer).map(self._actual_type)

    @override
    def _min_size(self) -> int:
        return LENGTH_PREFIX_SIZE


class BytesCodec(BytesLikeCodec[bytes]):
    """ Represents builtin `bytes` values.
    """
    __slots__ = ()

    @override
    def __init__(self) -> None:
        super().__init__(bytes)

    @override
    @classmethod
    def _from_type(cls, type_: type[bytes], /, *, type_map: Codec.TypeMap) -> Self:
        if type_ is not bytes:
            raise TypeError('expected bytes type')
        return cls()


class BytearrayCodec(BytesLikeCodec[bytearray]):
    """ Represents builtin `bytearray` values, decoded values are fresh mutable buffers.
    """
    __slots__ = ()

    @override
    def __init__(self) -> None:
        super().__init__(bytearray)

    @override
    @classmethod
    def _from_type(cls, type_: type[bytearray], /, *, type_map: Codec.TypeMap) -> Self:
        if type_ is not bytearray:
            raise TypeError('expected bytearray type')
        return cls()
