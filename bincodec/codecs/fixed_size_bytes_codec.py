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
Fixed-size byte strings: exactly N raw bytes with no length prefix.

This is the shape of hashes, keys and curve points. Such types are usually declared as a `NewType` of `bytes` and
registered with a codec subclass that only sets the size, `Bytes32Codec` is the 32 byte one:

>>> from typing import NewType
>>> from bincodec.codecs import make_codec
>>> Hash = NewType('Hash', bytes)
>>> codec = make_codec(Hash, extra_codecs_map={Hash: Bytes32Codec})
>>> data = codec.to_bytes(Hash(bytes(range(32))))
>>> len(data)
32
>>> codec.from_bytes(data[:31]).is_err()
True
"""

from __future__ import annotations

from typing import ClassVar, TypeVar

from typing_extensions import Self, override

from bincodec.codecs.codec import Codec
from bincodec.serialization import Deserializer, SerializationError, Serializer
from bincodec.utils.result import Ok, Result, propagate_result
from bincodec.utils.typing import is_subclass, resolve_newtype

B = TypeVar('B', bound=bytes)


class FixedSizeBytesCodec(Codec[B]):
    """ Base class for byte strings with a size known from the type, subclasses must set `_size`.
    """

    __slots__ = ('_actual_type',)
    _is_hashable = True
    _size: ClassVar[int]
    _actual_type: type[B]

    def __init__(self, actual_type: type[B]) -> None:
        self._actual_type = actual_type

    @override
    @classmethod
    def _from_type(cls, type_: type[B], /, *, type_map: Codec.TypeMap) -> Self:
        if not is_subclass(type_, bytes):
            raise TypeError('expected bytes-like type')
        return cls(resolve_newtype(type_))

    def _filter_in(self, value: B, /) -> bytes:
        """Mechanism to convert B into bytes before serializing."""
        return bytes(value)

    def _filter_out(self, data: bytes, /) -> B:
        """Mechanism to convert bytes into B after deserializing."""
        return self._actual_type(data)

    @override
    def _check_value(self, value: B, /, *, deep: bool) -> None:
        if not isinstance(value, bytes):
            raise TypeError(f'expected bytes type, not {type(value)}')
        data = self._filter_in(value)
        if len(data) != self._size:
            raise ValueError(f'value has {len(data)} bytes, expected always {self._size} bytes')

    @override
    def _serialize(self, serializer: Serializer, value: B, /) -> None:
        data = self._filter_in(value)
        assert len(data) == self._size  # XXX: double check
        serializer.write_bytes(data)

    @override
    @propagate_result
    def _deserialize(self, deserializer: Deserializer, /) -> Result[B, SerializationError]:
        data = deserializer.read_bytes(self._size).unwrap_or_propagate()
        return Ok(self._filter_out(bytes(data)))

    @override
    def _min_size(self) -> int:
        return self._size


class Bytes32Codec(FixedSizeBytesCodec[B]):
    _size = 32
