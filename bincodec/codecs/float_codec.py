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

import struct
from typing import ClassVar

from typing_extensions import Self, override

from bincodec.codecs.codec import Codec
from bincodec.serialization import Deserializer, SerializationError, Serializer
from bincodec.serialization.encoding.float import decode_float, encode_float
from bincodec.utils.result import Result
from bincodec.utils.typing import is_subclass


class _SizedFloatCodec(Codec[float]):
    """ Base class for IEEE 754 floats, every bit pattern decodes, NaN payloads included.

    Values are Python floats, that is doubles, so every `f64` bit pattern survives a decode then encode. An `f32`
    signalling NaN doesn't: widening it to a double sets the quiet bit, so `7f800001` comes back as `7fc00001`.
    The payload bits are kept.
    """

    _is_hashable = True
    # XXX: subclass must define these values:
    _byte_size: ClassVar[int]
    _format: ClassVar[str]

    @override
    @classmethod
    def _from_type(cls, type_: type[float], /, *, type_map: Codec.TypeMap) -> Self:
        if not is_subclass(type_, float):
            raise TypeError('expected float type')
        return cls()

    @override
    def _check_value(self, value: float, /, *, deep: bool) -> None:
        if isinstance(value, bool) or not isinstance(value, (float, int)):
            raise TypeError('expected float')
        try:
            struct.pack(self._format, value)
        except OverflowError:
            raise ValueError(f'{value} does not fit in {type(self).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: float, /) -> None:
        encode_float(serializer, value, length=self._byte_size)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Result[float, SerializationError]:
        return decode_float(deserializer, length=self._byte_size)

    @override
    def _min_size(self) -> int:
        return self._byte_size


class F32Codec(_SizedFloatCodec):
    _byte_size = 4
    _format = '<f'


class F64Codec(_SizedFloatCodec):
    _byte_size = 8
    _format = '<d'
