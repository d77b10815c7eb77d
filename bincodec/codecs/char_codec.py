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

from typing_extensions import Self, override

from bincodec.codecs.codec import Codec
from bincodec.serialization import Deserializer, SerializationError, Serializer
from bincodec.serialization.encoding.char import decode_char, encode_char, is_scalar_value
from bincodec.types import char
from bincodec.utils.result import Result


class CharCodec(Codec[str]):
    """ Represents a single Unicode scalar value, annotated with `bincodec.types.char`.
    """

    _is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: type[str], /, *, type_map: Codec.TypeMap) -> Self:
        if type_ is not char:
            raise TypeError('expected char type')
        return cls()

    @override
    def _check_value(self, value: str, /, *, deep: bool) -> None:
        if not isinstance(value, str):
            raise TypeError('expected str')
        if len(value) != 1:
            raise ValueError(f'expected exactly one character, got {len(value)}')
        if not is_scalar_value(ord(value)):
            raise ValueError(f'{ord(value):#x} is not a Unicode scalar value')

    @override
    def _serialize(self, serializer: Serializer, value: str, /) -> None:
        encode_char(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Result[str, SerializationError]:
        return decode_char(deserializer)

    @override
    def _min_size(self) -> int:
        return 4
