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

r"""
An optional value is a tagged value with two variants: `None` (tag 0) and a present value (tag 1).

Layout:

    [0x00] when None
    [0x01][value] when not None

>>> from bincodec.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> se = Serializer.build_bytes_serializer()
>>> encode_optional(se, 'a', encode_utf8)
>>> bytes(se.finalize()).hex()
'01010000000000000061'

>>> se = Serializer.build_bytes_serializer()
>>> encode_optional(se, None, encode_utf8)
>>> bytes(se.finalize()).hex()
'00'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('01010000000000000061'))
>>> decode_optional(de, decode_utf8)
Ok('a')
>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('00'))
>>> decode_optional(de, decode_utf8)
Ok(None)
>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('02'))
>>> decode_optional(de, decode_utf8).is_err()
True
"""

from typing import Optional, TypeVar

from bincodec.serialization import Deserializer, SerializationError, Serializer
from bincodec.utils.result import Ok, Result, propagate_result

from . import Decoder, Encoder
from .tagged import decode_tag, encode_tag

T = TypeVar('T')


def encode_optional(serializer: Serializer, value: Optional[T], encoder: Encoder[T]) -> None:
    if value is None:
        encode_tag(serializer, 0)
    else:
        encode_tag(serializer, 1)
        encoder(serializer, value)


@propagate_result
def decode_optional(deserializer: Deserializer, decoder: Decoder[T]) -> Result[Optional[T], SerializationError]:
    has_value = decode_tag(deserializer, 2).unwrap_or_propagate()
    if has_value:
        return decoder(deserializer)
    else:
        return Ok(None)
