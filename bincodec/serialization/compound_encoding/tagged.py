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
A tagged value is a single tag byte followed by the encoding of whichever variant the tag selects.

Layout: [tag: u8][variant value]

Tags are the 0-based position of the variant in its declaration, so at most 256 variants can be addressed. Any tag
that is not below the number of variants is invalid.

>>> from bincodec.serialization.encoding.bool import encode_bool, decode_bool
>>> from bincodec.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> se = Serializer.build_bytes_serializer()
>>> encode_tagged(se, 1, 'a', encode_utf8)
>>> bytes(se.finalize()).hex()
'01010000000000000061'

>>> decoders = (decode_bool, decode_utf8)
>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('01010000000000000061'))
>>> decode_tagged(de, decoders)
Ok('a')
>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0200'))
>>> print(decode_tagged(de, decoders).unwrap_err())
invalid tag 2, expected less than 2
>>> de = Deserializer.build_bytes_deserializer(b'')
>>> decode_tagged(de, decoders).is_err()
True
"""

from collections.abc import Sequence
from typing import Any

from bincodec.serialization import Deserializer, InvalidTagError, SerializationError, Serializer
from bincodec.serialization.consts import MAX_VARIANTS
from bincodec.utils.result import Err, Ok, Result, propagate_result

from . import Decoder, Encoder


def encode_tag(serializer: Serializer, tag: int) -> None:
    assert 0 <= tag < MAX_VARIANTS
    serializer.write_byte(tag)


@propagate_result
def decode_tag(deserializer: Deserializer, variant_count: int) -> Result[int, SerializationError]:
    tag = deserializer.read_byte().unwrap_or_propagate()
    if tag >= variant_count:
        return Err(InvalidTagError(f'invalid tag {tag}, expected less than {variant_count}'))
    return Ok(tag)


def encode_tagged(serializer: Serializer, tag: int, value: Any, encoder: Encoder[Any]) -> None:
    encode_tag(serializer, tag)
    encoder(serializer, value)


@propagate_result
def decode_tagged(deserializer: Deserializer, decoders: Sequence[Decoder[Any]]) -> Result[Any, SerializationError]:
    tag = decode_tag(deserializer, len(decoders)).unwrap_or_propagate()
    return decoders[tag](deserializer)
