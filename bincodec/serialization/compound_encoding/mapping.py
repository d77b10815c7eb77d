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
Encoding a mapping is equivalent to encoding a collection of 2-tuples.

Layout: [N: u64][key_0][value_0]...[key_N-1][value_N-1]

>>> from bincodec.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> from bincodec.serialization.encoding.bool import encode_bool, decode_bool
>>> se = Serializer.build_bytes_serializer()
>>> encode_mapping(se, {'a': False, 'b': True}, encode_utf8, encode_bool)
>>> bytes(se.finalize()).hex()
'02000000000000000100000000000000610001000000000000006201'

Breakdown of the result:

    0200000000000000: 2 as u64, the total length
    010000000000000061: 'a' with length prefix
    00: False
    010000000000000062: 'b' with length prefix
    01: True

>>> data = bytes.fromhex('02000000000000000100000000000000610001000000000000006201')
>>> de = Deserializer.build_bytes_deserializer(data)
>>> decode_mapping(de, decode_utf8, decode_bool, dict)
Ok({'a': False, 'b': True})
>>> de.finalize()
Ok(None)
"""

from collections.abc import Iterable, Mapping
from typing import Callable, TypeVar

from bincodec.serialization import Deserializer, SerializationError, Serializer
from bincodec.serialization.encoding.length import decode_length, encode_length
from bincodec.utils.result import Ok, Result, propagate_result

from . import Decoder, Encoder, check_enough_data

KT = TypeVar('KT')
VT = TypeVar('VT')
R = TypeVar('R', bound=Mapping)


def encode_mapping(
    serializer: Serializer,
    values_mapping: Mapping[KT, VT],
    key_encoder: Encoder[KT],
    value_encoder: Encoder[VT],
) -> None:
    encode_length(serializer, len(values_mapping))
    for key, value in values_mapping.items():
        key_encoder(serializer, key)
        value_encoder(serializer, value)


@propagate_result
def decode_mapping(
    deserializer: Deserializer,
    key_decoder: Decoder[KT],
    value_decoder: Decoder[VT],
    mapping_builder: Callable[[Iterable[tuple[KT, VT]]], R],
    *,
    min_item_size: int = 0,
) -> Result[R, SerializationError]:
    size = decode_length(deserializer).unwrap_or_propagate()
    check_enough_data(deserializer, size, min_item_size).unwrap_or_propagate()
    items: list[tuple[KT, VT]] = []
    for _ in range(size):
        key = key_decoder(deserializer).unwrap_or_propagate()
        value = value_decoder(deserializer).unwrap_or_propagate()
        items.append((key, value))
    return Ok(mapping_builder(items))
