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
A fixed-size array has its length as part of its type, so it is not written.

Layout: [value_0]...[value_N-1]

Decoded elements are collected in a list and only turned into a tuple once all of them have been decoded, so a
partially decoded array is never observable.

>>> from bincodec.serialization.encoding.int import encode_int, decode_int
>>> encode_u16 = lambda se, v: encode_int(se, v, length=2, signed=False)
>>> decode_u16 = lambda de: decode_int(de, length=2, signed=False)
>>> se = Serializer.build_bytes_serializer()
>>> encode_array(se, (1, 2, 3), encode_u16, length=3)
>>> bytes(se.finalize()).hex()
'010002000300'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('010002000300'))
>>> decode_array(de, decode_u16, length=3)
Ok((1, 2, 3))

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0100020003'))
>>> decode_array(de, decode_u16, length=3).is_err()
True
"""

from collections.abc import Sequence
from typing import TypeVar

from bincodec.serialization import Deserializer, SerializationError, Serializer
from bincodec.utils.result import Ok, Result, propagate_result

from . import Decoder, Encoder, check_enough_data

T = TypeVar('T')


def encode_array(serializer: Serializer, values: Sequence[T], encoder: Encoder[T], *, length: int) -> None:
    if len(values) != length:
        raise ValueError(f'expected exactly {length} items, got {len(values)}')
    for value in values:
        encoder(serializer, value)


@propagate_result
def decode_array(
    deserializer: Deserializer,
    decoder: Decoder[T],
    *,
    length: int,
    min_item_size: int = 0,
) -> Result[tuple[T, ...], SerializationError]:
    check_enough_data(deserializer, length, min_item_size).unwrap_or_propagate()
    items: list[T] = []
    for _ in range(length):
        items.append(decoder(deserializer).unwrap_or_propagate())
    return Ok(tuple(items))
