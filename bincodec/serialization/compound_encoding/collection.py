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
A collection is basically any value that has a known size and is iterable.

Layout: [N: u64][value_0]...[value_N-1]

>>> from bincodec.serialization.encoding.int import encode_int, decode_int
>>> se = Serializer.build_bytes_serializer()
>>> encode_collection(se, [1, 2], lambda se, v: encode_int(se, v, length=1, signed=False))
>>> bytes(se.finalize()).hex()
'02000000000000000102'

Breakdown of the result:

    0200000000000000: 2 as u64, the total length
    01: first u8
    02: second u8

When decoding, the builder can be any compatible collection, in the previous example a `list` was encoded, but when
decoding a `tuple` could be used, it only matters that the collection can be initialized with an `Iterable[T]`.

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('02000000000000000102'))
>>> decode_collection(de, lambda de: decode_int(de, length=1, signed=False), tuple)
Ok((1, 2))
>>> de.finalize()
Ok(None)

A missing element is an error, nothing is built:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('020000000000000001'))
>>> decode_collection(de, lambda de: decode_int(de, length=1, signed=False), list).is_err()
True
"""

from collections.abc import Collection, Iterable
from typing import Callable, TypeVar

from bincodec.serialization import Deserializer, SerializationError, Serializer
from bincodec.serialization.encoding.length import decode_length, encode_length
from bincodec.utils.result import Ok, Result, propagate_result

from . import Decoder, Encoder, check_enough_data

T = TypeVar('T')
R = TypeVar('R', bound=Collection)


def encode_collection(serializer: Serializer, values: Collection[T], encoder: Encoder[T]) -> None:
    encode_length(serializer, len(values))
    for value in values:
        encoder(serializer, value)


@propagate_result
def decode_collection(
    deserializer: Deserializer,
    decoder: Decoder[T],
    builder: Callable[[Iterable[T]], R],
    *,
    min_item_size: int = 0,
) -> Result[R, SerializationError]:
    length = decode_length(deserializer).unwrap_or_propagate()
    check_enough_data(deserializer, length, min_item_size).unwrap_or_propagate()
    items: list[T] = []
    for _ in range(length):
        items.append(decoder(deserializer).unwrap_or_propagate())
    return Ok(builder(items))
