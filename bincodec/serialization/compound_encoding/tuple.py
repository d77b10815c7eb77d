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
In Python a tuple type can be used in annotations in 2 different ways:

1. `tuple[A, B, C]`: known fixed length and heterogeneous types
2. `tuple[X, ...]`: variable length and homogeneous type

This module only implements encoding of the first case, the second case can be encoded using the collection encoder.

There actually isn't a "format" per-se, the encoding of `tuple[A, B, C]` is just the encoding of A concatenated with B
concatenated with C, no length and no tag. The same rule is used for the fields of records.

>>> from bincodec.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> from bincodec.serialization.encoding.bool import encode_bool, decode_bool
>>> se = Serializer.build_bytes_serializer()
>>> encode_tuple(se, ('a', False), (encode_utf8, encode_bool))
>>> bytes(se.finalize()).hex()
'01000000000000006100'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('01000000000000006100'))
>>> decode_tuple(de, (decode_utf8, decode_bool))
Ok(('a', False))

The first failure is returned as is:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('01000000000000006102'))
>>> print(decode_tuple(de, (decode_utf8, decode_bool)).unwrap_err())
b'\x02' is not a valid boolean
"""

from typing import Any

from bincodec.serialization import Deserializer, SerializationError, Serializer
from bincodec.utils.result import Ok, Result, propagate_result

from . import Decoder, Encoder


def encode_tuple(serializer: Serializer, values: tuple[Any, ...], encoders: tuple[Encoder[Any], ...]) -> None:
    assert len(values) == len(encoders)
    for value, encoder in zip(values, encoders):
        encoder(serializer, value)


@propagate_result
def decode_tuple(
    deserializer: Deserializer,
    decoders: tuple[Decoder[Any], ...],
) -> Result[tuple[Any, ...], SerializationError]:
    values: list[Any] = []
    for decoder in decoders:
        values.append(decoder(deserializer).unwrap_or_propagate())
    return Ok(tuple(values))
