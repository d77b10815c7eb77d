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
This module implements encoding of byte sequences by prefixing them with their length as a u64.

This is the exact same layout as a sequence of `u8`, but the bytes are copied in a single write/read.

>>> se = Serializer.build_bytes_serializer()
>>> encode_bytes(se, b'test')  # will prepend 0400000000000000 before writing b'test'
>>> bytes(se.finalize()).hex()
'040000000000000074657374'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('040000000000000074657374'))
>>> decode_bytes(de)
Ok(b'test')
>>> de.finalize()
Ok(None)

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('04000000000000007465737466'))
>>> _ = decode_bytes(de)
>>> print(de.finalize().unwrap_err())
trailing data: 1 bytes left

A length larger than what is left is an error:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0500000000000000') + b'test')
>>> decode_bytes(de).is_err()
True
"""

from bincodec.serialization import Deserializer, SerializationError, Serializer
from bincodec.utils.result import Ok, Result, propagate_result

from .length import decode_length, encode_length


def encode_bytes(serializer: Serializer, data: bytes | bytearray) -> None:
    """ Encodes a byte-sequence adding a length prefix.

    This modules's docstring has more details and examples.
    """
    assert isinstance(data, (bytes, bytearray))
    encode_length(serializer, len(data))
    serializer.write_bytes(data)


@propagate_result
def decode_bytes(deserializer: Deserializer) -> Result[bytes, SerializationError]:
    """ Decodes a byte-sequence with a length prefix.

    This modules's docstring has more details and examples.
    """
    size = decode_length(deserializer).unwrap_or_propagate()
    data = deserializer.read_bytes(size).unwrap_or_propagate()
    return Ok(bytes(data))
