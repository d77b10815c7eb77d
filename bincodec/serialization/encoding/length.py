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
This module implements the length prefix used by strings, byte sequences and every variable-length container.

A length is always a little-endian u64, regardless of how many bytes or elements follow.

>>> se = Serializer.build_bytes_serializer()
>>> encode_length(se, 2)
>>> bytes(se.finalize()).hex()
'0200000000000000'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0200000000000000'))
>>> decode_length(de)
Ok(2)
>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('02000000'))
>>> decode_length(de).is_err()
True
"""

from bincodec.serialization import Deserializer, SerializationError, Serializer
from bincodec.serialization.consts import LENGTH_PREFIX_FORMAT, MAX_LENGTH
from bincodec.utils.result import Ok, Result, propagate_result


def encode_length(serializer: Serializer, length: int) -> None:
    """ Encodes a length or element count as a u64.
    """
    if not 0 <= length <= MAX_LENGTH:
        raise ValueError('length does not fit in a u64')
    serializer.write_struct(LENGTH_PREFIX_FORMAT, length)


@propagate_result
def decode_length(deserializer: Deserializer) -> Result[int, SerializationError]:
    """ Decodes a u64 length or element count.
    """
    length, = deserializer.read_struct(LENGTH_PREFIX_FORMAT).unwrap_or_propagate()
    return Ok(length)
