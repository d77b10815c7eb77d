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
This module implements encoding of integers with a fixed size, the size and signedness are parametrized.

The encoding format is plain two's complement little-endian.

>>> se = Serializer.build_bytes_serializer()
>>> encode_int(se, 0x01020304, length=4, signed=False)  # writes 04030201
>>> encode_int(se, 255, length=1, signed=False)  # writes ff
>>> encode_int(se, -2, length=2, signed=True)  # writes feff
>>> bytes(se.finalize()).hex()
'04030201fffeff'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('04030201fffeff'))
>>> hex(decode_int(de, length=4, signed=False).unwrap())
'0x1020304'
>>> decode_int(de, length=1, signed=False)
Ok(255)
>>> decode_int(de, length=2, signed=True)
Ok(-2)
>>> decode_int(de, length=1, signed=False)
Err(OutOfDataError('not enough bytes to read: needed 1, have 0'))
"""

from bincodec.serialization import Deserializer, SerializationError, Serializer
from bincodec.utils.result import Ok, Result, propagate_result


def int_bounds(length: int, signed: bool) -> tuple[int, int]:
    """ Inclusive range of the values that fit in `length` bytes.

    >>> int_bounds(1, True)
    (-128, 127)
    >>> int_bounds(2, False)
    (0, 65535)
    """
    bits = length * 8
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def encode_int(serializer: Serializer, number: int, *, length: int, signed: bool) -> None:
    """ Encode an int using the given byte-length and signedness.

    This modules's docstring has more details and examples.
    """
    try:
        data = int.to_bytes(number, length, byteorder='little', signed=signed)
    except OverflowError:
        raise ValueError('too big to encode')
    serializer.write_bytes(data)


@propagate_result
def decode_int(deserializer: Deserializer, *, length: int, signed: bool) -> Result[int, SerializationError]:
    """ Decode an int using the given byte-length and signedness.

    This modules's docstring has more details and examples.
    """
    data = deserializer.read_bytes(length).unwrap_or_propagate()
    return Ok(int.from_bytes(data, byteorder='little', signed=signed))
