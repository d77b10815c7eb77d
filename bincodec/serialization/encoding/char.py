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
This module implements encoding of a single Unicode scalar value as a little-endian u32.

Only scalar values are valid: code points up to U+10FFFF excluding the surrogate range U+D800..U+DFFF.

>>> se = Serializer.build_bytes_serializer()
>>> encode_char(se, 'a')  # writes 61000000
>>> encode_char(se, '\\N{SMILING FACE WITH SUNGLASSES}')  # writes 0ef60100
>>> bytes(se.finalize()).hex()
'610000000ef60100'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('610000000ef60100'))
>>> decode_char(de)
Ok('a')
>>> hex(ord(decode_char(de).unwrap()))
'0x1f60e'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('00d80000'))
>>> print(decode_char(de).unwrap_err())
0xd800 is not a Unicode scalar value
"""

from bincodec.serialization import Deserializer, InvalidScalarError, SerializationError, Serializer
from bincodec.utils.result import Err, Ok, Result, propagate_result

from .int import decode_int, encode_int

MAX_CODE_POINT = 0x10FFFF
SURROGATES = range(0xD800, 0xE000)


def is_scalar_value(code_point: int) -> bool:
    return 0 <= code_point <= MAX_CODE_POINT and code_point not in SURROGATES


def encode_char(serializer: Serializer, value: str) -> None:
    """ Encodes a 1-length str as its code point.
    """
    assert isinstance(value, str) and len(value) == 1
    code_point = ord(value)
    if not is_scalar_value(code_point):
        raise ValueError(f'{code_point:#x} is not a Unicode scalar value')
    encode_int(serializer, code_point, length=4, signed=False)


@propagate_result
def decode_char(deserializer: Deserializer) -> Result[str, SerializationError]:
    """ Decodes a code point into a 1-length str.
    """
    code_point = decode_int(deserializer, length=4, signed=False).unwrap_or_propagate()
    if not is_scalar_value(code_point):
        return Err(InvalidScalarError(f'{code_point:#x} is not a Unicode scalar value'))
    return Ok(chr(code_point))
