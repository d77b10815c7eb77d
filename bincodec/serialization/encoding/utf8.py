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
This module implements utf-8 string encoding with a length prefix.

It works exactly like bytes-encoding but the encoded byte-sequence is utf-8 and it takes/returns a `str`. The length
prefix counts bytes, not characters.

>>> se = Serializer.build_bytes_serializer()
>>> encode_utf8(se, 'ab')  # writes 02000000000000006162
>>> encode_utf8(se, 'π')  # writes 0200000000000000cf80
>>> bytes(se.finalize()).hex()
'020000000000000061620200000000000000cf80'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('020000000000000061620200000000000000cf80'))
>>> decode_utf8(de)
Ok('ab')
>>> decode_utf8(de)
Ok('π')
>>> de.finalize()
Ok(None)

Bytes that aren't valid utf-8 are rejected even when the length is right:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0100000000000000ff'))
>>> type(decode_utf8(de).unwrap_err()).__name__
'InvalidUtf8Error'
"""

from bincodec.serialization import Deserializer, InvalidUtf8Error, SerializationError, Serializer
from bincodec.utils.result import Err, Ok, Result, propagate_result

from .bytes import decode_bytes, encode_bytes


def encode_utf8(serializer: Serializer, value: str) -> None:
    """ Encodes a string using UTF-8 and adding a length prefix.

    This modules's docstring has more details and examples.
    """
    assert isinstance(value, str)
    data = value.encode('utf-8')
    encode_bytes(serializer, data)


@propagate_result
def decode_utf8(deserializer: Deserializer) -> Result[str, SerializationError]:
    """ Decodes a UTF-8 string with a length prefix.

    This modules's docstring has more details and examples.
    """
    data = decode_bytes(deserializer).unwrap_or_propagate()
    try:
        return Ok(data.decode('utf-8'))
    except UnicodeDecodeError as e:
        return Err(InvalidUtf8Error(f'invalid utf-8 data: {e.reason}'), cause=e)
