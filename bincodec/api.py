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
Shortcuts to encode and decode values without building a codec first.

The codec is derived from the given type (or from the value's class when encoding) with the default maps and is
cached, so calling these repeatedly for the same type is cheap.

>>> from bincodec.types import u32
>>> to_bytes(u32(0x01020304), u32).hex()
'04030201'
>>> from_bytes(u32, bytes.fromhex('04030201'))
Ok(16909060)
>>> from_bytes(u32, bytes.fromhex('0403020100')).is_err()
True
>>> value, rest = parse(u32, bytes.fromhex('0403020100')).unwrap()
>>> bytes(rest)
b'\\x00'
"""

from typing import Any, TypeVar

from bincodec.codecs import make_codec
from bincodec.serialization import SerializationError
from bincodec.serialization.types import Buffer
from bincodec.utils.result import Result

T = TypeVar('T')


def to_bytes(value: Any, type_: Any = None, /) -> bytes:
    """ Encode a value, using its own class as type when none is given.

    Plain classes like `int`, `str` or a dataclass work without a type, but containers need one, since `list` alone
    doesn't say what the items are.
    """
    return make_codec(type(value) if type_ is None else type_).to_bytes(value)


def unparse(value: Any, out: bytearray, type_: Any = None, /) -> None:
    """ Like `to_bytes` but the encoding is appended to `out`.
    """
    make_codec(type(value) if type_ is None else type_).unparse(value, out)


def from_bytes(type_: type[T], data: Buffer, /) -> Result[T, SerializationError]:
    """ Decode a value of the given type that takes exactly all of data.
    """
    return make_codec(type_).from_bytes(data)


def parse(type_: type[T], data: Buffer, /) -> Result[tuple[T, memoryview], SerializationError]:
    """ Decode a value of the given type from the start of data, the rest is returned along with the value.
    """
    return make_codec(type_).parse(data)


encode = to_bytes
decode = from_bytes
