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
The `binary` class decorator gives a dataclass, NamedTuple or Enum its own encode/decode methods.

>>> from dataclasses import dataclass
>>> @binary
... @dataclass(frozen=True)
... class Version:
...     major: int
...     minor: int
>>> data = Version(1, 2).to_bytes()
>>> data.hex()
'01000000000000000200000000000000'
>>> Version.from_bytes(data)
Ok(Version(major=1, minor=2))
>>> buf = bytearray(b'\\xff')
>>> Version(3, 4).unparse(buf)
>>> len(buf)
17
>>> Version.parse(buf[1:] + b'!').map(lambda r: (r[0], bytes(r[1])))
Ok((Version(major=3, minor=4), b'!'))

The codec is only derived on first use, so annotations can refer to classes that are defined later.
"""

from typing import Any, TypeVar

from bincodec.codecs import Codec, make_codec
from bincodec.serialization import SerializationError
from bincodec.serialization.types import Buffer
from bincodec.utils.result import Result

C = TypeVar('C', bound=type)


def _codec(cls: type) -> Codec[Any]:
    """Codec for this class, derived on first use."""
    return make_codec(cls)


def _to_bytes(self: Any) -> bytes:
    """Encode this value."""
    return make_codec(type(self)).to_bytes(self)


def _unparse(self: Any, out: bytearray) -> None:
    """Append the encoding of this value to out."""
    make_codec(type(self)).unparse(self, out)


def _from_bytes(cls: type, data: Buffer) -> Result[Any, SerializationError]:
    """Decode a value that takes exactly all of data."""
    return make_codec(cls).from_bytes(data)


def _parse(cls: type, data: Buffer) -> Result[tuple[Any, memoryview], SerializationError]:
    """Decode a value from the start of data, returning it together with the rest."""
    return make_codec(cls).parse(data)


def binary(cls: C) -> C:
    """Decorator to attach `codec()`, `to_bytes()`, `unparse()`, `from_bytes()` and `parse()` to a class.

    It must be applied on top of `@dataclass`, since the fields are only known after that.
    """
    if not isinstance(cls, type):
        raise TypeError('binary can only decorate classes')
    setattr(cls, 'codec', classmethod(_codec))
    setattr(cls, 'to_bytes', _to_bytes)
    setattr(cls, 'unparse', _unparse)
    setattr(cls, 'from_bytes', classmethod(_from_bytes))
    setattr(cls, 'parse', classmethod(_parse))
    return cls
