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

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .types import Buffer

if TYPE_CHECKING:
    from .bytes_serializer import BytearraySerializer, BytesSerializer


class Serializer(ABC):
    """Output side of every encoder: a sink that bytes are appended to.

    Writing can't fail for well-formed values, so none of these methods return a `Result`.
    """

    @staticmethod
    def build_bytes_serializer() -> BytesSerializer:
        from .bytes_serializer import BytesSerializer
        return BytesSerializer()

    @staticmethod
    def build_bytearray_serializer(out: bytearray) -> BytearraySerializer:
        from .bytes_serializer import BytearraySerializer
        return BytearraySerializer(out)

    @abstractmethod
    def finalize(self) -> Buffer:
        """Get the resulting byte sequence, the serializer cannot be used after this."""
        raise NotImplementedError

    @abstractmethod
    def cur_pos(self) -> int:
        """Number of bytes written so far."""
        raise NotImplementedError

    @abstractmethod
    def write_byte(self, data: int) -> None:
        """Write a single byte."""
        raise NotImplementedError

    @abstractmethod
    def write_bytes(self, data: Buffer) -> None:
        """Write a byte sequence."""
        # XXX: this is a blanket implementation, implementors are expected to specialize it
        for byte in memoryview(data).cast('B'):
            self.write_byte(byte)

    def write_struct(self, format: str, *values: Any) -> None:
        """Pack values with `struct.pack` and write the result."""
        self.write_bytes(struct.pack(format, *values))
