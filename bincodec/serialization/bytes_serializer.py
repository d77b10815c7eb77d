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

from typing_extensions import override

from .serializer import Serializer
from .types import Buffer


class BytesSerializer(Serializer):
    """Simple implementation of Serializer to write to memory.

    This implementation defers joining everything until finalize is called, before that every write is stored as a
    memoryview in a list.
    """

    def __init__(self) -> None:
        self._parts: list[memoryview] = []
        self._pos: int = 0

    @override
    def finalize(self) -> memoryview:
        result = memoryview(b''.join(self._parts))
        del self._parts
        return result

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def write_byte(self, data: int) -> None:
        if not 0 <= data <= 0xff:
            raise ValueError('byte must be in range(0, 256)')
        self._parts.append(memoryview(bytes((data,))))
        self._pos += 1

    @override
    def write_bytes(self, data: Buffer) -> None:
        view = memoryview(data).cast('B')
        self._parts.append(view)
        self._pos += len(view)


class BytearraySerializer(Serializer):
    """Serializer that appends directly to a caller-owned bytearray.

    Bytes already in the buffer are left untouched, `cur_pos` only counts what this serializer wrote.
    """

    def __init__(self, out: bytearray) -> None:
        self._out = out
        self._start = len(out)

    @override
    def finalize(self) -> bytearray:
        return self._out

    @override
    def cur_pos(self) -> int:
        return len(self._out) - self._start

    @override
    def write_byte(self, data: int) -> None:
        if not 0 <= data <= 0xff:
            raise ValueError('byte must be in range(0, 256)')
        self._out.append(data)

    @override
    def write_bytes(self, data: Buffer) -> None:
        self._out += memoryview(data)
