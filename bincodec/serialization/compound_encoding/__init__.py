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
This module was made to hold compound encoding implementations.

Compound encoders are encoders that are generic in some way and will delegate the encoding of some portion to another
encoder. For example a `list[T]` encoder writes the element count and delegates each element to an encoder that knows
how to encode `T`.

The general organization should be that each submodule `x` deals with a single type and look like this:

    def encode_x(serializer: Serializer, value: ValueType, ...config params...) -> None:
        ...

    def decode_x(deserializer: Deserializer, ...config params...) -> Result[ValueType, SerializationError]:
        ...

Decoders stop at the first inner `Err` and return it unchanged. The "config params" are optional and specific to each
encoder. Submodules should not have to take into consideration how types are mapped to encoders.
"""

from typing import Protocol, TypeVar

from bincodec.serialization.deserializer import Deserializer
from bincodec.serialization.exceptions import OutOfDataError, SerializationError
from bincodec.serialization.serializer import Serializer
from bincodec.utils.result import Err, Ok, Result

T_co = TypeVar('T_co', covariant=True)
T_contra = TypeVar('T_contra', contravariant=True)


class Decoder(Protocol[T_co]):
    def __call__(self, deserializer: Deserializer, /) -> Result[T_co, SerializationError]:
        ...


class Encoder(Protocol[T_contra]):
    def __call__(self, serializer: Serializer, value: T_contra, /) -> None:
        ...


def check_enough_data(deserializer: Deserializer, count: int, min_item_size: int) -> Result[None, SerializationError]:
    """ Fail early when `count` items of at least `min_item_size` bytes can't possibly fit in what is left.

    Zero-sized items can't be checked this way, for those the count is trusted.
    """
    if min_item_size > 0 and count * min_item_size > deserializer.remaining():
        return Err(OutOfDataError(f'{count} items need at least {count * min_item_size} bytes'))
    return Ok(None)
