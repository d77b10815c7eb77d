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

class SerializationError(ValueError):
    """Base class for every decoding failure.

    Decoders never raise these for malformed input, they are wrapped in an `Err` and returned.
    """


class OutOfDataError(SerializationError):
    """Fewer bytes remain than what the value being decoded requires."""


class TrailingDataError(SerializationError):
    """An exact decode finished with bytes left over."""


class InvalidTagError(SerializationError):
    """The tag byte of a sum type does not match any declared variant."""


class InvalidUtf8Error(SerializationError):
    """A string's byte content is not valid UTF-8."""


class InvalidScalarError(SerializationError):
    """A decoded u32 is not a Unicode scalar value."""


class InvalidBoolError(SerializationError):
    """A boolean byte is neither 0 nor 1."""


class InvalidValueError(SerializationError):
    """The decoded fields were rejected when building the final value."""


class UnsupportedTypeError(TypeError):
    """A type annotation cannot be mapped to any codec."""


class TooManyVariantsError(UnsupportedTypeError):
    """A sum type declares more variants than a tag byte can address."""
