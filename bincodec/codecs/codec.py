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

from abc import ABC, abstractmethod
from typing import Generic, NamedTuple, TypeVar, final

from typing_extensions import Self

from bincodec.codecs.utils import TypeAliasMap, TypeToCodecMap, get_aliased_type, get_usable_origin_type
from bincodec.serialization import Deserializer, SerializationError, Serializer
from bincodec.serialization.types import Buffer
from bincodec.utils.result import Ok, Result, propagate_result

T = TypeVar('T')


class Codec(ABC, Generic[T]):
    """ This class is used to model a type with a known type signature and how it will be (de)serialized.

    Codecs are built from type annotations with `Codec.from_type` (or `make_codec` for the default maps), compound
    codecs hold the codecs of their arguments, so a single instance knows how to encode any value of the annotated
    type, however deeply nested.

    Instances are immutable once built and can be shared freely.
    """

    class TypeMap(NamedTuple):
        alias_map: TypeAliasMap
        codecs_map: TypeToCodecMap

    # XXX: subclasses must override this if they need any properties
    __slots__ = ()

    # XXX: subclasses must initialize this property
    _is_hashable: bool

    @final
    @staticmethod
    def from_type(type_: type[T], /, *, type_map: TypeMap) -> Codec[T]:
        """ Instantiate a Codec instance from a type signature using the given maps.

        A `codecs_map` associates concrete types to concrete Codec classes, while an `alias_map` associates types with
        substitute types to use instead.
        """
        usable_origin = get_usable_origin_type(type_, type_map=type_map)
        codec_class = type_map.codecs_map[usable_origin]
        aliased_type = get_aliased_type(type_, type_map.alias_map)
        return codec_class._from_type(aliased_type, type_map=type_map)

    @final
    @staticmethod
    def check_type(type_: type[T], /, *, type_map: TypeMap) -> None:
        """ Raise a TypeError if no codec can be made for the given type, the codec itself is discarded."""
        Codec.from_type(type_, type_map=type_map)

    @classmethod
    def _from_type(cls, type_: type[T], /, *, type_map: TypeMap) -> Self:
        """ Instantiate a Codec instance from a type signature.

        The implementation is expected to inspect the given type's origin and args to check for compatibility and to
        decide on using `Codec.from_type`, forwarding the given `type_map` to continue instantiating Codec
        specializations, this is the case particularly for compound codecs, like OptionalCodec or DictCodec.
        """
        # XXX: a Codec that is only meant for local use does not need to implement _from_type
        raise TypeError(f'{cls} is not compatible with use in a Codec.TypeMap')

    @final
    def is_hashable(self) -> bool:
        """ Indicates whether the values produced by this codec are expected to be hashable.

        This is used to prevent unhashable types from being used as keys in dicts or members in sets."""
        return self._is_hashable

    @final
    def min_size(self) -> int:
        """ The least amount of bytes any encoded value of this type takes.
        """
        return self._min_size()

    @final
    def check_value(self, value: T, /) -> None:
        """ Raise a TypeError or ValueError if the value is not compatible.

        A value being compatible is more than just having the correct instance, for example if the value is a dict, all
        the dict's keys and values must be checked for compatibility.
        """
        # XXX: subclasses must implement Codec._check_value, not Codec.check_value
        self._check_value(value, deep=True)

    @final
    def serialize(self, serializer: Serializer, value: T, /) -> None:
        """ Serialize a value instance according to the signature that was abstracted.

        Serialization includes calling check_value while the value is being serialized, so calling check_value before
        calling serialize is not needed.
        """
        # XXX: subclasses must implement Codec._serialize, not Codec.serialize
        self._check_value(value, deep=False)
        self._serialize(serializer, value)

    @final
    def deserialize(self, deserializer: Deserializer, /) -> Result[T, SerializationError]:
        """ Deserialize a value instance according to the signature that was abstracted.

        Malformed input never raises, the failure is returned as an `Err` and whatever was read is simply lost.
        """
        # XXX: subclasses must implement Codec._deserialize, not Codec.deserialize
        return self._deserialize(deserializer)

    @final
    def to_bytes(self, value: T, /) -> bytes:
        """ Shortcut to quickly convert a value T to `bytes` and avoid using the serialization system.
        """
        serializer = Serializer.build_bytes_serializer()
        self.serialize(serializer, value)
        return bytes(serializer.finalize())

    @final
    def unparse(self, value: T, out: bytearray, /) -> None:
        """ Append the encoding of value to a buffer owned by the caller.

        If the value turns out to be invalid halfway through, whatever was appended is removed before raising.
        """
        start = len(out)
        try:
            self.serialize(Serializer.build_bytearray_serializer(out), value)
        except BaseException:
            del out[start:]
            raise

    @final
    @propagate_result
    def parse(self, data: Buffer, /) -> Result[tuple[T, memoryview], SerializationError]:
        """ Decode a value from the start of data and return it together with what was not consumed.
        """
        deserializer = Deserializer.build_bytes_deserializer(data)
        value = self.deserialize(deserializer).unwrap_or_propagate()
        return Ok((value, deserializer.read_all()))

    @final
    @propagate_result
    def from_bytes(self, data: Buffer, /) -> Result[T, SerializationError]:
        """ Decode a value that takes exactly all of data, trailing bytes are an error.
        """
        deserializer = Deserializer.build_bytes_deserializer(data)
        value = self.deserialize(deserializer).unwrap_or_propagate()
        deserializer.finalize().unwrap_or_propagate()
        return Ok(value)

    @abstractmethod
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        """ Inner implementation of `Codec.check_value`, should raise when the given value is not valid.

        Compound values should use `Codec._check_value` on the inner type(s) instead of `Codec.check_value` and pass
        the appropriate deep argument.
        """
        raise NotImplementedError

    @abstractmethod
    def _serialize(self, serializer: Serializer, value: T, /) -> None:
        """ Inner implementation of `serialize`, you can assume that the give value has been "shallow checked".

        When implementing the serialization with compound encoders, `Codec.serialize` should be passed as an `Encoder`
        instead of `Codec._serialize`, that way the next `Codec._serialize` implementation will be able to assume that
        the value was checked.
        """
        raise NotImplementedError

    @abstractmethod
    def _deserialize(self, deserializer: Deserializer, /) -> Result[T, SerializationError]:
        """ Inner implementation of `deserialize`, it is expected that deserializers always produce valid values.
        """
        raise NotImplementedError

    @abstractmethod
    def _min_size(self) -> int:
        raise NotImplementedError
