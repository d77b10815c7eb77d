import pytest

from bincodec.serialization import Deserializer, OutOfDataError, SerializationError, Serializer, TrailingDataError


def test_read_bytes_shrinks_view() -> None:
    data = bytes(range(10))
    de = Deserializer.build_bytes_deserializer(data)
    assert de.remaining() == 10
    assert bytes(de.read_bytes(3).unwrap()) == b'\x00\x01\x02'
    assert de.remaining() == 7
    assert de.read_byte().unwrap() == 3
    assert bytes(de.peek_bytes(2).unwrap()) == b'\x04\x05'
    assert de.peek_byte().unwrap() == 4
    assert de.remaining() == 6
    assert bytes(de.read_all()) == bytes(range(4, 10))
    assert de.is_empty()
    assert de.finalize().is_ok()
    # the caller's data is never touched
    assert data == bytes(range(10))


def test_out_of_data() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x02')
    err = de.read_bytes(3).unwrap_err()
    assert isinstance(err, OutOfDataError)
    assert str(err) == 'not enough bytes to read: needed 3, have 2'
    # a failed read consumes nothing
    assert de.remaining() == 2
    de.read_bytes(2).unwrap()
    assert isinstance(de.read_byte().unwrap_err(), OutOfDataError)
    assert isinstance(de.peek_byte().unwrap_err(), OutOfDataError)


def test_negative_read() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01')
    assert isinstance(de.read_bytes(-1).unwrap_err(), SerializationError)


def test_trailing_data() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x02')
    de.read_byte().unwrap()
    err = de.finalize().unwrap_err()
    assert isinstance(err, TrailingDataError)
    assert str(err) == 'trailing data: 1 bytes left'


def test_structs() -> None:
    se = Serializer.build_bytes_serializer()
    se.write_struct('<HI', 1, 2)
    assert se.cur_pos() == 6
    data = bytes(se.finalize())
    assert data == b'\x01\x00\x02\x00\x00\x00'
    de = Deserializer.build_bytes_deserializer(data)
    assert de.peek_struct('<H').unwrap() == (1,)
    assert de.read_struct('<HI').unwrap() == (1, 2)
    assert isinstance(de.read_struct('<H').unwrap_err(), OutOfDataError)


def test_memoryview_and_bytearray_input() -> None:
    data = bytearray(b'\x00abc')
    de = Deserializer.build_bytes_deserializer(memoryview(data)[1:])
    assert bytes(de.read_bytes(3).unwrap()) == b'abc'
    de = Deserializer.build_bytes_deserializer(data)
    assert de.read_byte().unwrap() == 0


def test_bytearray_serializer_appends() -> None:
    out = bytearray(b'prefix')
    se = Serializer.build_bytearray_serializer(out)
    se.write_byte(1)
    se.write_bytes(b'\x02\x03')
    assert se.cur_pos() == 3
    se.finalize()
    assert out == b'prefix\x01\x02\x03'


@pytest.mark.parametrize('value', [-1, 256])
def test_write_byte_out_of_range(value: int) -> None:
    se = Serializer.build_bytes_serializer()
    with pytest.raises(ValueError):
        se.write_byte(value)
