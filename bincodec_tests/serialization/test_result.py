import pytest

from bincodec.serialization import OutOfDataError
from bincodec.utils.result import Err, Ok, Result, UnwrapError, propagate_result


def test_ok_accessors() -> None:
    result: Result[int, str] = Ok(1)
    assert result.is_ok()
    assert not result.is_err()
    assert result.ok() == 1
    assert result.err() is None
    assert result.unwrap() == 1
    assert result.unwrap_or(2) == 1
    assert result.expect('never') == 1
    with pytest.raises(UnwrapError):
        result.unwrap_err()


def test_err_accessors() -> None:
    result: Result[int, str] = Err('bad')
    assert result.is_err()
    assert not result.is_ok()
    assert result.ok() is None
    assert result.err() == 'bad'
    assert result.unwrap_err() == 'bad'
    assert result.unwrap_or(2) == 2
    with pytest.raises(UnwrapError) as exc_info:
        result.unwrap()
    assert exc_info.value.result is result
    with pytest.raises(UnwrapError, match='custom message'):
        result.expect('custom message')


def test_err_unwrap_chains_exception() -> None:
    error = OutOfDataError('not enough bytes to read')
    with pytest.raises(UnwrapError) as exc_info:
        Err(error).unwrap()
    assert exc_info.value.__cause__ is error
    with pytest.raises(OutOfDataError):
        Err(error).unwrap_or_raise()


def test_equality_and_hash() -> None:
    assert Ok(1) == Ok(1)
    assert Ok(1) != Ok(2)
    assert Ok(1) != Err(1)
    assert Err('a') == Err('a')
    assert len({Ok(1), Ok(1), Err(1)}) == 2


def test_map() -> None:
    assert Ok(2).map(lambda x: x * 3) == Ok(6)
    assert Err('e').map(lambda x: x * 3) == Err('e')


def test_propagate_result_short_circuits() -> None:
    calls = []

    @propagate_result
    def add(a: Result[int, str], b: Result[int, str]) -> Result[int, str]:
        x = a.unwrap_or_propagate()
        calls.append('a')
        y = b.unwrap_or_propagate()
        calls.append('b')
        return Ok(x + y)

    assert add(Ok(1), Ok(2)) == Ok(3)
    assert calls == ['a', 'b']
    calls.clear()
    assert add(Err('first'), Ok(2)) == Err('first')
    assert calls == []
    assert add(Ok(1), Err('second')) == Err('second')
    assert calls == ['a']


def test_err_keeps_traceback() -> None:
    err = Err(OutOfDataError('not enough bytes to read'))
    assert err.traceback is not None
    assert 'OutOfDataError: not enough bytes to read' in err.traceback

    try:
        b'\xff'.decode('utf-8')
    except UnicodeDecodeError as e:
        err = Err(ValueError('invalid'), cause=e)
    assert err.traceback is not None
    assert 'UnicodeDecodeError' in err.traceback
    assert isinstance(err.unwrap_err().__cause__, UnicodeDecodeError)

    assert Err('not an exception').traceback is None
