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
A small `Result` type inspired by Rust, used to report decode failures as values instead of raising.

Only the methods that make sense for the decoding path are implemented (https://doc.rust-lang.org/std/result/).

>>> Ok(1).map(lambda x: x + 1)
Ok(2)
>>> Err('bad').map(lambda x: x + 1)
Err('bad')
>>> Ok(1).unwrap_or(0), Err('bad').unwrap_or(0)
(1, 0)

Functions decorated with `propagate_result` can use `unwrap_or_propagate()` the same way `?` is used in Rust:

>>> @propagate_result
... def double(r):
...     return Ok(2 * r.unwrap_or_propagate())
>>> double(Ok(21))
Ok(42)
>>> double(Err('bad'))
Err('bad')
"""

from __future__ import annotations

import functools
import os
import traceback
from collections import deque
from typing import Any, Callable, Generic, Literal, NoReturn, ParamSpec, TypeAlias, TypeVar

T = TypeVar('T', covariant=True)  # Success type
E = TypeVar('E', covariant=True)  # Error type
U = TypeVar('U')
P = ParamSpec('P')

_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class Ok(Generic[T]):
    """
    A value that indicates success and which stores arbitrary data for the return value.
    """

    __slots__ = ('_value',)
    __match_args__ = ('_value',)

    def __init__(self, value: T) -> None:
        self._value = value

    def __repr__(self) -> str:
        return f'Ok({self._value!r})'

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Ok) and self._value == other._value

    def __ne__(self, other: Any) -> bool:
        return not (self == other)

    def __hash__(self) -> int:
        return hash((True, self._value))

    def is_ok(self) -> Literal[True]:
        return True

    def is_err(self) -> Literal[False]:
        return False

    def ok(self) -> T:
        return self._value

    def err(self) -> None:
        return None

    def expect(self, _message: str) -> T:
        return self._value

    def unwrap(self) -> T:
        return self._value

    def unwrap_err(self) -> NoReturn:
        raise UnwrapError(self, 'Called `Result.unwrap_err()` on an `Ok` value')

    def unwrap_or(self, _default: U) -> T:
        return self._value

    def unwrap_or_raise(self) -> T:
        return self._value

    def unwrap_or_propagate(self) -> T:
        return self._value

    def map(self, op: Callable[[T], U]) -> Ok[U]:
        """
        The contained result is `Ok`, so return `Ok` with original value mapped to a new value using `op`.
        """
        return Ok(op(self._value))


class Err(Generic[E]):
    """
    A value that signifies failure and which stores arbitrary data for the error.

    When the error is an exception a formatted traceback is kept in `traceback`, this is the only diagnostic context
    that survives since the exception itself is never raised.
    """

    __slots__ = ('_value', 'traceback')
    __match_args__ = ('_value',)

    def __init__(self, value: E, cause: Exception | None = None) -> None:
        self._value = value
        self.traceback: str | None

        if cause is not None:
            # when a cause is provided, we use it.
            assert cause.__traceback__ is not None, 'cause must only be used from a try-except context'
            if isinstance(value, BaseException) and value.__cause__ is None:
                value.__cause__ = cause
            self.traceback = traceback.format_exc()
            return

        if not isinstance(value, Exception):
            # when value is not an Exception, we don't try to extract a traceback.
            self.traceback = None
            return

        if value.__traceback__ is not None:
            self.traceback = ''.join(traceback.format_exception(value))
            return

        # when value is an exception without a traceback, we have to capture it ourselves.
        self.traceback = self._capture_traceback(value)

    @staticmethod
    def _capture_traceback(e: Exception) -> str:
        """
        Capture the current call stack as a traceback string, formatted like a real exception.

        Only the innermost frames that belong to this package are kept.
        """
        # drop Err.__init__ and Err._capture_traceback
        stack = traceback.extract_stack()[:-2]

        filtered_stack: deque[traceback.FrameSummary] = deque()
        for frame in reversed(stack):
            if not frame.filename.startswith(_PACKAGE_DIR):
                break
            filtered_stack.appendleft(frame)

        tb_lines = ['Traceback (most recent call last):\n']
        tb_lines.extend(traceback.format_list(filtered_stack))
        tb_lines.append(f'{type(e).__module__}:{type(e).__qualname__}: {e}\n')
        return ''.join(tb_lines)

    def __repr__(self) -> str:
        return f'Err({self._value!r})'

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Err) and self._value == other._value

    def __ne__(self, other: Any) -> bool:
        return not (self == other)

    def __hash__(self) -> int:
        return hash((False, self._value))

    def is_ok(self) -> Literal[False]:
        return False

    def is_err(self) -> Literal[True]:
        return True

    def ok(self) -> None:
        return None

    def err(self) -> E:
        return self._value

    def expect(self, message: str) -> NoReturn:
        exc = UnwrapError(self, f'{message}: {self._value!r}')
        if isinstance(self._value, BaseException):
            raise exc from self._value
        raise exc

    def unwrap(self) -> NoReturn:
        exc = UnwrapError(self, f'Called `Result.unwrap()` on an `Err` value: {self._value!r}')
        if isinstance(self._value, BaseException):
            raise exc from self._value
        raise exc

    def unwrap_err(self) -> E:
        return self._value

    def unwrap_or(self, default: U) -> U:
        return default

    def unwrap_or_raise(self) -> NoReturn:
        """
        The contained result is `Err`, so raise the exception with the value.
        """
        assert isinstance(self._value, Exception), (
            f'called `Result.unwrap_or_raise()` on non-exception value: {self._value}'
        )
        raise self._value

    def unwrap_or_propagate(self) -> NoReturn:
        """
        The contained result is `Err`, bail out to the closest function decorated with `propagate_result`.
        """
        raise _ResultPropagationException(self)

    def map(self, _op: Callable[[T], U]) -> Err[E]:
        return self


Result: TypeAlias = Ok[T] | Err[E]


class UnwrapError(Exception):
    """
    Exception raised from `.unwrap_*` and `.expect_*` calls.

    The original `Result` can be accessed via the `.result` attribute.
    """

    _result: Result[Any, Any]

    def __init__(self, result: Result[Any, Any], message: str) -> None:
        super().__init__(message)
        self._result = result

    @property
    def result(self) -> Result[Any, Any]:
        return self._result


class _ResultPropagationException(Exception):
    def __init__(self, err: Err[E]) -> None:
        super().__init__('did you forget to annotate the function/method with `@propagate_result`?')
        self.err = err


def propagate_result(f: Callable[P, Result[T, E]]) -> Callable[P, Result[T, E]]:
    """
    Decorator to turn a function into one that allows using unwrap_or_propagate.
    """
    @functools.wraps(f)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, E]:
        try:
            return f(*args, **kwargs)
        except _ResultPropagationException as e:
            return e.err  # type: ignore[return-value]

    return wrapper

