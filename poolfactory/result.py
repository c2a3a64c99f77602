"""
Tagged success/failure values used by every fallible pool operation.

``Ok`` and ``Err`` are separate classes, so a result is told apart by its tag
rather than its payload: ``Ok("boom") != Err("boom")``.

Example::

    result = pool.checkout()
    result.match(
        lambda handle: handle.release(),
        lambda error: logger.warning("checkout failed: %s", error),
    )
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, NoReturn, TypeVar, Union

from .exceptions import UnwrapError

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result wrapping ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        """Transform the value."""
        return Ok(fn(self.value))

    def map_err(self, fn: Callable[[Any], Any]) -> Ok[T]:
        return self

    def and_then(self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain an operation that itself returns a result."""
        return fn(self.value)

    def or_else(self, fn: Callable[[Any], Result[T, F]]) -> Ok[T]:
        return self

    def value_or(self, default: T) -> T:
        return self.value

    def match(self, on_ok: Callable[[T], U], on_err: Callable[[Any], U]) -> U:
        return on_ok(self.value)

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self) -> NoReturn:
        raise UnwrapError(self.value, f"Called unwrap_err on Ok({self.value!r})")


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed result wrapping ``error``."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def map(self, fn: Callable[[Any], Any]) -> Err[E]:
        return self

    def map_err(self, fn: Callable[[E], F]) -> Err[F]:
        """Transform the error."""
        return Err(fn(self.error))

    def and_then(self, fn: Callable[[Any], Any]) -> Err[E]:
        return self

    def or_else(self, fn: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """Recover from the error with an operation returning a result."""
        return fn(self.error)

    def value_or(self, default: T) -> T:
        return default

    def match(self, on_ok: Callable[[Any], U], on_err: Callable[[E], U]) -> U:
        return on_err(self.error)

    def unwrap(self) -> NoReturn:
        """
        Raise the wrapped error.

        Raises:
            The wrapped exception itself, or UnwrapError if the payload
            is not an exception

        """
        if isinstance(self.error, BaseException):
            raise self.error
        raise UnwrapError(self.error, f"Called unwrap on Err({self.error!r})")

    def unwrap_err(self) -> E:
        return self.error


Result = Union[Ok[T], Err[E]]


def is_ok(result: Result[T, E]) -> bool:
    return isinstance(result, Ok)


def is_err(result: Result[T, E]) -> bool:
    return isinstance(result, Err)


def as_result(value: Any) -> Result[Any, Any]:
    """Wrap ``value`` in ``Ok`` unless it already is a result."""
    if isinstance(value, (Ok, Err)):
        return value
    return Ok(value)
