"""Result type: Ok[T] | Err[E] for explicit error handling.

Example:
    ```python
    from oxide import Err, Ok, Result

    def parse_port(raw: str) -> Result[int, str]:
        if not raw.isdigit():
            return Err(f'not a number: {raw!r}')
        return Ok(int(raw))

    parse_port('8080').map(lambda p: p + 1)           # Ok(value=8081)
    parse_port('http').unwrap_or(80)                   # 80
    parse_port('http').or_else(lambda e: Ok(len(e)))  # Ok(value=20)
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING, Any, Final, NoReturn, Self, TypeIs

import msgspec

from oxide._compare import identical
from oxide._sealed import SealedMeta, SealedStructMeta, seal_module
from oxide.errors import UnwrapError

if TYPE_CHECKING:
    from oxide.option import NothingType, Option, Some

__all__ = ['Err', 'Ok', 'Result']

UNWRAP_MESSAGE: Final = 'Failed to unwrap Result (found Err)'
UNWRAP_ERR_MESSAGE: Final = 'Failed to unwrap_err Result (found Ok)'


def _cause(error: object) -> BaseException | None:
    return error if isinstance(error, BaseException) else None


# ---------------------------------------------------------------------
# Result[T, E] base
# ---------------------------------------------------------------------


class Result[T, E = Exception](metaclass=SealedMeta):
    """Discriminated union: Ok[T] | Err[E].

    Result is the shared base of both variants. It is never instantiated
    directly; use `Ok(value)` or `Err(error)`. Exhaustive handling is a
    `match` on the variant classes:

        match res:
            case Ok(value): ...
            case Err(error): ...
    """

    __slots__ = ()

    # predicates
    def is_ok(self) -> TypeIs[Ok[T]]: ...
    def is_err(self) -> TypeIs[Err[E]]: ...

    def is_(self, other: object) -> TypeIs[Result[Any, Any]]:
        """Return True if `other` is a Result of the same variant.

        This is a type guard, not value equality: `Ok(1).is_(Ok(2))` is True.
        """
        return isinstance(other, Result) and self.is_ok() == other.is_ok()

    def eq(self, other: object) -> bool: ...

    def neq(self, other: object) -> bool:
        """Return True unless `other` is `eq` to this Result."""
        return not self.eq(other)

    # extraction
    def into(self) -> T | None: ...
    def expect(self, msg: str) -> T: ...
    def expect_err(self, msg: str) -> E: ...
    def unwrap(self) -> T: ...
    def unwrap_err(self) -> E: ...
    def unwrap_or(self, default: T) -> T: ...
    def unwrap_or_else(self, f: Callable[[E], T]) -> T: ...
    def unwrap_unchecked(self) -> T | E: ...

    # combinators
    def or_[F](self, other: Result[T, F]) -> Result[T, F]: ...
    def or_else[F](self, f: Callable[[E], Result[T, F]]) -> Result[T, F]: ...
    def and_[U](self, other: Result[U, E]) -> Result[U, E]: ...
    def and_then[U](self, f: Callable[[T], Result[U, E]]) -> Result[U, E]: ...
    def map[U](self, f: Callable[[T], U]) -> Result[U, E]: ...
    def map_err[F](self, f: Callable[[E], F]) -> Result[T, F]: ...
    def map_or[U](self, default: U, f: Callable[[T], U]) -> U: ...
    def map_or_else[U](self, default: Callable[[E], U], f: Callable[[T], U]) -> U: ...
    def flatten(self) -> Result[Any, Any]: ...
    def inspect(self, f: Callable[[T], object]) -> Self: ...
    def inspect_err(self, f: Callable[[E], object]) -> Self: ...

    # conversion
    def ok(self) -> Option[T]: ...
    def err(self) -> Option[E]: ...

    # -----------------------------------------------------------------
    # Static guards, capture and aggregation
    # -----------------------------------------------------------------

    @staticmethod
    def is_result(value: object) -> TypeIs[Result[Any, Any]]:
        """Return True if `value` is a Result (Ok or Err).

        Examples:
            >>> Result.is_result(Ok(1)), Result.is_result(Err('e'))
            (True, True)
            >>> Result.is_result(1)
            False
        """
        return isinstance(value, Result)

    @staticmethod
    def safe[U](fn: Callable[..., U], /, *args: Any, **kwargs: Any) -> Result[U, Exception]:
        """Call `fn(*args, **kwargs)`, returning Ok(result) or Err(exception).

        Example:
            ```python
            Result.safe(int, '42')    # Ok(value=42)
            Result.safe(int, 'nope')  # Err(error=ValueError(...))
            ```
        """
        from oxide.capture import call_result

        return call_result(fn, *args, **kwargs)

    @staticmethod
    def safe_async[U](awaitable: Awaitable[U], /) -> Awaitable[Result[U, Exception]]:
        """Return a coroutine resolving to Ok(result), or Err(exception) if `awaitable` raised."""
        from oxide.capture import await_result

        return await_result(awaitable)

    @staticmethod
    def collect[U, F](results: Iterable[Result[U, F]]) -> Result[list[U], F]:
        """Collect an iterable of Results into a Result of list.

        Short-circuits on the first Err encountered, returning that Err
        unchanged; later items of a generator are never produced.

        Examples:
            >>> Result.collect([Ok(1), Ok(2), Ok(3)])
            Ok(value=[1, 2, 3])
            >>> Result.collect([Ok(1), Err('fail'), Ok(3)])
            Err(error='fail')
        """
        values: list[U] = []
        for res in results:
            if not isinstance(res, Ok):
                return res
            values.append(res.value)
        return Ok(values)

    @staticmethod
    def all[U, F](*results: Result[U, F]) -> Result[list[U], F]:
        """Return Ok(list of values) if every Result is Ok, else the first Err."""
        return Result.collect(results)

    @staticmethod
    def any[U, F](first: Result[U, F], /, *rest: Result[U, F]) -> Result[U, F]:
        """Return the first Ok, or the last Err if every Result is an Err.

        Both are returned as the same instance that was passed in.

        Examples:
            >>> Result.any(Err('a'), Ok(2), Ok(3))
            Ok(value=2)
            >>> Result.any(Err('a'), Err('b'))
            Err(error='b')
        """
        last = first
        for res in (first, *rest):
            if isinstance(res, Ok):
                return res
            last = res
        return last


# ---------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------


class Ok[T](msgspec.Struct, Result[T, Any], metaclass=SealedStructMeta, frozen=True, gc=False):
    """Success variant of Result containing a value of type T.

    Ok represents the successful outcome of an operation. It wraps a value
    that can be extracted, transformed, or propagated through a chain of
    Result-returning operations.

    Examples:
        >>> ok = Ok(42)
        >>> ok.unwrap()
        42
        >>> ok.map(lambda x: x * 2)
        Ok(value=84)
    """

    value: T

    def is_ok(self) -> TypeIs[Ok[T]]:
        """Return True if the result is Ok.

        This method provides type narrowing - after checking is_ok(),
        the type checker knows the result is Ok[T].
        """
        return True

    def is_err(self) -> TypeIs[Err[Any]]:
        """Return False since this is Ok."""
        return False

    def eq(self, other: object) -> bool:
        """Return True if `other` is Ok holding the identical value."""
        return isinstance(other, Ok) and identical(self.value, other.value)

    def into(self) -> T:
        """Return the contained value."""
        return self.value

    def expect(self, msg: str) -> T:  # noqa: ARG002
        """Return the contained Ok value, ignoring the message."""
        return self.value

    def expect_err(self, msg: str) -> NoReturn:
        """Raise an exception with a custom message since this is Ok.

        Raises:
            UnwrapError: Always, with the custom message.
        """
        raise UnwrapError(msg)

    def unwrap(self) -> T:
        """Return the contained Ok value.

        Since this is Ok, this always succeeds.
        """
        return self.value

    def unwrap_err(self) -> NoReturn:
        """Raise an exception since this is Ok.

        Raises:
            UnwrapError: Always, since Ok has no error to unwrap.
        """
        raise UnwrapError(UNWRAP_ERR_MESSAGE)

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        """Return the contained Ok value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, f: Callable[[Any], T]) -> T:  # noqa: ARG002
        """Return the contained Ok value, ignoring the fallback function."""
        return self.value

    def unwrap_unchecked(self) -> T:
        """Return the contained value."""
        return self.value

    def or_[F](self, other: Result[T, F]) -> Self:  # noqa: ARG002
        """Return self since this is Ok."""
        return self

    def or_else[F](self, f: Callable[[Any], Result[T, F]]) -> Self:  # noqa: ARG002
        """Return self unchanged since this is Ok."""
        return self

    def and_[U, E](self, other: Result[U, E]) -> Result[U, E]:
        """Return other since this is Ok."""
        return other

    def and_then[U, E](self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Apply a function that returns a Result to the contained value.

        Also known as flatmap or bind.

        Args:
            f: Function that takes T and returns Result[U, E].

        Returns:
            The Result returned by f.
        """
        return f(self.value)

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Ok value.

        Returns:
            Ok containing the result of applying f to the value.
        """
        return Ok(f(self.value))

    def map_err[F](self, f: Callable[[Any], F]) -> Self:  # noqa: ARG002
        """Return self unchanged since this is Ok."""
        return self

    def map_or[U](self, default: U, f: Callable[[T], U]) -> U:  # noqa: ARG002
        """Return f(value), ignoring the default."""
        return f(self.value)

    def map_or_else[U](self, default: Callable[[Any], U], f: Callable[[T], U]) -> U:  # noqa: ARG002
        """Return f(value) without calling the default function."""
        return f(self.value)

    def flatten(self) -> Result[Any, Any]:
        """Flatten a nested Result.

        Converts Result[Result[T, E], E] into Result[T, E]. A non-Result
        value is left wrapped.
        """
        if isinstance(self.value, Result):
            return self.value
        return self

    def inspect(self, f: Callable[[T], object]) -> Self:
        """Call f with the value for side effects and return self."""
        f(self.value)
        return self

    def inspect_err(self, f: Callable[[Any], object]) -> Self:  # noqa: ARG002
        """Return self without calling f."""
        return self

    def ok(self) -> Some[T]:
        """Convert to Option, returning Some(value)."""
        from oxide.option import Some

        return Some(self.value)

    def err(self) -> NothingType:
        """Convert to Option, returning Nothing since this is Ok."""
        from oxide.option import Nothing

        return Nothing


class Err[E](msgspec.Struct, Result[Any, E], metaclass=SealedStructMeta, frozen=True, gc=False):
    """Error variant of Result containing an error of type E.

    Err represents the failure outcome of an operation. It wraps an error
    value that can be transformed, recovered from, or propagated.

    Examples:
        >>> err = Err('something went wrong')
        >>> err.is_err()
        True
        >>> err.unwrap_or(0)
        0
    """

    error: E

    def is_ok(self) -> TypeIs[Ok[Any]]:
        """Return False since this is Err."""
        return False

    def is_err(self) -> TypeIs[Err[E]]:
        """Return True if the result is Err.

        This method provides type narrowing - after checking is_err(),
        the type checker knows the result is Err[E].
        """
        return True

    def eq(self, other: object) -> bool:
        """Return True if `other` is Err holding the identical error."""
        return isinstance(other, Err) and identical(self.error, other.error)

    def into(self) -> None:
        """Return None since there is no Ok value."""
        return None

    def expect(self, msg: str) -> NoReturn:
        """Raise an exception with a custom message.

        Raises:
            UnwrapError: Always, with the custom message. An exception
                error payload is attached as the cause.
        """
        raise UnwrapError(msg) from _cause(self.error)

    def expect_err(self, msg: str) -> E:  # noqa: ARG002
        """Return the contained error, ignoring the message."""
        return self.error

    def unwrap(self) -> NoReturn:
        """Raise an exception since this is Err.

        Raises:
            UnwrapError: Always, since Err has no Ok value to unwrap. An
                exception error payload is attached as the cause.
        """
        raise UnwrapError(UNWRAP_MESSAGE) from _cause(self.error)

    def unwrap_err(self) -> E:
        """Return the contained error."""
        return self.error

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Err."""
        return default

    def unwrap_or_else[T](self, f: Callable[[E], T]) -> T:
        """Compute a default value from the error since this is Err."""
        return f(self.error)

    def unwrap_unchecked(self) -> E:
        """Return the raw payload, which for Err is the error."""
        return self.error

    def or_[T, F](self, other: Result[T, F]) -> Result[T, F]:
        """Return other since this is Err."""
        return other

    def or_else[T, F](self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """Apply a recovery function to the error.

        Args:
            f: Function that takes the error and returns a new Result.

        Returns:
            The Result returned by f.
        """
        return f(self.error)

    def and_[U](self, other: Result[U, E]) -> Self:  # noqa: ARG002
        """Return self since this is Err."""
        return self

    def and_then[U](self, f: Callable[[Any], Result[U, E]]) -> Self:  # noqa: ARG002
        """Return self unchanged since this is Err."""
        return self

    def map[U](self, f: Callable[[Any], U]) -> Self:  # noqa: ARG002
        """Return self unchanged since this is Err."""
        return self

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Apply a function to the contained error.

        Args:
            f: Function to apply to the error value.

        Returns:
            Err containing the transformed error.
        """
        return Err(f(self.error))

    def map_or[U](self, default: U, f: Callable[[Any], U]) -> U:  # noqa: ARG002
        """Return the default since this is Err."""
        return default

    def map_or_else[U](self, default: Callable[[E], U], f: Callable[[Any], U]) -> U:  # noqa: ARG002
        """Compute the default from the error since this is Err."""
        return default(self.error)

    def flatten(self) -> Self:
        """Return self since this is Err (nothing to flatten)."""
        return self

    def inspect(self, f: Callable[[Any], object]) -> Self:  # noqa: ARG002
        """Return self without calling f."""
        return self

    def inspect_err(self, f: Callable[[E], object]) -> Self:
        """Call f with the error for side effects and return self."""
        f(self.error)
        return self

    def ok(self) -> NothingType:
        """Convert to Option, returning Nothing since this is Err."""
        from oxide.option import Nothing

        return Nothing

    def err(self) -> Some[E]:
        """Convert to Option, returning Some(error)."""
        from oxide.option import Some

        return Some(self.error)


seal_module(__name__, __all__)
