"""Option type: Some[T] | Nothing for optional values.

Example:
    ```python
    from oxide import Nothing, Option, Some

    users = ['Simon', 'Garfunkel']

    def fetch_user(username: str) -> Option[str]:
        return Some(username) if username in users else Nothing

    def greet(username: str) -> str:
        return (
            fetch_user(username)
            .map(lambda user: f'Hello {user}, my old friend!')
            .unwrap_or('*silence*')
        )

    greet('Simon')        # 'Hello Simon, my old friend!'
    greet('SuperKing77')  # '*silence*'
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING, Any, Final, NoReturn, Self, TypeIs

import msgspec

from oxide._compare import identical, is_absent
from oxide._sealed import SealedMeta, SealedStructMeta, SingletonStructMeta, seal_module
from oxide.errors import UnwrapError

if TYPE_CHECKING:
    from oxide.result import Err, Ok, Result

__all__ = ['Nothing', 'NothingType', 'Option', 'Some', 'option']

UNWRAP_MESSAGE: Final = 'Failed to unwrap Option (found Nothing)'


# ---------------------------------------------------------------------
# Option[T] base
# ---------------------------------------------------------------------


class Option[T](metaclass=SealedMeta):
    """Discriminated union: Some[T] | Nothing.

    Option is the shared base of both variants. It is never instantiated
    directly; use `Some(value)`, `Nothing` or `Option.from_(value)`.
    Exhaustive handling is a `match` on the variant classes:

        match opt:
            case Some(value): ...
            case NothingType(): ...
    """

    __slots__ = ()

    # predicates
    def is_some(self) -> TypeIs[Some[T]]: ...
    def is_none(self) -> TypeIs[NothingType]: ...

    def is_(self, other: object) -> TypeIs[Option[Any]]:
        """Return True if `other` is an Option of the same variant.

        This is a type guard, not value equality: `Some(1).is_(Some(2))` is True.
        """
        return isinstance(other, Option) and self.is_some() == other.is_some()

    def eq(self, other: object) -> bool: ...

    def neq(self, other: object) -> bool:
        """Return True unless `other` is `eq` to this Option."""
        return not self.eq(other)

    # extraction
    def into(self) -> T | None: ...
    def expect(self, msg: str) -> T: ...
    def unwrap(self) -> T: ...
    def unwrap_or(self, default: T) -> T: ...
    def unwrap_or_else(self, f: Callable[[], T]) -> T: ...
    def unwrap_unchecked(self) -> T | None: ...

    # combinators
    def or_(self, other: Option[T]) -> Option[T]: ...
    def or_else(self, f: Callable[[], Option[T]]) -> Option[T]: ...
    def and_[U](self, other: Option[U]) -> Option[U]: ...
    def and_then[U](self, f: Callable[[T], Option[U]]) -> Option[U]: ...
    def map[U](self, f: Callable[[T], U]) -> Option[U]: ...
    def map_or[U](self, default: U, f: Callable[[T], U]) -> U: ...
    def map_or_else[U](self, default: Callable[[], U], f: Callable[[T], U]) -> U: ...
    def filter(self, predicate: Callable[[T], bool]) -> Option[T]: ...
    def zip[U](self, other: Option[U]) -> Option[tuple[T, U]]: ...
    def flatten(self) -> Option[Any]: ...
    def inspect(self, f: Callable[[T], object]) -> Self: ...

    # conversion
    def ok_or[E](self, err: E) -> Result[T, E]: ...
    def ok_or_else[E](self, f: Callable[[], E]) -> Result[T, E]: ...

    # -----------------------------------------------------------------
    # Static constructors, guards and aggregation
    # -----------------------------------------------------------------

    @staticmethod
    def from_[U](value: U | None) -> Option[U]:
        """Wrap `value`, mapping absence to Nothing.

        None and not-a-number values (float/complex/Decimal NaN) become
        Nothing; anything else becomes Some(value).

        Examples:
            >>> Option.from_(1)
            Some(value=1)
            >>> Option.from_(None) is Nothing
            True
            >>> Option.from_(float('nan')) is Nothing
            True
        """
        if is_absent(value):
            return Nothing
        return Some(value)

    @staticmethod
    def is_option(value: object) -> TypeIs[Option[Any]]:
        """Return True if `value` is an Option (Some or Nothing).

        Examples:
            >>> Option.is_option(Some(1)), Option.is_option(Nothing)
            (True, True)
            >>> Option.is_option(1)
            False
        """
        return isinstance(value, Option)

    @staticmethod
    def safe[U](fn: Callable[..., U], /, *args: Any, **kwargs: Any) -> Option[U]:
        """Call `fn(*args, **kwargs)`, returning Some(result) or Nothing if it raised.

        Coroutine functions, and functions returning an awaitable, are
        rejected with TypeError: use `Option.safe_async` for those.

        Example:
            ```python
            def might_raise(raises: bool) -> str:
                if raises:
                    raise ValueError('raise')
                return 'Hello World'

            Option.safe(might_raise, True)   # Nothing
            Option.safe(might_raise, False)  # Some(value='Hello World')
            ```
        """
        from oxide.capture import call_option

        return call_option(fn, *args, **kwargs)

    @staticmethod
    def safe_async[U](awaitable: Awaitable[U], /) -> Awaitable[Option[U]]:
        """Return a coroutine resolving to Some(result), or Nothing if `awaitable` raised.

        Example:
            ```python
            async def might_raise(raises: bool) -> str:
                if raises:
                    raise ValueError('raise')
                return 'Hello World'

            await Option.safe_async(might_raise(True))   # Nothing
            await Option.safe_async(might_raise(False))  # Some(value='Hello World')
            ```
        """
        from oxide.capture import await_option

        return await_option(awaitable)

    @staticmethod
    def collect[U](options: Iterable[Option[U]]) -> Option[list[U]]:
        """Collect an iterable of Options into an Option of list.

        Consumes `options` lazily and stops at the first Nothing, so the
        rest of a generator is never produced.

        Examples:
            >>> Option.collect(Some(n) for n in (1, 2, 3))
            Some(value=[1, 2, 3])
            >>> Option.collect([Some(1), Nothing, Some(3)]) is Nothing
            True
        """
        values: list[U] = []
        for opt in options:
            if not isinstance(opt, Some):
                return Nothing
            values.append(opt.value)
        return Some(values)

    @staticmethod
    def all[U](*options: Option[U]) -> Option[list[U]]:
        """Return Some(list of values) if every Option is Some, else Nothing.

        Example:
            ```python
            def num(val: int) -> Option[int]:
                return Some(val) if val > 10 else Nothing

            Option.all(num(20), num(30), num(40))  # Some(value=[20, 30, 40])
            Option.all(num(20), num(5), num(40))   # Nothing
            ```
        """
        return Option.collect(options)

    @staticmethod
    def any[U](*options: Option[U]) -> Option[U]:
        """Return the first Some (the same instance), or Nothing if there is none.

        Example:
            ```python
            Option.any(num(5), num(20), num(2))  # Some(value=20)
            Option.any(num(2), num(5), num(8))   # Nothing
            ```
        """
        for opt in options:
            if isinstance(opt, Some):
                return opt
        return Nothing


# ---------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------


class Some[T](msgspec.Struct, Option[T], metaclass=SealedStructMeta, frozen=True, gc=False):
    """Some variant of Option containing a value of type T.

    Some always represents presence, even for `Some(None)`; use
    `Option.from_` to map None and NaN to Nothing.

    Examples:
        >>> some = Some(42)
        >>> some.unwrap()
        42
        >>> some.map(lambda x: x * 2)
        Some(value=84)
    """

    value: T

    def is_some(self) -> TypeIs[Some[T]]:
        """Return True if the option is Some.

        This method provides type narrowing - after checking is_some(),
        the type checker knows the option is Some[T].
        """
        return True

    def is_none(self) -> TypeIs[NothingType]:
        """Return False since this is Some."""
        return False

    def eq(self, other: object) -> bool:
        """Return True if `other` is Some holding the identical value.

        Scalars compare by value, other objects by identity:

            >>> val = {'x': 10}
            >>> Some(val).eq(Some(val)), Some(val).eq(Some({'x': 10}))
            (True, False)
        """
        return isinstance(other, Some) and identical(self.value, other.value)

    def into(self) -> T:
        """Return the contained value."""
        return self.value

    def expect(self, msg: str) -> T:  # noqa: ARG002
        """Return the contained Some value, ignoring the message."""
        return self.value

    def unwrap(self) -> T:
        """Return the contained Some value.

        Since this is Some, this always succeeds.
        """
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        """Return the contained Some value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, f: Callable[[], T]) -> T:  # noqa: ARG002
        """Return the contained Some value, ignoring the fallback function."""
        return self.value

    def unwrap_unchecked(self) -> T:
        """Return the contained value."""
        return self.value

    def or_(self, other: Option[T]) -> Self:  # noqa: ARG002
        """Return self since this is Some."""
        return self

    def or_else(self, f: Callable[[], Option[T]]) -> Self:  # noqa: ARG002
        """Return self unchanged since this is Some."""
        return self

    def and_[U](self, other: Option[U]) -> Option[U]:
        """Return other since this is Some."""
        return other

    def and_then[U](self, f: Callable[[T], Option[U]]) -> Option[U]:
        """Apply a function that returns an Option to the contained value.

        Also known as flatmap or bind.

        Args:
            f: Function that takes T and returns Option[U].

        Returns:
            The Option returned by f.
        """
        return f(self.value)

    def map[U](self, f: Callable[[T], U]) -> Some[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Some value.

        Returns:
            Some containing the result of applying f to the value.
        """
        return Some(f(self.value))

    def map_or[U](self, default: U, f: Callable[[T], U]) -> U:  # noqa: ARG002
        """Return f(value), ignoring the default."""
        return f(self.value)

    def map_or_else[U](self, default: Callable[[], U], f: Callable[[T], U]) -> U:  # noqa: ARG002
        """Return f(value) without calling the default function."""
        return f(self.value)

    def filter(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Return Some if the predicate is satisfied, else Nothing.

        Args:
            predicate: Function that returns True to keep the value.

        Returns:
            Some(value) if predicate(value) is True, else Nothing.
        """
        if predicate(self.value):
            return self
        return Nothing

    def zip[U](self, other: Option[U]) -> Option[tuple[T, U]]:
        """Combine two Some values into a tuple.

        If both are Some, returns Some((self.value, other.value)).
        If other is Nothing, returns Nothing.
        """
        if isinstance(other, Some):
            return Some((self.value, other.value))
        return Nothing

    def flatten(self) -> Option[Any]:
        """Flatten a nested Option.

        Converts Option[Option[T]] into Option[T]. A non-Option value is
        left wrapped, so Some(1).flatten() is Some(1).
        """
        if isinstance(self.value, Option):
            return self.value
        return self

    def inspect(self, f: Callable[[T], object]) -> Self:
        """Call f with the value for side effects and return self."""
        f(self.value)
        return self

    def ok_or[E](self, err: E) -> Ok[T]:  # noqa: ARG002
        """Convert to Result, returning Ok(value).

        Args:
            err: Ignored error value.

        Returns:
            Ok containing the value.
        """
        from oxide.result import Ok

        return Ok(self.value)

    def ok_or_else[E](self, f: Callable[[], E]) -> Ok[T]:  # noqa: ARG002
        """Convert to Result, returning Ok(value) without calling f."""
        from oxide.result import Ok

        return Ok(self.value)


class NothingType(msgspec.Struct, Option[Any], metaclass=SingletonStructMeta, frozen=True, gc=False):
    """Nothing variant of Option representing absence of a value.

    This is a singleton: `NothingType()`, copying and pickling all return
    the `Nothing` constant.

    Examples:
        >>> Nothing.is_none()
        True
        >>> Nothing.unwrap_or(0)
        0
    """

    def __copy__(self) -> NothingType:
        return Nothing

    def __deepcopy__(self, memo: dict[int, Any]) -> NothingType:
        return Nothing

    def __reduce__(self) -> str:
        # Pickled by reference to the module-level singleton.
        return 'Nothing'

    def is_some(self) -> TypeIs[Some[Any]]:
        """Return False since this is Nothing."""
        return False

    def is_none(self) -> TypeIs[NothingType]:
        """Return True if the option is Nothing.

        This method provides type narrowing - after checking is_none(),
        the type checker knows the option is Nothing.
        """
        return True

    def eq(self, other: object) -> bool:
        """Return True if `other` is Nothing."""
        return isinstance(other, NothingType)

    def into(self) -> None:
        """Return None since there is no value."""
        return None

    def expect(self, msg: str) -> NoReturn:
        """Raise an exception with a custom message.

        Args:
            msg: Custom error message.

        Raises:
            UnwrapError: Always, with the custom message.
        """
        raise UnwrapError(msg)

    def unwrap(self) -> NoReturn:
        """Raise an exception since this is Nothing.

        Raises:
            UnwrapError: Always, since Nothing has no value to unwrap.
        """
        raise UnwrapError(UNWRAP_MESSAGE)

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Nothing."""
        return default

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        """Compute and return a default value since this is Nothing."""
        return f()

    def unwrap_unchecked(self) -> None:
        """Return None since there is no value."""
        return None

    def or_[T](self, other: Option[T]) -> Option[T]:
        """Return other since self is Nothing."""
        return other

    def or_else[T](self, f: Callable[[], Option[T]]) -> Option[T]:
        """Apply a recovery function since this is Nothing.

        Args:
            f: Function that returns a new Option.

        Returns:
            The Option returned by f.
        """
        return f()

    def and_[U](self, other: Option[U]) -> NothingType:  # noqa: ARG002
        """Return Nothing since self is Nothing."""
        return self

    def and_then[U](self, f: Callable[[Any], Option[U]]) -> NothingType:  # noqa: ARG002
        """Return Nothing since there's no value to bind."""
        return self

    def map[U](self, f: Callable[[Any], U]) -> NothingType:  # noqa: ARG002
        """Return Nothing since there's no value to map."""
        return self

    def map_or[U](self, default: U, f: Callable[[Any], U]) -> U:  # noqa: ARG002
        """Return the default since this is Nothing."""
        return default

    def map_or_else[U](self, default: Callable[[], U], f: Callable[[Any], U]) -> U:  # noqa: ARG002
        """Compute the default since this is Nothing."""
        return default()

    def filter(self, predicate: Callable[[Any], bool]) -> NothingType:  # noqa: ARG002
        """Return Nothing since there's no value to filter."""
        return self

    def zip[U](self, other: Option[U]) -> NothingType:  # noqa: ARG002
        """Return Nothing since self is Nothing."""
        return self

    def flatten(self) -> NothingType:
        """Return Nothing since there's nothing to flatten."""
        return self

    def inspect(self, f: Callable[[Any], object]) -> Self:  # noqa: ARG002
        """Return self without calling f."""
        return self

    def ok_or[E](self, err: E) -> Err[E]:
        """Convert to Result, returning Err(err).

        Args:
            err: The error value to wrap.

        Returns:
            Err containing the error.
        """
        from oxide.result import Err

        return Err(err)

    def ok_or_else[E](self, f: Callable[[], E]) -> Err[E]:
        """Convert to Result, computing the error.

        Args:
            f: Function that produces the error value.

        Returns:
            Err containing the computed error.
        """
        from oxide.result import Err

        return Err(f())


Nothing: Final[NothingType] = NothingType()
"""Singleton instance representing the absence of a value."""


def option[T](value: T | None) -> Option[T]:
    """Wrap `value` as an Option; alias of `Option.from_`."""
    return Option.from_(value)


seal_module(__name__, __all__)
