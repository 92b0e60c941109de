"""Capture exceptions as Option/Result values.

`call_*` invoke a function immediately, `await_*` await an awaitable, and the
`@safe_option` / `@safe_result` decorators wrap a function (sync or async) so
every call is captured. `Option.safe`, `Option.safe_async`, `Result.safe` and
`Result.safe_async` are thin entry points over the `call_*` / `await_*`
functions here.

Only `Exception` subclasses are captured; `KeyboardInterrupt`, `SystemExit`
and `asyncio.CancelledError` propagate.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any, overload

import wrapt

from oxide import _config
from oxide._logging import get_logger
from oxide.option import Nothing, Option, Some
from oxide.result import Err, Ok, Result

__all__ = [
    'await_option',
    'await_result',
    'call_option',
    'call_result',
    'safe_option',
    'safe_result',
]

_DEFAULT_EXCEPTIONS: tuple[type[BaseException], ...] = (Exception,)


def _target_name(target: object) -> str:
    return getattr(target, '__qualname__', None) or type(target).__qualname__


def _log_captured(target: object, container: str, exc: BaseException) -> None:
    if not _config.SETTINGS.log_captured:
        return
    get_logger(__name__).debug(
        'exception captured',
        target=_target_name(target),
        container=container,
        exc_type=type(exc).__name__,
    )


def _require_sync(fn: Callable[..., Any], entry: str) -> None:
    if inspect.isawaitable(fn):
        if inspect.iscoroutine(fn):
            fn.close()
        msg = f'{entry}() got an awaitable {type(fn).__name__!r}; use {entry}_async() instead'
        raise TypeError(msg)
    if inspect.iscoroutinefunction(fn):
        msg = f'{entry}() got coroutine function {_target_name(fn)!r}; use {entry}_async() on its awaitable'
        raise TypeError(msg)


def _reject_awaitable(fn: Callable[..., Any], value: object, entry: str) -> None:
    if not inspect.isawaitable(value):
        return
    if inspect.iscoroutine(value):
        value.close()
    msg = f'{entry}() got an awaitable from {_target_name(fn)!r}; use {entry}_async() instead'
    raise TypeError(msg)


def _require_awaitable(value: object, entry: str) -> None:
    if not inspect.isawaitable(value):
        msg = f'{entry}() expects an awaitable, got {type(value).__name__}'
        raise TypeError(msg)


# ---------------------------------------------------------------------
# Immediate capture
# ---------------------------------------------------------------------


def call_option[T](fn: Callable[..., T], /, *args: Any, **kwargs: Any) -> Option[T]:
    """Call `fn(*args, **kwargs)` and return Some(result), or Nothing if it raised.

    Raises:
        TypeError: If `fn` is an awaitable, a coroutine function, or returns an awaitable.
    """
    _require_sync(fn, 'Option.safe')
    try:
        value = fn(*args, **kwargs)
    except Exception as e:
        _log_captured(fn, 'Option', e)
        return Nothing
    _reject_awaitable(fn, value, 'Option.safe')
    return Some(value)


def call_result[T](fn: Callable[..., T], /, *args: Any, **kwargs: Any) -> Result[T, Exception]:
    """Call `fn(*args, **kwargs)` and return Ok(result), or Err(exception) if it raised.

    Raises:
        TypeError: If `fn` is an awaitable, a coroutine function, or returns an awaitable.
    """
    _require_sync(fn, 'Result.safe')
    try:
        value = fn(*args, **kwargs)
    except Exception as e:
        _log_captured(fn, 'Result', e)
        return Err(e)
    _reject_awaitable(fn, value, 'Result.safe')
    return Ok(value)


async def _await_option[T](awaitable: Awaitable[T]) -> Option[T]:
    try:
        value = await awaitable
    except Exception as e:
        _log_captured(awaitable, 'Option', e)
        return Nothing
    return Some(value)


async def _await_result[T](awaitable: Awaitable[T]) -> Result[T, Exception]:
    try:
        value = await awaitable
    except Exception as e:
        _log_captured(awaitable, 'Result', e)
        return Err(e)
    return Ok(value)


def await_option[T](awaitable: Awaitable[T], /) -> Awaitable[Option[T]]:
    """Return a coroutine that awaits `awaitable` and never raises its exceptions.

    Resolves to Some(result), or Nothing if the awaitable raised.

    Raises:
        TypeError: Immediately, if `awaitable` is not awaitable.
    """
    _require_awaitable(awaitable, 'Option.safe_async')
    return _await_option(awaitable)


def await_result[T](awaitable: Awaitable[T], /) -> Awaitable[Result[T, Exception]]:
    """Return a coroutine that awaits `awaitable` and never raises its exceptions.

    Resolves to Ok(result), or Err(exception) if the awaitable raised.

    Raises:
        TypeError: Immediately, if `awaitable` is not awaitable.
    """
    _require_awaitable(awaitable, 'Result.safe_async')
    return _await_result(awaitable)


# ---------------------------------------------------------------------
# Decorators
# ---------------------------------------------------------------------


def _capture_decorator(
    func: Callable[..., Any] | None,
    exceptions: tuple[type[BaseException], ...] | None,
    on_value: Callable[[Any], Any],
    on_error: Callable[[BaseException], Any],
    container: str,
) -> Any:
    catch = exceptions if exceptions is not None else _DEFAULT_EXCEPTIONS

    def decorate(fn: Callable[..., Any]) -> Any:
        if inspect.iscoroutinefunction(fn):

            @wrapt.decorator
            async def async_wrapper(
                wrapped: Callable[..., Awaitable[Any]],
                instance: Any,
                args: tuple[Any, ...],
                kwargs: dict[str, Any],
            ) -> Any:
                try:
                    value = await wrapped(*args, **kwargs)
                except catch as e:
                    _log_captured(wrapped, container, e)
                    return on_error(e)
                return on_value(value)

            return async_wrapper(fn)

        @wrapt.decorator
        def sync_wrapper(
            wrapped: Callable[..., Any],
            instance: Any,
            args: tuple[Any, ...],
            kwargs: dict[str, Any],
        ) -> Any:
            try:
                value = wrapped(*args, **kwargs)
            except catch as e:
                _log_captured(wrapped, container, e)
                return on_error(e)
            return on_value(value)

        return sync_wrapper(fn)

    if func is not None:
        return decorate(func)
    return decorate


@overload
def safe_option[**P, T](func: Callable[P, T], /) -> Callable[P, Option[T]]: ...


@overload
def safe_option(
    func: None = None,
    /,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]: ...


def safe_option(
    func: Callable[..., Any] | None = None,
    /,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Any:
    """Decorator that returns Some(result), or Nothing when the function raises.

    Can be used with or without arguments:
        @safe_option
        def lookup(key): ...

        @safe_option(exceptions=(KeyError,))
        def specific(key): ...

    `async def` functions are detected and return a coroutine of the Option.

    Args:
        func: The function to wrap (when used without parentheses).
        exceptions: Tuple of exception types to capture. Defaults to (Exception,).
            Anything else propagates.

    Returns:
        A wrapped function returning Option[T] instead of T.

    Example:
        ```python
        @safe_option
        def first_word(text: str) -> str:
            return text.split()[0]

        first_word('hello world')  # Some(value='hello')
        first_word('')             # Nothing
        ```
    """
    return _capture_decorator(func, exceptions, Some, lambda _e: Nothing, 'Option')


@overload
def safe_result[**P, T](func: Callable[P, T], /) -> Callable[P, Result[T, Exception]]: ...


@overload
def safe_result(
    func: None = None,
    /,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]: ...


def safe_result(
    func: Callable[..., Any] | None = None,
    /,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Any:
    """Decorator that returns Ok(result), or Err(exception) when the function raises.

    Can be used with or without arguments:
        @safe_result
        def risky(): ...

        @safe_result(exceptions=(ValueError, TypeError))
        def specific(): ...

    `async def` functions are detected and return a coroutine of the Result.

    Args:
        func: The function to wrap (when used without parentheses).
        exceptions: Tuple of exception types to capture. Defaults to (Exception,).
            Anything else propagates.

    Returns:
        A wrapped function returning Result[T, E] instead of T.

    Example:
        ```python
        @safe_result
        def divide(a: int, b: int) -> float:
            return a / b

        divide(10, 2)  # Ok(value=5.0)
        divide(10, 0)  # Err(error=ZeroDivisionError('division by zero'))
        ```
    """
    return _capture_decorator(func, exceptions, Ok, Err, 'Result')
