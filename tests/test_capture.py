"""Tests for exception capture: safe, safe_async and the decorators."""

import asyncio
import inspect
import sys

import pytest
from oxide import Err, Nothing, Ok, Option, Result, Settings, Some, safe_option, safe_result
from oxide import _config
from structlog.testing import capture_logs


def parse_int(raw: str) -> int:
    return int(raw)


def might_raise(raises: bool) -> str:
    if raises:
        raise ValueError('raise')
    return 'Hello World'


async def might_raise_async(raises: bool) -> str:
    await asyncio.sleep(0)
    if raises:
        raise ValueError('raise')
    return 'Hello World'


class TestOptionSafe:
    """Tests for Option.safe."""

    def test_success(self):
        """A returning call gives Some."""
        assert Option.safe(might_raise, False) == Some('Hello World')

    def test_raise(self):
        """A raising call gives Nothing."""
        assert Option.safe(might_raise, True) is Nothing

    def test_none_result_is_some(self):
        """A function returning None still gives Some(None)."""
        assert Option.safe(lambda: None) == Some(None)

    def test_passes_arguments(self):
        """Positional and keyword arguments are forwarded."""
        assert Option.safe(int, '10', base=2) == Some(2)

    def test_base_exception_propagates(self):
        """KeyboardInterrupt is not captured."""

        def interrupt() -> None:
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            Option.safe(interrupt)

    def test_rejects_coroutine_function(self):
        """Coroutine functions must go through safe_async."""
        with pytest.raises(TypeError, match='safe_async'):
            Option.safe(might_raise_async, False)

    def test_rejects_awaitable_argument(self):
        """An awaitable passed in place of a function is rejected and closed."""
        coro = might_raise_async(False)
        with pytest.raises(TypeError, match=r'Option\.safe\(\) got an awaitable .*Option\.safe_async\(\)'):
            Option.safe(coro)  # type: ignore[arg-type]
        assert inspect.getcoroutinestate(coro) == inspect.CORO_CLOSED

    def test_rejects_returned_awaitable(self):
        """A function returning a coroutine is rejected and the coroutine closed."""
        coros = []

        def make() -> object:
            coro = might_raise_async(False)
            coros.append(coro)
            return coro

        with pytest.raises(TypeError, match='awaitable'):
            Option.safe(make)
        assert inspect.getcoroutinestate(coros[0]) == inspect.CORO_CLOSED


class TestResultSafe:
    """Tests for Result.safe."""

    def test_success(self):
        """A returning call gives Ok."""
        assert Result.safe(parse_int, '42') == Ok(42)

    def test_raise(self):
        """A raising call gives Err holding the exception."""
        res = Result.safe(parse_int, 'nope')
        assert res.is_err()
        assert isinstance(res.unwrap_err(), ValueError)

    def test_system_exit_propagates(self):
        """SystemExit is not captured."""
        with pytest.raises(SystemExit):
            Result.safe(sys.exit, 3)

    def test_rejects_coroutine_function(self):
        """Coroutine functions must go through safe_async."""
        with pytest.raises(TypeError, match=r'Result\.safe_async'):
            Result.safe(might_raise_async, True)

    @pytest.mark.asyncio
    async def test_rejects_awaitable_argument(self):
        """Coroutines and futures passed to safe are rejected, not captured."""
        coro = might_raise_async(True)
        with pytest.raises(TypeError, match=r'Result\.safe_async'):
            Result.safe(coro)  # type: ignore[arg-type]
        assert inspect.getcoroutinestate(coro) == inspect.CORO_CLOSED

        future = asyncio.get_running_loop().create_future()
        with capture_logs() as logs, pytest.raises(TypeError, match='awaitable'):
            Result.safe(future)  # type: ignore[arg-type]
        assert logs == []
        future.cancel()


class TestSafeAsync:
    """Tests for Option.safe_async and Result.safe_async."""

    @pytest.mark.asyncio
    async def test_option_success(self):
        """A resolving coroutine gives Some."""
        assert await Option.safe_async(might_raise_async(False)) == Some('Hello World')

    @pytest.mark.asyncio
    async def test_option_raise(self):
        """A rejecting coroutine gives Nothing."""
        assert await Option.safe_async(might_raise_async(True)) is Nothing

    @pytest.mark.asyncio
    async def test_result_success(self):
        """A resolving coroutine gives Ok."""
        assert await Result.safe_async(might_raise_async(False)) == Ok('Hello World')

    @pytest.mark.asyncio
    async def test_result_raise(self):
        """A rejecting coroutine gives Err with the exception."""
        res = await Result.safe_async(might_raise_async(True))
        assert isinstance(res.unwrap_err(), ValueError)

    @pytest.mark.asyncio
    async def test_future(self):
        """Futures are accepted as awaitables."""
        loop = asyncio.get_running_loop()
        done = loop.create_future()
        done.set_result(5)
        failed = loop.create_future()
        failed.set_exception(KeyError('k'))

        assert await Result.safe_async(done) == Ok(5)
        assert await Option.safe_async(failed) is Nothing

    @pytest.mark.asyncio
    async def test_cancelled_error_propagates(self):
        """Cancellation is not captured."""

        async def cancelled() -> None:
            raise asyncio.CancelledError

        with pytest.raises(asyncio.CancelledError):
            await Result.safe_async(cancelled())

    def test_rejects_non_awaitable_immediately(self):
        """A non-awaitable raises TypeError before anything is awaited."""
        with pytest.raises(TypeError, match='expects an awaitable'):
            Option.safe_async(42)  # type: ignore[arg-type]
        with pytest.raises(TypeError, match='expects an awaitable'):
            Result.safe_async(might_raise)  # type: ignore[arg-type]


class TestSafeOptionDecorator:
    """Tests for the @safe_option decorator."""

    def test_sync(self):
        """Sync functions return Some or Nothing."""

        @safe_option
        def first_word(text: str) -> str:
            return text.split()[0]

        assert first_word('hello world') == Some('hello')
        assert first_word('') is Nothing

    @pytest.mark.asyncio
    async def test_async(self):
        """Async functions return a coroutine of Option."""
        wrapped = safe_option(might_raise_async)
        assert await wrapped(False) == Some('Hello World')
        assert await wrapped(True) is Nothing

    def test_exceptions_param(self):
        """Only the listed exceptions are captured."""

        @safe_option(exceptions=(KeyError,))
        def lookup(data: dict[str, int], key: str) -> int:
            if not data:
                raise RuntimeError('empty')
            return data[key]

        assert lookup({'a': 1}, 'a') == Some(1)
        assert lookup({'a': 1}, 'b') is Nothing
        with pytest.raises(RuntimeError):
            lookup({}, 'a')

    def test_preserves_metadata(self):
        """The wrapper keeps name and docstring."""

        @safe_option
        def documented() -> int:
            """Return one."""
            return 1

        assert documented.__name__ == 'documented'
        assert documented.__doc__ == 'Return one.'


class TestSafeResultDecorator:
    """Tests for the @safe_result decorator."""

    def test_sync(self):
        """Sync functions return Ok or Err."""

        @safe_result
        def divide(a: int, b: int) -> float:
            return a / b

        assert divide(10, 2) == Ok(5.0)
        res = divide(10, 0)
        assert isinstance(res.unwrap_err(), ZeroDivisionError)

    @pytest.mark.asyncio
    async def test_async(self):
        """Async functions return a coroutine of Result."""

        @safe_result
        async def fetch(fail: bool) -> str:
            return await might_raise_async(fail)

        assert await fetch(False) == Ok('Hello World')
        assert isinstance((await fetch(True)).unwrap_err(), ValueError)

    @pytest.mark.asyncio
    async def test_async_exceptions_param(self):
        """Uncaptured exceptions propagate from async functions."""

        @safe_result(exceptions=(KeyError,))
        async def fetch() -> str:
            raise ValueError('not captured')

        with pytest.raises(ValueError, match='not captured'):
            await fetch()

    def test_method(self):
        """Decorated methods still receive self."""

        class Parser:
            base = 16

            @safe_result
            def parse(self, raw: str) -> int:
                return int(raw, self.base)

        assert Parser().parse('ff') == Ok(255)
        assert Parser().parse('zz').is_err()

    def test_base_exception_propagates(self):
        """KeyboardInterrupt is not captured by default."""

        @safe_result
        def interrupt() -> None:
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            interrupt()

    def test_err_chains_into_unwrap(self):
        """Unwrapping a captured Err chains the original exception."""

        @safe_result
        def boom() -> None:
            raise ValueError('boom')

        res = boom()
        with pytest.raises(Exception) as exc_info:
            res.unwrap()
        assert exc_info.value.__cause__ is res.unwrap_err()


class TestCaptureLogging:
    """Tests for the debug events emitted when an exception is captured."""

    def test_result_safe_logs(self):
        """A captured exception emits one debug event."""
        with capture_logs() as logs:
            Result.safe(parse_int, 'nope')

        assert logs == [
            {
                'event': 'exception captured',
                'log_level': 'debug',
                'target': 'parse_int',
                'container': 'Result',
                'exc_type': 'ValueError',
            }
        ]

    def test_success_does_not_log(self):
        """No event is emitted when nothing is raised."""
        with capture_logs() as logs:
            Option.safe(parse_int, '1')
            Err('not captured').unwrap_or(0)
        assert logs == []

    def test_decorator_logs(self):
        """Decorated functions log with the container name."""

        @safe_option
        def fail() -> None:
            raise KeyError('k')

        with capture_logs() as logs:
            fail()

        assert len(logs) == 1
        assert logs[0]['container'] == 'Option'
        assert logs[0]['exc_type'] == 'KeyError'
        assert logs[0]['target'].endswith('fail')

    @pytest.mark.asyncio
    async def test_async_logs(self):
        """Awaited failures log the coroutine name."""
        with capture_logs() as logs:
            await Option.safe_async(might_raise_async(True))

        assert len(logs) == 1
        assert logs[0]['target'] == 'might_raise_async'
        assert logs[0]['container'] == 'Option'

    def test_logging_can_be_disabled(self, monkeypatch):
        """log_captured=False silences the events."""
        monkeypatch.setattr(_config, 'SETTINGS', Settings(log_captured=False))
        with capture_logs() as logs:
            assert Option.safe(parse_int, 'nope') is Nothing
        assert logs == []
