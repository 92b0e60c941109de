"""Pytest configuration and shared fixtures for oxide tests."""

from collections.abc import Callable, Iterator
from typing import Any

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Restore structlog defaults after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def sample_ok():
    """Sample Ok value for testing."""
    from oxide import Ok

    return Ok(42)


@pytest.fixture
def sample_err():
    """Sample Err value for testing."""
    from oxide import Err

    return Err(ValueError('test error'))


class Spy:
    """Callable that records how often it was called."""

    def __init__(self, returns: Any = None) -> None:
        self.returns = returns
        self.calls: list[tuple[Any, ...]] = []

    def __call__(self, *args: Any) -> Any:
        self.calls.append(args)
        return self.returns

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def spy() -> Callable[..., Spy]:
    """Factory for call-counting spies."""
    return Spy
