"""Exception types raised by oxide itself.

Containers report failure through their variant, not by raising. The only
exception the containers raise on their own is `UnwrapError`, when an
`unwrap`-family method is called on the wrong variant.
"""

from __future__ import annotations

__all__ = ['OxideError', 'UnwrapError']


class OxideError(Exception):
    """Base exception class for oxide errors.

    Attributes:
        message (str): A human-readable description of the error.
        code (str | None): An optional error code for programmatic error handling.

    Example:
        ```python
        from oxide import Nothing, OxideError

        try:
            Nothing.unwrap()
        except OxideError as e:
            print(f'oxide error occurred: {e}')
        ```
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        """Initialize an OxideError.

        Args:
            message (str): A human-readable description of the error.
            code (str | None): An optional error code for programmatic error handling.
        """
        super().__init__(message)
        self.message: str = message
        self.code: str | None = code

    def __str__(self) -> str:
        """Return a string representation of the error."""
        if self.code:
            return f'[{self.code}] {self.message}'
        return self.message


class UnwrapError(OxideError, RuntimeError):
    """An `unwrap`, `expect`, `unwrap_err` or `expect_err` hit the wrong variant.

    `expect` raises with the caller's message, `unwrap` with a fixed default
    one; the exception type is the same for both.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, code=None)
