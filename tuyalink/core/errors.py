"""
Error taxonomy for the Tuya cloud client.

Every failure raised by this package derives from ``TuyaError``. Layers add
context (the path or operation that failed) with ``with_context``; the caller
still receives the original error type, ``message`` keeps the original text
and ``str(error)`` shows the whole chain.
"""
from __future__ import annotations

from typing import Optional, Tuple


class TuyaError(Exception):
    """Base class for all client errors."""

    def __init__(self, message: str, path: Optional[str] = None, context: Tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.context = tuple(context)

    def _clone(self, context: Tuple[str, ...]) -> "TuyaError":
        return type(self)(self.message, path=self.path, context=context)

    def with_context(self, context: str) -> "TuyaError":
        """Return a copy of this error with ``context`` added in front of its message."""
        clone = self._clone((context,) + self.context)
        clone.__cause__ = self.__cause__ or self
        return clone

    def __str__(self) -> str:
        return ": ".join(self.context + (self.message,))


class TransportError(TuyaError):
    """The underlying HTTP request failed (connection, TLS, timeout)."""
    pass


class ParseError(TuyaError):
    """The response body was not valid JSON."""
    pass


class AuthError(TuyaError):
    """The token endpoint answered without an access token."""
    pass


class NotFoundError(TuyaError):
    """No device matched a lookup."""
    pass


class ApiError(TuyaError):
    """
    A business error reported by the provider.

    Attributes:
        code: The provider's numeric error code, 0 when absent or non-numeric.
    """

    def __init__(
        self,
        code: int,
        message: str,
        path: Optional[str] = None,
        context: Tuple[str, ...] = (),
    ) -> None:
        super().__init__(message, path=path, context=context)
        self.code = code

    def _clone(self, context: Tuple[str, ...]) -> "ApiError":
        return type(self)(self.code, self.message, path=self.path, context=context)

    def __str__(self) -> str:
        text = super().__str__()
        return f"{text} (code {self.code})" if self.code else text


__all__ = [
    "ApiError",
    "AuthError",
    "NotFoundError",
    "ParseError",
    "TransportError",
    "TuyaError",
]
