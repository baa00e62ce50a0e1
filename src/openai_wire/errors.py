"""Error taxonomy surfaced to callers.

Every public entry point either returns a fully populated result or raises
one of :class:`TransportError`, :class:`APIError` or :class:`DecodeError`.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx


class OpenAIWireError(Exception):
    """Base class for all errors raised by this library."""


class TransportError(OpenAIWireError):
    """No usable response was obtained (connection, TLS, timeout, ...)."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class APIError(OpenAIWireError):
    """The server answered with an error.

    ``message``, ``type``, ``code`` and ``param`` are taken from the server's
    error document when it has one; otherwise only ``status_code`` and the
    raw ``body`` are set. Errors sent inside an event stream have no status.
    """

    def __init__(
        self,
        status_code: int | None,
        message: str | None = None,
        type: str | None = None,
        code: str | None = None,
        param: str | None = None,
        body: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.type = type
        self.code = code
        self.param = param
        self.body = body
        super().__init__(self._describe())

    def _describe(self) -> str:
        status = f"HTTP {self.status_code}" if self.status_code is not None else "stream error"
        if self.message:
            return f"{status}: {self.message}"
        return status


@dataclass(frozen=True, slots=True)
class FieldFailure:
    """One field of a document that could not be mapped."""

    path: str
    expected: str
    found: str


class DecodeError(OpenAIWireError):
    """A document did not match the target result type.

    ``path`` points at the first failing field (``$.choices[0].text``);
    every failing field is listed in ``failures``.
    """

    def __init__(
        self,
        path: str,
        expected: str,
        found: str,
        failures: list[FieldFailure] | None = None,
    ) -> None:
        self.path = path
        self.expected = expected
        self.found = found
        self.failures = failures if failures is not None else [FieldFailure(path, expected, found)]
        super().__init__(f"{path}: expected {expected}, found {found}")


# Exceptions a chunk source or HTTP client raises when the connection fails.
TRANSPORT_EXCEPTIONS = (httpx.TransportError, httpx.StreamError, OSError)
