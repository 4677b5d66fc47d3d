"""Exception types raised by the handler."""

from __future__ import annotations

from typing import Optional


class SearchClientError(Exception):
    """Base class for every error raised by es_handler."""


class ValidationError(SearchClientError, ValueError):
    """Caller input was rejected before any request was sent."""


class TransportError(SearchClientError):
    """The request failed to connect, timed out, or got a non-success status.

    An expired scroll context is reported by the engine as a failed request,
    so it surfaces here too and cannot be told apart from other failures.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(SearchClientError):
    """The engine answered successfully but the body did not match the model."""

    def __init__(self, message: str, body: Optional[bytes] = None) -> None:
        super().__init__(message)
        self.body = body
