"""
Exceptions raised by the Pushover client.

Local failures (configuration, encoding) happen before anything is sent.
Transport failures carry the underlying httpx exception. Decode and API
failures carry what the server returned.
"""
from __future__ import annotations

from typing import List, Optional

import httpx


class PushoverError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(PushoverError):
    pass


class EncodingError(PushoverError):
    """A field could not be written into the request body."""


class AttachmentReadError(EncodingError):
    def __init__(self, path: str, inner: OSError):
        super().__init__(f"unable to read attachment {path!r}: {inner}")
        self.path = path
        self.inner = inner


class TransportError(PushoverError):
    """The transport failed before a response was received."""

    def __init__(self, inner: Exception):
        super().__init__(f"pushover: transport failure: {inner}")
        self.inner = inner


class RequestTimeoutError(TransportError):
    """The call's timeout elapsed while the round trip was pending."""


class DecodeError(PushoverError):
    def __init__(self, message: str, status_code: int, body: bytes):
        super().__init__(f"{message}, on input: {body[:200]!r}")
        self.status_code = status_code
        self.body = body


class ResponseTooLargeError(DecodeError):
    pass


class APIError(PushoverError):
    """
    A non-2xx response from the API.

    When the response body is a Pushover error payload its fields are
    exposed here; otherwise only status_code is set.
    """

    def __init__(
            self,
            status_code: int,
            *,
            status: int = 0,
            request: str = "",
            user: str = "",
            errors: Optional[List[str]] = None,
            receipt: str = "",
            inner: Optional[Exception] = None,
    ):
        self.status_code = status_code
        self.status = status
        self.request = request
        self.user = user
        self.errors = list(errors or [])
        self.receipt = receipt
        self.inner = inner
        super().__init__(self._render())

    def _render(self) -> str:
        parts = [
            f"pushover: {self.status_code} {httpx.codes.get_reason_phrase(self.status_code)}".rstrip(),
            f"status={self.status}",
        ]
        if self.request:
            parts.append(f"request={self.request}")
        if self.user:
            parts.append(f"user={self.user}")
        if self.errors:
            parts.append("errors=[" + "; ".join(self.errors) + "]")
        return "; ".join(parts)


def is_context_error(err) -> bool:
    """True if err comes from a call whose timeout elapsed."""
    if isinstance(err, RequestTimeoutError):
        return True
    if isinstance(err, TransportError):
        err = err.inner
    return isinstance(err, httpx.TimeoutException)


def is_status_code(err, code: int) -> bool:
    """
    True if err indicates the HTTP status code. err may be an APIError,
    an httpx.Response or a plain int.
    """
    if isinstance(err, bool):
        return False
    if isinstance(err, APIError):
        return err.status_code == code
    if isinstance(err, httpx.Response):
        return err.status_code == code
    if isinstance(err, int):
        return err == code
    return False


def is_not_found(err) -> bool:
    return is_status_code(err, httpx.codes.NOT_FOUND)
