"""
Round-trip loggers.

A logger is any object with a log(request, response, error, start, duration)
method. The client calls it exactly once per round trip: response is None
when the transport failed, error is None when it did not.
"""
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol, TextIO

import httpx

from .decoding import MAX_SUCCESS_BODY


class Logger(Protocol):
    def log(
            self,
            request: httpx.Request,
            response: Optional[httpx.Response],
            error: Optional[BaseException],
            start: datetime,
            duration: timedelta,
    ) -> None:
        ...


class NopLogger:
    def log(self, request, response, error, start, duration) -> None:
        return None


def _nanoseconds(duration: timedelta) -> int:
    return (duration.days * 86400 + duration.seconds) * 10**9 + duration.microseconds * 1000


class JSONLogger:
    """Writes one JSON line per round trip."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stderr

    def log(self, request, response, error, start, duration) -> None:
        event_response = {}
        if response is not None:
            event_response["status_code"] = response.status_code
        if error is not None:
            event_response["error"] = {"message": str(error)}

        record = {
            "@timestamp": start.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "event": {
                "duration": _nanoseconds(duration),
                "request": {"url": str(request.url)},
                "response": event_response,
            },
        }
        self.stream.write(json.dumps(record, separators=(",", ":")) + "\n")


def _dump_headers(lines, headers: httpx.Headers):
    for name, value in headers.multi_items():
        lines.append(f"{name}: {value}")


def dump_request(request: httpx.Request) -> str:
    lines = [f"{request.method} {request.url.raw_path.decode('ascii')} HTTP/1.1"]
    _dump_headers(lines, request.headers)
    body = request.read()
    return "\r\n".join(lines) + "\r\n\r\n" + body.decode("utf-8", errors="replace")


class _ReplayStream(httpx.SyncByteStream):
    """Yields the bytes already taken from a stream, then the rest of it."""

    def __init__(self, head: bytes, rest, original: httpx.SyncByteStream, error=None):
        self.head = head
        self.rest = rest
        self.original = original
        self.error = error

    def __iter__(self):
        if self.head:
            yield self.head
        if self.error is not None:
            raise self.error
        yield from self.rest

    def close(self) -> None:
        self.original.close()


def _peek_body(response: httpx.Response, limit: int):
    """
    Take up to limit bytes of a streaming body without consuming it for
    later readers. Returns the bytes and whether the body was longer.
    """
    if not isinstance(response.stream, httpx.SyncByteStream):
        return b"", False

    original = response.stream
    rest = iter(original)
    buf = bytearray()
    error = None
    try:
        for chunk in rest:
            buf.extend(chunk)
            if len(buf) > limit:
                break
    except httpx.HTTPError as e:
        error = e
    finally:
        response.stream = _ReplayStream(bytes(buf), rest, original, error)
    return bytes(buf[:limit]), len(buf) > limit


def dump_response(response: httpx.Response, limit: int = MAX_SUCCESS_BODY) -> str:
    lines = [f"{response.http_version} {response.status_code} {response.reason_phrase}"]
    _dump_headers(lines, response.headers)
    body, truncated = _peek_body(response, limit)
    text = body.decode("utf-8", errors="replace")
    if truncated:
        text += f"\r\n[body truncated at {limit} bytes]"
    return "\r\n".join(lines) + "\r\n\r\n" + text


class RawLogger:
    """Writes the request and response as they appear on the wire."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stderr

    def log(self, request, response, error, start, duration) -> None:
        print(dump_request(request), file=self.stream)
        if response is not None:
            print(dump_response(response), file=self.stream)
        if error is not None:
            print(f"error: {error}", file=self.stream)


class LoggingLogger:
    """Forwards each round trip to a standard library logger."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("pushover_client.roundtrip")

    def log(self, request, response, error, start, duration) -> None:
        elapsed_ms = duration.total_seconds() * 1000
        if error is not None or response is None:
            self.logger.warning("✗ %s %s failed after %.1fms: %s",
                                request.method, request.url, elapsed_ms, error)
        elif response.status_code >= 400:
            self.logger.warning("✗ %s %s -> %d (%.1fms)",
                                request.method, request.url, response.status_code, elapsed_ms)
        else:
            self.logger.info("✓ %s %s -> %d (%.1fms)",
                             request.method, request.url, response.status_code, elapsed_ms)
