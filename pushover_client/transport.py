from __future__ import annotations

import logging
import platform
import time
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

import httpx

from . import __version__
from .errors import RequestTimeoutError, TransportError
from .loggers import Logger, NopLogger

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/json; charset=utf-8"

TimeoutTypes = Union[None, float, httpx.Timeout]


def user_agent() -> str:
    return (
        f"pushover-python/{__version__} "
        f"({platform.system().lower()}/{platform.machine()}; Python {platform.python_version()})"
    )


class RoundTripper:
    """
    Sends requests through an injected httpx transport.

    Callers supply requests with a path only; the configured endpoint's
    scheme and host are filled in here, along with the default headers.
    The round-trip logger runs once per call, whatever the outcome.
    """

    def __init__(
            self,
            transport: httpx.BaseTransport,
            base_url: httpx.URL,
            *,
            logger: Optional[Logger] = None,
            ua: Optional[str] = None,
    ):
        self.transport = transport
        self.base_url = base_url
        self.logger = logger or NopLogger()
        self.ua = ua if ua is not None else user_agent()

    def prepare(self, request: httpx.Request, timeout: TimeoutTypes = None) -> httpx.Request:
        request.url = self.base_url.copy_with(raw_path=request.url.raw_path)
        request.headers["Host"] = request.url.netloc.decode("ascii")
        if self.ua:
            request.headers.setdefault("User-Agent", self.ua)
        request.headers.setdefault("Accept", "application/json")
        request.headers.setdefault("Content-Type", DEFAULT_CONTENT_TYPE)
        if timeout is not None:
            if not isinstance(timeout, httpx.Timeout):
                timeout = httpx.Timeout(timeout)
            request.extensions["timeout"] = timeout.as_dict()
        return request

    def round_trip(self, request: httpx.Request, timeout: TimeoutTypes = None) -> httpx.Response:
        request = self.prepare(request, timeout)
        logger.debug("%s %s", request.method, request.url)

        response = None
        error = None
        start = datetime.now(timezone.utc)
        started = time.perf_counter()
        try:
            response = self.transport.handle_request(request)
        except httpx.TimeoutException as e:
            error = e
            raise RequestTimeoutError(e) from e
        except httpx.TransportError as e:
            error = e
            raise TransportError(e) from e
        except BaseException as e:
            error = e
            raise
        finally:
            duration = timedelta(seconds=time.perf_counter() - started)
            self._notify(request, response, error, start, duration)

        logger.debug("%s %s -> %d", request.method, request.url, response.status_code)
        return response

    def _notify(self, request, response, error, start, duration):
        try:
            self.logger.log(request, response, error, start, duration)
        except Exception as e:
            logger.warning("Round-trip logger %r failed: %s", self.logger, e)

    def close(self) -> None:
        self.transport.close()
