from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlencode

import httpx

from .config import Config
from .decoding import parse_response
from .encoding import build_send_request
from .errors import ConfigurationError
from .loggers import Logger, NopLogger
from .models import Message
from .schemas import Limits, SendResponse
from .transport import RoundTripper, TimeoutTypes

logger = logging.getLogger(__name__)

LIMITS_PATH = "/1/apps/limits.json"


class PushoverClient:
    """
    Client for the Pushover API.

    Unset arguments fall back to the environment (see Config):
    APP_TOKEN, USER_KEY, PUSHOVER_URL and PUSHOVER_TIMEOUT.

        with PushoverClient(app_token="...", user_key="...") as client:
            client.messages.send(Message(message="Hello world!"))
    """

    def __init__(
            self,
            app_token: Optional[str] = None,
            user_key: Optional[str] = None,
            base_url: Optional[str] = None,
            transport: Optional[httpx.BaseTransport] = None,
            logger: Optional[Logger] = None,
            timeout: TimeoutTypes = None,
    ):
        config = Config()
        self.app_token = app_token if app_token is not None else config.APP_TOKEN
        self.user_key = user_key if user_key is not None else config.USER_KEY
        self.base_url = base_url or config.PUSHOVER_URL
        self.timeout = timeout if timeout is not None else config.PUSHOVER_TIMEOUT

        try:
            url = httpx.URL(self.base_url)
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"invalid base URL {self.base_url!r}: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigurationError(f"invalid base URL {self.base_url!r}: scheme and host required")

        self._round_tripper = RoundTripper(
            transport if transport is not None else httpx.HTTPTransport(),
            url,
            logger=logger or NopLogger(),
        )

        # As reported by the last API call
        self._app_limit = 0
        self._app_remaining = 0
        self._app_reset = 0

        self.messages = MessagesAPI(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self) -> None:
        self._round_tripper.close()

    def do(self, request: httpx.Request, timeout: TimeoutTypes = None) -> httpx.Response:
        """
        Send request (with a path-only URL) to the API. The caller must
        close the returned response.
        """
        response = self._round_tripper.round_trip(
            request, timeout if timeout is not None else self.timeout
        )
        self._update_limits(response.headers)
        return response

    def _update_limits(self, headers: httpx.Headers) -> None:
        try:
            if "X-Limit-App-Limit" in headers:
                self._app_limit = int(headers["X-Limit-App-Limit"])
            if "X-Limit-App-Remaining" in headers:
                self._app_remaining = int(headers["X-Limit-App-Remaining"])
            if "X-Limit-App-Reset" in headers:
                self._app_reset = int(headers["X-Limit-App-Reset"])
        except ValueError as e:
            logger.debug("Ignoring malformed limit header: %s", e)
            return
        if "X-Limit-App-Remaining" in headers:
            logger.debug("API limits: %d of %d remaining", self._app_remaining, self._app_limit)

    def _store_limits(self, limits: Limits) -> None:
        self._app_limit = limits.limit
        self._app_remaining = limits.remaining
        self._app_reset = limits.reset

    def limits(self) -> Limits:
        """
        API limits as reported by the last API call. Use messages.limits()
        to ask the API instead.
        """
        return Limits(limit=self._app_limit, remaining=self._app_remaining, reset=self._app_reset)


class MessagesAPI:
    def __init__(self, client: PushoverClient):
        self.client = client

    def send(self, message: Message, *, timeout: TimeoutTypes = None) -> SendResponse:
        request = build_send_request(message, self.client.app_token, self.client.user_key)
        response = self.client.do(request, timeout)
        try:
            result = parse_response(response, SendResponse)
        finally:
            response.close()
        logger.info("✓ Message sent (request %s)", result.request or "-")
        return result

    def limits(self, *, timeout: TimeoutTypes = None) -> Limits:
        """Ask the API for the application's current limits."""
        request = httpx.Request(
            "GET", f"{LIMITS_PATH}?{urlencode({'token': self.client.app_token})}"
        )
        response = self.client.do(request, timeout)
        try:
            result = parse_response(response, Limits)
        finally:
            response.close()
        self.client._store_limits(result)
        return result
