from __future__ import annotations

import logging
from typing import Tuple, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .errors import APIError, DecodeError, RequestTimeoutError, ResponseTooLargeError, TransportError
from .schemas import ErrorPayload

logger = logging.getLogger(__name__)

MAX_SUCCESS_BODY = 8 << 20
MAX_ERROR_BODY = 1 << 20

T = TypeVar("T", bound=BaseModel)


def read_limited(response: httpx.Response, limit: int) -> Tuple[bytes, bool]:
    """
    Read at most limit bytes of the response body. The second value is True
    when the body was longer than limit.
    """
    buf = bytearray()
    try:
        for chunk in response.iter_bytes():
            buf.extend(chunk)
            if len(buf) > limit:
                return bytes(buf[:limit]), True
    except httpx.TimeoutException as e:
        raise RequestTimeoutError(e) from e
    except httpx.TransportError as e:
        raise TransportError(e) from e
    return bytes(buf), False


def error_from_response(response: httpx.Response) -> APIError:
    body, too_large = read_limited(response, MAX_ERROR_BODY)
    if too_large:
        return APIError(response.status_code)
    try:
        payload = ErrorPayload.model_validate_json(body)
    except ValidationError as e:
        logger.debug("Error response %d is not a Pushover payload: %s", response.status_code, e)
        return APIError(response.status_code)
    return APIError(
        response.status_code,
        status=payload.status,
        request=payload.request,
        user=payload.user,
        errors=payload.errors,
        receipt=payload.receipt,
    )


def parse_response(response: httpx.Response, model: Type[T]) -> T:
    """
    Decode a 2xx response into model, or raise the APIError the response
    describes. The caller owns closing the response.
    """
    if not response.is_success:
        raise error_from_response(response)

    body, too_large = read_limited(response, MAX_SUCCESS_BODY)
    if too_large:
        raise ResponseTooLargeError(
            f"response body exceeds {MAX_SUCCESS_BODY} bytes", response.status_code, body
        )
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"invalid JSON data: {e}", response.status_code, body) from e
