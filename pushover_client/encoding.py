"""
Request bodies for POST /1/messages.json.

A message without an attachment is sent URL-encoded; with an attachment it
is sent as multipart/form-data, the file in the "attachment" part. Both
carry the same fields, produced once by message_fields().
"""
from __future__ import annotations

import logging
import os
from typing import List, Tuple
from urllib.parse import urlencode

import httpx

from .errors import AttachmentReadError, EncodingError
from .helpers import ELLIPSIS, cut
from .models import Message, Priority

logger = logging.getLogger(__name__)

MESSAGES_PATH = "/1/messages.json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

MAX_MESSAGE = 1024
MAX_TITLE = 250
MAX_URL = 512
MAX_URL_TITLE = 100
MIN_RETRY = 30  # seconds
MAX_EXPIRE = 10800  # seconds


def message_fields(message: Message, app_token: str, user_key: str) -> List[Tuple[str, str]]:
    fields = [
        ("token", app_token),
        ("user", user_key),
        ("message", cut(message.message, MAX_MESSAGE, ELLIPSIS)),
    ]
    if message.html:
        fields.append(("html", "1"))
    if message.monospace:
        fields.append(("monospace", "1"))
    if message.title:
        fields.append(("title", cut(message.title, MAX_TITLE, ELLIPSIS)))
    if message.devices:
        fields.append(("device", ",".join(message.devices)))
    if message.url:
        fields.append(("url", cut(message.url, MAX_URL)))
    if message.url_title:
        fields.append(("url_title", cut(message.url_title, MAX_URL_TITLE, ELLIPSIS)))

    if message.priority != Priority.NORMAL:
        fields.append(("priority", str(int(message.priority))))
        if message.priority == Priority.EMERGENCY:
            retry = max(int(message.retry.total_seconds()), MIN_RETRY)
            expire = min(int(message.expire.total_seconds()), MAX_EXPIRE)
            fields.append(("retry", str(retry)))
            fields.append(("expire", str(expire)))

    if message.callback_url:
        fields.append(("callback", message.callback_url))
    if message.sound:
        fields.append(("sound", message.sound))
    if message.timestamp is not None:
        epoch = int(message.timestamp.timestamp())
        if epoch:
            fields.append(("timestamp", str(epoch)))
    if message.tags:
        fields.append(("tags", ",".join(message.tags)))
    return fields


def _read_attachment(path: str) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise AttachmentReadError(path, e) from e


def build_send_request(message: Message, app_token: str, user_key: str) -> httpx.Request:
    """
    Build the POST request for message. The URL is relative; the client
    points it at its configured endpoint.

    Raises AttachmentReadError or EncodingError before anything is sent.
    """
    fields = message_fields(message, app_token, user_key)

    if not message.attachment:
        return httpx.Request(
            "POST",
            MESSAGES_PATH,
            content=urlencode(fields).encode("ascii"),
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )

    contents = _read_attachment(message.attachment)
    filename = os.path.basename(message.attachment)
    try:
        request = httpx.Request(
            "POST",
            MESSAGES_PATH,
            data=dict(fields),
            files={"attachment": (filename, contents)},
        )
        # Render the multipart body now so framing errors surface here
        request.read()
    except (TypeError, ValueError, UnicodeError) as e:
        raise EncodingError(f"unable to write form-data: {e}") from e

    logger.debug("Encoded %d fields and %d byte attachment %s", len(fields), len(contents), filename)
    return request
