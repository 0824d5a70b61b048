from __future__ import annotations

from datetime import datetime, timedelta
from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Priority(IntEnum):
    # No alert or notification on the user's devices
    LOWEST = -2
    # Quiet notification
    LOW = -1
    NORMAL = 0
    # Bypasses the user's quiet hours
    HIGH = 1
    # Bypasses quiet hours and repeats until the user acknowledges it
    EMERGENCY = 2

    @classmethod
    def from_name(cls, name: str) -> "Priority":
        """Parse "lowest", "low", ... "emergency"; anything else is NORMAL."""
        try:
            return cls[(name or "").strip().upper()]
        except KeyError:
            return cls.NORMAL


class Message(BaseModel):
    """
    A notification to send.

    Over-long text fields are truncated when the message is encoded, so the
    limits below are never validation errors:
    message 1024, title 250, url 512, url_title 100 characters.
    """
    model_config = ConfigDict(frozen=True)

    message: str
    title: str = ""
    html: bool = False
    monospace: bool = False

    # Target devices; all of the user's devices when empty
    devices: list[str] = Field(default_factory=list)

    url: str = ""
    url_title: str = ""

    priority: Priority = Priority.NORMAL
    sound: str = ""

    # Date/time of the message instead of the time the API receives it
    timestamp: Optional[datetime] = None

    # EMERGENCY only: how often to repeat (at least 30s) and for how long (at most 3h)
    retry: timedelta = timedelta(0)
    expire: timedelta = timedelta(0)

    # Invoked by the API when the user acknowledges an EMERGENCY message
    callback_url: str = ""

    tags: list[str] = Field(default_factory=list)

    # Path of a local file to attach
    attachment: str = ""
