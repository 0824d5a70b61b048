"""Client for the Pushover notification API."""

__version__ = "0.1.0"

from .client import MessagesAPI, PushoverClient
from .config import Config
from .errors import (
    APIError,
    AttachmentReadError,
    ConfigurationError,
    DecodeError,
    EncodingError,
    PushoverError,
    RequestTimeoutError,
    ResponseTooLargeError,
    TransportError,
    is_context_error,
    is_not_found,
    is_status_code,
)
from .loggers import JSONLogger, Logger, LoggingLogger, NopLogger, RawLogger
from .models import Message, Priority
from .schemas import Limits, SendResponse

__all__ = [
    "APIError",
    "AttachmentReadError",
    "Config",
    "ConfigurationError",
    "DecodeError",
    "EncodingError",
    "JSONLogger",
    "Limits",
    "Logger",
    "LoggingLogger",
    "Message",
    "MessagesAPI",
    "NopLogger",
    "Priority",
    "PushoverClient",
    "PushoverError",
    "RawLogger",
    "RequestTimeoutError",
    "ResponseTooLargeError",
    "SendResponse",
    "TransportError",
    "is_context_error",
    "is_not_found",
    "is_status_code",
]
