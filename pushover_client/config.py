from dotenv import load_dotenv
load_dotenv()
import os

from .errors import ConfigurationError


DEFAULT_BASE_URL = "https://api.pushover.net"


def env_string(default, *names):
    """Return the first non-empty environment value among names, else default."""
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return default


class Config:
    def __init__(self):
        # Pushover credentials
        self.APP_TOKEN = env_string("", "APP_TOKEN")
        self.USER_KEY = env_string("", "USER_KEY")

        # Endpoint
        self.PUSHOVER_URL = env_string(DEFAULT_BASE_URL, "PUSHOVER_URL")
        timeout = env_string("30", "PUSHOVER_TIMEOUT")
        try:
            self.PUSHOVER_TIMEOUT = float(timeout)  # seconds
        except ValueError as e:
            raise ConfigurationError(f"invalid PUSHOVER_TIMEOUT {timeout!r}: {e}") from e

        self.LOG_LEVEL = env_string("INFO", "LOG_LEVEL").upper()
