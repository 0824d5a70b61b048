import httpx
import pytest

from pushover_client import PushoverClient


class Recorder:
    """Collects round-trip logger calls."""

    def __init__(self):
        self.calls = []

    def log(self, request, response, error, start, duration):
        self.calls.append((request, response, error, start, duration))


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def make_client(recorder):
    def _make(handler, **kwargs):
        kwargs.setdefault("app_token", "TOKEN")
        kwargs.setdefault("user_key", "USER")
        kwargs.setdefault("base_url", "https://api.example.test")
        kwargs.setdefault("logger", recorder)
        return PushoverClient(transport=httpx.MockTransport(handler), **kwargs)

    return _make
