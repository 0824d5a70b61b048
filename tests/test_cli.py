from urllib.parse import parse_qsl

import httpx
from click.testing import CliRunner

from pushover_client.cli import cli


def _env(monkeypatch):
    monkeypatch.setenv("APP_TOKEN", "TOKEN")
    monkeypatch.setenv("USER_KEY", "USER")
    monkeypatch.setenv("PUSHOVER_URL", "https://api.example.test")


def test_env(monkeypatch):
    _env(monkeypatch)
    result = CliRunner().invoke(cli, ["env"], obj={})
    assert result.exit_code == 0
    assert "APP_TOKEN" in result.output
    assert "https://api.example.test" in result.output


def test_send_prints_receipt(monkeypatch):
    _env(monkeypatch)
    seen = {}

    def handler(request):
        seen["form"] = dict(parse_qsl(request.content.decode()))
        return httpx.Response(200, json={"status": 1, "receipt": "rcpt123"})

    result = CliRunner().invoke(
        cli,
        ["send", "-m", "Hello", "-p", "emergency", "--retry", "10", "--tags", "a,b"],
        obj={"transport": httpx.MockTransport(handler)},
    )

    assert result.exit_code == 0, result.output
    assert "rcpt123" in result.output.splitlines()
    assert seen["form"]["message"] == "Hello"
    assert seen["form"]["priority"] == "2"
    assert seen["form"]["retry"] == "30"
    assert seen["form"]["expire"] == "300"
    assert seen["form"]["tags"] == "a,b"


def test_send_reports_api_error(monkeypatch):
    _env(monkeypatch)

    def handler(request):
        return httpx.Response(400, json={"status": 0, "errors": ["message cannot be blank"]})

    result = CliRunner().invoke(cli, ["send"], obj={"transport": httpx.MockTransport(handler)})

    assert result.exit_code == 1
    assert "message cannot be blank" in result.output


def test_limits(monkeypatch):
    _env(monkeypatch)

    def handler(request):
        return httpx.Response(200, json={"limit": 10000, "remaining": 7496, "reset": 1393653600})

    result = CliRunner().invoke(cli, ["limits"], obj={"transport": httpx.MockTransport(handler)})

    assert result.exit_code == 0, result.output
    assert "Limit=10000, remaining=7496, reset=1393653600 (" in result.output


def test_env_shows_unset_url_as_empty(monkeypatch):
    _env(monkeypatch)
    monkeypatch.delenv("PUSHOVER_URL")
    result = CliRunner().invoke(cli, ["env"], obj={})
    assert result.exit_code == 0
    assert f"{'PUSHOVER_URL':<30}:  (required)" in result.output
    assert "api.pushover.net" not in result.output


def test_invalid_timeout_setting_is_reported(monkeypatch):
    _env(monkeypatch)
    monkeypatch.setenv("PUSHOVER_TIMEOUT", "soon")
    result = CliRunner().invoke(cli, ["env"], obj={})
    assert result.exit_code == 1
    assert "PUSHOVER_TIMEOUT" in result.output
