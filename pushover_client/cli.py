"""
Command-line interface for the Pushover API.

    pushover send -m "Hello world!"
    pushover limits
"""
import logging
import sys

import click
import httpx

from .client import PushoverClient
from .config import Config, env_string
from .errors import PushoverError
from .loggers import JSONLogger, RawLogger
from .models import Message, Priority

PRIORITIES = ["lowest", "low", "normal", "high", "emergency"]


@click.group()
@click.option("-k", "--insecure", is_flag=True, help="Accept insecure connections")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output to stderr")
@click.option("-d", "--raw", is_flag=True, help="Raw output of HTTP request/response to stderr")
@click.pass_context
def cli(ctx: click.Context, insecure: bool, verbose: bool, raw: bool) -> None:
    """Send notifications with Pushover."""
    try:
        config = Config()
    except PushoverError as e:
        raise click.ClickException(str(e)) from e
    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO))

    ctx.ensure_object(dict)
    transport = ctx.obj.get("transport")
    if transport is None and insecure:
        transport = httpx.HTTPTransport(verify=False)

    round_trip_logger = None
    if verbose:
        round_trip_logger = JSONLogger(sys.stderr)
    elif raw:
        round_trip_logger = RawLogger(sys.stderr)

    try:
        client = PushoverClient(transport=transport, logger=round_trip_logger)
    except PushoverError as e:
        raise click.ClickException(str(e)) from e
    ctx.obj["client"] = ctx.with_resource(client)


@cli.command()
def env() -> None:
    """Print environment."""
    for name in ("APP_TOKEN", "USER_KEY", "PUSHOVER_URL"):
        click.echo(f"{name:<30}: {env_string('', name)} (required)")


@cli.command()
@click.option("-m", "message", default="", help="Message to send")
@click.option("--html", is_flag=True, help="Message is formatted as HTML")
@click.option("--mono", is_flag=True, help="Use monospace font for message")
@click.option("-t", "title", default="", help="Title (optional)")
@click.option("-d", "device", default="", help="Device (optional)")
@click.option("--url", default="", help="URL (optional)")
@click.option("--url-title", default="", help="URL title (optional)")
@click.option("-p", "priority", type=click.Choice(PRIORITIES), default="normal", help="Priority")
@click.option("--sound", default="", help="Sound to play (optional)")
@click.option("-a", "attachment", default="", help="File to attach (optional)")
@click.option("--retry", default=30, show_default=True, help="Retry seconds (if priority is emergency)")
@click.option("--expire", default=300, show_default=True, help="Expire seconds (if priority is emergency)")
@click.option("--tags", default="", help="Tags (optional)")
@click.option("--callback", default="", help="Callback URL (optional)")
@click.pass_obj
def send(obj, message, html, mono, title, device, url, url_title, priority, sound,
         attachment, retry, expire, tags, callback) -> None:
    """Send a message."""
    msg = Message(
        message=message,
        html=html,
        monospace=mono,
        title=title,
        devices=[device] if device else [],
        url=url,
        url_title=url_title,
        priority=Priority.from_name(priority),
        sound=sound,
        attachment=attachment,
        retry=retry,
        expire=expire,
        tags=[t.strip() for t in tags.split(",") if t.strip()],
        callback_url=callback,
    )
    try:
        resp = obj["client"].messages.send(msg)
    except PushoverError as e:
        raise click.ClickException(str(e)) from e
    click.echo(resp.receipt)


@cli.command()
@click.pass_obj
def limits(obj) -> None:
    """Print the application's API limits."""
    try:
        resp = obj["client"].messages.limits()
    except PushoverError as e:
        raise click.ClickException(str(e)) from e

    reset = resp.reset_time.strftime("%a %b %d %H:%M:%S UTC %Y") if resp.reset_time else "-"
    click.echo(f"Limit={resp.limit}, remaining={resp.remaining}, reset={resp.reset} ({reset})")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
