"""hookrelay entry point: wires settings, logging and the webhook server."""

from __future__ import annotations

import asyncio
import signal
import sys
from typing import BinaryIO

import click

from hookrelay import __version__
from hookrelay.config import Settings, load_settings
from hookrelay.transports.discord_transport import DiscordNotifier
from hookrelay.utils.logging import get_logger, setup_logging
from hookrelay.webhooks.dispatcher import EventDispatcher
from hookrelay.webhooks.server import WebhookServer
from hookrelay.webhooks.signature import sign_payload

log = get_logger(__name__)


def build_server(settings: Settings) -> WebhookServer:
    return WebhookServer(
        settings.server,
        settings.secret_bytes(),
        EventDispatcher(),
        DiscordNotifier(settings.discord),
    )


async def run(settings: Settings) -> None:
    server = build_server(settings)

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    def _signal_handler() -> None:
        log.info("shutdown_signal")
        stop_event.set()

    if sys.platform != "win32":
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, _signal_handler)

    log.info("hookrelay_starting", version=__version__)
    await server.start()

    try:
        if sys.platform == "win32":
            while not stop_event.is_set():
                await asyncio.sleep(1)
        else:
            await stop_event.wait()
    except KeyboardInterrupt:
        pass
    finally:
        await server.stop()


@click.group()
@click.version_option(__version__, prog_name="hookrelay")
def cli() -> None:
    """Relay signed GitHub webhooks to a Discord channel."""


@cli.command()
@click.option("--config", "config_path", default=None, help="Path to config YAML file")
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--port", type=int, default=None, help="Override the listening port")
def serve(config_path: str | None, log_level: str | None, port: int | None) -> None:
    """Start the webhook server."""
    settings = load_settings(config_path)
    if log_level:
        settings.log_level = log_level
    if port is not None:
        settings.server.port = port
    setup_logging(level=settings.log_level, json_output=settings.log_json)
    asyncio.run(run(settings))


@cli.command()
@click.argument("payload", type=click.File("rb"))
@click.option("--secret", default=None, help="Secret to sign with (defaults to configured secret)")
@click.option("--config", "config_path", default=None, help="Path to config YAML file")
def sign(payload: BinaryIO, secret: str | None, config_path: str | None) -> None:
    """Print the X-Hub-Signature-256 value for PAYLOAD (use - for stdin)."""
    if secret is None:
        secret = load_settings(config_path).secret
    if not secret:
        raise click.UsageError("No secret given and none configured (HOOKRELAY_SECRET).")
    click.echo(sign_payload(secret.encode("utf-8"), payload.read()))


if __name__ == "__main__":
    cli()
