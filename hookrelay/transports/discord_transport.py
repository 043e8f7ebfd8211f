"""Discord notifier posting to a channel webhook URL with httpx."""

from __future__ import annotations

import httpx

from hookrelay.config import DiscordConfig
from hookrelay.transports.base import Notifier
from hookrelay.utils.logging import get_logger
from hookrelay.webhooks.models import NotifyOutcome

log = get_logger(__name__)


class DiscordNotifier(Notifier):
    def __init__(
        self,
        config: DiscordConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._client = client
        self._owns_client = client is None

    @property
    def platform_name(self) -> str:
        return "discord"

    async def start(self) -> None:
        if not self._config.webhook_url:
            log.warning(
                "discord_webhook_url_missing",
                msg="No Discord webhook URL configured, every delivery will fail with 500.",
            )
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._config.timeout or None)
            self._owns_client = True
        log.info("discord_notifier_started")

    async def stop(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
        log.info("discord_notifier_stopped")

    async def notify(self, message: str) -> NotifyOutcome:
        if not self._config.webhook_url:
            log.error("discord_notify_failed", reason="no_webhook_url")
            return NotifyOutcome.FAILED

        if self._client is None:
            log.error("discord_notify_failed", reason="notifier_not_started")
            return NotifyOutcome.FAILED

        try:
            resp = await self._client.post(
                self._config.webhook_url,
                json={"content": message},
                headers={"Content-Type": "application/json"},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.error("discord_notify_failed", reason="network_error", error=str(exc))
            return NotifyOutcome.FAILED
        except (UnicodeError, ValueError) as exc:
            # Lone surrogates from a JSON \ud800 escape cannot be UTF-8 encoded
            log.error(
                "discord_notify_failed",
                reason="unencodable_message",
                error=type(exc).__name__,
            )
            return NotifyOutcome.FAILED

        if not resp.is_success:
            self._log_error_response(resp)
            return NotifyOutcome.FAILED

        log.info("discord_notified", status=resp.status_code)
        return NotifyOutcome.DELIVERED

    def _log_error_response(self, resp: httpx.Response) -> None:
        if resp.status_code == 429:
            log.warning(
                "discord_rate_limited",
                retry_after=resp.headers.get("Retry-After"),
            )
        elif resp.status_code == 404:
            log.error("discord_webhook_not_found", msg="Webhook URL is invalid")
        log.error(
            "discord_notify_failed",
            reason="http_error",
            status=resp.status_code,
            status_text=resp.reason_phrase,
        )
