"""Webhook HTTP server using aiohttp."""

from __future__ import annotations

import json
from typing import Any, Callable

from aiohttp import web

from hookrelay.config import ServerConfig
from hookrelay.transports.base import Notifier
from hookrelay.utils.logging import get_logger
from hookrelay.webhooks.dispatcher import EventDispatcher
from hookrelay.webhooks.models import Delivery, NotifyOutcome
from hookrelay.webhooks.signature import SIGNATURE_HEADER, verify_signature

log = get_logger(__name__)

EVENT_HEADER = "X-GitHub-Event"
DELIVERY_HEADER = "X-GitHub-Delivery"

Verifier = Callable[[bytes, str, bytes], bool]


class WebhookServer:
    """Receives GitHub deliveries, verifies them and relays a summary.

    Collaborators are injected already constructed; the server holds no
    per-request state.
    """

    def __init__(
        self,
        config: ServerConfig,
        secret: bytes,
        dispatcher: EventDispatcher,
        notifier: Notifier,
        verifier: Verifier = verify_signature,
    ) -> None:
        self._config = config
        self._secret = secret
        self._dispatcher = dispatcher
        self._notifier = notifier
        self._verifier = verifier
        self._runner: web.AppRunner | None = None

    @property
    def path(self) -> str:
        path = self._config.path
        return path if path.startswith("/") else f"/{path}"

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        if not self._secret:
            log.warning(
                "webhook_no_secret",
                msg="No webhook secret configured, all deliveries will be rejected. Set HOOKRELAY_SECRET.",
            )
        await self._notifier.start()
        app = self.build_app()
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self._config.bind, self._config.port)
        await site.start()
        log.info(
            "webhook_server_started",
            bind=self._config.bind,
            port=self._config.port,
            path=self.path,
        )

    async def stop(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
        await self._notifier.stop()
        log.info("webhook_server_stopped")

    # ------------------------------------------------------------------
    # App construction
    # ------------------------------------------------------------------

    def build_app(self) -> web.Application:
        app = web.Application(client_max_size=self._config.max_body_size)
        app.router.add_post(self.path, self._handle_webhook)
        app.router.add_get("/health", self._handle_health)
        return app

    # ------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------

    async def _handle_health(self, request: web.Request) -> web.Response:
        return web.json_response({"status": "ok"})

    async def _handle_webhook(self, request: web.Request) -> web.Response:
        delivery = Delivery(
            body=await request.read(),
            signature=request.headers.get(SIGNATURE_HEADER, ""),
            event_type=request.headers.get(EVENT_HEADER, "unknown"),
            delivery_id=request.headers.get(DELIVERY_HEADER, ""),
        )

        if not self._verifier(self._secret, delivery.signature, delivery.body):
            log.warning(
                "webhook_signature_rejected",
                remote=request.remote,
                delivery_id=delivery.delivery_id,
            )
            return web.json_response({"error": "Invalid signature"}, status=401)

        payload = self._parse_payload(delivery)
        message = self._dispatcher.dispatch(delivery.event_type, payload)

        log.info(
            "webhook_received",
            event_type=delivery.event_type,
            delivery_id=delivery.delivery_id,
        )

        outcome = await self._notifier.notify(message)
        if outcome is NotifyOutcome.DELIVERED:
            return web.Response(status=202, text="Accepted")

        log.error(
            "webhook_relay_failed",
            event_type=delivery.event_type,
            delivery_id=delivery.delivery_id,
            notifier=self._notifier.platform_name,
        )
        return web.json_response({"error": "internal server error"}, status=500)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _parse_payload(self, delivery: Delivery) -> Any:
        # Only called after verification; shape is handled leniently downstream
        try:
            return json.loads(delivery.body)
        except (ValueError, UnicodeDecodeError):
            log.warning(
                "webhook_payload_unparseable",
                event_type=delivery.event_type,
                delivery_id=delivery.delivery_id,
            )
            return {}
