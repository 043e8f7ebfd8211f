"""Webhook ingress: signature verification, dispatch and the HTTP server."""

from hookrelay.webhooks.dispatcher import EventDispatcher
from hookrelay.webhooks.models import Delivery, NotifyOutcome
from hookrelay.webhooks.signature import sign_payload, verify_signature

__all__ = [
    "Delivery",
    "EventDispatcher",
    "NotifyOutcome",
    "sign_payload",
    "verify_signature",
]
