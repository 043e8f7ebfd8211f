"""Webhook delivery models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Delivery:
    body: bytes  # raw request bytes, exactly as received
    signature: str = ""
    event_type: str = "unknown"
    delivery_id: str = ""


class NotifyOutcome(str, Enum):
    DELIVERED = "delivered"
    FAILED = "failed"
