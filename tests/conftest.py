"""Shared fixtures and fakes."""

import pytest

from hookrelay.transports.base import Notifier
from hookrelay.webhooks.models import NotifyOutcome


class RecordingNotifier(Notifier):
    """Notifier fake that records messages and returns a fixed outcome."""

    def __init__(self, outcome: NotifyOutcome = NotifyOutcome.DELIVERED) -> None:
        self.outcome = outcome
        self.messages: list[str] = []
        self.started = False
        self.stopped = False

    @property
    def platform_name(self) -> str:
        return "recording"

    async def start(self) -> None:
        self.started = True

    async def stop(self) -> None:
        self.stopped = True

    async def notify(self, message: str) -> NotifyOutcome:
        self.messages.append(message)
        return self.outcome


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep the developer's own config and env out of every test."""
    monkeypatch.setenv("HOOKRELAY_CONFIG_DIR", str(tmp_path / "config"))
    for var in (
        "HOOKRELAY_CONFIG",
        "HOOKRELAY_SECRET",
        "HOOKRELAY_SERVER__PORT",
        "HOOKRELAY_DISCORD__WEBHOOK_URL",
    ):
        monkeypatch.delenv(var, raising=False)
