"""Abstract notifier base class."""

from __future__ import annotations

from abc import ABC, abstractmethod

from hookrelay.webhooks.models import NotifyOutcome


class Notifier(ABC):
    @property
    @abstractmethod
    def platform_name(self) -> str: ...

    async def start(self) -> None:
        return None

    async def stop(self) -> None:
        return None

    @abstractmethod
    async def notify(self, message: str) -> NotifyOutcome:
        """Deliver *message* once. Must resolve to an outcome, never raise."""
