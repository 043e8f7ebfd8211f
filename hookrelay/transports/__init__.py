"""hookrelay notifiers."""

from hookrelay.transports.base import Notifier
from hookrelay.transports.discord_transport import DiscordNotifier

__all__ = [
    "Notifier",
    "DiscordNotifier",
]
