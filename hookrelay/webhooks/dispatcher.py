"""Route authenticated deliveries to the summarizer for their event type."""

from __future__ import annotations

from typing import Any

from hookrelay.utils.logging import get_logger
from hookrelay.webhooks.summarizers import (
    Summarizer,
    summarize_issue,
    summarize_star,
    summarize_unknown,
)

log = get_logger(__name__)


def default_summarizers() -> dict[str, Summarizer]:
    return {
        "star": summarize_star,
        "issues": summarize_issue,
    }


class EventDispatcher:
    """Maps ``X-GitHub-Event`` tags to summarizers.

    ``dispatch`` is total: unknown tags get a message naming the tag, and a
    summarizer that raises is logged and replaced by a fallback message.
    """

    def __init__(self, summarizers: dict[str, Summarizer] | None = None) -> None:
        if summarizers is None:
            summarizers = default_summarizers()
        self._summarizers: dict[str, Summarizer] = dict(summarizers)

    @property
    def event_types(self) -> list[str]:
        return sorted(self._summarizers)

    def register(self, event_type: str, summarizer: Summarizer) -> None:
        self._summarizers[event_type] = summarizer

    def dispatch(self, event_type: str, payload: Any) -> str:
        summarizer = self._summarizers.get(event_type)
        if summarizer is None:
            log.info("webhook_event_unhandled", event_type=event_type)
            return summarize_unknown(event_type)

        try:
            return summarizer(payload)
        except Exception:
            log.exception("summarizer_failed", event_type=event_type)
            return f"Could not summarize {event_type} event"
