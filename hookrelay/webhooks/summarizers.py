"""Per-event summarizers turning GitHub payloads into one-line messages."""

from __future__ import annotations

from typing import Any, Callable

UNAVAILABLE = "unavailable"

Summarizer = Callable[[Any], str]


def lookup(payload: Any, *path: str) -> str:
    """Walk nested mappings along *path*, returning ``UNAVAILABLE`` on any gap."""
    current = payload
    for key in path:
        if not isinstance(current, dict):
            return UNAVAILABLE
        current = current.get(key)
    if current is None or isinstance(current, (dict, list)):
        return UNAVAILABLE
    return str(current)


# ---------------------------------------------------------------------------
# star
# ---------------------------------------------------------------------------

def summarize_star(payload: Any) -> str:
    action = lookup(payload, "action")

    if action in ("created", "deleted"):
        login = lookup(payload, "sender", "login")
        repo = lookup(payload, "repository", "full_name")
        return f"User {login} {action} star on {repo}"

    return f"Unhandled action for the star event {action}"


# ---------------------------------------------------------------------------
# issues
# ---------------------------------------------------------------------------

def summarize_issue(payload: Any) -> str:
    action = lookup(payload, "action")

    if action == "opened":
        return f"An issue was opened with this title {lookup(payload, 'issue', 'title')}"
    if action == "closed":
        return f"An issue was closed by {lookup(payload, 'issue', 'user', 'login')}"
    if action == "reopened":
        return f"An issue was reopened by {lookup(payload, 'issue', 'user', 'login')}"

    return f"Unhandled action for the issue event {action}"


def summarize_unknown(event_type: str) -> str:
    return f"Unknown event {event_type}"
