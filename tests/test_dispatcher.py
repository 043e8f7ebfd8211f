"""Tests for event summarizers and the dispatcher registry."""

import pytest

from hookrelay.webhooks.dispatcher import EventDispatcher
from hookrelay.webhooks.summarizers import (
    UNAVAILABLE,
    lookup,
    summarize_issue,
    summarize_star,
)


@pytest.fixture
def dispatcher():
    return EventDispatcher()


# ---------------------------------------------------------------------------
# Field lookup
# ---------------------------------------------------------------------------

class TestLookup:
    def test_nested_value(self):
        assert lookup({"a": {"b": "c"}}, "a", "b") == "c"

    def test_missing_key(self):
        assert lookup({"a": {}}, "a", "b") == UNAVAILABLE

    def test_non_mapping_intermediate(self):
        assert lookup({"a": "flat"}, "a", "b") == UNAVAILABLE
        assert lookup(["not", "a", "dict"], "a") == UNAVAILABLE

    def test_null_and_containers_are_unavailable(self):
        assert lookup({"a": None}, "a") == UNAVAILABLE
        assert lookup({"a": {"b": 1}}, "a") == UNAVAILABLE

    def test_scalars_are_stringified(self):
        assert lookup({"n": 42}, "n") == "42"


# ---------------------------------------------------------------------------
# star
# ---------------------------------------------------------------------------

class TestSummarizeStar:
    def test_created(self):
        payload = {
            "action": "created",
            "sender": {"login": "alice"},
            "repository": {"full_name": "org/repo"},
        }
        assert summarize_star(payload) == "User alice created star on org/repo"

    def test_deleted(self):
        payload = {
            "action": "deleted",
            "sender": {"login": "bob"},
            "repository": {"full_name": "org/repo"},
        }
        assert summarize_star(payload) == "User bob deleted star on org/repo"

    def test_missing_fields_use_placeholder(self):
        assert summarize_star({"action": "created"}) == (
            f"User {UNAVAILABLE} created star on {UNAVAILABLE}"
        )

    def test_unhandled_action(self):
        assert summarize_star({"action": "archived"}) == (
            "Unhandled action for the star event archived"
        )


# ---------------------------------------------------------------------------
# issues
# ---------------------------------------------------------------------------

class TestSummarizeIssue:
    def test_opened(self):
        payload = {"action": "opened", "issue": {"title": "Bug X"}}
        assert summarize_issue(payload) == "An issue was opened with this title Bug X"

    def test_closed(self):
        payload = {"action": "closed", "issue": {"user": {"login": "carol"}}}
        assert summarize_issue(payload) == "An issue was closed by carol"

    def test_reopened(self):
        payload = {"action": "reopened", "issue": {"user": {"login": "dave"}}}
        assert summarize_issue(payload) == "An issue was reopened by dave"

    def test_unhandled_action_names_it(self):
        message = summarize_issue({"action": "labeled", "issue": {"title": "x"}})
        assert "labeled" in message
        assert message == "Unhandled action for the issue event labeled"

    def test_missing_issue(self):
        assert summarize_issue({"action": "closed"}) == (
            f"An issue was closed by {UNAVAILABLE}"
        )

    def test_missing_action(self):
        assert summarize_issue({}) == f"Unhandled action for the issue event {UNAVAILABLE}"


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------

class TestEventDispatcher:
    def test_default_registry(self, dispatcher):
        assert dispatcher.event_types == ["issues", "star"]

    def test_routes_star(self, dispatcher):
        payload = {
            "action": "created",
            "sender": {"login": "alice"},
            "repository": {"full_name": "org/repo"},
        }
        assert dispatcher.dispatch("star", payload) == "User alice created star on org/repo"

    def test_routes_issues(self, dispatcher):
        payload = {"action": "opened", "issue": {"title": "Bug X"}}
        assert dispatcher.dispatch("issues", payload) == (
            "An issue was opened with this title Bug X"
        )

    @pytest.mark.parametrize("event_type", ["push", "pull_request", "", "weird event ☃"])
    def test_unknown_event_names_type(self, dispatcher, event_type):
        message = dispatcher.dispatch(event_type, {"action": "whatever"})
        assert message == f"Unknown event {event_type}"

    def test_non_object_payload(self, dispatcher):
        message = dispatcher.dispatch("star", ["not", "an", "object"])
        assert message == f"Unhandled action for the star event {UNAVAILABLE}"

    def test_register_new_event(self, dispatcher):
        dispatcher.register("ping", lambda payload: f"pong {payload['zen']}")
        assert "ping" in dispatcher.event_types
        assert dispatcher.dispatch("ping", {"zen": "Keep it simple"}) == "pong Keep it simple"

    def test_custom_registry_replaces_defaults(self):
        dispatcher = EventDispatcher({"fork": lambda payload: "forked"})
        assert dispatcher.event_types == ["fork"]
        assert dispatcher.dispatch("star", {}) == "Unknown event star"

    def test_failing_summarizer_does_not_raise(self, dispatcher):
        def broken(payload):
            raise KeyError("missing")

        dispatcher.register("broken", broken)
        assert dispatcher.dispatch("broken", {}) == "Could not summarize broken event"
