"""
Unit tests for the snsPlus configuration scanner.

No AWS involved: the scanner only walks the service document.
"""

from sns_plus.scanner import (
    all_functions,
    convert_events,
    sns_plus_events,
    sns_plus_functions,
    sns_plus_topic_names,
)


def _service(functions):
    return {"service": "shop", "functions": functions}


class TestFunctionListing:
    """Tests for listing declared functions."""

    def test_all_functions_in_declaration_order(self, sample_service):
        funcs = all_functions(sample_service)
        assert [f["handler"] for f in funcs] == ["orders.handler", "health.handler"]

    def test_missing_functions(self):
        """Edge case: no functions key, or an explicit null."""
        assert all_functions({"service": "shop"}) == []
        assert all_functions(_service(None)) == []

    def test_only_sns_plus_functions(self, sample_service):
        funcs = sns_plus_functions(sample_service)
        assert len(funcs) == 1
        assert funcs[0]["handler"] == "orders.handler"

    def test_function_without_events(self):
        """A function with no events (or events: null) is skipped."""
        service = _service({"a": {"handler": "a.h"}, "b": {"handler": "b.h", "events": None}})
        assert sns_plus_functions(service) == []


class TestEventScanning:
    """Tests for collecting snsPlus events."""

    def test_returns_only_tagged_events_in_order(self):
        """
        Given: Mixed events across two functions
        Expect: Exactly the snsPlus entries, in function then event order
        """
        service = _service({
            "first": {"events": [{"snsPlus": "a"}, {"http": "GET /"}, {"snsPlus": "b"}]},
            "second": {"events": [{"sns": "arn:aws:sns:us-east-1:1:native"}, {"snsPlus": "c"}]},
        })

        events = sns_plus_events(service)

        assert [e["snsPlus"] for e in events] == ["a", "b", "c"]

    def test_returns_the_same_objects(self):
        """Events are returned by reference so they can be rewritten in place."""
        event = {"snsPlus": "a"}
        service = _service({"f": {"events": [event]}})

        assert sns_plus_events(service)[0] is event

    def test_scan_does_not_mutate(self, sample_service):
        import copy

        before = copy.deepcopy(sample_service)
        sns_plus_events(sample_service)
        assert sample_service == before

    def test_string_events_are_ignored(self):
        """Shorthand string events like '- schedule' aren't snsPlus events."""
        service = _service({"f": {"events": ["schedule", {"snsPlus": "x"}]}})
        assert sns_plus_topic_names(service) == ["x"]

    def test_topic_names_keep_duplicates(self):
        service = _service({
            "a": {"events": [{"snsPlus": "orders"}]},
            "b": {"events": [{"snsPlus": "orders"}]},
        })
        assert sns_plus_topic_names(service) == ["orders", "orders"]


class TestConvertEvents:
    """Tests for rewriting snsPlus events into native sns events."""

    def test_adds_sns_arn(self, sample_service):
        """
        Given: An snsPlus event for 'order-created'
        Expect: The same entry gains sns: <arn>
        """
        count = convert_events(sample_service, "us-east-1", "123456789012")

        event = sample_service["functions"]["orders"]["events"][1]
        assert count == 1
        assert event["sns"] == "arn:aws:sns:us-east-1:123456789012:order-created"
        assert event["snsPlus"] == "order-created"

    def test_other_events_untouched(self, sample_service):
        convert_events(sample_service, "us-east-1", "123456789012")

        assert sample_service["functions"]["orders"]["events"][0] == {
            "http": {"path": "orders", "method": "post"}
        }
        assert "sns" not in sample_service["functions"]["health"]["events"][0]

    def test_no_functions(self):
        assert convert_events(_service({}), "us-east-1", "1") == 0
