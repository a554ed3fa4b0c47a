"""
Tests for Chaining Policy
"""

import pytest
from structlog.testing import capture_logs

from proxytrace.config import reset_settings
from proxytrace.container import wrap
from proxytrace.policies import ChainingPolicy


class ChainableString:
    """Fluent string builder whose mutators return the receiver."""

    def __init__(self, initial=""):
        self.value = initial

    def append(self, text):
        self.value += text
        return self

    def prepend(self, text):
        self.value = text + self.value
        return self

    def upper(self):
        return self.value.upper()

    def to_string(self):
        return self.value

    def __str__(self):
        return self.value


class TestChainingPolicy:
    """Test suite for permissive method chaining."""

    @pytest.fixture
    def records(self):
        return []

    @pytest.fixture
    def policy(self, records):
        return ChainingPolicy(sink=records.append)

    @pytest.fixture
    def text(self, policy):
        return wrap(ChainableString("Hello"), policy)

    def test_chain_through_unknown_methods(self, text):
        """Test a chain mixing real and missing methods."""
        result = (
            text
            .append(" World")
            .make_upper_case()
            .add_emoji("🎉")
            .prepend(">>> ")
            .to_string()
        )

        assert result == ">>> Hello World"

    def test_unknown_calls_do_not_change_state(self, policy):
        """Test that the chain matches calling only the real mutators."""
        plain = ChainableString("Hello")
        plain.append(" World").prepend(">>> ")

        target = ChainableString("Hello")
        wrap(target, policy).append(" World").make_upper_case().add_emoji("x").prepend(">>> ")

        assert target.value == plain.value

    def test_self_return_yields_wrapper(self, text):
        """Test that a mutator returning its receiver returns the wrapper."""
        assert text.append("!") is text

    def test_other_results_end_chain(self, text):
        """Test that non-self results pass through unchanged."""
        assert text.upper() == "HELLO"
        assert str(text) == "Hello"

    def test_unknown_method_returns_wrapper(self, text):
        """Test that a missing method is a no-op returning the wrapper."""
        assert text.does_not_exist(1, 2, key="v") is text

    def test_every_read_is_callable(self, text):
        """Test that even plain attributes are read as chainable no-ops."""
        member = text.value
        assert callable(member)
        assert member() is text

    def test_unknown_calls_are_reported(self, text, policy, records):
        """Test that swallowed calls are counted and sent to the sink."""
        text.make_upper_case().add_emoji("🎉")

        assert policy.ignored_calls == 2
        assert [r.name for r in records] == ["make_upper_case", "add_emoji"]
        assert records[1].args == ["🎉"]

    def test_known_calls_are_not_reported(self, text, policy, records):
        """Test that real methods do not reach the sink."""
        text.append("a").prepend("b")

        assert policy.ignored_calls == 0
        assert records == []

    def test_unknown_call_logged(self, text):
        """Test the structlog event for swallowed calls."""
        with capture_logs() as logs:
            text.make_upper_case()

        ignored = [e for e in logs if e["event"] == "chain_call_ignored"]
        assert len(ignored) == 1
        assert ignored[0]["name"] == "make_upper_case"

    def test_reporting_can_be_disabled(self):
        """Test that report_unknown=False silences the log but still counts."""
        policy = ChainingPolicy(report_unknown=False)
        text = wrap(ChainableString(), policy)

        with capture_logs() as logs:
            text.nope()

        assert not [e for e in logs if e["event"] == "chain_call_ignored"]
        assert policy.ignored_calls == 1

    def test_reporting_default_from_settings(self, monkeypatch):
        """Test that the default comes from PROXYTRACE_REPORT_UNKNOWN_CHAIN_CALLS."""
        monkeypatch.setenv("PROXYTRACE_REPORT_UNKNOWN_CHAIN_CALLS", "false")
        reset_settings()
        try:
            assert ChainingPolicy().report_unknown is False
        finally:
            reset_settings()

    def test_mapping_target(self):
        """Test chaining over a mapping of functions."""
        steps = []
        pipeline = {}
        pipeline["step"] = lambda name: steps.append(name) or pipeline

        proxy = wrap(pipeline, ChainingPolicy())
        assert proxy.step("a").skip().step("b") is proxy
        assert steps == ["a", "b"]

    def test_mapping_builtin_methods(self):
        """Test that dict methods run on the target instead of being skipped."""
        target = {"a": 1}
        policy = ChainingPolicy()
        proxy = wrap(target, policy)

        assert proxy.update({"b": 2}) is None
        assert proxy.setdefault("c", 3) == 3
        assert proxy.pop("a") == 1
        assert sorted(proxy.keys()) == ["b", "c"]

        assert target == {"b": 2, "c": 3}
        assert policy.ignored_calls == 0

    def test_missing_mapping_key_is_ignored(self):
        """Test that a name that is neither key nor dict method is skipped."""
        target = {"a": 1}
        policy = ChainingPolicy()
        proxy = wrap(target, policy)

        assert proxy.frobnicate(1) is proxy
        assert policy.ignored_calls == 1
        assert target == {"a": 1}

    def test_index_like_keys_on_list(self):
        """Test that list elements and list methods are both reachable."""
        calls = []
        target = [lambda: calls.append("first")]
        policy = ChainingPolicy()
        proxy = wrap(target, policy)

        proxy["0"]()
        proxy.append(5)
        proxy["7"]()

        assert calls == ["first"]
        assert target[1] == 5
        assert policy.ignored_calls == 1

    def test_writes_pass_through(self, text):
        """Test that attribute writes are not intercepted."""
        text.value = "Bye"
        assert str(text) == "Bye"
