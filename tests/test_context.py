"""
Tests for RunContext: bridge lifecycle, counters and timing spans.
"""

import pytest

from uqff.context import RunContext
from uqff.symbolic import NullBridge


class RecordingBridge:
    def __init__(self):
        self.calls = []

    def open(self):
        self.calls.append("open")
        return self

    def close(self):
        self.calls.append("close")


class TestLifecycle:
    """open()/close() and the with-statement."""

    def test_default_bridge(self):
        assert isinstance(RunContext().bridge, NullBridge)

    def test_open_close_idempotent(self):
        bridge = RecordingBridge()
        ctx = RunContext(bridge=bridge)
        ctx.open()
        ctx.open()
        ctx.close()
        ctx.close()
        assert bridge.calls == ["open", "close"]

    def test_with_statement_closes_on_error(self):
        bridge = RecordingBridge()
        with pytest.raises(RuntimeError):
            with RunContext(bridge=bridge) as ctx:
                assert ctx.is_open
                raise RuntimeError("boom")
        assert bridge.calls == ["open", "close"]


class TestMetrics:
    """Counters and spans."""

    def test_count(self):
        ctx = RunContext()
        ctx.count("rounds")
        ctx.count("rounds", 4)
        assert ctx.metrics["rounds"] == 5

    def test_span_recorded(self):
        ctx = RunContext()
        with ctx.span("work"):
            pass
        with ctx.span("work"):
            pass
        assert [name for name, _ in ctx.spans] == ["work", "work"]
        assert ctx.elapsed_ms("work") >= 0.0
        assert ctx.elapsed_ms("other") == 0.0

    def test_span_recorded_on_error(self):
        ctx = RunContext()
        with pytest.raises(ValueError):
            with ctx.span("fails"):
                raise ValueError("x")
        assert ctx.spans[0][0] == "fails"

    def test_to_dict(self):
        ctx = RunContext()
        ctx.count("a")
        with ctx.span("s"):
            pass
        data = ctx.to_dict()
        assert data["metrics"] == {"a": 1}
        assert data["spans"][0]["name"] == "s"
