"""
Tests for the symbolic verification bridge.

The real engine is not required: POSIX `echo` and `false` stand in for
a successful and a failing wolframscript process.
"""

import shutil

import pytest

from uqff.symbolic import (
    NullBridge, UNAVAILABLE, WolframScriptBridge, evaluate_symbolic_float,
    is_failure, parse_number, verify_term,
)
from uqff.terms.compressed import MUGECompressedBase

needs_echo = pytest.mark.skipif(shutil.which("echo") is None, reason="echo not available")
needs_false = pytest.mark.skipif(shutil.which("false") is None, reason="false not available")


class TestHelpers:
    """Sentinel detection and number parsing."""

    def test_is_failure(self):
        assert is_failure("[ERROR: boom]")
        assert is_failure(UNAVAILABLE)
        assert not is_failure("42")
        assert not is_failure(42.0)

    def test_parse_number(self):
        assert parse_number("42") == 42.0
        assert parse_number(" 1.5*^12\n") == 1.5e12
        assert parse_number("x + 1") is None


class TestNullBridge:
    """No engine configured."""

    def test_always_unavailable(self):
        bridge = NullBridge().open()
        assert bridge.evaluate_symbolic("1+1") == UNAVAILABLE
        bridge.close()

    def test_float_helper_returns_none(self, caplog):
        assert evaluate_symbolic_float(NullBridge(), "1+1") is None
        assert "Symbolic evaluation failed" in caplog.text


class TestWolframScriptBridge:
    """Subprocess bridge failure modes and results."""

    def test_not_open(self):
        assert WolframScriptBridge().evaluate_symbolic("1") == "[ERROR: bridge not open]"

    def test_missing_executable(self):
        with WolframScriptBridge(executable="no-such-engine-uqff") as bridge:
            result = bridge.evaluate_symbolic("1")
        assert result == "[ERROR: no-such-engine-uqff not found]"
        assert bridge.is_open is False

    @needs_echo
    def test_numeric_result(self):
        with WolframScriptBridge(executable="echo", args=()) as bridge:
            assert bridge.evaluate_symbolic("42") == 42.0
            assert bridge.evaluate_symbolic("1.5*^12") == 1.5e12

    @needs_echo
    def test_non_numeric_result(self):
        with WolframScriptBridge(executable="echo", args=()) as bridge:
            assert bridge.evaluate_symbolic("x") == "x"
            assert evaluate_symbolic_float(bridge, "x") is None

    @needs_false
    def test_non_zero_exit(self):
        with WolframScriptBridge(executable="false", args=()) as bridge:
            result = bridge.evaluate_symbolic("1")
        assert result.startswith("[ERROR: exit code 1")


class TestVerifyTerm:
    """Numeric vs symbolic comparison."""

    def test_unavailable(self):
        result = verify_term(NullBridge(), MUGECompressedBase(), "G*M/r^2", 0.0, {})
        assert result.status == "unavailable"
        assert result.symbolic is None
        assert result.to_dict()["term"] == "MUGECompressedBase"

    @needs_echo
    def test_match(self):
        term = MUGECompressedBase()
        expected = repr(term.evaluate(0.0, {}))
        with WolframScriptBridge(executable="echo", args=()) as bridge:
            result = verify_term(bridge, term, expected, 0.0, {})
        assert result.status == "match"
        assert result.rel_error == 0.0

    @needs_echo
    def test_mismatch(self):
        with WolframScriptBridge(executable="echo", args=()) as bridge:
            result = verify_term(bridge, MUGECompressedBase(), "1.0", 0.0, {})
        assert result.status == "mismatch"
        assert result.rel_error > 0.99
