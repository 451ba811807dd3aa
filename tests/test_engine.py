"""
Tests for the evaluation engine.

Verifies:
  - aDPM injection before the round, and its absence when unregistered
  - Subtotals are exact sums over the category members
  - Missing, invalid, raising and non-finite terms record 0.0
  - Caller parameters are never mutated
  - ResultSeries rejects mismatched rounds; column / top_terms
"""

import math
from collections import OrderedDict

import pytest

from uqff.context import RunContext
from uqff.engine import (
    DependencyResolver, EvaluationEngine, EvaluationRound, ResultSeries,
)
from uqff.parameters import ParameterMap
from uqff.registry import TermRegistry, RESONANCE_CATEGORY
from uqff.terms import PhysicsTerm
from uqff.terms.resonance import MUGEResonanceADPM, MUGEResonanceAAetherRes


class ConstantTerm(PhysicsTerm):
    category = "test"

    def __init__(self, name, value, valid=True):
        self.name = name
        self.value = value
        self.valid = valid

    def validate(self, params):
        return self.valid

    def evaluate(self, t, params):
        return self.value


class DividingTerm(PhysicsTerm):
    name = "Dividing"
    category = "test"

    def evaluate(self, t, params):
        return 1.0 / params.get("zero", 0.0)


class OverflowTerm(PhysicsTerm):
    name = "Overflow"
    category = "test"

    def evaluate(self, t, params):
        return 1e308 * 10.0


# Unit inputs: aDPM = 1 * 1 * (2 - 1) * 1 * 1 * 1 * 1 = 1
UNIT_PARAMS = {
    "I": 1.0, "A": 1.0, "omega1": 2.0, "omega2": 1.0, "fDPM": 1.0,
    "Evac_neb": 1.0, "c_res": 1.0, "Vsys": 1.0,
    "UA_SCM": 2.0, "omega_i": 1.0, "fTHz": 1.0, "fTRZ": 0.0,
}


def resonance_registry(with_base=True):
    reg = TermRegistry()
    if with_base:
        reg.register("MUGEResonanceADPM", MUGEResonanceADPM())
    reg.register("MUGEResonanceAAetherRes", MUGEResonanceAAetherRes())
    reg.register("g1", ConstantTerm("g1", 1.5))
    reg.register("g2", ConstantTerm("g2", -0.5))
    return reg


class TestDependencyResolver:
    """Base dependency injection."""

    def test_injects_value(self):
        params = ParameterMap(UNIT_PARAMS)
        value = DependencyResolver().resolve(0.0, params, resonance_registry())
        assert value == 1.0
        assert params["aDPM"] == 1.0

    def test_absent_base_injects_nothing(self):
        params = ParameterMap(UNIT_PARAMS)
        value = DependencyResolver().resolve(0.0, params, resonance_registry(False))
        assert value is None
        assert "aDPM" not in params

    def test_custom_base_and_key(self):
        reg = TermRegistry()
        reg.register("base", ConstantTerm("base", 4.0))
        params = ParameterMap()
        DependencyResolver("base", "k").resolve(0.0, params, reg)
        assert params["k"] == 4.0


class TestEvaluateRound:
    """One round over an active subset."""

    def test_dependent_uses_injected_value(self):
        engine = EvaluationEngine(resonance_registry())
        round_ = engine.evaluate_round(0.0, UNIT_PARAMS,
                                       ["MUGEResonanceADPM", "MUGEResonanceAAetherRes"])
        assert round_.value("MUGEResonanceADPM") == 1.0
        assert round_.value("MUGEResonanceAAetherRes") == 2.0
        assert round_.injected == 1.0

    def test_dependent_zero_without_base(self):
        engine = EvaluationEngine(resonance_registry(False))
        round_ = engine.evaluate_round(0.0, UNIT_PARAMS, ["MUGEResonanceAAetherRes"])
        assert round_.value("MUGEResonanceAAetherRes") == 0.0
        assert round_.injected is None

    def test_subtotals(self):
        engine = EvaluationEngine(resonance_registry())
        names = ["g1", "MUGEResonanceADPM", "g2", "MUGEResonanceAAetherRes"]
        round_ = engine.evaluate_round(0.0, UNIT_PARAMS, names)
        assert round_.total_gravity == 1.0
        assert round_.total_resonance == 3.0
        assert list(round_.values) == names

    def test_registered_category_decides_subtotal(self):
        reg = TermRegistry()
        reg.register("x", ConstantTerm("x", 5.0), category=RESONANCE_CATEGORY)
        round_ = EvaluationEngine(reg).evaluate_round(0.0, {}, ["x"])
        assert round_.total_resonance == 5.0
        assert round_.total_gravity == 0.0

    def test_resonance_muge_feeds_gravity_subtotal(self, registry):
        # category "muge" decides the subtotal, not the word in the name
        round_ = EvaluationEngine(registry).evaluate_round(0.0, {}, ["ResonanceMUGE"])
        value = round_.value("ResonanceMUGE")
        assert value != 0.0
        assert round_.total_gravity == value
        assert round_.total_resonance == 0.0

    def test_unknown_term_records_zero(self):
        engine = EvaluationEngine(resonance_registry())
        round_ = engine.evaluate_round(0.0, UNIT_PARAMS, ["g1", "Missing"])
        assert round_.value("Missing") == 0.0
        assert round_.skipped == ["Missing"]
        assert round_.total_gravity == 1.5

    def test_invalid_term_records_zero(self):
        reg = TermRegistry()
        reg.register("bad", ConstantTerm("bad", 9.0, valid=False))
        round_ = EvaluationEngine(reg).evaluate_round(0.0, {}, ["bad"])
        assert round_.value("bad") == 0.0
        assert round_.skipped == ["bad"]

    def test_raising_term_records_zero(self):
        reg = TermRegistry()
        reg.register("Dividing", DividingTerm())
        reg.register("ok", ConstantTerm("ok", 1.0))
        round_ = EvaluationEngine(reg).evaluate_round(0.0, {}, ["Dividing", "ok"])
        assert round_.value("Dividing") == 0.0
        assert round_.value("ok") == 1.0

    def test_non_finite_records_zero(self):
        reg = TermRegistry()
        reg.register("Overflow", OverflowTerm())
        round_ = EvaluationEngine(reg).evaluate_round(0.0, {}, ["Overflow"])
        assert round_.value("Overflow") == 0.0
        assert round_.skipped == ["Overflow"]

    def test_params_not_mutated(self):
        params = ParameterMap(UNIT_PARAMS)
        EvaluationEngine(resonance_registry()).evaluate_round(
            0.0, params, ["MUGEResonanceAAetherRes"])
        assert "aDPM" not in params

    def test_context_counters(self):
        ctx = RunContext()
        engine = EvaluationEngine(resonance_registry(), context=ctx)
        engine.evaluate_round(0.0, UNIT_PARAMS, ["g1", "Missing"])
        engine.evaluate_round(0.0, UNIT_PARAMS, ["g1", "Missing"])
        assert ctx.metrics["rounds"] == 2
        assert ctx.metrics["terms_evaluated"] == 2
        assert ctx.metrics["terms_skipped"] == 2

    def test_full_registry_round_is_finite(self, registry, system_params):
        round_ = EvaluationEngine(registry).evaluate_round(
            system_params["t"], system_params, registry.all_names())
        assert len(round_) == 61
        assert math.isfinite(round_.total_gravity)
        assert math.isfinite(round_.total_resonance)
        resonance = sum(round_.values[n] for n in registry.names_by_category(RESONANCE_CATEGORY))
        assert round_.total_resonance == pytest.approx(resonance, rel=1e-12)


class TestResultSeries:
    """Append-only series."""

    def make_round(self, t, a, b):
        return EvaluationRound(t, OrderedDict([("a", a), ("b", b)]), a + b, 0.0)

    def test_append_and_columns(self):
        series = ResultSeries("t", ["a", "b"])
        series.append(self.make_round(0.0, 1.0, 2.0))
        series.append(self.make_round(1.0, 3.0, -4.0))
        assert len(series) == 2
        assert series.axis() == [0.0, 1.0]
        assert series.column("a") == [1.0, 3.0]
        assert series.column("total_gravity") == [3.0, -1.0]
        assert series.last().t == 1.0

    def test_mismatched_round_rejected(self):
        series = ResultSeries("t", ["b", "a"])
        with pytest.raises(ValueError):
            series.append(self.make_round(0.0, 1.0, 2.0))

    def test_unknown_column(self):
        with pytest.raises(KeyError):
            ResultSeries("t", ["a"]).column("z")

    def test_top_terms_by_magnitude(self):
        series = ResultSeries("t", ["a", "b"])
        series.append(self.make_round(0.0, 1.0, -4.0))
        assert series.top_terms(1) == [("b", -4.0)]

    def test_empty_series(self):
        series = ResultSeries()
        assert series.last() is None
        assert series.top_terms() == []

    def test_clear(self):
        series = ResultSeries("t", ["a", "b"])
        series.append(self.make_round(0.0, 1.0, 2.0))
        series.clear()
        assert len(series) == 0
