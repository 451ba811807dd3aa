"""
Evaluation engine: dependency resolution, evaluation rounds, result series.

This module contains ONLY the round machinery. Formulas live under
uqff/terms, run orchestration (time series, sweeps, export) lives in
uqff.simulation.

    SimulationDriver
      -> EvaluationEngine.evaluate_round(t, params, active_terms)
         -> DependencyResolver.resolve()   (aDPM injected first)
         -> term.validate() / term.evaluate() for each active name
         -> EvaluationRound (values + category subtotals)
      -> ResultSeries.append(round)

Error policy: nothing raised by a term escapes evaluate_round(). Unknown
names, failed validation, arithmetic errors and non-finite results are
all recorded as 0.0 so every round has one value per active term.

This module provides:
    DependencyResolver - Computes the base term and injects its value
    EvaluationRound    - Values and subtotals at one axis value
    ResultSeries       - Append-only ordered sequence of rounds
    EvaluationEngine   - Runs one round over an active term subset

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging
from collections import OrderedDict

import numpy as np

from uqff.parameters import ParameterMap
from uqff.terms.resonance import ADPM_KEY

log = logging.getLogger(__name__)

BASE_TERM = "MUGEResonanceADPM"

# Exceptions a formula can raise on bad numeric input
TERM_ERRORS = (ArithmeticError, ValueError)


class DependencyResolver:
    """
    Computes one base term before the round and injects its value.

    The resonance family reads the base acceleration from the parameter
    map. Before each round the resolver looks up the base term,
    evaluates it with the round's parameters and stores the result under
    `key`. Absent base term means nothing is injected and dependents use
    their own default for the key.

    Parameters
    ----------
    base_term : str
        Registry name of the term to evaluate first.
    key : str
        Parameter key the result is injected under.
    """

    def __init__(self, base_term=BASE_TERM, key=ADPM_KEY):
        self.base_term = base_term
        self.key = key

    def resolve(self, t, params, registry):
        """
        Evaluate the base term and inject its value into params.

        Parameters
        ----------
        t : float
            Evaluation time.
        params : ParameterMap
            Working map for this round. Mutated: params[key] is set.
        registry : TermRegistry
            Where the base term is looked up.

        Returns
        -------
        float or None
            The injected value, or None if nothing was injected.
        """
        term = registry.get(self.base_term)
        if term is None:
            log.debug("Base term '%s' not registered; '%s' not injected",
                      self.base_term, self.key)
            return None
        try:
            value = float(term.evaluate(t, params))
        except TERM_ERRORS as e:
            log.warning("Base term '%s' failed at t=%s: %s", self.base_term, t, e)
            return None
        if not np.isfinite(value):
            log.warning("Base term '%s' non-finite at t=%s", self.base_term, t)
            return None
        params[self.key] = value
        return value


class EvaluationRound:
    """
    Values of all active terms at one axis value.

    Parameters
    ----------
    t : float
        Evaluation time, or the swept parameter value in sweep mode.
    values : OrderedDict
        Term name to value, in active-term order.
    total_gravity : float
        Sum of values of every term not in the resonance category.
    total_resonance : float
        Sum of values of the resonance category members.
    injected : float or None
        Base dependency value injected for this round.
    skipped : list of str
        Names recorded as 0.0 because they were missing, failed
        validation, raised, or produced a non-finite value.
    """

    def __init__(self, t, values, total_gravity, total_resonance,
                 injected=None, skipped=None):
        self.t = t
        self.values = values
        self.total_gravity = total_gravity
        self.total_resonance = total_resonance
        self.injected = injected
        self.skipped = list(skipped or [])

    def value(self, name):
        """Value recorded for name (KeyError if not active this round)."""
        return self.values[name]

    def __len__(self):
        return len(self.values)

    def to_dict(self):
        return {
            "t": self.t,
            "total_gravity": self.total_gravity,
            "total_resonance": self.total_resonance,
            "injected": self.injected,
            "values": OrderedDict(self.values),
            "skipped": list(self.skipped),
        }


class ResultSeries:
    """
    Ordered, append-only sequence of EvaluationRound.

    Every round must carry the same term names in the same order, so
    the series always exports as a rectangular table.

    Parameters
    ----------
    axis_name : str
        Column name of the primary axis ("t" or the swept parameter).
    term_names : list of str
        Active term names, in column order.
    """

    def __init__(self, axis_name="t", term_names=None):
        self.axis_name = axis_name
        self.term_names = list(term_names or [])
        self._rounds = []

    def append(self, round_):
        """
        Append a round.

        Raises
        ------
        ValueError
            If the round's term names differ from the series columns.
        """
        if list(round_.values) != self.term_names:
            raise ValueError(
                "Round at {} does not match series columns".format(round_.t)
            )
        self._rounds.append(round_)

    def clear(self):
        self._rounds = []

    def __len__(self):
        return len(self._rounds)

    def __iter__(self):
        return iter(self._rounds)

    def __getitem__(self, index):
        return self._rounds[index]

    def last(self):
        """Final round, or None for an empty series."""
        return self._rounds[-1] if self._rounds else None

    def axis(self):
        """Primary axis values (times or swept values)."""
        return [r.t for r in self._rounds]

    def column(self, name):
        """
        Per-round values for one term or subtotal.

        Parameters
        ----------
        name : str
            A term name, "total_gravity" or "total_resonance".

        Returns
        -------
        list of float
        """
        if name in ("total_gravity", "total_resonance"):
            return [getattr(r, name) for r in self._rounds]
        if name not in self.term_names:
            raise KeyError(name)
        return [r.values[name] for r in self._rounds]

    def top_terms(self, n=5):
        """
        Largest contributors at the final round by absolute value.

        Returns
        -------
        list of (str, float)
        """
        last = self.last()
        if last is None:
            return []
        ranked = sorted(last.values.items(), key=lambda kv: abs(kv[1]),
                        reverse=True)
        return ranked[:n]

    def to_dict(self):
        return {
            "axis": self.axis_name,
            "terms": list(self.term_names),
            "rounds": [r.to_dict() for r in self._rounds],
        }


class EvaluationEngine:
    """
    Runs evaluation rounds over a subset of registered terms.

    Parameters
    ----------
    registry : TermRegistry
        Source of terms and their stored categories.
    resolver : DependencyResolver, optional
        Dependency step run before each round. Defaults to the aDPM
        resolver.
    context : RunContext, optional
        Receives per-round metrics.
    """

    def __init__(self, registry, resolver=None, context=None):
        self.registry = registry
        self.resolver = resolver if resolver is not None else DependencyResolver()
        self.context = context

    def _evaluate_term(self, name, t, params):
        """Return (value, ok) for one active name."""
        term = self.registry.get(name)
        if term is None:
            log.debug("Term '%s' not registered; recording 0.0", name)
            return 0.0, False
        try:
            if not term.validate(params):
                return 0.0, False
            value = float(term.evaluate(t, params))
        except TERM_ERRORS as e:
            log.warning("Term '%s' failed at t=%s: %s", name, t, e)
            return 0.0, False
        if not np.isfinite(value):
            log.warning("Term '%s' non-finite at t=%s; recording 0.0", name, t)
            return 0.0, False
        return value, True

    def evaluate_round(self, t, params, active_terms):
        """
        Evaluate every active term at t.

        Parameters
        ----------
        t : float
            Evaluation time.
        params : ParameterMap or dict
            Round parameters. Not mutated; the dependency value is
            injected into a working copy.
        active_terms : list of str
            Names to evaluate, in output order.

        Returns
        -------
        EvaluationRound
        """
        working = ParameterMap(params)
        injected = self.resolver.resolve(t, working, self.registry)

        values = OrderedDict()
        skipped = []
        total_gravity = 0.0
        total_resonance = 0.0

        for name in active_terms:
            value, ok = self._evaluate_term(name, t, working)
            values[name] = value
            if not ok:
                skipped.append(name)
            if self.registry.is_resonance(name):
                total_resonance += value
            else:
                total_gravity += value

        if self.context is not None:
            self.context.count("rounds")
            self.context.count("terms_evaluated", len(values) - len(skipped))
            self.context.count("terms_skipped", len(skipped))

        return EvaluationRound(t, values, total_gravity, total_resonance,
                               injected=injected, skipped=skipped)
