"""
Simulation driver: time-series and parameter-sweep runs.

    TimeSeriesConfig / SweepConfig  - validated run parameters
    SimulationDriver                - repeats evaluation rounds, keeps
                                      the last ResultSeries, exports it

Run parameters are checked when the config is built. A bad config raises
ConfigError before any round is evaluated; once a run starts it always
completes with one row per step.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging
import math
import time

import numpy as np

from uqff.context import RunContext
from uqff.engine import EvaluationEngine, ResultSeries
from uqff.export import write_sweep_csv, write_time_series_csv
from uqff.parameters import AstrophysicalSystem, ParameterMap

log = logging.getLogger(__name__)

PROGRESS_EVERY = 10
MODE_TIME_SERIES = "time_series"
MODE_SWEEP = "sweep"


class ConfigError(ValueError):
    """Invalid run configuration (dt <= 0, steps < 2, max <= min, ...)."""


def _finite(name, value):
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ConfigError("{} must be a number, got {!r}".format(name, value))
    if not np.isfinite(value):
        raise ConfigError("{} must be finite, got {}".format(name, value))
    return value


class TimeSeriesConfig:
    """
    Time range for a time-series run.

    Parameters
    ----------
    t_start : float
        First evaluation time (s).
    t_end : float
        Last allowed evaluation time (s). Must be >= t_start.
    dt : float
        Step (s). Must be > 0.

    Raises
    ------
    ConfigError
        On a non-positive step or a reversed range, and when the range
        is too large to count in steps of dt.
    """

    def __init__(self, t_start, t_end, dt):
        self.t_start = _finite("t_start", t_start)
        self.t_end = _finite("t_end", t_end)
        self.dt = _finite("dt", dt)
        if self.dt <= 0:
            raise ConfigError("dt must be > 0, got {}".format(self.dt))
        if self.t_end < self.t_start:
            raise ConfigError("t_end ({}) must be >= t_start ({})".format(
                self.t_end, self.t_start))
        span = (self.t_end - self.t_start) / self.dt
        if not np.isfinite(span):
            raise ConfigError("time range too large for dt")
        self._num_steps = int(math.floor(span)) + 1

    @property
    def num_steps(self):
        """floor((t_end - t_start) / dt) + 1."""
        return self._num_steps

    def times(self):
        return [self.t_start + i * self.dt for i in range(self.num_steps)]

    def to_dict(self):
        return {"t_start": self.t_start, "t_end": self.t_end, "dt": self.dt,
                "num_steps": self.num_steps}


class SweepConfig:
    """
    One parameter varied over [min_value, max_value] at a fixed time.

    Parameters
    ----------
    param_name : str
        Parameter key to overlay.
    min_value, max_value : float
        Inclusive range; max_value must be > min_value.
    steps : int
        Number of equally spaced points, >= 2.
    t_eval : float
        Evaluation time for every point.

    Raises
    ------
    ConfigError
        On an empty name, steps < 2 or max <= min.
    """

    def __init__(self, param_name, min_value, max_value, steps, t_eval=1e10):
        if not isinstance(param_name, str) or not param_name.strip():
            raise ConfigError("param_name must be a non-empty string")
        self.param_name = param_name.strip()
        self.min_value = _finite("min", min_value)
        self.max_value = _finite("max", max_value)
        self.t_eval = _finite("t_eval", t_eval)
        steps_f = _finite("steps", steps)
        if steps_f != int(steps_f):
            raise ConfigError("steps must be an integer, got {}".format(steps))
        self.steps = int(steps_f)
        if self.steps < 2:
            raise ConfigError("steps must be >= 2, got {}".format(self.steps))
        if self.max_value <= self.min_value:
            raise ConfigError("max ({}) must be > min ({})".format(
                self.max_value, self.min_value))

    @property
    def step_size(self):
        return (self.max_value - self.min_value) / (self.steps - 1)

    def values(self):
        """Sweep points, both ends included."""
        return np.linspace(self.min_value, self.max_value, self.steps).tolist()

    def to_dict(self):
        return {"param": self.param_name, "min": self.min_value,
                "max": self.max_value, "steps": self.steps,
                "t_eval": self.t_eval, "step_size": self.step_size}


def _unique(names):
    seen = set()
    result = []
    for name in names:
        if name not in seen:
            seen.add(name)
            result.append(name)
    return result


class SimulationDriver:
    """
    Repeats evaluation rounds over a time range or a parameter sweep.

    Parameters
    ----------
    registry : TermRegistry
        Registered terms.
    system : AstrophysicalSystem, optional
        Base system state. Defaults to the SGR 1745-2900 defaults.
    params : dict, optional
        Entries overlaid on the system's parameter map.
    active_terms : list of str, optional
        Terms to evaluate, in column order. Defaults to every registered
        name in registration order. Duplicates are dropped.
    context : RunContext, optional
        Receives timing spans and counters.
    """

    def __init__(self, registry, system=None, params=None, active_terms=None,
                 context=None):
        self.registry = registry
        self.system = system if system is not None else AstrophysicalSystem()
        self.params = ParameterMap(params or {})
        if active_terms is None:
            active_terms = registry.all_names()
        self.active_terms = _unique(active_terms)
        self.context = context if context is not None else RunContext()
        self.engine = EvaluationEngine(registry, context=self.context)
        self.series = ResultSeries("t", self.active_terms)
        self.mode = None
        self.last_config = None
        self.elapsed_ms = 0.0

    def base_params(self):
        """System parameter map with the driver overrides applied."""
        return self.system.to_param_map().overlay(self.params)

    def _start(self, axis_name, mode, config):
        self.series = ResultSeries(axis_name, self.active_terms)
        self.mode = mode
        self.last_config = config

    def _progress(self, step, total, round_):
        if step % PROGRESS_EVERY == 0 or step == total - 1:
            log.info("Step %d/%d %s=%.6e gravity=%.6e resonance=%.6e",
                     step + 1, total, self.series.axis_name, round_.t,
                     round_.total_gravity, round_.total_resonance)

    def run_time_series(self, config):
        """
        Evaluate one round per step from t_start to t_end.

        Parameters
        ----------
        config : TimeSeriesConfig

        Returns
        -------
        ResultSeries
            Rounds in increasing time order.
        """
        self._start("t", MODE_TIME_SERIES, config)
        base = self.base_params()
        times = config.times()
        log.info("Time series: %d steps, t=%s..%s, %d terms",
                 len(times), config.t_start, config.t_end, len(self.active_terms))

        start = time.perf_counter()
        with self.context.span(MODE_TIME_SERIES):
            for step, t in enumerate(times):
                params = base.with_value("t", t)
                round_ = self.engine.evaluate_round(t, params, self.active_terms)
                self.series.append(round_)
                self._progress(step, len(times), round_)
        self.elapsed_ms = (time.perf_counter() - start) * 1000.0
        log.info("Time series complete: %d rounds in %.1f ms",
                 len(self.series), self.elapsed_ms)
        return self.series

    def run_sweep(self, config):
        """
        Evaluate one round per sweep point at config.t_eval.

        Parameters
        ----------
        config : SweepConfig

        Returns
        -------
        ResultSeries
            Rounds keyed by the swept value, min first.
        """
        self._start(config.param_name, MODE_SWEEP, config)
        base = self.base_params().with_value("t", config.t_eval)
        points = config.values()
        log.info("Sweep: %s from %s to %s, %d steps at t=%s",
                 config.param_name, config.min_value, config.max_value,
                 config.steps, config.t_eval)

        start = time.perf_counter()
        with self.context.span(MODE_SWEEP):
            for step, value in enumerate(points):
                params = base.with_value(config.param_name, value)
                round_ = self.engine.evaluate_round(config.t_eval, params,
                                                    self.active_terms)
                round_.t = value
                self.series.append(round_)
                self._progress(step, len(points), round_)
        self.elapsed_ms = (time.perf_counter() - start) * 1000.0
        log.info("Sweep complete: %d points in %.1f ms",
                 len(self.series), self.elapsed_ms)
        return self.series

    def summary(self, top=5):
        """
        First/last subtotals and the largest terms at the final round.

        Returns
        -------
        dict or None
            None before any run.
        """
        if not len(self.series):
            return None
        first = self.series[0]
        last = self.series.last()
        return {
            "mode": self.mode,
            "axis": self.series.axis_name,
            "rounds": len(self.series),
            "elapsed_ms": round(self.elapsed_ms, 3),
            "first": {"axis": first.t, "total_gravity": first.total_gravity,
                      "total_resonance": first.total_resonance},
            "last": {"axis": last.t, "total_gravity": last.total_gravity,
                     "total_resonance": last.total_resonance},
            "top_terms": [{"name": n, "value": v}
                          for n, v in self.series.top_terms(top)],
        }

    def export_csv(self, path):
        """
        Write the last run in its layout.

        Raises
        ------
        ValueError
            If no run has been made.
        ExportError
            If the file cannot be written.
        """
        if self.mode is None:
            raise ValueError("No simulation results to export")
        if self.mode == MODE_SWEEP:
            return write_sweep_csv(self.series, path)
        return write_time_series_csv(self.series, path)
