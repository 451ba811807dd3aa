"""
Flask API routes for the UQFF term engine.

Endpoints:
  GET  /api/terms                - list registered terms (?category= filter)
  GET  /api/terms/<name>         - single term metadata
  GET  /api/categories           - term names grouped by category
  GET  /api/systems              - catalogued astrophysical systems
  GET  /api/systems/<id>         - one system (unknown id -> default record)
  GET  /api/bodies               - default celestial bodies
  POST /api/evaluate             - one evaluation round
  POST /api/time-series          - time-series run
  POST /api/sweep                - parameter sweep

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging

from flask import Blueprint, jsonify, request

from uqff.engine import EvaluationEngine
from uqff.parameters import AstrophysicalSystem, ParameterMap
from uqff.simulation import SimulationDriver, SweepConfig, TimeSeriesConfig
from data.systems import BODIES, SystemCatalogue, build_body_params, get_body

log = logging.getLogger(__name__)

# Cap on rounds per request
MAX_STEPS = 5000


def _error(message, status=400):
    return jsonify({"error": message}), status


def _request_params(data, catalogue):
    """
    Build the request's parameter overrides.

    Order of precedence (later wins): catalogued system, body, explicit
    "params" entries.

    Raises
    ------
    ValueError
        If params is not an object of numbers or the body is unknown.
    """
    params = ParameterMap()
    system_id = data.get("system")
    if system_id:
        params.update(catalogue.get_system(system_id).to_param_map())
    body_name = data.get("body")
    if body_name:
        body = get_body(body_name)
        if body is None:
            raise ValueError("Unknown body '{}'".format(body_name))
        params.update(build_body_params(body))
    extra = data.get("params") or {}
    if not isinstance(extra, dict):
        raise ValueError("params must be an object")
    try:
        params.update(extra)
    except (TypeError, ValueError):
        raise ValueError("params values must be numbers")
    return params


def _request_terms(data, registry):
    terms = data.get("terms")
    if terms is None:
        return registry.all_names()
    if not isinstance(terms, list) or not all(isinstance(n, str) for n in terms):
        raise ValueError("terms must be a list of names")
    return terms


def create_api_blueprint(registry, catalogue=None):
    """
    Build the API blueprint bound to a registry and system catalogue.

    Parameters
    ----------
    registry : TermRegistry
    catalogue : SystemCatalogue, optional
        Defaults to the built-in catalogue.

    Returns
    -------
    flask.Blueprint
    """
    if catalogue is None:
        catalogue = SystemCatalogue()
    api = Blueprint("api", __name__, url_prefix="/api")

    @api.route("/terms", methods=["GET"])
    def list_terms():
        """Return all terms, optionally filtered by ?category=."""
        category = request.args.get("category")
        terms = registry.list_all()
        if category:
            terms = [t for t in terms if t["category"] == category]
        return jsonify({"count": len(terms), "terms": terms})

    @api.route("/terms/<name>", methods=["GET"])
    def get_term(name):
        term = registry.get(name)
        if term is None:
            return _error("Term not found", 404)
        meta = term.metadata()
        meta["category"] = registry.category(name)
        return jsonify(meta)

    @api.route("/categories", methods=["GET"])
    def list_categories():
        return jsonify({cat: registry.names_by_category(cat)
                        for cat in registry.categories()})

    @api.route("/systems", methods=["GET"])
    def list_systems():
        return jsonify(catalogue.list_all())

    @api.route("/systems/<system_id>", methods=["GET"])
    def get_system(system_id):
        """Return one system; unknown ids get the default record."""
        system = catalogue.get_system(system_id).to_dict()
        system["id"] = system_id
        system["found"] = catalogue.has_system(system_id)
        return jsonify(system)

    @api.route("/bodies", methods=["GET"])
    def list_bodies():
        return jsonify([b.to_dict() for b in BODIES.values()])

    @api.route("/evaluate", methods=["POST"])
    def evaluate():
        """
        Evaluate one round.

        Request JSON:
        {
            "t": 1e10,                  // s
            "terms": ["..."],           // optional, default all
            "system": "SGR1745",        // optional catalogue id
            "body": "Sun",              // optional default body
            "params": {"Vsys": 1e50}    // optional overrides
        }
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return _error("Request body must be JSON")
        try:
            t = float(data.get("t", AstrophysicalSystem().t))
            overrides = _request_params(data, catalogue)
            terms = _request_terms(data, registry)
        except (TypeError, ValueError) as e:
            return _error(str(e))

        params = AstrophysicalSystem().to_param_map().overlay(overrides)
        params["t"] = t
        round_ = EvaluationEngine(registry).evaluate_round(t, params, terms)
        return jsonify(round_.to_dict())

    @api.route("/time-series", methods=["POST"])
    def time_series():
        """
        Run a time series.

        Request JSON: {"t_start", "t_end", "dt", "terms", "system",
        "body", "params"}. Response: series rounds plus summary.
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return _error("Request body must be JSON")
        try:
            config = TimeSeriesConfig(
                data.get("t_start", 0.0), data.get("t_end"), data.get("dt"))
            overrides = _request_params(data, catalogue)
            terms = _request_terms(data, registry)
        except (TypeError, ValueError) as e:
            return _error(str(e))
        if config.num_steps > MAX_STEPS:
            return _error("Too many steps ({} > {})".format(config.num_steps, MAX_STEPS))

        driver = SimulationDriver(registry, params=overrides, active_terms=terms)
        series = driver.run_time_series(config)
        return jsonify({
            "config": config.to_dict(),
            "series": series.to_dict(),
            "summary": driver.summary(),
        })

    @api.route("/sweep", methods=["POST"])
    def sweep():
        """
        Run a parameter sweep.

        Request JSON: {"param", "min", "max", "steps", "t_eval", "terms",
        "system", "body", "params"}.
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return _error("Request body must be JSON")
        try:
            config = SweepConfig(
                data.get("param"), data.get("min"), data.get("max"),
                data.get("steps"), data.get("t_eval", 1e10))
            overrides = _request_params(data, catalogue)
            terms = _request_terms(data, registry)
        except (TypeError, ValueError) as e:
            return _error(str(e))
        if config.steps > MAX_STEPS:
            return _error("Too many steps ({} > {})".format(config.steps, MAX_STEPS))

        driver = SimulationDriver(registry, params=overrides, active_terms=terms)
        series = driver.run_sweep(config)
        return jsonify({
            "config": config.to_dict(),
            "series": series.to_dict(),
            "summary": driver.summary(),
        })

    return api
