"""
Command-line runner for the UQFF term engine.

Usage:
    python simulate.py list
    python simulate.py list --category muge_resonance
    python simulate.py system SGR1745
    python simulate.py timeseries --t-start 0 --t-end 1e10 --dt 1e9 --csv out.csv
    python simulate.py sweep --param B --min 1e13 --max 1e16 --steps 4 --csv sweep.csv
    python simulate.py verify --executable wolframscript

Common options:
    --terms     Comma-separated term names (default: every registered term).
    --system    Catalogue id whose parameters seed the run (e.g. SGR1745).
    --set       KEY=VALUE parameter override, repeatable.
    --csv       Write the run to CSV.
    --plot      Write a PNG plot of the subtotals.
    --verbose   INFO-level logging (progress every 10 steps).

Exit codes: 0 success, 1 export failure, 2 configuration error.

IMPORTANT: No unicode in code or messages (Windows charmap).
"""

import argparse
import logging
import sys

from uqff.context import RunContext
from uqff.export import ExportError, plot_series
from uqff.parameters import AstrophysicalSystem, ParameterMap
from uqff.registry import build_default_registry
from uqff.simulation import ConfigError, SimulationDriver, SweepConfig, TimeSeriesConfig
from uqff.symbolic import WolframScriptBridge, verify_term
from data.systems import SystemCatalogue

EXIT_OK = 0
EXIT_EXPORT = 1
EXIT_CONFIG = 2

# Upper bound on rounds per run
MAX_STEPS = 100000

# Closed form of MUGECompressedBase in Wolfram syntax
BASE_EXPRESSION = "6.674*^-11 * {M} / ({r})^2"


def _parse_overrides(pairs):
    """Turn ["KEY=VALUE", ...] into a ParameterMap."""
    params = ParameterMap()
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ConfigError("Override must be KEY=VALUE, got '{}'".format(pair))
        try:
            params[key.strip()] = float(value)
        except ValueError:
            raise ConfigError("Override {} is not a number: '{}'".format(key, value))
    return params


def _parse_terms(text, registry):
    if not text:
        return None
    names = [n.strip() for n in text.split(",") if n.strip()]
    unknown = [n for n in names if n not in registry]
    if unknown:
        print("Warning: unknown terms recorded as 0.0: {}".format(", ".join(unknown)))
    return names


def _build_driver(args, registry, context):
    params = ParameterMap()
    if args.system:
        catalogue = SystemCatalogue()
        if not catalogue.has_system(args.system):
            raise ConfigError("Unknown system '{}' (known: {})".format(
                args.system, ", ".join(catalogue.system_ids())))
        params.update(catalogue.get_system(args.system).to_param_map())
    params.update(_parse_overrides(args.set))
    return SimulationDriver(registry, params=params,
                            active_terms=_parse_terms(args.terms, registry),
                            context=context)


def _print_summary(summary):
    print("")
    print("{} rounds ({}) in {:.1f} ms".format(
        summary["rounds"], summary["mode"], summary["elapsed_ms"]))
    for label in ("first", "last"):
        row = summary[label]
        print("  {:<5s} {}={:.6e}  gravity={:.6e}  resonance={:.6e}".format(
            label, summary["axis"], row["axis"], row["total_gravity"],
            row["total_resonance"]))
    print("  Top terms at final round:")
    for entry in summary["top_terms"]:
        print("    {:<30s} {:.6e}".format(entry["name"], entry["value"]))


def _export(driver, args):
    if args.csv:
        driver.export_csv(args.csv)
        print("Wrote {}".format(args.csv))
    if args.plot:
        plot_series(driver.series, args.plot)
        print("Wrote {}".format(args.plot))


# -----------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------

def cmd_list(args, registry):
    if args.category:
        names = registry.names_by_category(args.category)
        if not names:
            print("No terms in category '{}'".format(args.category))
            return EXIT_CONFIG
        for name in names:
            print("{:<30s} {}".format(name, registry.get(name).description))
        return EXIT_OK
    print(registry.describe())
    return EXIT_OK


def cmd_system(args, registry):
    catalogue = SystemCatalogue()
    if not args.system_id:
        for system_id in catalogue.system_ids():
            system = catalogue.get_system(system_id)
            print("{:<12s} {:<26s} {}".format(system_id, system.name, system.type))
        return EXIT_OK
    if not catalogue.has_system(args.system_id):
        print("Unknown system '{}'".format(args.system_id))
        return EXIT_CONFIG
    system = catalogue.get_system(args.system_id)
    for key, value in system.to_dict().items():
        print("  {:<22s} {}".format(key, value))
    print("  Parameter map:")
    for key, value in system.to_param_map().items():
        print("    {:<10s} {:.6e}".format(key, value))
    return EXIT_OK


def _check_steps(count):
    if count > MAX_STEPS:
        raise ConfigError("Too many steps ({} > {})".format(count, MAX_STEPS))


def cmd_timeseries(args, registry):
    with RunContext() as context:
        config = TimeSeriesConfig(args.t_start, args.t_end, args.dt)
        _check_steps(config.num_steps)
        driver = _build_driver(args, registry, context)
        driver.run_time_series(config)
        _print_summary(driver.summary())
        _export(driver, args)
    return EXIT_OK


def cmd_sweep(args, registry):
    with RunContext() as context:
        config = SweepConfig(args.param, args.min, args.max, args.steps, args.t_eval)
        _check_steps(config.steps)
        driver = _build_driver(args, registry, context)
        driver.run_sweep(config)
        _print_summary(driver.summary())
        _export(driver, args)
    return EXIT_OK


def cmd_verify(args, registry):
    """Check MUGECompressedBase against the symbolic engine."""
    term = registry.get("MUGECompressedBase")
    if term is None:
        print("MUGECompressedBase is not registered")
        return EXIT_CONFIG
    bridge = WolframScriptBridge(executable=args.executable, timeout=args.timeout)
    params = AstrophysicalSystem().to_param_map()
    expression = BASE_EXPRESSION.format(M=repr(term.M), r=repr(term.r))
    with RunContext(bridge=bridge) as context:
        result = verify_term(context.bridge, term, expression, params["t"], params)
    print("{}: numeric={:.6e} symbolic={} status={}".format(
        result.term_name, result.numeric, result.symbolic, result.status))
    return EXIT_OK


def _add_run_options(parser):
    parser.add_argument("--terms", default=None,
                        help="Comma-separated term names (default: all)")
    parser.add_argument("--system", default=None,
                        help="Catalogue id seeding the parameters")
    parser.add_argument("--set", action="append", metavar="KEY=VALUE",
                        help="Parameter override (repeatable)")
    parser.add_argument("--csv", default=None, help="CSV output path")
    parser.add_argument("--plot", default=None, help="PNG plot output path")


def build_parser():
    ap = argparse.ArgumentParser(
        description="Evaluate UQFF physics terms over time or a parameter sweep."
    )
    ap.add_argument("--verbose", action="store_true",
                    help="INFO-level logging")
    sub = ap.add_subparsers(dest="command")
    sub.required = True

    p = sub.add_parser("list", help="List registered terms")
    p.add_argument("--category", default=None, help="Only this category")
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("system", help="Show catalogued systems")
    p.add_argument("system_id", nargs="?", default=None)
    p.set_defaults(func=cmd_system)

    p = sub.add_parser("timeseries", help="Evaluate terms over a time range")
    p.add_argument("--t-start", type=float, default=0.0)
    p.add_argument("--t-end", type=float, default=1e10)
    p.add_argument("--dt", type=float, default=1e9)
    _add_run_options(p)
    p.set_defaults(func=cmd_timeseries)

    p = sub.add_parser("sweep", help="Sweep one parameter at a fixed time")
    p.add_argument("--param", required=True)
    p.add_argument("--min", type=float, required=True)
    p.add_argument("--max", type=float, required=True)
    p.add_argument("--steps", type=int, default=10)
    p.add_argument("--t-eval", type=float, default=1e10)
    _add_run_options(p)
    p.set_defaults(func=cmd_sweep)

    p = sub.add_parser("verify", help="Compare the base term with the symbolic engine")
    p.add_argument("--executable", default="wolframscript")
    p.add_argument("--timeout", type=float, default=30.0)
    p.set_defaults(func=cmd_verify)
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    registry = build_default_registry()
    try:
        return args.func(args, registry)
    except ConfigError as e:
        print("Configuration error: {}".format(e))
        return EXIT_CONFIG
    except ExportError as e:
        print("Export failed: {}".format(e))
        return EXIT_EXPORT


if __name__ == "__main__":
    sys.exit(main())
