"""
CSV and PNG export of result series.

Time-series layout:
    t,total_gravity,total_resonance,<term_1>,<term_2>,...
Sweep layout:
    <param>,total_gravity,total_resonance

Numbers are written in scientific notation with 6 digits after the point
("%.6e"). Files are opened and closed within one with-block; an OSError
becomes ExportError and leaves the in-memory series untouched.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import csv
import logging

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt  # noqa: E402

log = logging.getLogger(__name__)

NUMBER_FORMAT = "{:.6e}"


class ExportError(Exception):
    """Export target could not be written."""

    def __init__(self, path, reason):
        super().__init__("Cannot write {}: {}".format(path, reason))
        self.path = path
        self.reason = reason


def format_number(value):
    return NUMBER_FORMAT.format(value)


def time_series_rows(series):
    """
    Header and rows for the time-series layout.

    Returns
    -------
    list of list of str
        First entry is the header.
    """
    header = [series.axis_name, "total_gravity", "total_resonance"] + list(series.term_names)
    rows = [header]
    for r in series:
        row = [format_number(r.t), format_number(r.total_gravity),
               format_number(r.total_resonance)]
        row.extend(format_number(r.values[name]) for name in series.term_names)
        rows.append(row)
    return rows


def sweep_rows(series):
    """Header and rows for the sweep layout (axis and subtotals only)."""
    rows = [[series.axis_name, "total_gravity", "total_resonance"]]
    for r in series:
        rows.append([format_number(r.t), format_number(r.total_gravity),
                     format_number(r.total_resonance)])
    return rows


def _write_rows(path, rows):
    try:
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerows(rows)
    except OSError as e:
        log.error("CSV export failed: path=%s, err=%s", path, e)
        raise ExportError(path, e) from e
    log.info("Exported %d rows to %s", len(rows) - 1, path)
    return path


def write_time_series_csv(series, path):
    """
    Write a time-series run.

    Raises
    ------
    ExportError
        If the file cannot be opened or written.
    """
    return _write_rows(path, time_series_rows(series))


def write_sweep_csv(series, path):
    """
    Write a parameter-sweep run.

    Raises
    ------
    ExportError
        If the file cannot be opened or written.
    """
    return _write_rows(path, sweep_rows(series))


def plot_series(series, path, terms=None, log_scale=True):
    """
    Plot subtotals (and optionally individual terms) against the axis.

    Parameters
    ----------
    series : ResultSeries
    path : str
        PNG output path.
    terms : list of str, optional
        Term columns to add to the plot.
    log_scale : bool
        Use a symlog y axis. Values keep their sign; term magnitudes
        span dozens of decades.

    Raises
    ------
    KeyError
        If a name in terms is not a column of series.
    ExportError
        If the image cannot be written.
    """
    x = series.axis()
    fig, ax = plt.subplots(figsize=(10, 6))
    try:
        _draw_series(ax, x, series, terms, log_scale)
        plt.tight_layout()
        plt.savefig(path, dpi=150, bbox_inches='tight')
    except OSError as e:
        raise ExportError(path, e) from e
    finally:
        plt.close(fig)
    log.info("Saved plot to %s", path)
    return path


def _draw_series(ax, x, series, terms, log_scale):
    ax.plot(x, series.column("total_gravity"), label="total_gravity", linewidth=2)
    ax.plot(x, series.column("total_resonance"), label="total_resonance", linewidth=2)
    for name in terms or []:
        ax.plot(x, series.column(name), label=name, linewidth=1, alpha=0.7)

    ax.set_xlabel(series.axis_name)
    ax.set_ylabel("value (mixed units)")
    if log_scale:
        ax.set_yscale("symlog")
    ax.legend(fontsize=8)
    ax.grid(True, alpha=0.3)
