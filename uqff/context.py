"""
RunContext: explicit per-run state for timing, counters and the
symbolic bridge.

A context is created by the top-level run (CLI command, API request,
test) and handed to the driver. It owns the bridge lifecycle: open()
starts it, close() shuts it down, and the with-statement does both.
Nothing here is global.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging
import time
from collections import OrderedDict
from contextlib import contextmanager

from uqff.symbolic import NullBridge


class RunContext:
    """
    Timing spans, metric counters and the symbolic bridge for one run.

    Parameters
    ----------
    bridge : object, optional
        Symbolic bridge (WolframScriptBridge or NullBridge). Defaults to
        NullBridge.
    logger : logging.Logger, optional
        Destination for span timings. Defaults to this module's logger.
    """

    def __init__(self, bridge=None, logger=None):
        self.bridge = bridge if bridge is not None else NullBridge()
        self.log = logger if logger is not None else logging.getLogger(__name__)
        self.metrics = OrderedDict()
        self.spans = []
        self.is_open = False

    def open(self):
        """Start the bridge. Safe to call twice."""
        if not self.is_open:
            self.bridge.open()
            self.is_open = True
        return self

    def close(self):
        """Shut the bridge down. Safe to call twice."""
        if self.is_open:
            self.bridge.close()
            self.is_open = False

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def count(self, metric, n=1):
        """Add n to a named counter."""
        self.metrics[metric] = self.metrics.get(metric, 0) + n

    @contextmanager
    def span(self, name):
        """
        Time a block.

        The elapsed wall time (ms) is appended to `spans` as
        (name, elapsed_ms) and logged at debug level, also when the
        block raises.
        """
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000.0
            self.spans.append((name, elapsed_ms))
            self.log.debug("span %s: %.3f ms", name, elapsed_ms)

    def elapsed_ms(self, name):
        """Total recorded time for all spans with this name."""
        return sum(ms for span_name, ms in self.spans if span_name == name)

    def to_dict(self):
        return {
            "metrics": dict(self.metrics),
            "spans": [{"name": n, "elapsed_ms": round(ms, 3)} for n, ms in self.spans],
        }
