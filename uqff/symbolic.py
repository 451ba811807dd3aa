"""
Symbolic verification bridge.

External collaborator that evaluates a formatted expression string and
returns either a number or an error string. Any string result beginning
with "[" is a failure sentinel ("[ERROR: ...]"); callers log it and
continue, a failed verification never aborts a simulation.

Bridges:
    WolframScriptBridge - runs `wolframscript -code <expr>` per call
    NullBridge          - no symbolic engine; every call fails softly

Both follow an explicit open()/close() lifecycle owned by RunContext.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging
import math
import shutil
import subprocess

log = logging.getLogger(__name__)

UNAVAILABLE = "[Symbolic engine not available]"


def is_failure(value):
    """True for a failure sentinel (a string starting with "[")."""
    return isinstance(value, str) and value.startswith("[")


def parse_number(text):
    """
    Parse a numeric result from the symbolic engine.

    Accepts plain floats and Wolfram's "1.5*^12" exponent notation.

    Returns
    -------
    float or None
        None when text is not a number.
    """
    cleaned = text.strip().replace("*^", "e")
    try:
        return float(cleaned)
    except ValueError:
        return None


class NullBridge:
    """Bridge used when no symbolic engine is configured."""

    name = "null"

    def open(self):
        return self

    def close(self):
        pass

    def evaluate_symbolic(self, expression):
        return UNAVAILABLE


class WolframScriptBridge:
    """
    Evaluate expressions through a wolframscript subprocess.

    Parameters
    ----------
    executable : str
        Program to run (default "wolframscript").
    args : tuple of str
        Arguments placed before the expression (default ("-code",)).
    timeout : float
        Seconds before a call is abandoned.
    """

    name = "wolframscript"

    def __init__(self, executable="wolframscript", args=("-code",), timeout=30.0):
        self.executable = executable
        self.args = tuple(args)
        self.timeout = timeout
        self.path = None
        self.is_open = False

    def open(self):
        """Locate the executable. A missing engine is logged, not raised."""
        self.path = shutil.which(self.executable)
        if self.path is None:
            log.warning("Symbolic engine '%s' not found on PATH", self.executable)
        self.is_open = True
        return self

    def close(self):
        self.is_open = False
        self.path = None

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def evaluate_symbolic(self, expression):
        """
        Evaluate one expression.

        Parameters
        ----------
        expression : str
            Expression in the engine's syntax.

        Returns
        -------
        float or str
            The numeric result, the raw text for non-numeric output, or
            an "[ERROR: ...]" sentinel.
        """
        if not self.is_open:
            return "[ERROR: bridge not open]"
        if self.path is None:
            return "[ERROR: {} not found]".format(self.executable)

        cmd = [self.path] + list(self.args) + [expression]
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=self.timeout,
            )
        except FileNotFoundError:
            return "[ERROR: {} not found]".format(self.executable)
        except subprocess.TimeoutExpired:
            return "[ERROR: timed out after {}s]".format(self.timeout)
        except OSError as e:
            return "[ERROR: {}]".format(e)

        if result.returncode != 0:
            detail = (result.stderr or result.stdout).strip()
            return "[ERROR: exit code {}: {}]".format(result.returncode, detail)

        output = result.stdout.strip()
        if not output:
            return "[ERROR: empty result]"
        number = parse_number(output)
        return number if number is not None else output


def evaluate_symbolic_float(bridge, expression):
    """
    Evaluate an expression and return a float, or None on any failure.

    Failures are logged as warnings.
    """
    value = bridge.evaluate_symbolic(expression)
    if is_failure(value):
        log.warning("Symbolic evaluation failed for %r: %s", expression, value)
        return None
    if isinstance(value, str):
        number = parse_number(value)
        if number is None:
            log.warning("Symbolic result for %r is not numeric: %r", expression, value)
        return number
    return float(value)


class VerificationResult:
    """
    Outcome of comparing a term with its symbolic counterpart.

    status is "match", "mismatch" or "unavailable".
    """

    def __init__(self, term_name, numeric, symbolic, status, rel_error=None):
        self.term_name = term_name
        self.numeric = numeric
        self.symbolic = symbolic
        self.status = status
        self.rel_error = rel_error

    def to_dict(self):
        return {
            "term": self.term_name,
            "numeric": self.numeric,
            "symbolic": self.symbolic,
            "status": self.status,
            "rel_error": self.rel_error,
        }


def verify_term(bridge, term, expression, t, params, rel_tol=1e-6):
    """
    Compare term.evaluate(t, params) with the symbolic value of expression.

    Parameters
    ----------
    bridge : WolframScriptBridge or NullBridge
    term : PhysicsTerm
    expression : str
        Closed form of the term with the parameter values substituted.
    t : float
    params : ParameterMap or dict
    rel_tol : float
        Relative tolerance for a match.

    Returns
    -------
    VerificationResult
    """
    numeric = term.evaluate(t, params)
    symbolic = evaluate_symbolic_float(bridge, expression)
    if symbolic is None:
        return VerificationResult(term.name, numeric, None, "unavailable")

    scale = max(abs(numeric), abs(symbolic))
    rel_error = abs(numeric - symbolic) / scale if scale > 0 else 0.0
    status = "match" if math.isclose(numeric, symbolic, rel_tol=rel_tol) else "mismatch"
    if status == "mismatch":
        log.warning("Term %s differs from symbolic value: %s vs %s",
                    term.name, numeric, symbolic)
    return VerificationResult(term.name, numeric, symbolic, status, rel_error)
