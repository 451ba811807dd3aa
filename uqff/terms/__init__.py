"""
UQFF Term Layer: PhysicsTerm ABC.

Every closed-form formula evaluator (gravity components, compressed and
resonance MUGE pieces, astrophysical systems, helpers) is a PhysicsTerm.
Terms are scalar functions of time and a flat parameter map. They are
built once when the registry is populated and are read-only afterwards.

Parameter contract:
    A missing parameter key is never an error. Each term declares a
    `defaults` table and reads its inputs through param(), which falls
    back to that table. Keys whose fallback depends on t (e.g. "tn")
    pass the fallback explicitly.

Division policy:
    A term whose denominator is zero or non-physical returns 0.0 from
    evaluate() and False from validate(). No term raises on bad input.

Modules:
    gravity    - Ug1-4, buoyancy, magnetism, aether, unified field
    muge       - compressed/resonance MUGE and the astrophysical systems
    compressed - the nine compressed MUGE components
    resonance  - the thirteen resonance MUGE components (aDPM family)
    helpers    - time-varying moments, fields and reactor efficiency
    source6    - body-parameterized gravity family (Sun, Earth, ...)

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

from abc import ABC, abstractmethod

_MISSING = object()


class PhysicsTerm(ABC):
    """
    Abstract base class for a UQFF physics term.

    Class Attributes
    ----------------
    name : str
        Unique registry key (e.g. "UniversalGravity1").
    category : str
        Aggregation tag used when the term is registered. One of
        "gravity_wolfram", "unified_field", "muge", "astrophysics",
        "helper", "muge_compressed", "muge_resonance".
    description : str
        Equation string for listings and the API.
    defaults : dict
        Fallback value for every parameter key the term reads.
    """

    name = ""
    category = ""
    description = ""
    defaults = {}

    @abstractmethod
    def evaluate(self, t, params):
        """
        Evaluate the term at time t.

        Parameters
        ----------
        t : float
            Evaluation time in seconds.
        params : ParameterMap or dict
            Flat parameter map. Read only; never mutated.

        Returns
        -------
        float
            Term value. Units differ between terms.
        """

    def validate(self, params):
        """
        Pre-check the parameter map before evaluation.

        Returns
        -------
        bool
            False when evaluate() would hit a zero or non-physical
            denominator. Terms without denominators accept everything.
        """
        return True

    def param(self, params, key, default=_MISSING):
        """
        Read a parameter, falling back to the term's default table.

        Parameters
        ----------
        params : ParameterMap or dict or None
            Parameter map to read from.
        key : str
            Parameter name.
        default : float, optional
            Explicit fallback; overrides the `defaults` table.

        Returns
        -------
        float
        """
        if params is not None and key in params:
            return float(params[key])
        if default is not _MISSING:
            return default
        return self.defaults[key]

    def metadata(self):
        """
        Return term metadata for listings and the API.

        Returns
        -------
        dict
            name, category, description and the default table.
        """
        return {
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "defaults": dict(self.defaults),
        }

    def __repr__(self):
        return "<{} {}>".format(type(self).__name__, self.name)
