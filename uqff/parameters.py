"""
Parameter maps for term evaluation.

A ParameterMap is a flat str -> float mapping passed to every term in a
round. Missing keys are not an error: get() takes a fallback and terms
carry their own default tables. Overlays return copies, so a sweep point
never mutates the map it was derived from.

AstrophysicalSystem holds the default system state used by the
simulation driver (SGR 1745-2900 magnetar with resonance constants).

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

from collections.abc import MutableMapping


class ParameterMap(MutableMapping):
    """
    Mapping from parameter name to float value.

    Parameters
    ----------
    values : dict or ParameterMap, optional
        Initial entries. Values are coerced to float.
    """

    def __init__(self, values=None, **kwargs):
        self._values = {}
        if values is not None:
            self.update(values)
        if kwargs:
            self.update(kwargs)

    def __getitem__(self, key):
        return self._values[key]

    def __setitem__(self, key, value):
        if not isinstance(key, str) or not key:
            raise ValueError("Parameter name must be a non-empty string")
        self._values[key] = float(value)

    def __delitem__(self, key):
        del self._values[key]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return "ParameterMap({!r})".format(self._values)

    def set(self, key, value):
        """Set one parameter and return self for chaining."""
        self[key] = value
        return self

    def copy(self):
        """Independent copy of this map."""
        return ParameterMap(self._values)

    def overlay(self, values=None, **kwargs):
        """
        Return a copy with the given entries replaced or added.

        Parameters
        ----------
        values : dict, optional
            Entries to overlay.
        **kwargs
            Additional entries.

        Returns
        -------
        ParameterMap
            New map; self is left unchanged.
        """
        result = self.copy()
        if values is not None:
            result.update(values)
        if kwargs:
            result.update(kwargs)
        return result

    def with_value(self, key, value):
        """Copy with a single parameter overlaid (one sweep point)."""
        result = self.copy()
        result[key] = value
        return result

    def to_dict(self):
        """Plain dict for JSON responses."""
        return dict(self._values)


class AstrophysicalSystem:
    """
    Default system state for simulation runs.

    Attribute names are the parameter keys. Defaults describe the
    SGR 1745-2900 magnetar together with the vacuum-energy and
    resonance constants the aDPM family consumes.

    Parameters
    ----------
    **overrides
        Attribute values replacing the defaults. Unknown names raise
        ValueError.
    """

    DEFAULTS = (
        ("M", 2.8e30),
        ("M_DM", 1.4e30),
        ("r", 1.2e4),
        ("Rs", 1.2e4),
        ("Vsys", 1e56),
        ("Bs_t", 1e15),
        ("Bcrit", 4.4e13),
        ("omega_s", 1e-8),
        ("vexp", 1e6),
        ("t", 1e10),
        ("Evac_neb", 7.09e-36),
        ("Evac_ISM", 7.09e-37),
        ("Delta_Evac", 6.381e-36),
        ("fDPM", 1e12),
        ("fTHz", 1e12),
        ("fquantum", 1.445e-17),
        ("fAether", 1.576e-35),
        ("ffluid", 1e6),
        ("freact", 1e10),
        ("Fsuper", 6.287e-19),
        ("UA_SCM", 10.0),
        ("omega_i", 1e-8),
        ("k4_res", 1.0),
        ("fTRZ", 0.1),
        ("c_res", 3e8),
        ("I", 1e45),
        ("A", 7e22),
        ("omega1", 1e-8),
        ("omega2", 5e-9),
        ("b", 1.0),
        ("f_worm", 1.0),
        ("H_z", 2.270e-18),
    )

    def __init__(self, **overrides):
        for key, value in self.DEFAULTS:
            setattr(self, key, value)
        known = {key for key, _ in self.DEFAULTS}
        for key, value in overrides.items():
            if key not in known:
                raise ValueError("Unknown system parameter '{}'".format(key))
            setattr(self, key, float(value))

    def to_param_map(self):
        """
        Build the parameter map for one evaluation.

        Returns
        -------
        ParameterMap
            One entry per attribute, including the current t.
        """
        return ParameterMap({key: getattr(self, key) for key, _ in self.DEFAULTS})

    def to_dict(self):
        return self.to_param_map().to_dict()
