"""
Static catalogue of astrophysical systems and celestial bodies.

Systems (SGR 1745-2900, Sgr A*, M82, template) seed a ParameterMap for
the MUGE and resonance terms. Bodies (Sun, Earth, Jupiter, Neptune) plus
SimulationParams seed the body-parameterized gravity family.

Lookups never fail: an unknown system id returns the default record
("Unknown", all quantities zero), an unknown body returns None.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math
from collections import OrderedDict

from uqff.parameters import ParameterMap

SYSTEM_TYPES = (
    "MAGNETAR",
    "SUPERMASSIVE_BLACK_HOLE",
    "GALAXY",
    "STAR_FORMING_REGION",
    "NEBULA",
    "PLANETARY_SYSTEM",
    "QUASAR",
    "STELLAR_CLUSTER",
    "UNKNOWN",
)

# Record field -> parameter keys it seeds. Zero fields are not written,
# so terms keep their own defaults for unknown quantities.
FIELD_KEYS = (
    ("mass", ("mass", "M")),
    ("radius", ("radius", "Rs")),
    ("distance", ("dg",)),
    ("magnetic_field", ("B_field", "Bs_t")),
    ("redshift", ("z",)),
    ("luminosity", ("L",)),
    ("temperature", ("T",)),
    ("system_volume", ("Vsys",)),
    ("dark_matter_mass", ("M_DM",)),
    ("vacuum_energy_density", ("Evac_neb",)),
)


class SystemParameters:
    """
    Physical parameters of one catalogued system.

    Parameters
    ----------
    name : str
        Display name.
    type : str
        One of SYSTEM_TYPES.
    mass, radius, distance : float
        kg, m, m.
    magnetic_field : float
        T.
    redshift : float
        Dimensionless z.
    luminosity : float
        W.
    temperature : float
        K.
    system_volume : float
        m^3.
    dark_matter_mass : float
        kg.
    vacuum_energy_density : float
        J/m^3.
    catalog_id : str
        External catalogue designation.
    observation_epoch : str
        Free-form epoch tag.
    custom_params : dict, optional
        Extra parameter-map entries written as-is.
    """

    def __init__(self, name="Unknown", type="UNKNOWN", mass=0.0, radius=0.0,
                 distance=0.0, magnetic_field=0.0, redshift=0.0,
                 luminosity=0.0, temperature=0.0, system_volume=0.0,
                 dark_matter_mass=0.0, vacuum_energy_density=0.0,
                 catalog_id="", observation_epoch="", custom_params=None):
        if type not in SYSTEM_TYPES:
            raise ValueError("Unknown system type '{}'".format(type))
        self.name = name
        self.type = type
        self.mass = float(mass)
        self.radius = float(radius)
        self.distance = float(distance)
        self.magnetic_field = float(magnetic_field)
        self.redshift = float(redshift)
        self.luminosity = float(luminosity)
        self.temperature = float(temperature)
        self.system_volume = float(system_volume)
        self.dark_matter_mass = float(dark_matter_mass)
        self.vacuum_energy_density = float(vacuum_energy_density)
        self.catalog_id = catalog_id
        self.observation_epoch = observation_epoch
        self.custom_params = dict(custom_params or {})

    def to_param_map(self):
        """
        Parameter map seeded from the non-zero fields and custom_params.

        Returns
        -------
        ParameterMap
        """
        params = ParameterMap()
        for field, keys in FIELD_KEYS:
            value = getattr(self, field)
            if value != 0.0:
                for key in keys:
                    params[key] = value
        params.update(self.custom_params)
        return params

    def to_dict(self):
        return {
            "name": self.name,
            "type": self.type,
            "mass": self.mass,
            "radius": self.radius,
            "distance": self.distance,
            "magnetic_field": self.magnetic_field,
            "redshift": self.redshift,
            "luminosity": self.luminosity,
            "temperature": self.temperature,
            "system_volume": self.system_volume,
            "dark_matter_mass": self.dark_matter_mass,
            "vacuum_energy_density": self.vacuum_energy_density,
            "catalog_id": self.catalog_id,
            "observation_epoch": self.observation_epoch,
            "custom_params": dict(self.custom_params),
        }


DEFAULT_SYSTEMS = [
    ("SGR1745", {
        "name": "SGR 1745-2900",
        "type": "MAGNETAR",
        "mass": 2.984e30,            # ~1.5 M_sun
        "radius": 12000.0,
        "distance": 2.55e20,         # ~26,000 ly
        "magnetic_field": 1e10,
        "luminosity": 3.8e32,
        "catalog_id": "SGR 1745-2900",
    }),
    ("SGRA_STAR", {
        "name": "Sagittarius A*",
        "type": "SUPERMASSIVE_BLACK_HOLE",
        "mass": 8.155e36,            # ~4.1e6 M_sun
        "radius": 1.2e10,
        "distance": 2.55e20,
        "dark_matter_mass": 1e37,
        "system_volume": 3.552e45,
        "catalog_id": "Sgr A*",
    }),
    ("M82", {
        "name": "M82",
        "type": "GALAXY",
        "mass": 5e40,
        "radius": 3.7e20,
        "distance": 1.1e23,          # ~12 million ly
        "luminosity": 5e37,
        "catalog_id": "M82 / NGC 3034",
    }),
    ("TEMPLATE", {
        "name": "Template System",
        "type": "UNKNOWN",
    }),
]


class SystemCatalogue:
    """
    Lookup from short identifier to SystemParameters.

    Parameters
    ----------
    systems : list of (str, dict), optional
        Initial entries. Defaults to DEFAULT_SYSTEMS.
    """

    def __init__(self, systems=None):
        self._systems = OrderedDict()
        for system_id, fields in (DEFAULT_SYSTEMS if systems is None else systems):
            self._systems[system_id] = SystemParameters(**fields)

    def get_system(self, system_id):
        """The system, or a fresh default record for an unknown id."""
        system = self._systems.get(system_id)
        return system if system is not None else SystemParameters()

    def has_system(self, system_id):
        return system_id in self._systems

    def system_ids(self):
        return list(self._systems)

    def system_count(self):
        return len(self._systems)

    def add_system(self, system_id, system):
        """
        Add or replace a system.

        Raises
        ------
        ValueError
            If system_id is empty.
        """
        if not system_id:
            raise ValueError("system_id must be non-empty")
        self._systems[system_id] = system

    def list_all(self):
        return [dict(s.to_dict(), id=sid) for sid, s in self._systems.items()]


# -----------------------------------------------------------------------
# Celestial bodies for the body-parameterized family
# -----------------------------------------------------------------------

YEAR_S = 365.25 * 24 * 3600


class CelestialBody:
    """Body properties read by the Source6 terms (SI units)."""

    FIELDS = ("Ms", "Rs", "Rb", "Ts_surface", "omega_s", "Bs_avg",
              "SCm_density", "QUA", "Pcore", "PSCm", "omega_c")

    def __init__(self, name, **values):
        self.name = name
        missing = [f for f in self.FIELDS if f not in values]
        if missing:
            raise ValueError("Body '{}' missing {}".format(name, ", ".join(missing)))
        for field in self.FIELDS:
            setattr(self, field, float(values[field]))

    def to_dict(self):
        result = {"name": self.name}
        result.update((f, getattr(self, f)) for f in self.FIELDS)
        return result


BODIES = OrderedDict([
    ("Sun", CelestialBody(
        "Sun", Ms=1.989e30, Rs=6.96e8, Rb=1.496e13, Ts_surface=5778.0,
        omega_s=2.5e-6, Bs_avg=1e-4, SCm_density=1e15, QUA=1e-11,
        Pcore=1.0, PSCm=1.0, omega_c=2 * math.pi / (11.0 * YEAR_S))),
    ("Earth", CelestialBody(
        "Earth", Ms=5.972e24, Rs=6.371e6, Rb=1e7, Ts_surface=288.0,
        omega_s=7.292e-5, Bs_avg=3e-5, SCm_density=1e12, QUA=1e-12,
        Pcore=1e-3, PSCm=1e-3, omega_c=2 * math.pi / (1.0 * YEAR_S))),
    ("Jupiter", CelestialBody(
        "Jupiter", Ms=1.898e27, Rs=6.9911e7, Rb=1e8, Ts_surface=165.0,
        omega_s=1.76e-4, Bs_avg=4e-4, SCm_density=1e13, QUA=1e-11,
        Pcore=1e-3, PSCm=1e-3, omega_c=2 * math.pi / (11.86 * YEAR_S))),
    ("Neptune", CelestialBody(
        "Neptune", Ms=1.024e26, Rs=2.4622e7, Rb=5e7, Ts_surface=72.0,
        omega_s=1.08e-4, Bs_avg=1e-4, SCm_density=1e11, QUA=1e-13,
        Pcore=1e-3, PSCm=1e-3, omega_c=2 * math.pi / (164.8 * YEAR_S))),
])


class SimulationParams:
    """Run settings shared by every body (distance, couplings, wind)."""

    DEFAULTS = (
        ("r", 1e13), ("t", 0.0), ("tn", 0.0), ("theta", 0.0),
        ("v_SCm", 0.99 * 3.0e8), ("rho_A", 1e-23), ("rho_sw", 8e-21),
        ("v_sw", 5e5), ("QA", 1e-10), ("kappa", 0.0005), ("alpha", 0.001),
        ("gamma", 0.00005), ("delta_sw", 0.01), ("epsilon_sw", 0.001),
        ("delta_def", 0.01), ("HSCm", 1.0), ("UUA", 1.0), ("eta", 1e-22),
        ("k1", 1.5), ("k2", 1.2), ("k3", 1.8), ("k4", 2.0), ("beta_i", 0.6),
        ("rho_v", 6e-27), ("C_concentration", 1.0), ("f_feedback", 0.1),
        ("num_strings", 1e9), ("Ts00", 1.27e3 + 1.11e7), ("Omega_g", 7.3e-16),
        ("Mbh", 8.15e36), ("dg", 2.55e20),
    )

    def __init__(self, **overrides):
        known = dict(self.DEFAULTS)
        for key in overrides:
            if key not in known:
                raise ValueError("Unknown simulation parameter '{}'".format(key))
        known.update(overrides)
        for key, value in known.items():
            setattr(self, key, float(value))

    def to_dict(self):
        return {key: getattr(self, key) for key, _ in self.DEFAULTS}


def get_body(name):
    """Look up a default body by name. Returns CelestialBody or None."""
    return BODIES.get(name)


def build_body_params(body, sim=None):
    """
    Parameter map for one body under the given simulation settings.

    rj (string radius) is set to the body's bubble radius Rb.

    Returns
    -------
    ParameterMap
    """
    if sim is None:
        sim = SimulationParams()
    params = ParameterMap()
    for field in CelestialBody.FIELDS:
        params[field] = getattr(body, field)
    params.update(sim.to_dict())
    params["rj"] = body.Rb
    return params
