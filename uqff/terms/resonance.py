"""
Resonance MUGE components (the aDPM family).

MUGEResonanceADPM computes the base dipole-momentum acceleration
    aDPM = I * A * (omega1 - omega2) * fDPM * Evac_neb * c_res * Vsys
which the engine injects into the parameter map under "aDPM" before the
remaining members are evaluated. Dependent members read "aDPM" with a
default of 0.0, so without injection they evaluate to zero.

Most members share one shape, a product of parameters (times an optional
time factor) divided by a product of parameters. Those are expressed as
ResonanceRatioTerm descriptors rather than one class per formula.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math

from uqff.terms import PhysicsTerm

ADPM_KEY = "aDPM"

# Fallback for every key a resonance member reads.
RESONANCE_DEFAULTS = {
    "aDPM": 0.0,
    "I": 1e45,
    "A": 7e22,
    "omega1": 1e-8,
    "omega2": 5e-9,
    "fDPM": 1e12,
    "fTHz": 1e12,
    "Evac_neb": 7.09e-36,
    "Evac_ISM": 7.09e-37,
    "Delta_Evac": 6.381e-36,
    "c_res": 3e8,
    "Vsys": 1e56,
    "vexp": 1e6,
    "Fsuper": 6.287e-19,
    "UA_SCM": 10.0,
    "omega_i": 1e-8,
    "fTRZ": 0.1,
    "k4_res": 1.0,
    "freact": 1e10,
    "fquantum": 1.445e-17,
    "fAether": 1.576e-35,
    "ffluid": 1e6,
    "H_z": 2.270e-18,
    "r": 1.0,
    "b": 1.0,
    "f_worm": 1.0,
}


def reactor_decay(t):
    """Reactor energy Ereact = 1046 * exp(-0.0005 t)."""
    return 1046.0 * math.exp(-0.0005 * t)


def expansion_phase(t):
    """Angular part of the expansion frequency, 2*pi*t."""
    return 2.0 * math.pi * t


def _defaults_for(keys):
    return {k: RESONANCE_DEFAULTS[k] for k in keys}


class MUGEResonanceADPM(PhysicsTerm):
    """Base DPM acceleration; the dependency every other member consumes."""

    name = "MUGEResonanceADPM"
    category = "muge_resonance"
    description = ("Base DPM acceleration: aDPM = FDPM * fDPM * Evac_neb * c_res * Vsys, "
                   "where FDPM = I * A * (omega1 - omega2)")
    defaults = _defaults_for(("I", "A", "omega1", "omega2", "fDPM",
                              "Evac_neb", "c_res", "Vsys"))

    def evaluate(self, t, params):
        p = self.param
        fdpm_force = p(params, "I") * p(params, "A") * (
            p(params, "omega1") - p(params, "omega2"))
        return (fdpm_force * p(params, "fDPM") * p(params, "Evac_neb")
                * p(params, "c_res") * p(params, "Vsys"))


class ResonanceRatioTerm(PhysicsTerm):
    """
    Data-driven resonance member: prod(numerator) * f(t) / prod(denominator).

    Parameters
    ----------
    name : str
        Registry key.
    description : str
        Equation string.
    numerator : tuple of str
        Parameter keys multiplied in the numerator. Keys may repeat
        (a squared velocity is ("vexp", "vexp")).
    denominator : tuple of str
        Parameter keys multiplied in the denominator.
    time_factor : callable, optional
        f(t) multiplied into the numerator.
    """

    category = "muge_resonance"

    def __init__(self, name, description, numerator, denominator,
                 time_factor=None):
        self.name = name
        self.description = description
        self.numerator = tuple(numerator)
        self.denominator = tuple(denominator)
        self.time_factor = time_factor
        self.defaults = _defaults_for(set(self.numerator) | set(self.denominator))

    def _product(self, params, keys):
        value = 1.0
        for key in keys:
            value *= self.param(params, key)
        return value

    def validate(self, params):
        return self._product(params, self.denominator) != 0.0

    def evaluate(self, t, params):
        denom = self._product(params, self.denominator)
        if denom == 0.0:
            return 0.0
        num = self._product(params, self.numerator)
        if self.time_factor is not None:
            num *= self.time_factor(t)
        return num / denom


class MUGEResonanceAAetherRes(PhysicsTerm):
    """Aether resonance coupling."""

    name = "MUGEResonanceAAetherRes"
    category = "muge_resonance"
    description = ("Aether resonance coupling: "
                   "aaether_res = UA_SCM * omega_i * fTHz * aDPM * (1 + fTRZ)")
    defaults = _defaults_for(("aDPM", "UA_SCM", "omega_i", "fTHz", "fTRZ"))

    def evaluate(self, t, params):
        p = self.param
        return (p(params, "UA_SCM") * p(params, "omega_i") * p(params, "fTHz")
                * p(params, "aDPM") * (1.0 + p(params, "fTRZ")))


class MUGEResonanceOsc(PhysicsTerm):
    """Oscillatory member, zero in the current model."""

    name = "MUGEResonanceOsc"
    category = "muge_resonance"
    description = "Oscillatory term (zero in the current model)"

    def evaluate(self, t, params):
        return 0.0


class MUGEResonanceFTRZ(PhysicsTerm):
    """Pass-through of the TRZ factor."""

    name = "MUGEResonanceFTRZ"
    category = "muge_resonance"
    description = "TRZ factor component (pass-through): returns fTRZ parameter directly"
    defaults = _defaults_for(("fTRZ",))

    def evaluate(self, t, params):
        return self.param(params, "fTRZ")


class MUGEResonanceWormhole(PhysicsTerm):
    """Wormhole throat acceleration f_worm * Evac_neb / (b^2 + r^2)."""

    name = "MUGEResonanceWormhole"
    category = "muge_resonance"
    description = "Wormhole metric term: a_wormhole = f_worm * Evac_neb / (b^2 + r^2)"
    defaults = _defaults_for(("r", "b", "f_worm", "Evac_neb"))

    def _throat(self, params):
        b = self.param(params, "b")
        r = self.param(params, "r")
        return b * b + r * r

    def validate(self, params):
        return self._throat(params) != 0.0

    def evaluate(self, t, params):
        throat = self._throat(params)
        if throat == 0.0:
            return 0.0
        return self.param(params, "f_worm") * self.param(params, "Evac_neb") / throat


def resonance_terms():
    """
    Build the thirteen resonance members in registration order.

    Returns
    -------
    list of PhysicsTerm
    """
    ism = ("Evac_ISM", "c_res")
    neb = ("Evac_neb", "c_res")
    return [
        MUGEResonanceADPM(),
        ResonanceRatioTerm(
            "MUGEResonanceATHz",
            "THz frequency contribution: aTHz = fTHz * Evac_neb * vexp * aDPM / (Evac_ISM * c_res)",
            ("fTHz", "Evac_neb", "vexp", "aDPM"), ism),
        ResonanceRatioTerm(
            "MUGEResonanceAvacDiff",
            "Vacuum energy differential: avac_diff = Delta_Evac * vexp^2 * aDPM / (Evac_neb * c_res^2)",
            ("Delta_Evac", "vexp", "vexp", "aDPM"), ("Evac_neb", "c_res", "c_res")),
        ResonanceRatioTerm(
            "MUGEResonanceASuperFreq",
            "Superconductive frequency resonance: asuper_freq = Fsuper * fTHz * aDPM / (Evac_neb * c_res)",
            ("Fsuper", "fTHz", "aDPM"), neb),
        MUGEResonanceAAetherRes(),
        ResonanceRatioTerm(
            "MUGEResonanceUg4i",
            "Reactor gravity component: Ug4i = k4_res * Ereact * freact * aDPM / (Evac_neb * c_res), "
            "Ereact = 1046 * exp(-0.0005*t)",
            ("k4_res", "freact", "aDPM"), neb, time_factor=reactor_decay),
        ResonanceRatioTerm(
            "MUGEResonanceAQuantumFreq",
            "Quantum frequency contribution: aquantum_freq = fquantum * Evac_neb * aDPM / (Evac_ISM * c_res)",
            ("fquantum", "Evac_neb", "aDPM"), ism),
        ResonanceRatioTerm(
            "MUGEResonanceAAetherFreq",
            "Aether frequency component: aAether_freq = fAether * Evac_neb * aDPM / (Evac_ISM * c_res)",
            ("fAether", "Evac_neb", "aDPM"), ism),
        ResonanceRatioTerm(
            "MUGEResonanceAFluidFreq",
            "Fluid dynamics frequency: afluid_freq = ffluid * Evac_neb * Vsys / (Evac_ISM * c_res)",
            ("ffluid", "Evac_neb", "Vsys"), ism),
        MUGEResonanceOsc(),
        ResonanceRatioTerm(
            "MUGEResonanceAExpFreq",
            "Expansion frequency (Hubble): aexp_freq = fexp * Evac_neb * aDPM / (Evac_ISM * c_res), "
            "fexp = 2*PI*H_z*t",
            ("H_z", "Evac_neb", "aDPM"), ism, time_factor=expansion_phase),
        MUGEResonanceFTRZ(),
        MUGEResonanceWormhole(),
    ]
