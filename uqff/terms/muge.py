"""
Full MUGE equations and the astrophysical system terms built on them.

CompressedMUGE and ResonanceMUGE evaluate the complete compressed and
resonance expressions in one call. The astrophysical system terms
(SGR 1745-2900, Sgr A*, ...) evaluate ResonanceMUGE with a fixed system
parameter table; this is internal composition, not a registry lookup,
and the caller's parameter map is ignored.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math

from uqff.terms import PhysicsTerm
from uqff.terms.resonance import reactor_decay, expansion_phase


class CompressedMUGE(PhysicsTerm):
    """
    Compressed MUGE equation.

    g = G*M/r^2 * (1 + H0*t) * (1 - B/Bcrit) + Lambda*c^2/3
        + quantum + rho_fluid*Vsys*g_local
        + (M + M_DM) * (delta_rho_rho + 3*G*M/r^3)
    """

    name = "CompressedMUGE"
    category = "muge"
    description = ("Compressed MUGE: 9-term gravity equation "
                   "(base*expansion*super_adj + cosm + quantum + fluid + perturbation)")
    defaults = {
        "mass": 1e30,
        "radius": 1e4,
        "B_field": 1e10,
        "Bcrit": 1e11,
        "rho_fluid": 1e-15,
        "Vsys": 4.189e12,
        "g_local": 10.0,
        "M_DM": 0.0,
        "delta_rho_rho": 1e-5,
    }

    G = 6.67430e-11
    c = 3.0e8
    H0 = 2.269e-18
    Lambda = 1.1e-52
    hbar = 1.0546e-34

    def validate(self, params):
        return (self.param(params, "radius") != 0.0
                and self.param(params, "Bcrit") != 0.0)

    def evaluate(self, t, params):
        if not self.validate(params):
            return 0.0
        p = self.param
        m = p(params, "mass")
        r = p(params, "radius")

        base = self.G * m / (r * r)
        expansion = 1.0 + self.H0 * t
        super_adj = 1.0 - p(params, "B_field") / p(params, "Bcrit")
        adjusted_base = base * expansion * super_adj

        cosm = self.Lambda * self.c * self.c / 3.0
        quantum = (self.hbar / 1e-68) * 2.176e-18 * (2.0 * math.pi / 4.35e17)
        fluid = p(params, "rho_fluid") * p(params, "Vsys") * p(params, "g_local")
        perturbation = (m + p(params, "M_DM")) * (
            p(params, "delta_rho_rho") + 3.0 * self.G * m / (r * r * r))

        return adjusted_base + cosm + quantum + fluid + perturbation


class ResonanceMUGE(PhysicsTerm):
    """
    Resonance MUGE equation: the thirteen resonance pieces summed.

    Unlike the registered MUGEResonance* members, this term computes
    aDPM itself and keeps the resonance constants internal. The reactor
    piece multiplies by c_res (Ug4i = k4*Ereact*freact*aDPM/Evac_neb*c_res).
    """

    name = "ResonanceMUGE"
    category = "muge"
    description = ("Resonance MUGE: 13-term + wormhole resonance equation "
                   "(aDPM + aTHz + avac_diff + ... + a_wormhole)")
    defaults = {
        "I": 1e21,
        "A": 3.142e8,
        "omega1": 1e-3,
        "omega2": -1e-3,
        "Vsys": 4.189e12,
        "vexp": 1e3,
        "ffluid": 1.269e-14,
        "radius": 1e4,
    }

    fDPM = 1e12
    fTHz = 1e12
    Evac_neb = 7.09e-36
    Evac_ISM = 7.09e-37
    Delta_Evac = 6.381e-36
    Fsuper = 6.287e-19
    UA_SCM = 10.0
    omega_i = 1e-8
    k4_res = 1.0
    freact = 1e10
    fquantum = 1.445e-17
    fAether = 1.576e-35
    fTRZ = 0.1
    c_res = 3e8
    H_z = 2.270e-18
    b = 1.0
    f_worm = 1.0

    def components(self, t, params):
        """
        Evaluate every resonance piece.

        Returns
        -------
        dict
            Piece name to value, in summation order.
        """
        p = self.param
        vexp = p(params, "vexp")
        vsys = p(params, "Vsys")
        r = p(params, "radius")
        neb = self.Evac_neb
        ism = self.Evac_ISM
        c_res = self.c_res

        fdpm_force = p(params, "I") * p(params, "A") * (
            p(params, "omega1") - p(params, "omega2"))
        adpm = fdpm_force * self.fDPM * neb * c_res * vsys

        return {
            "aDPM": adpm,
            "aTHz": self.fTHz * neb * vexp * adpm / ism / c_res,
            "avac_diff": self.Delta_Evac * vexp * vexp * adpm / neb / (c_res * c_res),
            "asuper_freq": self.Fsuper * self.fTHz * adpm / neb / c_res,
            "aaether_res": self.UA_SCM * self.omega_i * self.fTHz * adpm * (1.0 + self.fTRZ),
            "Ug4i": self.k4_res * reactor_decay(t) * self.freact * adpm / neb * c_res,
            "aquantum_freq": self.fquantum * neb * adpm / ism / c_res,
            "aAether_freq": self.fAether * neb * adpm / ism / c_res,
            "afluid_freq": p(params, "ffluid") * neb * vsys / ism / c_res,
            "osc": 0.0,
            "aexp_freq": expansion_phase(t) * self.H_z * neb * adpm / ism / c_res,
            "fTRZ": self.fTRZ,
            "a_wormhole": self.f_worm * neb / (self.b * self.b + r * r),
        }

    def evaluate(self, t, params):
        return sum(self.components(t, params).values())


class SystemResonanceTerm(PhysicsTerm):
    """
    ResonanceMUGE evaluated with a fixed astrophysical parameter table.

    Parameters
    ----------
    name : str
        Registry key (e.g. "SGR1745Magnetar").
    description : str
        System summary.
    system_params : dict
        Parameter table handed to ResonanceMUGE on every call.
    """

    category = "astrophysics"

    def __init__(self, name, description, system_params):
        self.name = name
        self.description = description
        self.system_params = dict(system_params)
        self._resonance = ResonanceMUGE()

    def evaluate(self, t, params):
        return self._resonance.evaluate(t, self.system_params)

    def metadata(self):
        meta = super().metadata()
        meta["system_params"] = dict(self.system_params)
        return meta


_NEBULA = {
    "mass": 1.989e35, "Vsys": 1e53, "radius": 3.086e17, "I": 1e22, "A": 1e35,
}

SYSTEM_TABLES = [
    ("SGR1745Magnetar",
     "SGR 1745-2900: Magnetar system (I=1e21, M=2.984e30 kg, B=1e10 T, z=0.0009)",
     {"I": 1e21, "A": 3.142e8, "mass": 2.984e30, "B_field": 1e10,
      "radius": 1e4, "Vsys": 4.189e12, "vexp": 1e3}),
    ("SagittariusAStar",
     "Sagittarius A*: Supermassive black hole (M=8.155e36 kg, M_DM=1e37 kg, Vsys=3.552e45 m^3)",
     {"mass": 8.155e36, "M_DM": 1e37, "Vsys": 3.552e45, "radius": 1e12,
      "vexp": 5e6, "I": 1e23, "A": 2.813e30}),
    ("TapestryStarbirth",
     "Tapestry of Blazing Starbirth: Nebula (M=1.989e35 kg, Vsys=1e53 m^3, r=10 pc)",
     _NEBULA),
    ("Westerlund2Cluster",
     "Westerlund 2: Stellar cluster (similar to Tapestry parameters)",
     _NEBULA),
    ("PillarsCreation",
     "Pillars of Creation: Molecular cloud (M=1.989e32 kg, r=1 ly)",
     {"mass": 1.989e32, "radius": 9.46e15, "Vsys": 3.552e48, "I": 1e21,
      "A": 2.813e32}),
    ("RingsRelativity",
     "Rings of Relativity: Cosmological structure (M=1.989e36 kg, z=0.01)",
     {"mass": 1.989e36, "radius": 3.086e17, "Vsys": 1e54, "vexp": 1e5,
      "I": 1e22}),
    ("StudentGuideUniverse",
     "Student's Guide to the Universe: Observable universe (M=1e53 kg, r=10 Gly, t_Hubble=4.35e17 s)",
     {"mass": 1e53, "radius": 1e26, "Vsys": 1e80, "vexp": 3e8, "I": 1e24,
      "A": 1e52}),
]


def system_terms():
    """Build the seven astrophysical system terms in registration order."""
    return [SystemResonanceTerm(name, desc, table)
            for name, desc, table in SYSTEM_TABLES]
