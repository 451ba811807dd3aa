"""
Compressed MUGE components.

The compressed MUGE equation
    g = base * expansion * super_adj * envelope + ug_sum
        + cosmological + quantum + fluid + perturbation
split into nine independent terms. Each component is configured with its
system values at construction (SGR 1745-2900 by default) and ignores the
parameter map.

A zero radius or zero Bcrit yields 0.0 and fails validate().

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math

from uqff.terms import PhysicsTerm

G = 6.674e-11
H0 = 2.269e-18
LAMBDA = 1.1e-52
C_LIGHT = 2.998e8
HBAR = 1.0546e-34
DELTA_X_P = 1e-68
INTEGRAL_PSI = 2.176e-18
T_HUBBLE = 4.35e17


class MUGECompressedBase(PhysicsTerm):
    """Newtonian base acceleration G*M/r^2."""

    name = "MUGECompressedBase"
    category = "muge_compressed"
    description = "Compressed MUGE base term: G*M/r^2 (Newtonian gravitational acceleration)"

    def __init__(self, M=2.984e30, r=1e4):
        self.M = float(M)
        self.r = float(r)

    def validate(self, params):
        return self.M > 0 and self.r > 0

    def evaluate(self, t, params):
        if self.r == 0.0:
            return 0.0
        return G * self.M / (self.r * self.r)


class MUGEExpansion(PhysicsTerm):
    """Hubble expansion factor 1 + H0*t_sys."""

    name = "MUGEExpansion"
    category = "muge_compressed"
    description = "Hubble expansion factor: 1 + H0*t where H0 = 2.269e-18 s^-1 (dimensionless)"

    def __init__(self, t_sys=3.799e10):
        self.t_sys = float(t_sys)

    def validate(self, params):
        return self.t_sys >= 0

    def evaluate(self, t, params):
        return 1.0 + H0 * self.t_sys


class MUGESuperAdjustment(PhysicsTerm):
    """Superconductive suppression 1 - B/Bcrit."""

    name = "MUGESuperAdjustment"
    category = "muge_compressed"
    description = ("Superconductive magnetic adjustment: 1 - B/Bcrit "
                   "(dimensionless suppression factor)")

    def __init__(self, B=1e10, Bcrit=1e11):
        self.B = float(B)
        self.Bcrit = float(Bcrit)

    def validate(self, params):
        return self.Bcrit > 0 and self.B >= 0

    def evaluate(self, t, params):
        if self.Bcrit == 0.0:
            return 0.0
        return 1.0 - self.B / self.Bcrit


class MUGEEnvelope(PhysicsTerm):
    """Neutral envelope factor."""

    name = "MUGEEnvelope"
    category = "muge_compressed"
    description = "Envelope modulation factor (neutral = 1.0)"

    def evaluate(self, t, params):
        return 1.0


class MUGEUgSum(PhysicsTerm):
    """Ug1-Ug4 aggregate, held at zero in the compressed form."""

    name = "MUGEUgSum"
    category = "muge_compressed"
    description = "Sum of Ug1-4 components (zero in the compressed form)"

    def evaluate(self, t, params):
        return 0.0


class MUGECosmological(PhysicsTerm):
    """Cosmological constant acceleration Lambda*c^2/3."""

    name = "MUGECosmological"
    category = "muge_compressed"
    description = ("Cosmological constant term: Lambda*c^2/3 where "
                   "Lambda = 1.1e-52 m^-2 (dark energy acceleration)")

    def evaluate(self, t, params):
        return LAMBDA * C_LIGHT * C_LIGHT / 3.0


class MUGEQuantum(PhysicsTerm):
    """Quantum uncertainty correction."""

    name = "MUGEQuantum"
    category = "muge_compressed"
    description = ("Quantum uncertainty term: (hbar/Delta_xp)*integral_psi*(2*PI/tHubble) "
                   "(quantum gravity correction)")

    def evaluate(self, t, params):
        return (HBAR / DELTA_X_P) * INTEGRAL_PSI * (2.0 * math.pi / T_HUBBLE)


class MUGEFluid(PhysicsTerm):
    """Fluid coupling rho_fluid * Vsys * g_local."""

    name = "MUGEFluid"
    category = "muge_compressed"
    description = "Fluid dynamics term: rho_fluid * Vsys * g_local (Navier-Stokes coupling, units: N)"

    def __init__(self, rho_fluid=1e-15, Vsys=4.189e12, g_local=10.0):
        self.rho_fluid = float(rho_fluid)
        self.Vsys = float(Vsys)
        self.g_local = float(g_local)

    def validate(self, params):
        return self.rho_fluid >= 0 and self.Vsys > 0 and self.g_local >= 0

    def evaluate(self, t, params):
        return self.rho_fluid * self.Vsys * self.g_local


class MUGEPerturbation(PhysicsTerm):
    """Dark matter density perturbation (M+M_DM)*(delta + 3*G*M/r^3)."""

    name = "MUGEPerturbation"
    category = "muge_compressed"
    description = ("Dark matter perturbation: (M+M_DM)*(delta_rho/rho + 3*G*M/r^3) "
                   "(density fluctuation term)")

    def __init__(self, M=2.984e30, M_DM=0.0, delta_rho_rho=1e-5, r=1e4):
        self.M = float(M)
        self.M_DM = float(M_DM)
        self.delta_rho_rho = float(delta_rho_rho)
        self.r = float(r)

    def validate(self, params):
        return self.M >= 0 and self.M_DM >= 0 and self.r > 0

    def evaluate(self, t, params):
        if self.r == 0.0:
            return 0.0
        return (self.M + self.M_DM) * (
            self.delta_rho_rho + 3.0 * G * self.M / (self.r ** 3))


COMPRESSED_TERMS = (
    MUGECompressedBase,
    MUGEExpansion,
    MUGESuperAdjustment,
    MUGEEnvelope,
    MUGEUgSum,
    MUGECosmological,
    MUGEQuantum,
    MUGEFluid,
    MUGEPerturbation,
)
