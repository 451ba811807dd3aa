"""
Helper terms: time-varying dipole moments, string fields, rotation
frequency, surface gravity, reactor efficiency and the quasar jet step.

The moment and field helpers are configured at construction (solar
defaults) and ignore the parameter map. ReactorEfficiency and
NavierStokesQuasarJet read the map.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math

from uqff.terms import PhysicsTerm

G = 6.674e-11


class MuS(PhysicsTerm):
    """mu_s(t) = (Bs + 0.4*sin(omega_c*t) + SCm_contrib) * Rs^3."""

    name = "MuS"
    category = "helper"
    description = ("mu_s(t): Time-varying magnetic dipole moment = Bs_t * Rs^3 "
                   "where Bs_t = Bs + 0.4*sin(omega_c*t) + SCm_contrib (A*m^2)")

    def __init__(self, Bs=1e-4, omega_c=2.7e-6, Rs=6.96e8, SCm_contrib=1e3):
        self.Bs = Bs
        self.omega_c = omega_c
        self.Rs = Rs
        self.SCm_contrib = SCm_contrib

    def evaluate(self, t, params):
        bs_t = self.Bs + 0.4 * math.sin(self.omega_c * t) + self.SCm_contrib
        return bs_t * self.Rs ** 3


class GradMsR(PhysicsTerm):
    """Surface gravity G*Ms/Rs^2."""

    name = "GradMsR"
    category = "helper"
    description = ("grad(Ms/r): Approximate gradient of mass-to-radius ratio = "
                   "G*Ms/Rs^2 (surface gravity in m/s^2)")

    def __init__(self, Ms=1.989e30, Rs=6.96e8):
        self.Ms = Ms
        self.Rs = Rs

    def validate(self, params):
        return self.Ms > 0 and self.Rs > 0

    def evaluate(self, t, params):
        if self.Rs == 0.0:
            return 0.0
        return G * self.Ms / (self.Rs * self.Rs)


class Bj(PhysicsTerm):
    """String field Bj(t) = 1e-3 + 0.4*sin(omega_c*t) + SCm_contrib."""

    name = "Bj"
    category = "helper"
    description = "Bj(t): Magnetic string field = 1e-3 + 0.4*sin(omega_c*t) + SCm_contrib (Tesla)"

    def __init__(self, omega_c=2.7e-6, SCm_contrib=1e3):
        self.omega_c = omega_c
        self.SCm_contrib = SCm_contrib

    def evaluate(self, t, params):
        return 1e-3 + 0.4 * math.sin(self.omega_c * t) + self.SCm_contrib


class OmegaST(PhysicsTerm):
    """Rotation frequency omega_s(t) = omega_s - 0.4e-6*sin(omega_c*t)."""

    name = "OmegaST"
    category = "helper"
    description = ("omega_s(t): Stellar rotation frequency = "
                   "omega_s - 0.4e-6*sin(omega_c*t) (rad/s)")

    def __init__(self, omega_s=2.7e-6, omega_c=2.7e-6):
        self.omega_s = omega_s
        self.omega_c = omega_c

    def evaluate(self, t, params):
        return self.omega_s - 0.4e-6 * math.sin(self.omega_c * t)


class MuJ(PhysicsTerm):
    """String dipole moment mu_j(t) = Bj(t) * Rs^3."""

    name = "MuJ"
    category = "helper"
    description = "mu_j(t): Magnetic string dipole moment = Bj(t) * Rs^3 (A*m^2)"

    def __init__(self, omega_c=2.7e-6, Rs=6.96e8, SCm_contrib=1e3):
        self.Rs = Rs
        self._bj = Bj(omega_c=omega_c, SCm_contrib=SCm_contrib)

    def evaluate(self, t, params):
        return self._bj.evaluate(t, params) * self.Rs ** 3


class ReactorEfficiency(PhysicsTerm):
    """SCm reactor efficiency rho_SCm*v_SCm^2/rho_A*exp(-kappa*t)."""

    name = "ReactorEfficiency"
    category = "helper"
    description = "Ereact: SCm reactor efficiency (rho_SCm*v_SCm^2/rho_A*exp(-kappa*t))"
    defaults = {"rho_SCm": 1e15, "v_SCm": 0.99 * 3e8, "rho_A": 1e-23}

    kappa = 0.0005

    def validate(self, params):
        return self.param(params, "rho_A") > 0.0

    def evaluate(self, t, params):
        rho_a = self.param(params, "rho_A")
        if rho_a <= 0.0:
            return 0.0
        v_scm = self.param(params, "v_SCm")
        return (self.param(params, "rho_SCm") * v_scm * v_scm / rho_a
                * math.exp(-self.kappa * t))


class NavierStokesQuasarJet(PhysicsTerm):
    """One explicit Navier-Stokes step of the jet velocity under the UQFF body force."""

    name = "NavierStokesQuasarJet"
    category = "helper"
    description = "NS Quasar Jet: Navier-Stokes with UQFF body force (v += dt*uqff_g, v_jet=0.99c)"
    defaults = {"uqff_g": 0.0, "v_jet": 0.99 * 3e8}

    dt_ns = 0.1

    def evaluate(self, t, params):
        return (self.dt_ns * self.param(params, "uqff_g")
                + self.param(params, "v_jet") / 1e10)


HELPER_TERMS = (
    MuS,
    GradMsR,
    Bj,
    OmegaST,
    MuJ,
    ReactorEfficiency,
    NavierStokesQuasarJet,
)
