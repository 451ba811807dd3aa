"""
Universal gravity components Ug1-Ug4, buoyancy, magnetism, aether trace
and the unified field sum.

Coupling constants (k1..k4, alpha, wind factors) are fixed class
attributes. Body-dependent inputs are read from the parameter map with
the documented defaults. "tn" (normalized time) falls back to t.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math

from uqff.terms import PhysicsTerm


class UniversalGravity1(PhysicsTerm):
    """Magnetic dipole-gradient gravity with defect modulation."""

    name = "UniversalGravity1"
    category = "gravity_wolfram"
    description = ("Ug1: Magnetic dipole-gradient gravity with defect modulation "
                   "(k1*mu_s*grad(M/r)*exp(-alpha*t)*cos(PI*tn)*defect)")
    defaults = {"mu_s": 1e20, "grad_Ms_r": 1e-5}

    k1 = 1.5
    alpha = 0.001
    delta_def = 0.01

    def evaluate(self, t, params):
        mu_s = self.param(params, "mu_s")
        grad_ms_r = self.param(params, "grad_Ms_r")
        tn = self.param(params, "tn", t)
        defect = 1.0 + self.delta_def * math.sin(0.001 * t)
        return (self.k1 * mu_s * grad_ms_r * math.exp(-self.alpha * t)
                * math.cos(math.pi * tn) * defect)


class UniversalGravity2(PhysicsTerm):
    """Charge-reactivity gravity with solar wind modulation."""

    name = "UniversalGravity2"
    category = "gravity_wolfram"
    description = ("Ug2: Charge-reactivity gravity with solar wind modulation "
                   "(k2*(QA+QUA)*M/r^2*S*wind_mod*HSCm*Ereact)")
    defaults = {"QUA": 1e-11, "mass": 1e30, "radius": 1e13,
                "Ereact": 1.0, "step_function": 1.0}

    k2 = 1.2
    QA = 1e-10
    delta_sw = 0.01
    v_sw = 5e5
    HSCm = 1.0

    def validate(self, params):
        return self.param(params, "radius") != 0.0

    def evaluate(self, t, params):
        r = self.param(params, "radius")
        if r == 0.0:
            return 0.0
        qua = self.param(params, "QUA")
        m = self.param(params, "mass")
        ereact = self.param(params, "Ereact")
        s = self.param(params, "step_function")
        wind_mod = 1.0 + self.delta_sw * self.v_sw
        return (self.k2 * (self.QA + qua) * m / (r * r) * s * wind_mod
                * self.HSCm * ereact)


class UniversalGravity3(PhysicsTerm):
    """Magnetic string rotation gravity."""

    name = "UniversalGravity3"
    category = "gravity_wolfram"
    description = ("Ug3: Magnetic string rotation gravity "
                   "(k3*Bj*cos(omega_s_t*t*PI)*Pcore*Ereact)")
    defaults = {"Bj": 1e-3, "omega_s_t": 1e-6, "Pcore": 1e-3, "Ereact": 1.0}

    k3 = 1.8

    def evaluate(self, t, params):
        bj = self.param(params, "Bj")
        omega_s_t = self.param(params, "omega_s_t")
        pcore = self.param(params, "Pcore")
        ereact = self.param(params, "Ereact")
        return self.k3 * bj * math.cos(omega_s_t * t * math.pi) * pcore * ereact


class UniversalGravity4(PhysicsTerm):
    """Vacuum energy concentration gravity."""

    name = "UniversalGravity4"
    category = "gravity_wolfram"
    description = ("Ug4: Vacuum energy concentration gravity "
                   "(k4*rho_v*C*Mbh/dg*exp(-alpha*t)*cos(PI*tn)*(1+f_feedback))")
    defaults = {"Mbh": 8.15e36, "dg": 2.55e20}

    k4 = 2.0
    rho_v = 6e-27
    C_concentration = 1.0
    alpha = 0.001
    f_feedback = 0.1

    def validate(self, params):
        return self.param(params, "dg") != 0.0

    def evaluate(self, t, params):
        dg = self.param(params, "dg")
        if dg == 0.0:
            return 0.0
        mbh = self.param(params, "Mbh")
        tn = self.param(params, "tn", t)
        decay = math.exp(-self.alpha * t)
        cycle = math.cos(math.pi * tn)
        return (self.k4 * self.rho_v * self.C_concentration * mbh / dg
                * decay * cycle * (1.0 + self.f_feedback))


class UniversalBuoyancy(PhysicsTerm):
    """Universal buoyancy from galactic rotation."""

    name = "UniversalBuoyancy"
    category = "gravity_wolfram"
    description = ("Ubi: Universal buoyancy from galactic rotation "
                   "(-beta_i*Ugi*Omega_g*Mbh/dg*wind_mod*UUA*cos(PI*tn))")
    defaults = {"Ugi": 1.0, "Mbh": 8.15e36, "dg": 2.55e20, "rho_sw": 8e-21}

    beta_i = 0.6
    Omega_g = 7.3e-16
    epsilon_sw = 0.001
    UUA = 1.0

    def validate(self, params):
        return self.param(params, "dg") != 0.0

    def evaluate(self, t, params):
        dg = self.param(params, "dg")
        if dg == 0.0:
            return 0.0
        ugi = self.param(params, "Ugi")
        mbh = self.param(params, "Mbh")
        rho_sw = self.param(params, "rho_sw")
        tn = self.param(params, "tn", t)
        wind_mod = 1.0 + self.epsilon_sw * rho_sw
        return (-self.beta_i * ugi * self.Omega_g * mbh / dg * wind_mod
                * self.UUA * math.cos(math.pi * tn))


class UniversalMagnetism(PhysicsTerm):
    """A billion magnetic strings."""

    name = "UniversalMagnetism"
    category = "gravity_wolfram"
    description = ("Um: Billion magnetic strings "
                   "(num_strings*mu_j/rj*(1-exp(-gamma*t*cos(PI*tn)))*PSCm*Ereact)")
    defaults = {"mu_j": 1e20, "rj": 1e13, "PSCm": 1e-3, "Ereact": 1.0}

    gamma = 0.00005
    num_strings = 1e9

    def validate(self, params):
        return self.param(params, "rj") != 0.0

    def evaluate(self, t, params):
        rj = self.param(params, "rj")
        if rj == 0.0:
            return 0.0
        mu_j = self.param(params, "mu_j")
        pscm = self.param(params, "PSCm")
        ereact = self.param(params, "Ereact")
        tn = self.param(params, "tn", t)
        decay = 1.0 - math.exp(-self.gamma * t * math.cos(math.pi * tn))
        single = mu_j / rj * decay
        return single * self.num_strings * pscm * ereact


class UniversalAether(PhysicsTerm):
    """
    Trace of the aether-perturbed Minkowski metric.

    diag(1, -1, -1, -1) plus the modulation on every diagonal entry gives
    a trace of -2 + 4*mod.
    """

    name = "UniversalAether"
    category = "gravity_wolfram"
    description = ("A_mu_nu: Cosmic aether metric tensor trace "
                   "(Minkowski + eta*Ts00*cos(PI*tn))")
    defaults = {}

    eta = 1e-22
    Ts00 = 1.27e3 + 1.11e7

    def evaluate(self, t, params):
        tn = self.param(params, "tn", t)
        mod = self.eta * self.Ts00 * math.cos(math.pi * tn)
        return -2.0 + 4.0 * mod


class UnifiedField(PhysicsTerm):
    """Sum of precomputed component totals supplied in the parameter map."""

    name = "UnifiedField"
    category = "unified_field"
    description = "FU: Complete unified field (sum_Ugi + sum_Ubi + Um + A_mu_nu_trace)"
    defaults = {"sum_Ugi": 0.0, "sum_Ubi": 0.0, "Um": 0.0, "A_scalar": 0.0}

    def evaluate(self, t, params):
        return (self.param(params, "sum_Ugi") + self.param(params, "sum_Ubi")
                + self.param(params, "Um") + self.param(params, "A_scalar"))


GRAVITY_TERMS = (
    UniversalGravity1,
    UniversalGravity2,
    UniversalGravity3,
    UniversalGravity4,
    UniversalBuoyancy,
    UniversalMagnetism,
    UniversalAether,
    UnifiedField,
)
