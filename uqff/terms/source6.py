"""
Body-parameterized UQFF family (the "Source6" terms).

These terms read the celestial body (Ms, Rs, Rb, Bs_avg, omega_c, ...)
and simulation settings (r, alpha, k1..k4, ...) from the parameter map,
as built by data.systems.build_body_params(). The gravity terms compose
the helper terms directly; FullUnifiedFieldSource6 sums every component,
feeding each Ug value into the buoyancy term as Ugi.

Defaults are the solar values.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math

from uqff.terms import PhysicsTerm

G = 6.67430e-11
C_LIGHT = 3.0e8
SOLAR_CYCLE_OMEGA = 2.0 * math.pi / (11 * 365.25 * 24 * 3600)


# -----------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------

class StepFunctionSource6(PhysicsTerm):
    """Heaviside step S(r, Rb)."""

    name = "StepFunctionSource6"
    category = "helper"
    description = "Heaviside step: S(r,Rb) = 1 if r>Rb else 0"
    defaults = {"r": 1e13, "Rb": 1e7}

    def evaluate(self, t, params):
        return 1.0 if self.param(params, "r") > self.param(params, "Rb") else 0.0


class ReactorEnergySource6(PhysicsTerm):
    """E_react = rho_SCm * v_SCm^2 / rho_A * exp(-kappa*t)."""

    name = "ReactorEnergySource6"
    category = "helper"
    description = "E_react = (rho_SCm * v_SCm^2 / rho_A) * exp(-kappa*t)"
    defaults = {"SCm_density": 1e15, "v_SCm": 0.99 * C_LIGHT,
                "rho_A": 1e-23, "kappa": 0.0005}

    def validate(self, params):
        return self.param(params, "rho_A") > 0.0

    def evaluate(self, t, params):
        rho_a = self.param(params, "rho_A")
        if rho_a <= 0.0:
            return 0.0
        v_scm = self.param(params, "v_SCm")
        return (self.param(params, "SCm_density") * v_scm * v_scm / rho_a
                * math.exp(-self.param(params, "kappa") * t))


class MagneticMomentTimeSource6(PhysicsTerm):
    """mu_s(t) = [Bs + 0.4 sin(omega_c t) + 1000] * Rs^3."""

    name = "MagneticMomentTimeSource6"
    category = "helper"
    description = "mu_s(t) = [B_s + 0.4sin(omega_c*t) + 1000] * R_s^3"
    defaults = {"Bs_avg": 1e-4, "omega_c": SOLAR_CYCLE_OMEGA, "Rs": 6.96e8}

    def evaluate(self, t, params):
        bs_t = (self.param(params, "Bs_avg")
                + 0.4 * math.sin(self.param(params, "omega_c") * t) + 1e3)
        return bs_t * self.param(params, "Rs") ** 3


class GradientMassRadiusSource6(PhysicsTerm):
    """grad(Ms/r) = G * Ms / Rs^2."""

    name = "GradientMassRadiusSource6"
    category = "helper"
    description = "grad(M_s/r) = G * M_s / R_s^2"
    defaults = {"Ms": 1.989e30, "Rs": 6.96e8}

    def validate(self, params):
        return self.param(params, "Rs") > 0.0

    def evaluate(self, t, params):
        rs = self.param(params, "Rs")
        if rs <= 0.0:
            return 0.0
        return G * self.param(params, "Ms") / (rs * rs)


class MagneticJetFieldSource6(PhysicsTerm):
    """B_j(t) = 1e-3 + 0.4 sin(omega_c t) + 1000."""

    name = "MagneticJetFieldSource6"
    category = "helper"
    description = "B_j(t) = 1e-3 + 0.4sin(omega_c*t) + 1000"
    defaults = {"omega_c": SOLAR_CYCLE_OMEGA}

    def evaluate(self, t, params):
        return 1e-3 + 0.4 * math.sin(self.param(params, "omega_c") * t) + 1e3


class OmegaSpinModulationSource6(PhysicsTerm):
    """omega_s(t) = omega_s - 0.4e-6 sin(omega_c t)."""

    name = "OmegaSpinModulationSource6"
    category = "helper"
    description = "omega_s(t) = omega_s - 0.4e-6*sin(omega_c*t)"
    defaults = {"omega_s": 2.5e-6, "omega_c": SOLAR_CYCLE_OMEGA}

    def evaluate(self, t, params):
        return (self.param(params, "omega_s")
                - 0.4e-6 * math.sin(self.param(params, "omega_c") * t))


class MagneticJetMomentSource6(PhysicsTerm):
    """mu_j(t) = B_j(t) * Rs^3."""

    name = "MagneticJetMomentSource6"
    category = "helper"
    description = "mu_j(t) = B_j(t) * R_s^3"
    defaults = {"omega_c": SOLAR_CYCLE_OMEGA, "Rs": 6.96e8}

    _field = MagneticJetFieldSource6()

    def evaluate(self, t, params):
        return self._field.evaluate(t, params) * self.param(params, "Rs") ** 3


# -----------------------------------------------------------------------
# Gravity components
# -----------------------------------------------------------------------

_mu_s = MagneticMomentTimeSource6()
_grad = GradientMassRadiusSource6()
_ereact = ReactorEnergySource6()
_step = StepFunctionSource6()
_omega = OmegaSpinModulationSource6()
_bj = MagneticJetFieldSource6()
_mu_j = MagneticJetMomentSource6()


class UniversalGravity1Source6(PhysicsTerm):
    """Magnetic dipole gravity."""

    name = "UniversalGravity1Source6"
    category = "gravity_wolfram"
    description = ("Ug1 = k1 * mu_s(t) * grad(M_s/r) * exp(-alpha*t) * cos(pi*t_n) * defect "
                   "- Magnetic dipole gravity")
    defaults = {"r": 1e13, "alpha": 0.001, "delta_def": 0.01, "k1": 1.5}

    def validate(self, params):
        return self.param(params, "r") > 0.0

    def evaluate(self, t, params):
        if self.param(params, "r") <= 0.0:
            return 0.0
        p = self.param
        tn = p(params, "tn", t)
        defect = 1.0 + p(params, "delta_def") * math.sin(0.001 * t)
        return (p(params, "k1") * _mu_s.evaluate(t, params) * _grad.evaluate(t, params)
                * math.exp(-p(params, "alpha") * t) * math.cos(math.pi * tn) * defect)


class UniversalGravity2Source6(PhysicsTerm):
    """Charge/superconductor gravity."""

    name = "UniversalGravity2Source6"
    category = "gravity_wolfram"
    description = ("Ug2 = k2 * (Q_A+Q_UA) * M_s/r^2 * S(r,R_b) * wind * H_SCm * E_react "
                   "- Charge gravity")
    defaults = {"r": 1e13, "k2": 1.2, "QA": 1e-10, "delta_sw": 0.01, "v_sw": 5e5,
                "HSCm": 1.0, "Ms": 1.989e30, "QUA": 1e-11}

    def validate(self, params):
        return self.param(params, "r") > 0.0

    def evaluate(self, t, params):
        p = self.param
        r = p(params, "r")
        if r <= 0.0:
            return 0.0
        wind_mod = 1.0 + p(params, "delta_sw") * p(params, "v_sw")
        return (p(params, "k2") * (p(params, "QA") + p(params, "QUA")) * p(params, "Ms")
                / (r * r) * _step.evaluate(t, params) * wind_mod * p(params, "HSCm")
                * _ereact.evaluate(t, params))


class UniversalGravity3Source6(PhysicsTerm):
    """Magnetic strings gravity."""

    name = "UniversalGravity3Source6"
    category = "gravity_wolfram"
    description = ("Ug3 = k3 * B_j * cos(omega_s(t)*t*pi) * P_core * E_react "
                   "- Magnetic strings gravity")
    defaults = {"k3": 1.8, "Pcore": 1.0}

    def evaluate(self, t, params):
        omega_s_t = _omega.evaluate(t, params)
        return (self.param(params, "k3") * _bj.evaluate(t, params)
                * math.cos(omega_s_t * t * math.pi) * self.param(params, "Pcore")
                * _ereact.evaluate(t, params))


class UniversalGravity4Source6(PhysicsTerm):
    """Reactor / black hole gravity."""

    name = "UniversalGravity4Source6"
    category = "gravity_wolfram"
    description = ("Ug4 = k4 * rho_v * C * M_bh/d_g * exp(-alpha*t) * cos(pi*t_n) * (1+f_fb) "
                   "- Reactor gravity")
    defaults = {"rho_v": 6e-27, "C_concentration": 1.0, "Mbh": 8.15e36,
                "dg": 2.55e20, "alpha": 0.001, "f_feedback": 0.1, "k4": 2.0}

    def validate(self, params):
        return self.param(params, "dg") > 0.0

    def evaluate(self, t, params):
        p = self.param
        dg = p(params, "dg")
        if dg <= 0.0:
            return 0.0
        tn = p(params, "tn", t)
        return (p(params, "k4") * p(params, "rho_v") * p(params, "C_concentration")
                * p(params, "Mbh") / dg * math.exp(-p(params, "alpha") * t)
                * math.cos(math.pi * tn) * (1.0 + p(params, "f_feedback")))


class UniversalBuoyancySource6(PhysicsTerm):
    """Buoyancy of one gravity component Ugi."""

    name = "UniversalBuoyancySource6"
    category = "gravity_wolfram"
    description = ("Ubi = -beta_i * Ug_i * Omega_g * M_bh/d_g * (1+eps_sw*rho_sw) * UUA "
                   "* cos(pi*t_n)")
    defaults = {"Ugi": 1e10, "beta_i": 0.6, "Omega_g": 7.3e-16, "Mbh": 8.15e36,
                "dg": 2.55e20, "epsilon_sw": 0.001, "rho_sw": 8e-21, "UUA": 1.0}

    def validate(self, params):
        return self.param(params, "dg") > 0.0

    def evaluate(self, t, params):
        p = self.param
        dg = p(params, "dg")
        if dg <= 0.0:
            return 0.0
        tn = p(params, "tn", t)
        wind_mod = 1.0 + p(params, "epsilon_sw") * p(params, "rho_sw")
        return (-p(params, "beta_i") * p(params, "Ugi") * p(params, "Omega_g")
                * p(params, "Mbh") / dg * wind_mod * p(params, "UUA")
                * math.cos(math.pi * tn))


class UniversalMagnetismSource6(PhysicsTerm):
    """
    Cosmic string magnetism.

    rj falls back to the bubble radius Rb, then to the solar heliosphere
    radius when neither key is present.
    """

    name = "UniversalMagnetismSource6"
    category = "gravity_wolfram"
    description = ("Um = mu_j/r_j * [1-exp(-gamma*t*cos(pi*t_n))] * phi_hat * N_strings "
                   "* P_SCm * E_react")
    defaults = {"Rb": 1.496e13, "gamma": 0.00005, "num_strings": 1e9,
                "phi_hat": 1.0, "PSCm": 1.0}

    def _rj(self, params):
        return self.param(params, "rj", self.param(params, "Rb"))

    def validate(self, params):
        return self._rj(params) > 0.0

    def evaluate(self, t, params):
        p = self.param
        rj = self._rj(params)
        if rj <= 0.0:
            return 0.0
        tn = p(params, "tn", t)
        decay = 1.0 - math.exp(-p(params, "gamma") * t * math.cos(math.pi * tn))
        single = _mu_j.evaluate(t, params) / rj * decay * p(params, "phi_hat")
        return single * p(params, "num_strings") * p(params, "PSCm") * _ereact.evaluate(t, params)


class SpacetimeMetricSource6(PhysicsTerm):
    """Trace of g_mu_nu + eta*Ts00*cos(pi*tn) on the diagonal."""

    name = "SpacetimeMetricSource6"
    category = "gravity_wolfram"
    description = "A_mu_nu = g_mu_nu + eta*T_s00*cos(pi*t_n) - Metric tensor modulation trace"
    defaults = {"eta": 1e-22, "Ts00": 1.27e3 + 1.11e7}

    MINKOWSKI_DIAGONAL = (1.0, -1.0, -1.0, -1.0)

    def evaluate(self, t, params):
        tn = self.param(params, "tn", t)
        mod = self.param(params, "eta") * self.param(params, "Ts00") * math.cos(math.pi * tn)
        return sum(g + mod for g in self.MINKOWSKI_DIAGONAL)


_ug_terms = (UniversalGravity1Source6(), UniversalGravity2Source6(),
             UniversalGravity3Source6(), UniversalGravity4Source6())
_ubi = UniversalBuoyancySource6()
_um = UniversalMagnetismSource6()
_metric = SpacetimeMetricSource6()


class FullUnifiedFieldSource6(PhysicsTerm):
    """FU = sum(Ug_i) + sum(Ubi_i) + Um + trace(A_mu_nu)."""

    name = "FullUnifiedFieldSource6"
    category = "unified_field"
    description = ("FU = sum(Ug_i) + sum(Ubi_i) + Um + trace(A_mu_nu) "
                   "- Complete unified field strength")

    def evaluate(self, t, params):
        ug_values = [term.evaluate(t, params) for term in _ug_terms]
        # Buoyancy of each component reads it as Ugi from a private copy
        ubi_params = dict(params) if params is not None else {}
        sum_ubi = 0.0
        for ug in ug_values:
            ubi_params["Ugi"] = ug
            sum_ubi += _ubi.evaluate(t, ubi_params)
        return (sum(ug_values) + sum_ubi + _um.evaluate(t, params)
                + _metric.evaluate(t, params))


SOURCE6_TERMS = (
    StepFunctionSource6,
    ReactorEnergySource6,
    MagneticMomentTimeSource6,
    GradientMassRadiusSource6,
    MagneticJetFieldSource6,
    OmegaSpinModulationSource6,
    MagneticJetMomentSource6,
    UniversalGravity1Source6,
    UniversalGravity2Source6,
    UniversalGravity3Source6,
    UniversalGravity4Source6,
    UniversalBuoyancySource6,
    UniversalMagnetismSource6,
    SpacetimeMetricSource6,
    FullUnifiedFieldSource6,
)
