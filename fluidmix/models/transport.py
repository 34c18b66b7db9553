"""
Pure-species laws for viscosity, thermal conductivity
and mass diffusivity.
"""
from fluidmix.errors import FluidModelError


class ViscosityModelConstant:
    def __init__(self, mu):
        self._mu = mu

    def mu(self, T, rho):
        return self._mu


class ViscosityModelSutherland:
    def __init__(self, mu_ref, T_ref, S):
        self.mu_ref = mu_ref
        self.T_ref = T_ref
        self.S = S

    def mu(self, T, rho):
        return self.mu_ref*(T/self.T_ref)**1.5*(self.T_ref + self.S)/(T + self.S)


class ViscosityModelPolynomial:
    def __init__(self, coefficients):
        """
        mu = b[0] + b[1]*T + b[2]*T**2 + ...
        """
        self.coefficients = list(coefficients)

    def mu(self, T, rho):
        return _polynomial(self.coefficients, T)


class ThermalConductivityModelConstant:
    def __init__(self, kappa):
        self._kappa = kappa

    def kappa(self, T, rho, mu_lam, mu_turb, cp):
        return self._kappa


class ThermalConductivityModelConstantPrandtl:
    def __init__(self, Pr):
        self.Pr = Pr

    def kappa(self, T, rho, mu_lam, mu_turb, cp):
        return mu_lam*cp/self.Pr


class ThermalConductivityModelPolynomial:
    def __init__(self, coefficients):
        self.coefficients = list(coefficients)

    def kappa(self, T, rho, mu_lam, mu_turb, cp):
        return _polynomial(self.coefficients, T)


class ThermalConductivityModelRANS:
    """
    Adds the turbulent contribution cp*mu_turb/Pr_turb to
    a laminar conductivity law.
    """
    def __init__(self, laminar_model, Pr_turb):
        self.laminar_model = laminar_model
        self.Pr_turb = Pr_turb

    def kappa(self, T, rho, mu_lam, mu_turb, cp):
        return (self.laminar_model.kappa(T, rho, mu_lam, mu_turb, cp) +
                cp*mu_turb/self.Pr_turb)


class MassDiffusivityModelConstant:
    def __init__(self, D):
        self._D = D

    def D(self, rho, mu_lam, cp, kt):
        return self._D


class MassDiffusivityModelConstantSchmidt:
    def __init__(self, Sc):
        self.Sc = Sc

    def D(self, rho, mu_lam, cp, kt):
        return mu_lam/(self.Sc*rho)


class MassDiffusivityModelConstantLewis:
    def __init__(self, Le):
        self.Le = Le

    def D(self, rho, mu_lam, cp, kt):
        return kt/(self.Le*rho*cp)


class MassDiffusivityModelUnityLewis(MassDiffusivityModelConstantLewis):
    def __init__(self):
        super().__init__(1.)


def _polynomial(coefficients, T):
    out = 0.
    for b in reversed(coefficients):
        out = out*T + b
    return out


def make_viscosity_model(params, i):
    kind = params.viscosity_model[i]
    if kind == "constant":
        return ViscosityModelConstant(params.mu_constant[i])
    if kind == "sutherland":
        return ViscosityModelSutherland(
            params.mu_ref[i], params.mu_t_ref[i],
            params.sutherland_constant[i])
    if kind == "polynomial":
        if params.mu_polycoeffs[i] is None:
            raise FluidModelError(
                "mu_polycoeffs missing for species {}".format(params.species[i]))
        return ViscosityModelPolynomial(params.mu_polycoeffs[i])
    raise FluidModelError("Unknown viscosity model '{}'".format(kind))


def make_conductivity_model(params, i):
    kind = params.conductivity_model[i]
    if kind == "constant":
        model = ThermalConductivityModelConstant(params.kt_constant[i])
    elif kind == "constant_prandtl":
        model = ThermalConductivityModelConstantPrandtl(params.prandtl_lam[i])
    elif kind == "polynomial":
        if params.kt_polycoeffs[i] is None:
            raise FluidModelError(
                "kt_polycoeffs missing for species {}".format(params.species[i]))
        model = ThermalConductivityModelPolynomial(params.kt_polycoeffs[i])
    else:
        raise FluidModelError("Unknown conductivity model '{}'".format(kind))

    if params.turbulent_conductivity:
        model = ThermalConductivityModelRANS(model, params.prandtl_turb)
    return model


def make_diffusivity_model(params, i):
    kind = params.diffusivity_model[i]
    if kind == "constant_diffusivity":
        return MassDiffusivityModelConstant(params.diffusivity_constant[i])
    if kind == "constant_schmidt":
        return MassDiffusivityModelConstantSchmidt(
            params.schmidt_number_laminar[i])
    if kind == "constant_lewis":
        return MassDiffusivityModelConstantLewis(params.lewis_number[i])
    if kind == "unity_lewis":
        return MassDiffusivityModelUnityLewis()
    raise FluidModelError("Unknown diffusivity model '{}'".format(kind))
