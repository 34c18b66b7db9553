import numpy as np
import yaml

from fluidmix.constants import ARRAYSIZE
from fluidmix.errors import FluidModelError


def _per_species(value, n, name):
    """
    Broadcast a scalar parameter to all species, or check the
    length of a per-species list.
    """
    if value is None:
        return [None]*n
    if np.isscalar(value) or isinstance(value, str):
        return [value]*n
    if len(value) != n:
        raise FluidModelError(
            "'{}' has {} entries for {} species".format(name, len(value), n))
    return list(value)


class Params(object):

    def __init__(self, paramfile):
        """
        Mixture parameters.

        Parameters
        ----------
        paramfile : str or dict
            Path to a YAML parameter file, or an already loaded
            dictionary of parameters.
        """
        if isinstance(paramfile, dict):
            self._paramfile = None
            p = dict(paramfile)
        else:
            self._paramfile = paramfile
            with open(paramfile) as f:
                p = yaml.safe_load(f) or {}

        # species
        self.species = list(p["species"])
        self.n_species = len(self.species)
        self.n_scalars = self.n_species - 1
        if self.n_species > ARRAYSIZE:
            raise FluidModelError("Too many species, increase ARRAYSIZE")

        n = self.n_species

        # chemistry backend: cantera when a mechanism is given
        self.mechanism = p.get("mechanism")
        self.phase = p.get("phase")

        # molar masses [g/mol] and specific heats [J/(kg K)]
        self.molecular_weight = _per_species(
            p.get("molecular_weight"), n, "molecular_weight")
        self.specific_heat_cp = _per_species(
            p.get("specific_heat_cp"), n, "specific_heat_cp")
        if self.mechanism is None:
            for name in "molecular_weight", "specific_heat_cp":
                if None in getattr(self, name):
                    raise FluidModelError(
                        "'{}' is required without a mechanism".format(name))

        # operating conditions
        self.pressure_operating = float(p.get("pressure_operating", 101325.))
        self.gas_constant_ref = float(p.get("gas_constant_ref", 1.))

        # mixing rule
        self.mixing_viscosity_model = str(
            p.get("mixing_viscosity_model", "wilke")).lower()
        if self.mixing_viscosity_model not in ("wilke", "davidson"):
            raise FluidModelError("Unknown mixing viscosity model '{}'".format(
                self.mixing_viscosity_model))

        # viscosity laws
        self.viscosity_model = [m.lower() for m in _per_species(
            p.get("viscosity_model", "constant"), n, "viscosity_model")]
        self.mu_constant = _per_species(
            p.get("mu_constant", 1.716e-5), n, "mu_constant")
        self.mu_ref = _per_species(p.get("mu_ref", 1.716e-5), n, "mu_ref")
        self.mu_t_ref = _per_species(p.get("mu_t_ref", 273.15), n, "mu_t_ref")
        self.sutherland_constant = _per_species(
            p.get("sutherland_constant", 110.4), n, "sutherland_constant")
        self.mu_polycoeffs = self._coefficients(p.get("mu_polycoeffs"), n,
                                                "mu_polycoeffs")

        # thermal conductivity laws
        self.conductivity_model = [m.lower() for m in _per_species(
            p.get("conductivity_model", "constant_prandtl"), n,
            "conductivity_model")]
        self.kt_constant = _per_species(
            p.get("kt_constant", 0.0257), n, "kt_constant")
        self.prandtl_lam = _per_species(
            p.get("prandtl_lam", 0.72), n, "prandtl_lam")
        self.kt_polycoeffs = self._coefficients(p.get("kt_polycoeffs"), n,
                                                "kt_polycoeffs")
        self.turbulent_conductivity = bool(p.get("turbulent_conductivity", False))
        self.prandtl_turb = float(p.get("prandtl_turb", 0.9))

        # mass diffusivity laws
        self.diffusivity_model = [m.lower() for m in _per_species(
            p.get("diffusivity_model", "constant_diffusivity"), n,
            "diffusivity_model")]
        self.diffusivity_constant = _per_species(
            p.get("diffusivity_constant", 0.001), n, "diffusivity_constant")
        self.schmidt_number_laminar = _per_species(
            p.get("schmidt_number_laminar", 1.), n, "schmidt_number_laminar")
        self.lewis_number = _per_species(
            p.get("lewis_number", 1.), n, "lewis_number")

        # property table sweep
        table = p.get("table") or {}
        self.t_min = float(table.get("t_min", 300.))
        self.t_max = float(table.get("t_max", 2000.))
        self.n_points = int(table.get("n_points", 50))
        self.composition = table.get("composition", [0.]*self.n_scalars)
        self.output = table.get("output", "properties.hdf5")

        if len(self.composition) != self.n_scalars:
            raise FluidModelError(
                "table composition needs {} mass fractions".format(
                    self.n_scalars))

    @staticmethod
    def _coefficients(value, n, name):
        if value is None:
            return [None]*n
        # a single flat list of coefficients is shared by all species
        if all(np.isscalar(v) for v in value):
            return [list(value)]*n
        return _per_species(value, n, name)
