"""
Thermodynamic backends for the multicomponent mixture. A backend
is attached to a mixture and, on `update(T)`, refreshes the gas
constant, density, specific heats of the mixture and the specific
heat of each species.
"""
import logging

import numpy as np

from fluidmix.constants import universal_gas_constant
from fluidmix.errors import FluidModelError
from fluidmix.models.mixing import mean_molar_mass, mass_weighted

logger = logging.getLogger(__name__)


class MixtureEOSIdealGas(object):
    """
    Ideal gas at a fixed operating pressure with constant
    species specific heats.
    """
    def __init__(self, pressure_operating, gas_constant_ref=1.):
        self.mixture = None
        self.pressure_operating = pressure_operating
        self.gas_constant_ref = gas_constant_ref

        self.R = 0.
        self.rho = 0.
        self.cp = 0.
        self.cv = 0.
        self.species_cp = None

    def update(self, T):
        m = self.mixture
        M = mean_molar_mass(m.X, m.molar_masses)/1000
        self.R = universal_gas_constant/(self.gas_constant_ref*M)
        self.rho = self.pressure_operating/(T*self.R)
        self.species_cp = np.array(
            [s.specific_heat_cp for s in m.species_list], dtype=np.float64)
        self.cp = mass_weighted(m.Y, self.species_cp)
        self.cv = self.cp - self.R


class MixtureEOSCantera(object):
    """
    Thermodynamic state lookups delegated to a Cantera `Solution`.

    Parameters
    ----------
    mechanism : str
        Cantera input file, e.g. "h2o2.yaml".
    species_names : list of str
        Mixture species, in the order of the transported scalars.
    pressure_operating : float
        Thermodynamic pressure [Pa].
    phase : str, optional
        Phase name inside the mechanism file.
    """
    def __init__(self, mechanism, species_names, pressure_operating,
                 phase=None, gas_constant_ref=1.):
        import cantera

        self.mixture = None
        self.pressure_operating = pressure_operating
        self.gas_constant_ref = gas_constant_ref

        if phase:
            self.solution = cantera.Solution(mechanism, phase)
        else:
            self.solution = cantera.Solution(mechanism)
        self._gas_constant = cantera.gas_constant

        missing = [s for s in species_names
                   if s not in self.solution.species_names]
        if missing:
            raise FluidModelError("Species {} not found in mechanism '{}'".format(
                ", ".join(missing), mechanism))

        self.indices = np.array(
            [self.solution.species_index(s) for s in species_names])
        # kg/kmol, numerically equal to g/mol
        self.molar_masses = np.asarray(
            self.solution.molecular_weights)[self.indices]
        logger.info("Loaded mechanism %s with %d species",
                    mechanism, self.solution.n_species)

        self.R = 0.
        self.rho = 0.
        self.cp = 0.
        self.cv = 0.
        self.species_cp = None

    def update(self, T):
        gas = self.solution
        Y = np.zeros(gas.n_species)
        Y[self.indices] = self.mixture.Y
        gas.TPY = T, self.pressure_operating, Y

        self.R = self._gas_constant/(self.gas_constant_ref*gas.mean_molecular_weight)
        self.rho = gas.density
        self.cp = gas.cp_mass
        self.cv = gas.cv_mass
        self.species_cp = (np.asarray(gas.partial_molar_cp)[self.indices] /
                           self.molar_masses)
