import logging

import numpy as np

from fluidmix.constants import ARRAYSIZE
from fluidmix.errors import FluidModelError
from fluidmix.models.eos import MixtureEOSIdealGas, MixtureEOSCantera
from fluidmix.models.mixing import (mass_to_mole_fractions, mean_molar_mass,
                                    wilke_viscosity, wilke_conductivity,
                                    davidson_viscosity)
from fluidmix.models.species import Species
from fluidmix.models.transport import (make_viscosity_model,
                                       make_conductivity_model,
                                       make_diffusivity_model)

logger = logging.getLogger(__name__)


class Mixture:
    def __init__(self, species_list,
                 gas_model=None,
                 mixing_viscosity_model="wilke"):
        """
        Multicomponent mixture whose transport properties are
        obtained by mixing pure-species laws.

        Parameters
        ----------
        species_list : list of Species
            The last species is the carrier, its mass fraction is
            not transported.
        gas_model : MixtureEOSIdealGas or MixtureEOSCantera
            Thermodynamic backend.
        mixing_viscosity_model : str
            "wilke" or "davidson".
        """
        if len(species_list) > ARRAYSIZE:
            raise FluidModelError("Too many species, increase ARRAYSIZE")
        if mixing_viscosity_model not in ("wilke", "davidson"):
            raise FluidModelError("Unknown mixing viscosity model '{}'".format(
                mixing_viscosity_model))

        self.species_list = species_list
        self.n_species = len(species_list)
        self.gas_model = gas_model
        self.mixing_viscosity_model = mixing_viscosity_model
        self.molar_masses = np.array(
            [s.molecular_weight for s in species_list], dtype=np.float64)

        self.gas_model.mixture = self

        self.Y = np.zeros(self.n_species, dtype=np.float64)
        self.X = np.zeros(self.n_species, dtype=np.float64)
        self.Y[-1] = self.X[-1] = 1.
        self.species_mu = np.zeros(self.n_species, dtype=np.float64)
        self.species_kappa = np.zeros(self.n_species, dtype=np.float64)
        self.species_D = np.zeros(self.n_species, dtype=np.float64)

        self.T = 0.
        self.rho = 0.
        self.Cp = 0.
        self.Cv = 0.
        self.mu = 0.
        self.kappa = 0.

    @classmethod
    def from_params(cls, params):
        if params.mechanism:
            gas_model = MixtureEOSCantera(
                params.mechanism, params.species, params.pressure_operating,
                phase=params.phase, gas_constant_ref=params.gas_constant_ref)
            molecular_weight = list(gas_model.molar_masses)
        else:
            gas_model = MixtureEOSIdealGas(
                params.pressure_operating, params.gas_constant_ref)
            molecular_weight = params.molecular_weight

        species_list = []
        for i, name in enumerate(params.species):
            species_list.append(Species(
                name, molecular_weight[i],
                specific_heat_cp=params.specific_heat_cp[i],
                viscosity_model=make_viscosity_model(params, i),
                thermal_conductivity_model=make_conductivity_model(params, i),
                mass_diffusivity_model=make_diffusivity_model(params, i)))

        return cls(species_list, gas_model=gas_model,
                   mixing_viscosity_model=params.mixing_viscosity_model)

    def set_mass_fractions(self, scalars):
        scalars = np.asarray(scalars, dtype=np.float64)
        if scalars.shape != (self.n_species - 1,):
            raise FluidModelError(
                "Expected {} transported mass fractions, got shape {}".format(
                    self.n_species - 1, scalars.shape))
        self.Y[...], self.X[...] = mass_to_mole_fractions(
            scalars, self.molar_masses)

    def set_td_state_t(self, T, scalars, mu_turb=0.):
        """
        Set the thermodynamic and transport state from the
        temperature and the transported mass fractions.

        Parameters
        ----------
        T : float
            Temperature [K]
        scalars : array
            Mass fractions of all species but the last.
        mu_turb : float
            Eddy viscosity, used by turbulent conductivity laws.
        """
        self.set_mass_fractions(scalars)
        self.T = T

        self.gas_model.update(T)
        self.rho = self.gas_model.rho
        self.Cp = self.gas_model.cp
        self.Cv = self.gas_model.cv

        for i, specie in enumerate(self.species_list):
            self.species_mu[i] = specie.mu(T, self.rho)

        if self.mixing_viscosity_model == "wilke":
            self.mu = wilke_viscosity(self.X, self.species_mu, self.molar_masses)
        else:
            self.mu = davidson_viscosity(self.X, self.species_mu,
                                         self.molar_masses)

        species_cp = self.gas_model.species_cp
        for i, specie in enumerate(self.species_list):
            self.species_kappa[i] = specie.kappa(
                T, self.rho, self.species_mu[i], mu_turb, species_cp[i])
        self.kappa = wilke_conductivity(self.X, self.species_mu,
                                        self.species_kappa, self.molar_masses)

        for i, specie in enumerate(self.species_list):
            self.species_D[i] = specie.D(self.rho, self.mu, self.Cp, self.kappa)

        logger.debug("T=%g rho=%g cp=%g mu=%g kt=%g",
                     T, self.rho, self.Cp, self.mu, self.kappa)

    @property
    def molecular_weight(self):
        return mean_molar_mass(self.X, self.molar_masses)

    @property
    def R(self):
        return self.gas_model.R

    @property
    def mass_diffusivity(self):
        return self.species_D.copy()

    # long names for scripting

    @property
    def temperature(self):
        return self.T

    @property
    def density(self):
        return self.rho

    @property
    def cp(self):
        return self.Cp

    @property
    def cv(self):
        return self.Cv

    @property
    def gas_constant(self):
        return self.R

    @property
    def laminar_viscosity(self):
        return self.mu

    @property
    def thermal_conductivity(self):
        return self.kappa

    @property
    def mass_fractions(self):
        return self.Y.copy()

    @property
    def mole_fractions(self):
        return self.X.copy()

    @property
    def mean_molar_mass(self):
        return self.molecular_weight
