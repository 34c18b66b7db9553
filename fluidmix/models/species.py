class Species:
    def __init__(self, species_name,
                 molecular_weight,
                 specific_heat_cp=None,
                 viscosity_model=None,
                 thermal_conductivity_model=None,
                 mass_diffusivity_model=None):
        """
        species_name : str
        molecular_weight : float, g/mol
        specific_heat_cp : float, J/(kg K)
        viscosity_model : ViscosityModel
        thermal_conductivity_model : ThermalConductivityModel
        mass_diffusivity_model : MassDiffusivityModel
        """
        self.species_name = species_name
        self.molecular_weight = molecular_weight
        self.specific_heat_cp = specific_heat_cp
        self.viscosity_model = viscosity_model
        self.thermal_conductivity_model = thermal_conductivity_model
        self.mass_diffusivity_model = mass_diffusivity_model

    def mu(self, T, rho):
        return self.viscosity_model.mu(T, rho)

    def kappa(self, T, rho, mu_lam, mu_turb, cp):
        return self.thermal_conductivity_model.kappa(T, rho, mu_lam, mu_turb, cp)

    def D(self, rho, mu_lam, cp, kt):
        return self.mass_diffusivity_model.D(rho, mu_lam, cp, kt)

    def __repr__(self):
        return "Species({!r}, {})".format(self.species_name,
                                          self.molecular_weight)
