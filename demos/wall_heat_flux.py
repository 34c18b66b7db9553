import numpy as np

from fluidmix.fields import FlowSolution, Marker
from fluidmix.interface import SolverConfig, SolverInterface
from fluidmix.params import Params
from fluidmix.models.mixture import Mixture

# a line of points above an isothermal wall at y = 0
N = 11
y = np.linspace(0, 1e-3, N)
T_wall = 400.
T_inf = 300.

solution = FlowSolution(N, 2, 4)
solution.primitive[:, 0] = T_inf + (T_wall - T_inf)*np.exp(-y/2e-4)
solution.gradient_primitive[:, 0, 1] = -(T_wall - T_inf)/2e-4*np.exp(-y/2e-4)

# transport properties of a hydrogen/air mixture at each point
p = Params("h2_air.yaml")
mixture = Mixture.from_params(p)
scalars = np.tile(p.composition, (N, 1))
solution.update_transport(mixture, scalars)

wall = Marker("wall", [0], [[0., -1.]])

config = SolverConfig(gas_constant_nd=mixture.R, gamma=mixture.Cp/mixture.Cv,
                      prandtl_lam=0.72)
interface = SolverInterface(config, solution, [wall])

print("Laminar viscosity: {}".format(interface.laminar_viscosities()))
print("Wall heat flux:    {}".format(interface.marker_heat_fluxes("wall", 0)))
print("Normal heat flux:  {:15.10e}".format(
    interface.marker_normal_heat_fluxes("wall", 0)))
