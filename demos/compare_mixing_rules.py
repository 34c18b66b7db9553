import sys

import numpy as np
import matplotlib.pyplot as plt

from fluidmix.params import Params
from fluidmix.models.mixture import Mixture
from fluidmix.table import tabulate

paramfile = sys.argv[1] if len(sys.argv) > 1 else "h2_air.yaml"
p = Params(paramfile)

# hydrogen mass fraction sweep at fixed temperature
T = 600.
Y_H2 = np.linspace(0, 0.5, 51)

mu = {}
for rule in "wilke", "davidson":
    p.mixing_viscosity_model = rule
    mixture = Mixture.from_params(p)
    mu[rule] = np.zeros_like(Y_H2)
    for i, y in enumerate(Y_H2):
        # O2 and N2 keep the air ratio
        scalars = [y, 0.233*(1 - y)]
        mixture.set_td_state_t(T, scalars)
        mu[rule][i] = mixture.mu

plt.figure()
for rule, values in mu.items():
    plt.plot(Y_H2, values*1e6, label=rule)
plt.xlabel("Y_H2")
plt.ylabel("mu [uPa s]")
plt.title("T = {:g} K".format(T))
plt.legend()

# temperature sweep for the table composition
table = tabulate(Mixture.from_params(p), np.linspace(p.t_min, p.t_max, p.n_points),
                 p.composition)

plt.figure()
plt.plot(table["T"], table["kt"])
plt.xlabel("T [K]")
plt.ylabel("kt [W/(m K)]")
plt.show()
