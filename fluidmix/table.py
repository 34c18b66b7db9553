"""
Tabulate mixture properties over a temperature sweep:

    python -m fluidmix.table params.yaml
"""
import logging
import sys

import h5py
import numpy as np

from fluidmix.params import Params
from fluidmix.models.mixture import Mixture

logger = logging.getLogger(__name__)


class SingleLevelFilter(logging.Filter):
    def __init__(self, passlevel, reject):
        self.passlevel = passlevel
        self.reject = reject

    def filter(self, record):
        if self.reject:
            return (record.levelno != self.passlevel)
        else:
            return (record.levelno == self.passlevel)


def configure_logging(level=logging.INFO):
    root = logging.getLogger("fluidmix")
    root.setLevel(level)
    root.propagate = False

    if root.hasHandlers():
        root.handlers.clear()

    # info to stdout, everything else to stderr
    h1 = logging.StreamHandler(sys.stdout)
    h1.addFilter(SingleLevelFilter(logging.INFO, False))
    root.addHandler(h1)

    h2 = logging.StreamHandler(sys.stderr)
    h2.addFilter(SingleLevelFilter(logging.INFO, True))
    root.addHandler(h2)


def tabulate(mixture, temperatures, scalars):
    """
    Evaluate the mixture state at each temperature for a
    fixed composition.

    Returns
    -------
    dict of arrays
        T, rho, cp, cv, mu, kt and D (n_T, n_species).
    """
    temperatures = np.asarray(temperatures, dtype=np.float64)
    n = temperatures.shape[0]
    out = {
        "T": temperatures.copy(),
        "rho": np.zeros(n),
        "cp": np.zeros(n),
        "cv": np.zeros(n),
        "mu": np.zeros(n),
        "kt": np.zeros(n),
        "D": np.zeros([n, mixture.n_species]),
    }
    for i, T in enumerate(temperatures):
        mixture.set_td_state_t(T, scalars)
        out["rho"][i] = mixture.rho
        out["cp"][i] = mixture.Cp
        out["cv"][i] = mixture.Cv
        out["mu"][i] = mixture.mu
        out["kt"][i] = mixture.kappa
        out["D"][i] = mixture.mass_diffusivity
    return out


def write_table(filename, table, mixture):
    with h5py.File(filename, "w") as outfile:
        outfile.create_group("properties")
        for name, data in table.items():
            outfile.create_dataset("properties/" + name, data=data)
        outfile.attrs["species"] = np.array(
            [s.species_name for s in mixture.species_list],
            dtype=h5py.string_dtype())
        outfile.attrs["mixing_viscosity_model"] = mixture.mixing_viscosity_model


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 1:
        print("usage: python -m fluidmix.table params.yaml")
        return 1

    configure_logging()

    p = Params(argv[0])
    mixture = Mixture.from_params(p)

    temperatures = np.linspace(p.t_min, p.t_max, p.n_points)
    table = tabulate(mixture, temperatures, p.composition)

    for T, mu, kt in zip(table["T"], table["mu"], table["kt"]):
        logger.info("T: {:10.3f}    mu: {:15.10e}    kt: {:15.10e}".format(
            T, mu, kt))

    write_table(p.output, table, mixture)
    logger.info("Wrote %s", p.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
