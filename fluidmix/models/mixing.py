"""
Mixing rules for combining pure-species transport properties
into mixture-averaged values.

All kernels operate on 1-d float64 arrays with one entry per
species in the mixture.
"""
import numpy as np
from numba import jit


@jit(nopython=True, nogil=True)
def mass_to_mole_fractions(scalars, molar_masses):
    """
    Convert transported mass fractions to the full set of mass
    and mole fractions of an ideal mixture.

    Parameters
    ----------
    scalars : array
        Mass fractions of the first n-1 species. The last species
        takes up the remainder.
    molar_masses : array
        Molar masses of all n species.

    Returns
    -------
    Y, X : arrays
        Mass fractions and mole fractions of all n species.
    """
    n = molar_masses.shape[0]
    Y = np.empty(n, dtype=np.float64)
    X = np.empty(n, dtype=np.float64)

    Y_sum = 0.
    for i in range(n-1):
        Y[i] = scalars[i]
        Y_sum += scalars[i]
    Y[n-1] = 1 - Y_sum

    M_inv = 0.
    for i in range(n):
        M_inv += Y[i]/molar_masses[i]

    for i in range(n):
        X[i] = (Y[i]/molar_masses[i])/M_inv
    return Y, X


@jit(nopython=True, nogil=True)
def mean_molar_mass(X, molar_masses):
    out = 0.
    for i in range(X.shape[0]):
        out += X[i]*molar_masses[i]
    return out


@jit(nopython=True, nogil=True)
def mass_weighted(Y, values):
    out = 0.
    for i in range(Y.shape[0]):
        out += Y[i]*values[i]
    return out


@jit(nopython=True, nogil=True)
def wilke_phi(mu, molar_masses):
    """
    Wilke interaction coefficients phi[i, j].
    """
    n = mu.shape[0]
    M = molar_masses
    phi = np.ones((n, n), dtype=np.float64)
    for i in range(n):
        for j in range(n):
            if j != i:
                phi[i, j] = (1 + np.sqrt(mu[i]/mu[j])*(M[j]/M[i])**0.25)**2/(
                    np.sqrt(8*(1 + M[i]/M[j])))
    return phi


@jit(nopython=True, nogil=True)
def _wilke_sum(X, values, phi):
    n = X.shape[0]
    out = 0.
    for i in range(n):
        denominator = 0.
        for j in range(n):
            denominator += X[j]*phi[i, j]
        out += X[i]*values[i]/denominator
    return out


@jit(nopython=True, nogil=True)
def wilke_viscosity(X, mu, molar_masses):
    """
    Wilke (1950) mixture viscosity,

        mu = sum_i X_i mu_i / sum_j X_j phi_ij
    """
    return _wilke_sum(X, mu, wilke_phi(mu, molar_masses))


@jit(nopython=True, nogil=True)
def wilke_conductivity(X, mu, kt, molar_masses):
    """
    Wilke mixture thermal conductivity. The interaction coefficients
    are built from the species viscosities `mu`.
    """
    return _wilke_sum(X, kt, wilke_phi(mu, molar_masses))


@jit(nopython=True, nogil=True)
def davidson_viscosity(X, mu, molar_masses, A=0.375):
    """
    Davidson (1993) mixture viscosity from the fluidity of
    momentum fractions,

        1/mu = sum_i sum_j y_i y_j / sqrt(mu_i mu_j) * E_ij**A
    """
    n = X.shape[0]
    M = molar_masses

    denominator = 0.
    for i in range(n):
        denominator += X[i]*np.sqrt(M[i])

    y = np.empty(n, dtype=np.float64)
    for i in range(n):
        y[i] = X[i]*np.sqrt(M[i])/denominator

    fluidity = 0.
    for i in range(n):
        for j in range(n):
            E = 2*np.sqrt(M[i])*np.sqrt(M[j])/(M[i] + M[j])
            fluidity += (y[i]*y[j])/(np.sqrt(mu[i])*np.sqrt(mu[j]))*E**A
    return 1./fluidity
