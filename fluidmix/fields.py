import numpy as np

from fluidmix.errors import SolverInterfaceError


class FlowSolution(object):
    """
    Point-wise solver arrays.

    Parameters
    ----------
    n_point : int
        Number of mesh points.
    n_dim : int
        2 or 3.
    n_var : int
        Number of conservative state variables.
    n_prim : int
        Number of primitive variables. Temperature is primitive 0.
    n_species : int
        Number of transported species (nonequilibrium solvers).
    """
    def __init__(self, n_point, n_dim, n_var, n_prim=None, n_species=0):
        if n_dim not in (2, 3):
            raise SolverInterfaceError("n_dim must be 2 or 3, got {}".format(n_dim))
        if n_prim is None:
            n_prim = n_var + 2

        self.n_point = n_point
        self.n_dim = n_dim
        self.n_var = n_var
        self.n_prim = n_prim
        self.n_species = n_species

        self.solution = np.zeros([n_point, n_var], dtype=np.float64)
        self.primitive = np.zeros([n_point, n_prim], dtype=np.float64)
        self.gradient_primitive = np.zeros([n_point, n_prim, n_dim],
                                           dtype=np.float64)
        self.density = np.ones(n_point, dtype=np.float64)
        self.sound_speed = np.zeros(n_point, dtype=np.float64)
        self.laminar_viscosity = np.zeros(n_point, dtype=np.float64)
        self.eddy_viscosity = np.zeros(n_point, dtype=np.float64)
        self.temperature_ve = np.zeros(n_point, dtype=np.float64)

        # adjoint
        self.adjoint_source_term = np.zeros([n_point, n_var], dtype=np.float64)
        self.sens_objective_states = np.zeros([n_point, n_var], dtype=np.float64)
        self.sens_residuals_states = np.zeros([n_point, n_var], dtype=np.float64)
        self.sens_forces_states = np.zeros([n_point, n_var], dtype=np.float64)
        self.sens_coordinates_coordinates = np.zeros([n_point, n_dim],
                                                     dtype=np.float64)
        self.sens_objective_coordinates = np.zeros([n_point, n_dim],
                                                   dtype=np.float64)
        self.sens_residuals_coordinates = np.zeros([n_point, n_dim],
                                                   dtype=np.float64)
        self.sens_forces_coordinates = np.zeros([n_point, n_dim],
                                                dtype=np.float64)
        # d/d(Mach), d/d(AoA)
        self.sens_objective_farfield = np.zeros(2, dtype=np.float64)
        self.sens_residuals_farfield = np.zeros(2, dtype=np.float64)

    def update_transport(self, mixture, scalars):
        """
        Fill laminar viscosity, density and speed of sound from a
        mixture model, at the temperature stored in primitive 0.

        Parameters
        ----------
        mixture : Mixture
        scalars : array
            (n_point, n_species-1) transported mass fractions.
        """
        scalars = np.asarray(scalars, dtype=np.float64)
        if scalars.shape[0] != self.n_point:
            raise SolverInterfaceError(
                "Expected mass fractions for {} points".format(self.n_point))

        for i in range(self.n_point):
            mixture.set_td_state_t(self.primitive[i, 0], scalars[i])
            self.density[i] = mixture.rho
            self.laminar_viscosity[i] = mixture.mu
            self.sound_speed[i] = np.sqrt(
                mixture.Cp/mixture.Cv*mixture.R*mixture.T)


class Marker(object):
    """
    Boundary marker: a tagged list of mesh points with
    one (non unit) normal per vertex.

    A marker with no vertices takes its dimension from `n_dim`,
    or from the interface it is attached to.
    """
    def __init__(self, tag, vertices, normals, n_dim=None):
        self.tag = tag
        self.vertices = np.asarray(vertices, dtype=np.int64).ravel()
        normals = np.asarray(normals, dtype=np.float64)
        if self.vertices.shape[0] == 0 and normals.size == 0:
            normals = normals.reshape(0, n_dim or 0)

        if normals.ndim != 2:
            raise SolverInterfaceError(
                "Marker '{}': normals must be (n_vertex, n_dim), got shape {}".format(
                    tag, normals.shape))
        if normals.shape[0] != self.vertices.shape[0]:
            raise SolverInterfaceError(
                "Marker '{}': {} normals for {} vertices".format(
                    tag, normals.shape[0], self.vertices.shape[0]))

        self.normals = normals
        self.n_vertex = normals.shape[0]
        self._allocate(normals.shape[1])

    def _allocate(self, n_dim):
        n_vertex = self.n_vertex
        if self.normals.shape[1] != n_dim:
            self.normals = np.zeros([n_vertex, n_dim], dtype=np.float64)
        self.n_dim = n_dim
        self.heat_flux = np.zeros(n_vertex, dtype=np.float64)
        self.adjoint_tractions = np.zeros([n_vertex, n_dim], dtype=np.float64)
        self.inlet_flow_dir = np.zeros([n_vertex, n_dim], dtype=np.float64)

        self.sens_coordinates_displacements = np.zeros([n_vertex, n_dim],
                                                       dtype=np.float64)
        self.sens_objective_displacements = np.zeros([n_vertex, n_dim],
                                                     dtype=np.float64)
        self.sens_residuals_displacements = np.zeros([n_vertex, n_dim],
                                                     dtype=np.float64)
        self.sens_forces_displacements = np.zeros([n_vertex, n_dim],
                                                  dtype=np.float64)

    @property
    def unit_normals(self):
        area = np.linalg.norm(self.normals, axis=1)
        return self.normals/area[:, np.newaxis]
