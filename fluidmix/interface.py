"""
Scripting access to solver arrays: far-field settings, flow
state, transport properties, heat fluxes and discrete adjoint
sensitivities.

Point-wise getters return every point when called without an
index, or one point. Marker getters do the same for the vertices
of one marker, selected by index or tag.
"""
import logging

import numpy as np
import yaml

from fluidmix.errors import SolverInterfaceError

logger = logging.getLogger(__name__)


class SolverConfig(object):

    def __init__(self, fluid_problem=True,
                 discrete_adjoint=False,
                 kind_discrete_adjoint="residuals",
                 regime="compressible",
                 solver="navier_stokes",
                 nemo=False,
                 gamma=1.4,
                 gas_constant=287.058,
                 gas_constant_nd=1.,
                 prandtl_lam=0.72,
                 aoa=0.,
                 aos=0.,
                 mach=0.8,
                 reynolds=1e6,
                 temperature_freestream=288.15,
                 velocity_ref=1.,
                 n_time_iter=1,
                 time_step=0.,
                 surface_file="surface_flow",
                 fluid_load_markers=()):
        self.fluid_problem = fluid_problem
        self.discrete_adjoint = discrete_adjoint
        self.kind_discrete_adjoint = kind_discrete_adjoint
        self.regime = regime
        self.solver = solver
        self.nemo = nemo
        self.gamma = gamma
        self.gas_constant = gas_constant
        self.gas_constant_nd = gas_constant_nd
        self.prandtl_lam = prandtl_lam
        self.aoa = aoa
        self.aos = aos
        self.mach = mach
        self.reynolds = reynolds
        self.temperature_freestream = temperature_freestream
        self.velocity_ref = velocity_ref
        self.n_time_iter = n_time_iter
        self.time_step = time_step
        self.surface_file = surface_file
        self.fluid_load_markers = list(fluid_load_markers)
        self.translation_rate = np.zeros(3)
        self.rotation_rate = np.zeros(3)

    @classmethod
    def from_yaml(cls, paramfile):
        with open(paramfile) as f:
            p = yaml.safe_load(f) or {}
        return cls(**p)


class SolverInterface(object):

    def __init__(self, config, solution, markers=()):
        """
        Parameters
        ----------
        config : SolverConfig
        solution : FlowSolution
        markers : list of Marker
        """
        self.config = config
        self.solution = solution
        self.markers = list(markers)
        self.n_dim = solution.n_dim
        self.time_iteration = 0
        self.velocity_freestream_nd = np.zeros(self.n_dim)

        for m in self.markers:
            if m.n_vertex == 0:
                m._allocate(self.n_dim)
            if m.normals.shape[1] != self.n_dim:
                raise SolverInterfaceError(
                    "Marker '{}' normals are not {}-dimensional".format(
                        m.tag, self.n_dim))
            if m.n_vertex and (m.vertices.min() < 0 or
                               m.vertices.max() >= solution.n_point):
                raise SolverInterfaceError(
                    "Marker '{}' references points outside the mesh".format(m.tag))

        self.update_farfield()

    # -------------------------------------------------------------------
    # checks and indexing
    # -------------------------------------------------------------------

    def _check_flow(self):
        if not self.config.fluid_problem:
            raise SolverInterfaceError("Flow solver is not defined!")

    def _check_adjoint(self, residuals=True):
        if not self.config.fluid_problem or not self.config.discrete_adjoint:
            raise SolverInterfaceError("Discrete adjoint flow solver is not defined!")
        if residuals and self.config.kind_discrete_adjoint != "residuals":
            raise SolverInterfaceError(
                "Discrete adjoint flow solver does not use residual-based "
                "formulation!")

    def _check_nemo(self):
        if not self.config.nemo:
            raise SolverInterfaceError("Nonequilibrium flow solver is not defined!")

    def _point(self, point):
        if not 0 <= point < self.n_vertices:
            raise SolverInterfaceError("Vertex index exceeds mesh size.")
        return point

    def _marker(self, marker):
        if isinstance(marker, str):
            for m in self.markers:
                if m.tag == marker:
                    return m
            raise SolverInterfaceError("Unknown marker tag '{}'".format(marker))
        if not 0 <= marker < len(self.markers):
            raise SolverInterfaceError("Marker index exceeds number of markers.")
        return self.markers[marker]

    def _vertex(self, m, vertex):
        if not 0 <= vertex < m.n_vertex:
            raise SolverInterfaceError("Vertex index exceeds marker size.")
        return vertex

    def _at_points(self, values, point):
        if point is None:
            return values.copy()
        return values[self._point(point)].copy()

    def _at_marker(self, marker, values, vertex):
        m = self._marker(marker)
        if vertex is None:
            return values[m.vertices].copy()
        return values[m.vertices[self._vertex(m, vertex)]].copy()

    def _marker_array(self, marker, name, vertex):
        m = self._marker(marker)
        values = getattr(m, name)
        if vertex is None:
            return values.copy()
        return values[self._vertex(m, vertex)].copy()

    # -------------------------------------------------------------------
    # far-field
    # -------------------------------------------------------------------

    @property
    def angle_of_attack(self):
        return self.config.aoa

    @angle_of_attack.setter
    def angle_of_attack(self, value):
        self.config.aoa = value
        self.update_farfield()

    @property
    def angle_of_sideslip(self):
        return self.config.aos

    @angle_of_sideslip.setter
    def angle_of_sideslip(self, value):
        self.config.aos = value
        self.update_farfield()

    @property
    def mach_number(self):
        return self.config.mach

    @mach_number.setter
    def mach_number(self, value):
        self.config.mach = value
        self.update_farfield()

    @property
    def reynolds_number(self):
        return self.config.reynolds

    @reynolds_number.setter
    def reynolds_number(self, value):
        self.config.reynolds = value
        self.update_farfield()

    def update_farfield(self):
        """
        Recompute the nondimensional free-stream velocity from
        the Mach number and flow angles (degrees).
        """
        c = self.config
        alpha = np.deg2rad(c.aoa)
        beta = np.deg2rad(c.aos)
        speed = c.mach*np.sqrt(c.gamma*c.gas_constant*c.temperature_freestream)/(
            c.velocity_ref)

        v = self.velocity_freestream_nd
        if self.n_dim == 2:
            v[0] = np.cos(alpha)*speed
            v[1] = np.sin(alpha)*speed
        else:
            v[0] = np.cos(alpha)*np.cos(beta)*speed
            v[1] = np.sin(beta)*speed
            v[2] = np.sin(alpha)*speed
        logger.debug("Free-stream velocity set to %s", v)

    # -------------------------------------------------------------------
    # mesh and markers
    # -------------------------------------------------------------------

    @property
    def n_vertices(self):
        return self.solution.n_point

    def n_marker_vertices(self, marker):
        return self._marker(marker).n_vertex

    @property
    def marker_tags(self):
        return [m.tag for m in self.markers]

    @property
    def fluid_load_marker_tags(self):
        return list(self.config.fluid_load_markers)

    def marker_index(self, tag):
        return self.markers.index(self._marker(tag))

    def marker_vertex_index(self, marker, vertex):
        m = self._marker(marker)
        return int(m.vertices[self._vertex(m, vertex)])

    def set_inlet_angle(self, marker, alpha):
        """
        Set the inlet flow direction of every vertex on `marker`
        to the in-plane angle `alpha` (degrees).
        """
        m = self._marker(marker)
        alpha = np.deg2rad(alpha)
        m.inlet_flow_dir[:, 0] = np.cos(alpha)
        m.inlet_flow_dir[:, 1] = np.sin(alpha)

    def set_translation_rate(self, x_dot, y_dot, z_dot):
        self.config.translation_rate[:] = x_dot, y_dot, z_dot

    def set_rotation_rate(self, rot_x, rot_y, rot_z):
        self.config.rotation_rate[:] = rot_x, rot_y, rot_z

    # -------------------------------------------------------------------
    # flow solution
    # -------------------------------------------------------------------

    @property
    def n_state_variables(self):
        self._check_flow()
        return self.solution.n_var

    @property
    def n_primitive_variables(self):
        self._check_flow()
        return self.solution.n_prim

    def speed_of_sound(self, point=None):
        self._check_flow()
        return self._at_points(self.solution.sound_speed, point)

    def marker_speed_of_sound(self, marker, vertex=None):
        self._check_flow()
        return self._at_marker(marker, self.solution.sound_speed, vertex)

    def laminar_viscosities(self, point=None):
        self._check_flow()
        return self._at_points(self.solution.laminar_viscosity, point)

    def marker_laminar_viscosities(self, marker, vertex=None):
        self._check_flow()
        return self._at_marker(marker, self.solution.laminar_viscosity, vertex)

    def eddy_viscosities(self, point=None):
        self._check_flow()
        return self._at_points(self.solution.eddy_viscosity, point)

    def marker_eddy_viscosities(self, marker, vertex=None):
        self._check_flow()
        return self._at_marker(marker, self.solution.eddy_viscosity, vertex)

    def _conductivity(self):
        # constant Prandtl number, nondimensional cp
        c = self.config
        cp = (c.gamma/(c.gamma - 1.))*c.gas_constant_nd
        return cp*self.solution.laminar_viscosity/c.prandtl_lam

    def thermal_conductivities(self, point=None):
        self._check_flow()
        return self._at_points(self._conductivity(), point)

    def marker_thermal_conductivities(self, marker, vertex=None):
        self._check_flow()
        return self._at_marker(marker, self._conductivity(), vertex)

    def _heat_flux(self):
        if self.config.regime != "compressible":
            return np.zeros([self.n_vertices, self.n_dim])
        grad_T = self.solution.gradient_primitive[:, 0, :]
        return -self._conductivity()[:, np.newaxis]*grad_T

    def heat_fluxes(self, point=None):
        self._check_flow()
        return self._at_points(self._heat_flux(), point)

    def marker_heat_fluxes(self, marker, vertex=None):
        self._check_flow()
        return self._at_marker(marker, self._heat_flux(), vertex)

    def marker_normal_heat_fluxes(self, marker, vertex=None):
        self._check_flow()
        m = self._marker(marker)
        q = np.sum(self._heat_flux()[m.vertices]*m.unit_normals, axis=1)
        if vertex is None:
            return q
        return q[self._vertex(m, vertex)]

    def set_marker_normal_heat_fluxes(self, marker, values, vertex=None):
        """
        Prescribe the wall-normal heat flux of a custom boundary.
        """
        self._check_flow()
        m = self._marker(marker)
        if vertex is not None:
            if np.ndim(values) != 0:
                raise SolverInterfaceError("Expected one heat flux per vertex!")
            m.heat_flux[self._vertex(m, vertex)] = values
            return
        values = np.asarray(values, dtype=np.float64)
        if values.shape != (m.n_vertex,):
            raise SolverInterfaceError("Invalid number of marker vertices!")
        m.heat_flux[:] = values

    def marker_custom_heat_fluxes(self, marker, vertex=None):
        return self._marker_array(marker, "heat_flux", vertex)

    # -------------------------------------------------------------------
    # discrete adjoint
    # -------------------------------------------------------------------

    def marker_adjoint_forces(self, marker, vertex=None):
        self._check_adjoint(residuals=False)
        return self._marker_array(marker, "adjoint_tractions", vertex)

    def set_marker_adjoint_forces(self, marker, values, vertex=None):
        self._check_adjoint(residuals=False)
        m = self._marker(marker)
        values = np.asarray(values, dtype=np.float64)
        if vertex is not None:
            if values.shape != (self.n_dim,):
                raise SolverInterfaceError("Invalid number of dimensions!")
            m.adjoint_tractions[self._vertex(m, vertex)] = values
            return
        if values.ndim < 1 or values.shape[0] != m.n_vertex:
            raise SolverInterfaceError("Invalid number of marker vertices!")
        if values.shape != (m.n_vertex, self.n_dim):
            raise SolverInterfaceError("Invalid number of dimensions!")
        m.adjoint_tractions[...] = values

    def coordinates_coordinates_sensitivities(self, point=None):
        self._check_adjoint()
        return self._at_points(self.solution.sens_coordinates_coordinates, point)

    def objective_states_sensitivities(self, point=None):
        self._check_adjoint()
        return self._at_points(self.solution.sens_objective_states, point)

    def residuals_states_sensitivities(self, point=None):
        self._check_adjoint()
        return self._at_points(self.solution.sens_residuals_states, point)

    def forces_states_sensitivities(self, point=None):
        self._check_adjoint()
        return self._at_points(self.solution.sens_forces_states, point)

    def objective_coordinates_sensitivities(self, point=None):
        self._check_adjoint()
        return self._at_points(self.solution.sens_objective_coordinates, point)

    def residuals_coordinates_sensitivities(self, point=None):
        self._check_adjoint()
        return self._at_points(self.solution.sens_residuals_coordinates, point)

    def forces_coordinates_sensitivities(self, point=None):
        self._check_adjoint()
        return self._at_points(self.solution.sens_forces_coordinates, point)

    def objective_farfield_variables_sensitivities(self):
        """
        Sensitivities of the objective to (Mach, angle of attack).
        """
        self._check_adjoint()
        return self.solution.sens_objective_farfield.copy()

    def residuals_farfield_variables_sensitivities(self):
        self._check_adjoint()
        return self.solution.sens_residuals_farfield.copy()

    def marker_coordinates_displacements_sensitivities(self, marker, vertex=None):
        self._check_adjoint()
        return self._marker_array(marker, "sens_coordinates_displacements", vertex)

    def marker_objective_displacements_sensitivities(self, marker, vertex=None):
        self._check_adjoint()
        return self._marker_array(marker, "sens_objective_displacements", vertex)

    def marker_residuals_displacements_sensitivities(self, marker, vertex=None):
        self._check_adjoint()
        return self._marker_array(marker, "sens_residuals_displacements", vertex)

    def marker_forces_displacements_sensitivities(self, marker, vertex=None):
        self._check_adjoint()
        return self._marker_array(marker, "sens_forces_displacements", vertex)

    def set_adjoint_source_term(self, values):
        """
        Set the adjoint source term from a flat array ordered
        point by point, `n_point*n_var` long.
        """
        self._check_adjoint()
        values = np.asarray(values, dtype=np.float64).ravel()
        n_point, n_var = self.n_vertices, self.n_state_variables
        if values.shape[0] != n_point*n_var:
            raise SolverInterfaceError("Size does not match nPoint * nVar!")
        self.solution.adjoint_source_term[...] = values.reshape(n_point, n_var)

    # -------------------------------------------------------------------
    # time
    # -------------------------------------------------------------------

    @property
    def n_time_iterations(self):
        return self.config.n_time_iter

    @property
    def unsteady_time_step(self):
        return self.config.time_step

    @property
    def surface_file_name(self):
        return self.config.surface_file

    # -------------------------------------------------------------------
    # nonequilibrium flow
    # -------------------------------------------------------------------

    @property
    def n_nonequilibrium_species(self):
        return self.solution.n_species

    @property
    def n_nonequilibrium_state_variables(self):
        return self.n_nonequilibrium_species + self.n_dim + 2

    @property
    def n_nonequilibrium_primitive_variables(self):
        if self.config.solver == "navier_stokes":
            return self.n_nonequilibrium_species + self.n_dim + 10
        return self.n_nonequilibrium_species + self.n_dim + 8

    def nonequilibrium_mass_fractions(self, point=None):
        """
        Species mass fractions rho_s/rho; the first `n_species`
        state variables are the species densities.
        """
        self._check_nemo()
        n = self.n_nonequilibrium_species
        Y = self.solution.solution[:, :n]/self.solution.density[:, np.newaxis]
        return self._at_points(Y, point)

    def vibrational_temperatures(self, point=None):
        self._check_nemo()
        return self._at_points(self.solution.temperature_ve, point)
