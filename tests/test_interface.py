import numpy as np
import pytest
from numpy.testing import assert_allclose

from fluidmix.errors import SolverInterfaceError
from fluidmix.fields import FlowSolution, Marker
from fluidmix.interface import SolverConfig, SolverInterface
from fluidmix.params import Params
from fluidmix.models.mixture import Mixture


class TestSolverInterface:

    def setup_method(self):
        solution = FlowSolution(5, 2, 4)
        solution.sound_speed[:] = np.arange(5)
        solution.laminar_viscosity[:] = 0.72
        solution.eddy_viscosity[:] = 10 + np.arange(5)
        solution.gradient_primitive[:, 0, :] = [1., 2.]

        self.wall = Marker("wall", [3, 4], [[0., 2.], [0., 2.]])
        self.inlet = Marker("inlet", [0], [[-1., 0.]])
        self.config = SolverConfig(gamma=1.4, gas_constant_nd=1., prandtl_lam=0.72)
        self.solution = solution
        self.interface = SolverInterface(self.config, solution,
                                         [self.wall, self.inlet])

    def test_counts(self):
        i = self.interface
        assert i.n_vertices == 5
        assert i.n_state_variables == 4
        assert i.n_primitive_variables == 6
        assert i.n_marker_vertices("wall") == 2
        assert i.n_marker_vertices(1) == 1
        assert i.marker_tags == ["wall", "inlet"]
        assert i.marker_index("inlet") == 1
        assert i.marker_vertex_index("wall", 1) == 4

    def test_speed_of_sound(self):
        i = self.interface
        assert_allclose(i.speed_of_sound(), np.arange(5))
        assert i.speed_of_sound(2) == 2
        # marker vertices map to mesh points
        assert_allclose(i.marker_speed_of_sound("wall"), [3, 4])
        assert i.marker_speed_of_sound("wall", 0) == 3

    def test_index_checks(self):
        i = self.interface
        with pytest.raises(SolverInterfaceError, match="mesh size"):
            i.speed_of_sound(5)
        with pytest.raises(SolverInterfaceError, match="marker size"):
            i.marker_laminar_viscosities("wall", 2)
        with pytest.raises(SolverInterfaceError):
            i.marker_index("outlet")
        with pytest.raises(SolverInterfaceError):
            i.n_marker_vertices(2)

    def test_flow_solver_not_defined(self):
        self.config.fluid_problem = False
        with pytest.raises(SolverInterfaceError, match="Flow solver"):
            self.interface.laminar_viscosities()
        with pytest.raises(SolverInterfaceError, match="Flow solver"):
            self.interface.n_state_variables

    def test_viscosities(self):
        i = self.interface
        assert_allclose(i.laminar_viscosities(), 0.72)
        assert_allclose(i.eddy_viscosities(1), 11)
        assert_allclose(i.marker_eddy_viscosities("wall"), [13, 14])

    def test_thermal_conductivity(self):
        # cp = 3.5, k = cp*mu/Pr
        i = self.interface
        assert_allclose(i.thermal_conductivities(), 3.5)
        assert_allclose(i.marker_thermal_conductivities("wall", 1), 3.5)

    def test_heat_fluxes(self):
        i = self.interface
        assert_allclose(i.heat_fluxes(0), [-3.5, -7.])
        assert i.heat_fluxes().shape == (5, 2)
        assert_allclose(i.marker_heat_fluxes("wall"), [[-3.5, -7.]]*2)
        assert_allclose(i.marker_normal_heat_fluxes("wall"), [-7., -7.])
        assert_allclose(i.marker_normal_heat_fluxes("inlet", 0), 3.5)

    def test_heat_flux_incompressible(self):
        self.config.regime = "incompressible"
        assert_allclose(self.interface.heat_fluxes(), 0)

    def test_set_normal_heat_fluxes(self):
        i = self.interface
        i.set_marker_normal_heat_fluxes("wall", [100., 200.])
        assert_allclose(i.marker_custom_heat_fluxes("wall"), [100., 200.])
        i.set_marker_normal_heat_fluxes("wall", 50., vertex=1)
        assert i.marker_custom_heat_fluxes("wall", 1) == 50.
        with pytest.raises(SolverInterfaceError, match="marker vertices"):
            i.set_marker_normal_heat_fluxes("wall", [1., 2., 3.])

    def test_farfield(self):
        i = self.interface
        a = np.sqrt(1.4*287.058*288.15)
        i.mach_number = 0.5
        assert i.mach_number == 0.5
        assert_allclose(i.velocity_freestream_nd, [0.5*a, 0.], atol=1e-10)
        i.angle_of_attack = 90.
        assert_allclose(i.velocity_freestream_nd, [0., 0.5*a], atol=1e-10)
        i.reynolds_number = 2e6
        assert self.config.reynolds == 2e6

    def test_farfield_3d(self):
        solution = FlowSolution(2, 3, 5)
        config = SolverConfig(mach=1., aos=90., gas_constant=1., gamma=1.,
                              temperature_freestream=1.)
        i = SolverInterface(config, solution)
        assert_allclose(i.velocity_freestream_nd, [0., 1., 0.], atol=1e-12)

    def test_inlet_angle(self):
        self.interface.set_inlet_angle("inlet", 30.)
        assert_allclose(self.inlet.inlet_flow_dir[0],
                        [np.cos(np.pi/6), np.sin(np.pi/6)])

    def test_time(self):
        config = SolverConfig(n_time_iter=100, time_step=1e-3)
        i = SolverInterface(config, self.solution)
        assert i.n_time_iterations == 100
        assert i.unsteady_time_step == 1e-3
        assert i.time_iteration == 0


class TestAdjoint:

    def setup_method(self):
        self.solution = FlowSolution(3, 2, 4)
        self.solution.sens_objective_states[:] = np.arange(12).reshape(3, 4)
        self.solution.sens_objective_farfield[:] = [0.1, 0.2]
        self.wall = Marker("wall", [0, 2], [[0., 1.], [0., 1.]])
        self.wall.sens_objective_displacements[:] = [[1., 2.], [3., 4.]]
        self.config = SolverConfig(discrete_adjoint=True)
        self.interface = SolverInterface(self.config, self.solution, [self.wall])

    def test_adjoint_not_defined(self):
        self.config.discrete_adjoint = False
        with pytest.raises(SolverInterfaceError, match="Discrete adjoint"):
            self.interface.marker_adjoint_forces("wall")
        with pytest.raises(SolverInterfaceError, match="Discrete adjoint"):
            self.interface.objective_states_sensitivities()

    def test_residual_formulation_required(self):
        self.config.kind_discrete_adjoint = "fixed_point"
        with pytest.raises(SolverInterfaceError, match="residual"):
            self.interface.objective_states_sensitivities(0)
        # tractions are available for every formulation
        assert self.interface.marker_adjoint_forces("wall").shape == (2, 2)

    def test_adjoint_forces(self):
        i = self.interface
        i.set_marker_adjoint_forces("wall", [[1., 2.], [3., 4.]])
        assert_allclose(i.marker_adjoint_forces("wall", 1), [3., 4.])
        i.set_marker_adjoint_forces("wall", [5., 6.], vertex=0)
        assert_allclose(i.marker_adjoint_forces("wall"), [[5., 6.], [3., 4.]])

        with pytest.raises(SolverInterfaceError, match="marker vertices"):
            i.set_marker_adjoint_forces("wall", [[1., 2.]])
        with pytest.raises(SolverInterfaceError, match="dimensions"):
            i.set_marker_adjoint_forces("wall", [1., 2., 3.], vertex=0)
        with pytest.raises(SolverInterfaceError, match="dimensions"):
            i.set_marker_adjoint_forces("wall", [[1.], [2.]])

    def test_sensitivities(self):
        i = self.interface
        assert_allclose(i.objective_states_sensitivities(1), [4, 5, 6, 7])
        assert i.residuals_states_sensitivities().shape == (3, 4)
        assert i.coordinates_coordinates_sensitivities(2).shape == (2,)
        assert_allclose(i.objective_farfield_variables_sensitivities(), [0.1, 0.2])
        assert_allclose(i.residuals_farfield_variables_sensitivities(), 0)
        assert_allclose(i.marker_objective_displacements_sensitivities("wall", 1),
                        [3., 4.])
        assert i.marker_forces_displacements_sensitivities("wall").shape == (2, 2)

    def test_returned_arrays_are_copies(self):
        values = self.interface.objective_states_sensitivities()
        values[:] = -1
        assert_allclose(self.solution.sens_objective_states[0], [0, 1, 2, 3])

    def test_adjoint_source_term(self):
        i = self.interface
        i.set_adjoint_source_term(np.arange(12.))
        assert_allclose(self.solution.adjoint_source_term[1], [4, 5, 6, 7])
        with pytest.raises(SolverInterfaceError, match="nPoint"):
            i.set_adjoint_source_term(np.arange(11.))


class TestNonequilibrium:

    def setup_method(self):
        solution = FlowSolution(2, 2, 6, n_species=2)
        solution.density[:] = [2., 4.]
        solution.solution[:, :2] = [[0.5, 1.5], [1., 3.]]
        solution.temperature_ve[:] = [1000., 2000.]
        self.config = SolverConfig(nemo=True)
        self.interface = SolverInterface(self.config, solution)

    def test_counts(self):
        i = self.interface
        assert i.n_nonequilibrium_species == 2
        assert i.n_nonequilibrium_state_variables == 6
        assert i.n_nonequilibrium_primitive_variables == 14
        self.config.solver = "euler"
        assert i.n_nonequilibrium_primitive_variables == 12

    def test_mass_fractions(self):
        i = self.interface
        assert_allclose(i.nonequilibrium_mass_fractions(), [[0.25, 0.75]]*2)
        assert_allclose(i.nonequilibrium_mass_fractions(1), [0.25, 0.75])
        assert_allclose(i.vibrational_temperatures(), [1000., 2000.])

    def test_not_nonequilibrium(self):
        self.config.nemo = False
        with pytest.raises(SolverInterfaceError, match="Nonequilibrium"):
            self.interface.nonequilibrium_mass_fractions()


def test_marker_outside_mesh():
    with pytest.raises(SolverInterfaceError):
        SolverInterface(SolverConfig(), FlowSolution(2, 2, 4),
                        [Marker("wall", [5], [[0., 1.]])])


def test_config_from_yaml(tmp_path):
    paramfile = tmp_path / "solver.yaml"
    paramfile.write_text("mach: 0.3\ndiscrete_adjoint: true\n"
                         "fluid_load_markers: [wing]\n")
    config = SolverConfig.from_yaml(str(paramfile))
    i = SolverInterface(config, FlowSolution(1, 2, 4))
    assert i.mach_number == 0.3
    assert i.fluid_load_marker_tags == ["wing"]


def test_update_transport_from_mixture():
    p = Params({"species": ["H2", "N2"],
                "molecular_weight": [2.016, 28.014],
                "specific_heat_cp": [14310., 1040.],
                "viscosity_model": "constant",
                "mu_constant": [8.9e-6, 1.78e-5]})
    mixture = Mixture.from_params(p)
    solution = FlowSolution(3, 2, 4)
    solution.primitive[:, 0] = [300., 600., 900.]
    scalars = np.array([[0.], [0.], [0.1]])
    solution.update_transport(mixture, scalars)

    assert_allclose(solution.laminar_viscosity[:2], 1.78e-5)
    R = 8.3145/0.028014
    assert_allclose(solution.density[0], 101325./(R*300.))
    assert_allclose(solution.sound_speed[1], np.sqrt(1040./(1040. - R)*R*600.))

    with pytest.raises(SolverInterfaceError):
        solution.update_transport(mixture, scalars[:2])


def test_empty_marker():
    empty = Marker("empty", [], [])
    assert empty.n_vertex == 0
    i = SolverInterface(SolverConfig(discrete_adjoint=True),
                        FlowSolution(3, 2, 4), [empty])
    assert i.n_marker_vertices("empty") == 0
    assert empty.normals.shape == (0, 2)
    assert i.marker_laminar_viscosities("empty").shape == (0,)
    assert i.marker_normal_heat_fluxes("empty").shape == (0,)
    assert i.marker_adjoint_forces("empty").shape == (0, 2)
    i.set_marker_normal_heat_fluxes("empty", [])
    with pytest.raises(SolverInterfaceError, match="marker size"):
        i.marker_speed_of_sound("empty", 0)


def test_empty_marker_with_dimension():
    assert Marker("empty", [], [], n_dim=3).normals.shape == (0, 3)


def test_marker_normal_shapes():
    with pytest.raises(SolverInterfaceError, match="n_vertex, n_dim"):
        Marker("wall", [0, 1], [0., 1.])
    with pytest.raises(SolverInterfaceError, match="normals for"):
        Marker("wall", [0, 1], [[0., 1.]])


def test_marker_dimension_mismatch():
    with pytest.raises(SolverInterfaceError, match="dimensional"):
        SolverInterface(SolverConfig(), FlowSolution(2, 2, 4),
                        [Marker("wall", [0], [[0., 0., 1.]])])


class TestInterfaceSettings:

    def setup_method(self):
        self.config = SolverConfig(surface_file="surface_wing")
        solution = FlowSolution(2, 2, 4)
        solution.laminar_viscosity[:] = 0.72
        solution.gradient_primitive[:, 0, :] = [1., 2.]
        self.wall = Marker("wall", [0, 1], [[0., 1.], [0., 1.]])
        self.interface = SolverInterface(self.config, solution, [self.wall])

    def test_motion_rates(self):
        self.interface.set_translation_rate(1., 2., 3.)
        self.interface.set_rotation_rate(0., 0., 0.5)
        assert_allclose(self.config.translation_rate, [1., 2., 3.])
        assert_allclose(self.config.rotation_rate, [0., 0., 0.5])

    def test_surface_file_name(self):
        assert self.interface.surface_file_name == "surface_wing"

    def test_marker_heat_flux_incompressible(self):
        i = self.interface
        assert_allclose(i.marker_heat_fluxes("wall", 0), [-3.5, -7.])
        self.config.regime = "incompressible"
        assert_allclose(i.marker_heat_fluxes("wall"), np.zeros([2, 2]))
        assert_allclose(i.marker_normal_heat_fluxes("wall"), [0., 0.])

    def test_single_vertex_heat_flux_must_be_scalar(self):
        i = self.interface
        with pytest.raises(SolverInterfaceError, match="one heat flux"):
            i.set_marker_normal_heat_fluxes("wall", [1., 2.], vertex=0)
        i.set_marker_normal_heat_fluxes("wall", np.float64(3.), vertex=0)
        assert i.marker_custom_heat_fluxes("wall", 0) == 3.
