class FluidModelError(Exception):
    """
    Raised for invalid mixture configuration or state.
    """


class SolverInterfaceError(Exception):
    """
    Raised when a solver array is accessed out of bounds, with
    the wrong shape, or for a solver that is not active.
    """
