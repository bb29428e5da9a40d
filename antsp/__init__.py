from .errors import ACOError, ConfigurationError, InternalConsistencyError
from .fast_pow import approx_pow, exact_pow
from .graph import DistanceMatrix, load_matrix
from .tsp import TSPInstance
from .trails import TrailMatrix
from .ant import Ant, AntState, Colony
from .transition import TransitionRule
from .solver import ACOConfig, ACOResult, AntTspSolver, tour_to_string
from .experiments import run_parameter_sweep, run_repeated_trials
