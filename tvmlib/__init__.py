"""Time-value-of-money solvers public API."""

from .calculator import (
    calc_fv,
    calc_interest_rate,
    calc_nper,
    calc_pmt,
    calc_pv,
    future_value,
    interest_rate,
    number_of_periods,
    payment,
    present_value,
    solve,
)
from .config import DEFAULT_CONFIG, TvmConfig
from .errors import (
    DegenerateInputError,
    InvalidInputError,
    NonRealResultError,
    RateConvergenceError,
    TvmError,
)
from .rate_solver import RateResult, solve_rate
from .rates import to_effective, to_nominal
from .solvers import solve_fv, solve_nper, solve_pmt, solve_pv

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "DEFAULT_CONFIG",
    "TvmConfig",
    "RateResult",
    "TvmError",
    "InvalidInputError",
    "NonRealResultError",
    "DegenerateInputError",
    "RateConvergenceError",
    "to_effective",
    "to_nominal",
    "solve_pv",
    "solve_fv",
    "solve_pmt",
    "solve_nper",
    "solve_rate",
    "present_value",
    "future_value",
    "payment",
    "number_of_periods",
    "interest_rate",
    "calc_pv",
    "calc_fv",
    "calc_pmt",
    "calc_nper",
    "calc_interest_rate",
    "solve",
]
