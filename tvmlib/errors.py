"""Exception types raised by the TVM solvers."""


class TvmError(ValueError):
    """Base class for all time-value-of-money failures."""


class InvalidInputError(TvmError):
    """Raised when a parameter is missing, non-finite or out of range."""


class NonRealResultError(TvmError):
    """Raised when a power or log formula is fed a domain-invalid argument."""


class DegenerateInputError(TvmError):
    """Raised when the inputs make a solver formula divide by zero."""


class RateConvergenceError(RuntimeError, TvmError):
    """Raised when strict rate solving exhausts its iteration budget."""

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.result = result
