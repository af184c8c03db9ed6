"""Root-finding utilities (relative-step Newton-Raphson)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Tuple

import logging

logger = logging.getLogger(__name__)

FuncDeriv = Callable[[float], Tuple[float, float]]
Func = Callable[[float], float]


@dataclass
class RootResult:
    root: float
    iterations: int
    converged: bool
    method: str


@dataclass(frozen=True)
class IterationState:
    """Iterate ``i`` together with its value in the caller's unit."""

    i: float
    nominal_rate: float


def relative_newton(
    func_and_deriv: FuncDeriv,
    initial_guess: float,
    measure: Func,
    *,
    decimals: int = 4,
    max_iter: int = 100,
) -> RootResult:
    """Newton-Raphson with the step scaled by the current iterate.

    ``x_new = x - x * value / deriv``. When ``deriv`` is ``x**2 * d(f/x)/dx``
    this is Newton's method on ``f(x)/x``, which discards a spurious root of
    ``f`` at zero.

    Parameters
    ----------
    func_and_deriv:
        Callable returning (value, derivative) at a given point.
    initial_guess:
        Starting point for the iterations; must be non-zero to move.
    measure:
        Maps an iterate to the unit convergence is judged in.
    decimals:
        Two successive iterates converge when their measures agree after
        rounding to this many decimals.
    max_iter:
        Iteration budget. Exhausting it returns the last iterate with
        ``converged=False``.
    """
    state = IterationState(float(initial_guess), measure(float(initial_guess)))

    for iteration in range(1, max_iter + 1):
        try:
            value, deriv = func_and_deriv(state.i)
        except OverflowError as exc:
            logger.debug("Overflow evaluating at x=%s: %s", state.i, exc)
            return RootResult(state.i, iteration, False, "relative-newton")
        logger.debug("Newton iter %s: x=%s value=%s deriv=%s", iteration, state.i, value, deriv)
        if deriv == 0.0:
            logger.debug("Zero derivative; aborting Newton at iter %s", iteration)
            return RootResult(state.i, iteration, False, "relative-newton")
        x_new = state.i - state.i * (value / deriv)
        new_state = IterationState(x_new, measure(x_new))
        if round(new_state.nominal_rate, decimals) == round(state.nominal_rate, decimals):
            return RootResult(new_state.i, iteration, True, "relative-newton")
        state = new_state

    return RootResult(state.i, max_iter, False, "relative-newton")
