"""Interest-rate solver.

The governing identity has no closed form for the rate when payments are
non-zero. Multiplying it out by ``i`` gives the root-finding function::

    f(i) = (1+i)^n * pmt * (1+x*i) - pmt * (1+x*i) + fv*i + pv*i*(1+i)^n

``f`` vanishes trivially at ``i = 0``. The solver steps ``i - i*f/D`` with::

    D(i) = ((1+i)^n - 1) * (-pmt*(1+x*i)) + n*i*(1+i)^(n-1) * (pmt*(1+x*i) + pv*i)

For ordinary annuities (``x = 0``) ``D = i^2 * d(f/i)/di``, so the step is
Newton's method on ``f(i)/i``, which has no root at zero. For annuity-due
``D`` carries the timing factor on both terms and the step is only
approximately Newton. The iteration is seeded with a heuristic guess and
runs in effective-rate space until the nominal annual rate is stable to 4
decimals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Tuple

import logging

from tvmlib.config import TvmConfig
from tvmlib.errors import (
    DegenerateInputError,
    InvalidInputError,
    NonRealResultError,
    RateConvergenceError,
)
from tvmlib.rates import power, to_nominal
from tvmlib.utils.rootfinding import relative_newton

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100
CONVERGENCE_DECIMALS = 4


@dataclass(frozen=True)
class RateResult:
    """Solved rate.

    Attributes:
        rate: Nominal annual rate in percent (unrounded)
        effective_rate: Rate per payment period
        iterations: Newton iterations used (0 for closed-form cases)
        converged: False when the iteration budget ran out
        method: "closed-form", "zero-interest" or "relative-newton"
    """

    rate: float
    effective_rate: float
    iterations: int
    converged: bool
    method: str


# =========================
# Initial guess
# =========================

GuessCase = Tuple[str, Callable[[float, float, float, float], bool], Callable[[float, float, float, float], float]]


def _guess_opposite_signs(nper: float, pmt: float, pv: float, fv: float) -> float:
    return abs((nper * pmt + pv - fv) / (nper * pv))


def _guess_same_signs(nper: float, pmt: float, pv: float, fv: float) -> float:
    sign = -1.0 if pv != 0 else 1.0
    return abs(-(fv + sign * nper * pmt) / (3.0 * (pmt * (nper - 1.0) ** 2 + pv + fv)))


def _guess_pv_against_pmt(nper: float, pmt: float, pv: float, fv: float) -> float:
    return abs((nper * pmt - fv + pv) / (nper * pv))


def _guess_fallback(nper: float, pmt: float, pv: float, fv: float) -> float:
    a = abs(pmt / (abs(pv) + abs(fv)))
    return a + 1.0 / (a * nper ** 3)


# Evaluated in order; the first matching predicate wins.
GUESS_CASES: List[GuessCase] = [
    ("opposite-signs", lambda n, pmt, pv, fv: pmt * fv <= 0, _guess_opposite_signs),
    ("same-signs", lambda n, pmt, pv, fv: pmt * fv > 0, _guess_same_signs),
    ("pv-against-pmt", lambda n, pmt, pv, fv: pv * pmt < 0, _guess_pv_against_pmt),
    ("fallback", lambda n, pmt, pv, fv: True, _guess_fallback),
]


def initial_guess(nper: float, pmt: float, pv: float, fv: float) -> Tuple[str, float]:
    """Pick the seed effective rate for the Newton iteration.

    Returns the name of the matched case and the (non-negative) guess. When
    the matched formula divides by zero or yields zero, a point the
    iteration cannot leave, the fallback formula is used.
    """
    for name, matches, formula in GUESS_CASES:
        if not matches(nper, pmt, pv, fv):
            continue
        try:
            guess = formula(nper, pmt, pv, fv)
        except ZeroDivisionError:
            logger.debug("Guess case %s divides by zero; using fallback", name)
            break
        if guess == 0.0:
            logger.debug("Guess case %s yields zero; using fallback", name)
            break
        return name, guess
    try:
        return "fallback", _guess_fallback(nper, pmt, pv, fv)
    except ZeroDivisionError as exc:
        raise DegenerateInputError(
            f"No initial rate guess for nper={nper}, pmt={pmt}, pv={pv}, fv={fv}"
        ) from exc


def resolve_direction(guess: float, nper: float, pmt: float, pv: float, fv: float) -> Tuple[int, float]:
    """Align the sign of the guess with the sign the rate must have.

    The zero-rate period count ``-(pv+fv)/pmt`` below ``nper`` means positive
    interest, above it negative interest. Returns ``(direction, guess)``.
    """
    period0 = -((pv + fv) / pmt)
    direction = 1
    if period0 < nper:
        direction = 1
    if period0 > nper:
        direction = -1
    if (direction < 0 and guess > 0) or (direction > 0 and guess < 0):
        guess = -guess
    if direction < 0 and guess < 0:
        direction = 1
        guess = -guess
    return direction, guess


# =========================
# Newton iteration
# =========================

def governing_function(
    i: float, nper: float, pmt: float, pv: float, fv: float, x: int
) -> Tuple[float, float]:
    """Return ``(f(i), D(i))``, the iteration function and its step denominator.

    ``D`` equals ``i^2 * d(f(i)/i)/di`` only for ``x = 0``.
    """
    base = 1.0 + i
    if base <= 0.0:
        raise NonRealResultError(f"Effective rate {i} is at or below -100%")
    growth = base ** nper
    timing = 1.0 + x * i
    value = growth * pmt * timing - pmt * timing + fv * i + pv * i * growth
    deriv = (growth - 1.0) * (-(pmt * timing)) + nper * i * base ** (nper - 1.0) * (
        pmt * timing + pv * i
    )
    return value, deriv


def solve_rate(
    nper: float,
    pmt: float,
    pv: float,
    fv: float,
    config: TvmConfig,
    *,
    strict: bool = False,
    max_iter: int = MAX_ITERATIONS,
) -> RateResult:
    """Solve the nominal annual rate (percent) from nper, pmt, pv and fv.

    Raises:
        NonRealResultError: pmt == 0 and pv, fv do not have opposite signs
        DegenerateInputError: pmt == 0 with pv == 0 or nper == 0
        RateConvergenceError: strict is set and the iteration did not converge
    """
    cf = config.compound_frequency
    pf = config.payment_frequency
    is_discrete = config.is_discrete

    if pmt == 0:
        if pv == 0 or nper == 0:
            raise DegenerateInputError(
                f"Rate is undefined without payments for pv={pv}, nper={nper}"
            )
        ratio = -fv / pv
        if ratio <= 0.0:
            raise NonRealResultError(
                f"pv and fv must have opposite signs without payments (pv={pv}, fv={fv})"
            )
        effective = power(ratio, 1.0 / nper) - 1.0
        return RateResult(to_nominal(effective, is_discrete, cf, pf), effective, 0, True, "closed-form")

    if nper <= 0:
        raise InvalidInputError(f"nper must be positive to solve for the rate, got {nper}")

    if round(pv + nper * pmt + fv, CONVERGENCE_DECIMALS) == 0:
        return RateResult(0.0, 0.0, 0, True, "zero-interest")

    case, guess = initial_guess(nper, pmt, pv, fv)
    direction, guess = resolve_direction(guess, nper, pmt, pv, fv)
    logger.debug("Rate guess %s via %s, direction %s", guess, case, direction)

    x = config.x
    result = relative_newton(
        lambda i: governing_function(i, nper, pmt, pv, fv, x),
        guess,
        lambda i: to_nominal(i, is_discrete, cf, pf),
        decimals=CONVERGENCE_DECIMALS,
        max_iter=max_iter,
    )
    rate = RateResult(
        rate=to_nominal(result.root, is_discrete, cf, pf),
        effective_rate=result.root,
        iterations=result.iterations,
        converged=result.converged,
        method=result.method,
    )
    if not rate.converged:
        logger.warning(
            "Rate solver stopped after %s iterations without converging (last rate %s%%)",
            rate.iterations,
            rate.rate,
        )
        if strict:
            raise RateConvergenceError(
                f"Rate did not converge within {max_iter} iterations", result=rate
            )
    else:
        logger.debug("Rate solved after %s iterations via %s", rate.iterations, rate.method)
    return rate
