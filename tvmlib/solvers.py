"""Closed-form solvers for PV, FV, PMT and NPer.

Each function rearranges ``(PV + PMT*B)*A + PV + FV = 0`` for one unknown,
with two special cases:

    zero rate:     PV + NPer*PMT + FV = 0
    no payment:    FV = -PV*(1 + A)

Rates are nominal annual percentages. Results are unrounded floats.
"""

from __future__ import annotations

import logging
import math

from tvmlib.config import TvmConfig
from tvmlib.equation import build_vars
from tvmlib.errors import DegenerateInputError, NonRealResultError

logger = logging.getLogger(__name__)


def _finite(value: float, name: str) -> float:
    if not math.isfinite(value):
        raise NonRealResultError(f"{name} is not a finite number ({value})")
    return value


def solve_pv(rate: float, nper: float, pmt: float, fv: float, config: TvmConfig) -> float:
    """Present value from rate, number of periods, payment and future value."""
    v = build_vars(rate, nper, config)
    if v.effective_rate == 0.0:
        return -(fv + nper * pmt)
    if v.a + 1.0 == 0.0:
        raise DegenerateInputError(f"Discount factor underflows to zero for nper={nper}")
    if pmt == 0:
        return _finite(-fv / (v.a + 1.0), "pv")
    return _finite(-(fv + v.a * pmt * v.b) / (v.a + 1.0), "pv")


def solve_fv(rate: float, nper: float, pmt: float, pv: float, config: TvmConfig) -> float:
    """Future value from rate, number of periods, payment and present value."""
    v = build_vars(rate, nper, config)
    if v.effective_rate == 0.0:
        return -(pv + nper * pmt)
    if pmt == 0:
        return _finite(-pv * (1.0 + v.a), "fv")
    return _finite(-(pv + v.a * (pv + pmt * v.b)), "fv")


def solve_pmt(rate: float, nper: float, pv: float, fv: float, config: TvmConfig) -> float:
    """Periodic payment from rate, number of periods, present and future value."""
    v = build_vars(rate, nper, config)
    if v.effective_rate == 0.0:
        if nper == 0:
            raise DegenerateInputError("Payment is undefined for zero periods at zero rate")
        return -(fv + pv) / nper
    denominator = v.a * v.b
    if denominator == 0.0:
        raise DegenerateInputError(f"Payment is undefined for nper={nper}")
    return _finite(-(fv + pv * (v.a + 1.0)) / denominator, "pmt")


def solve_nper(rate: float, pmt: float, pv: float, fv: float, config: TvmConfig) -> float:
    """Number of periods from rate, payment, present and future value.

    Raises:
        DegenerateInputError: A denominator of the chosen formula is zero
        NonRealResultError: The log argument is not positive
    """
    v = build_vars(rate, 0.0, config)
    i = v.effective_rate
    if i == 0.0:
        if pmt == 0:
            raise DegenerateInputError("Number of periods is undefined with zero rate and zero payment")
        return -(fv + pv) / pmt

    if pmt == 0:
        if pv == 0:
            raise DegenerateInputError("Number of periods is undefined for pv=0 without payments")
        ratio = -fv / pv
        if ratio <= 0.0:
            raise NonRealResultError(
                f"pv and fv must have opposite signs without payments (pv={pv}, fv={fv})"
            )
        return math.log(ratio) / math.log(1.0 + i)

    denominator = pv + pmt * v.b
    if denominator == 0.0:
        raise DegenerateInputError("pv + pmt*B is zero; number of periods is undefined")
    t = (-fv + pmt * v.b) / denominator
    if t == 0.0:
        raise DegenerateInputError("fv equals pmt*B; number of periods is undefined")
    if t < 0.0:
        raise NonRealResultError(f"Log argument {t} is negative; no real number of periods")
    logger.debug("nper log ratio t=%s effective_rate=%s", t, i)
    return math.log(t) / math.log(1.0 + i)
