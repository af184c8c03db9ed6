"""Auxiliary terms of the governing time-value-of-money identity.

The identity linking the five TVM quantities is::

    (PV + PMT * (1 + i*X) / i) * ((1 + i)^NPer - 1) + PV + FV = 0

with ``i`` the effective rate per payment period and ``X`` the timing flag
(1 for payments at period start). Substituting

    A = (1 + i)^NPer - 1
    B = (1 + i*X) / i

reduces it to ``(PV + PMT*B)*A + PV + FV = 0``. When ``i == 0`` the
identity degenerates into the linear relation ``PV + NPer*PMT + FV = 0``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import math

import numpy as np

from tvmlib.config import TvmConfig
from tvmlib.rates import power, to_effective

ArrayLike = Union[float, np.ndarray]


@dataclass(frozen=True)
class EquationVariables:
    effective_rate: float
    x: int
    a: float
    b: float


def build_vars(rate: float, nper: float, config: TvmConfig) -> EquationVariables:
    """Return ``A`` and ``B`` for a nominal annual rate (percent).

    ``b`` is ``inf`` when the effective rate is zero; callers take the
    linear branch in that case.
    """
    effective_rate = to_effective(
        rate, config.is_discrete, config.compound_frequency, config.payment_frequency
    )
    x = config.x
    a = power(1.0 + effective_rate, nper) - 1.0
    b = (1.0 + effective_rate * x) / effective_rate if effective_rate != 0.0 else math.inf
    return EquationVariables(effective_rate=effective_rate, x=x, a=a, b=b)


def residual(
    pv: ArrayLike,
    fv: ArrayLike,
    pmt: ArrayLike,
    nper: ArrayLike,
    effective_rate: ArrayLike,
    x: ArrayLike = 0,
) -> ArrayLike:
    """Left-hand side of the governing identity; zero for a consistent set.

    Accepts scalars or numpy arrays (broadcast together). Zero effective
    rates are evaluated with the linear relation.
    """
    pv, fv, pmt, nper, i, x = np.broadcast_arrays(
        *(np.asarray(v, dtype=float) for v in (pv, fv, pmt, nper, effective_rate, x))
    )
    with np.errstate(divide="ignore", invalid="ignore"):
        a = (1.0 + i) ** nper - 1.0
        b = (1.0 + i * x) / i
        general = (pv + pmt * b) * a + pv + fv
    linear = pv + nper * pmt + fv
    out = np.where(i == 0.0, linear, general)
    if out.ndim == 0:
        return float(out)
    return out
