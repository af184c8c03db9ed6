"""Calculator entry points.

The positional functions take every compounding parameter explicitly and
round their result to 2 decimals. The ``calc_*`` functions accept a loose
parameter mapping, fill compounding defaults from ``DEFAULT_CONFIG`` and
validate the numeric inputs first.
"""

from __future__ import annotations

from typing import Callable, Dict, Mapping

import math

from tvmlib.config import TvmConfig, parse_flag
from tvmlib.errors import InvalidInputError
from tvmlib.rate_solver import solve_rate
from tvmlib.solvers import solve_fv, solve_nper, solve_pmt, solve_pv

DECIMALS = 2


def _present(value: float) -> float:
    # + 0.0 folds -0.0 into 0.0
    return round(value, DECIMALS) + 0.0


def _config(is_beginning, is_discrete, compound_frequency, payment_frequency) -> TvmConfig:
    return TvmConfig(
        is_beginning=parse_flag("is_beginning", is_beginning),
        is_discrete=parse_flag("is_discrete", is_discrete),
        compound_frequency=float(compound_frequency),
        payment_frequency=float(payment_frequency),
    )


def present_value(rate, nper, pmt, fv, is_beginning, is_discrete, compound_frequency, payment_frequency) -> float:
    config = _config(is_beginning, is_discrete, compound_frequency, payment_frequency)
    return _present(solve_pv(rate, nper, pmt, fv, config))


def future_value(rate, nper, pmt, pv, is_beginning, is_discrete, compound_frequency, payment_frequency) -> float:
    config = _config(is_beginning, is_discrete, compound_frequency, payment_frequency)
    return _present(solve_fv(rate, nper, pmt, pv, config))


def payment(rate, nper, pv, fv, is_beginning, is_discrete, compound_frequency, payment_frequency) -> float:
    config = _config(is_beginning, is_discrete, compound_frequency, payment_frequency)
    return _present(solve_pmt(rate, nper, pv, fv, config))


def number_of_periods(rate, pmt, pv, fv, is_beginning, is_discrete, compound_frequency, payment_frequency) -> float:
    config = _config(is_beginning, is_discrete, compound_frequency, payment_frequency)
    return _present(solve_nper(rate, pmt, pv, fv, config))


def interest_rate(
    nper, pmt, pv, fv, is_beginning, is_discrete, compound_frequency, payment_frequency, strict: bool = False
) -> float:
    """Nominal annual rate in percent, rounded to 2 decimals."""
    config = _config(is_beginning, is_discrete, compound_frequency, payment_frequency)
    return _present(solve_rate(nper, pmt, pv, fv, config, strict=strict).rate)


# =========================
# Mapping-based entry points
# =========================

def _require(params: Mapping, key: str) -> float:
    if key not in params or params[key] is None:
        raise InvalidInputError(f"Missing required parameter {key!r}")
    try:
        value = float(params[key])
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Parameter {key!r} must be numeric, got {params[key]!r}") from exc
    if not math.isfinite(value):
        raise InvalidInputError(f"Parameter {key!r} must be finite, got {value}")
    return value


def calc_pv(params: Mapping) -> float:
    config = TvmConfig.from_mapping(params)
    rate, nper, pmt, fv = (_require(params, k) for k in ("rate", "nper", "pmt", "fv"))
    return _present(solve_pv(rate, nper, pmt, fv, config))


def calc_fv(params: Mapping) -> float:
    config = TvmConfig.from_mapping(params)
    rate, nper, pmt, pv = (_require(params, k) for k in ("rate", "nper", "pmt", "pv"))
    return _present(solve_fv(rate, nper, pmt, pv, config))


def calc_pmt(params: Mapping) -> float:
    config = TvmConfig.from_mapping(params)
    rate, nper, pv, fv = (_require(params, k) for k in ("rate", "nper", "pv", "fv"))
    return _present(solve_pmt(rate, nper, pv, fv, config))


def calc_nper(params: Mapping) -> float:
    config = TvmConfig.from_mapping(params)
    rate, pmt, pv, fv = (_require(params, k) for k in ("rate", "pmt", "pv", "fv"))
    return _present(solve_nper(rate, pmt, pv, fv, config))


def calc_interest_rate(params: Mapping) -> float:
    config = TvmConfig.from_mapping(params)
    nper, pmt, pv, fv = (_require(params, k) for k in ("nper", "pmt", "pv", "fv"))
    strict = bool(params.get("strict", False))
    return _present(solve_rate(nper, pmt, pv, fv, config, strict=strict).rate)


CALCULATORS: Dict[str, Callable[[Mapping], float]] = {
    "pv": calc_pv,
    "fv": calc_fv,
    "pmt": calc_pmt,
    "nper": calc_nper,
    "rate": calc_interest_rate,
}


def solve(unknown: str, params: Mapping) -> float:
    """Solve for ``unknown`` (one of pv, fv, pmt, nper, rate)."""
    key = unknown.lower()
    if key in ("ir", "interest_rate"):
        key = "rate"
    if key not in CALCULATORS:
        raise InvalidInputError(
            f"Unknown solve target: {unknown}. Available: {', '.join(CALCULATORS)}"
        )
    return CALCULATORS[key](params)
